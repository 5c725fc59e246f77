"""
Project Scanner
===============
Builds one immutable ProjectInfo snapshot from a project directory.

Pipeline:
    1. Name            (package.json "name" or directory name)
    2. Package manager (first manifest marker wins)
    3. Directory structure
    4. Test setup      (test directories ∪ test frameworks)
    5. CI/CD platform
    6. README text → README claims

All reads are small local files; the scan is synchronous and keeps no
state between calls.
"""
import logging
import os
from typing import Optional

from doccheck.core.config import README_FILENAME
from doccheck.core.constants import (
    DEPENDENCY_CACHE_DIR,
    SOURCE_DIR_ALIASES,
    TEST_DIRS,
    TEST_FRAMEWORK_PATTERNS,
)
from doccheck.core.exceptions import ProjectPathError
from doccheck.models.project_info import DirectoryStructure, PackageManagerInfo, ProjectInfo
from doccheck.parser.claims_extractor import extract_claims
from doccheck.scanner.ci_config_reader import detect_cicd
from doccheck.scanner.project_detector import (
    detect_package_manager,
    detect_project_name,
    read_package_json,
)

logger = logging.getLogger(__name__)


def analyze_structure(root_path: str) -> DirectoryStructure:
    """
    List top-level directories, skipping hidden entries and node_modules.

    Entries are sorted so the result, and therefore the chosen source
    directory, does not depend on the platform's listing order.
    """
    directories = [
        entry.name
        for entry in sorted(os.scandir(root_path), key=lambda e: e.name)
        if entry.is_dir()
        and not entry.name.startswith(".")
        and entry.name != DEPENDENCY_CACHE_DIR
    ]
    source_dir = next((d for d in directories if d in SOURCE_DIR_ALIASES), None)
    return DirectoryStructure(
        directories=directories,
        has_source=source_dir is not None,
        source_dir=source_dir,
    )


def detect_test_setup(
    root_path: str,
    package_manager: Optional[PackageManagerInfo],
) -> tuple[bool, list[str]]:
    """
    Return (has_tests, test_patterns).

    A test directory adds "<dir>/**/*"; a test framework among npm
    devDependencies adds the file globs it conventionally uses. Patterns
    are accumulated in discovery order and may repeat across frameworks.
    """
    patterns: list[str] = []
    has_tests = False

    for test_dir in TEST_DIRS:
        if os.path.exists(os.path.join(root_path, test_dir)):
            has_tests = True
            patterns.append(f"{test_dir}/**/*")

    if package_manager is not None and package_manager.type == "npm":
        for framework, globs in TEST_FRAMEWORK_PATTERNS:
            if framework in package_manager.dev_dependencies:
                has_tests = True
                patterns.extend(globs)

    return has_tests, patterns


def read_readme(root_path: str) -> Optional[str]:
    readme_path = os.path.join(root_path, README_FILENAME)
    if not os.path.isfile(readme_path):
        return None
    with open(readme_path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def scan(root_path: str) -> ProjectInfo:
    """
    Scan a project directory.

    Parameters
    ----------
    root_path : str
        Project root; relative paths are resolved against the cwd.

    Returns
    -------
    ProjectInfo
        Fresh snapshot. README-derived fields are None when README.md is absent.

    Raises
    ------
    ProjectPathError
        If root_path is not a readable directory.
    """
    root = os.path.abspath(root_path)
    if not os.path.isdir(root):
        raise ProjectPathError(f"Project path does not exist or is not a directory: {root}")

    try:
        structure = analyze_structure(root)
    except OSError as e:
        raise ProjectPathError(f"Cannot read project directory {root}: {e}") from e

    manifest = read_package_json(root)
    package_manager = detect_package_manager(root, manifest)
    has_tests, test_patterns = detect_test_setup(root, package_manager)
    readme = read_readme(root)

    info = ProjectInfo(
        name=detect_project_name(root, manifest),
        path=root,
        package_manager=package_manager,
        structure=structure,
        has_tests=has_tests,
        test_patterns=test_patterns,
        cicd=detect_cicd(root),
        readme=readme,
        readme_claims=extract_claims(readme) if readme is not None else None,
    )
    logger.info(
        "Scanned %s: package_manager=%s, %d dirs, tests=%s",
        info.name,
        package_manager.type if package_manager else None,
        len(structure.directories),
        has_tests,
    )
    return info
