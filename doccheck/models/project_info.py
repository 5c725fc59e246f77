"""
Project Info Model
==================
Pydantic models for the snapshot produced by one project scan.
This is the contract between the scanner and every downstream consumer
(drift validator, generator, CLI JSON output, HTTP API).

Models are frozen: a snapshot is built once per scan and never mutated.
JSON uses camelCase aliases (``packageManager``, ``techStack``, ...) so the
shape stays stable for the web client; Python code uses snake_case.

ProjectInfo fields:
    name            — package.json "name", else the root directory name
    path            — absolute project root
    package_manager — detected manifest, or None
    structure       — top-level directory facts
    has_tests       — True if a test directory or test framework was found
    test_patterns   — glob patterns implied by what was found (ordered)
    cicd            — detected CI platform, or None
    readme          — raw README.md text, or None
    readme_claims   — claims extracted from the README, or None
"""
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

PackageManagerType = Literal["npm", "yarn", "pnpm", "pip", "cargo", "go"]
CiPlatform = Literal["github", "gitlab", "other"]


class _Snapshot(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class PackageManagerInfo(_Snapshot):
    type: PackageManagerType
    config_file: str
    dependencies: dict[str, str] = {}
    dev_dependencies: dict[str, str] = {}
    scripts: dict[str, str] = {}

    @property
    def all_dependency_names(self) -> list[str]:
        """Runtime then dev dependency names, without duplicates."""
        names = list(self.dependencies)
        names.extend(d for d in self.dev_dependencies if d not in self.dependencies)
        return names


class DirectoryStructure(_Snapshot):
    directories: list[str] = []
    has_source: bool = False
    source_dir: Optional[str] = None


class CiCdInfo(_Snapshot):
    platform: CiPlatform
    files: list[str] = []
    commands: list[str] = []


class ReadmeClaims(_Snapshot):
    tech_stack: list[str] = []
    structure: list[str] = []
    commands: list[str] = []


class ProjectInfo(_Snapshot):
    name: str
    path: str
    package_manager: Optional[PackageManagerInfo] = None
    structure: DirectoryStructure = DirectoryStructure()
    has_tests: bool = False
    test_patterns: list[str] = []
    cicd: Optional[CiCdInfo] = None
    readme: Optional[str] = None
    readme_claims: Optional[ReadmeClaims] = None
