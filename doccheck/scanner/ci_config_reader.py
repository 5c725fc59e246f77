"""
CI Config Reader
================
Detects the project's CI platform and lists the shell commands its
pipelines run.

Supported CI Platforms (checked in this order, first match wins):
    - GitHub Actions (.github/workflows/*.yml, *.yaml)
    - GitLab CI (.gitlab-ci.yml)

Commands feed the "CI/CD" section of a generated documentation skeleton.
YAML that fails to parse is logged and contributes no commands; the
platform and file list are still reported.

Deterministic:
    Workflow files are listed alphabetically; same repo → same CiCdInfo.
"""
import logging
import os
from typing import Any, Optional

import yaml

from doccheck.core.constants import GITHUB_WORKFLOWS_DIR, GITLAB_CI_FILE
from doccheck.models.project_info import CiCdInfo

logger = logging.getLogger(__name__)

_GITLAB_RESERVED = {
    "stages", "variables", "default", "include", "image", "services",
    "before_script", "after_script", "cache", "workflow",
}


def _load_yaml(path: str) -> Optional[Any]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return yaml.safe_load(f)
    except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
        logger.warning("Failed to parse YAML %s: %s", path, e)
        return None


# ---------------------------------------------------------------------------
# GitHub Actions
# ---------------------------------------------------------------------------
def _github_run_commands(data: Any) -> list[str]:
    """Collect `run:` values from every job's steps."""
    if not isinstance(data, dict) or not isinstance(data.get("jobs"), dict):
        return []

    commands: list[str] = []
    for job_def in data["jobs"].values():
        if not isinstance(job_def, dict) or not isinstance(job_def.get("steps"), list):
            continue
        for step in job_def["steps"]:
            # Action-only steps (uses:) have no run command
            if isinstance(step, dict) and step.get("run"):
                commands.append(str(step["run"]).strip())
    return commands


# ---------------------------------------------------------------------------
# GitLab CI
# ---------------------------------------------------------------------------
def _gitlab_script_commands(data: Any) -> list[str]:
    """Collect `script:` entries from every non-reserved, non-hidden job."""
    if not isinstance(data, dict):
        return []

    commands: list[str] = []
    for key, value in data.items():
        if str(key).startswith(".") or key in _GITLAB_RESERVED:
            continue
        if not isinstance(value, dict):
            continue
        script = value.get("script", [])
        if isinstance(script, str):
            script = [script]
        if not isinstance(script, list):
            continue
        commands.extend(cmd.strip() for cmd in script if isinstance(cmd, str))
    return commands


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
def detect_cicd(root_path: str) -> Optional[CiCdInfo]:
    """
    Detect the CI platform at the project root.

    Returns
    -------
    CiCdInfo | None
        None if neither a GitHub workflows directory nor .gitlab-ci.yml exists.
    """
    workflows_dir = os.path.join(root_path, *GITHUB_WORKFLOWS_DIR.split("/"))
    if os.path.isdir(workflows_dir):
        files = sorted(
            name for name in os.listdir(workflows_dir)
            if name.endswith((".yml", ".yaml"))
        )
        commands: list[str] = []
        for name in files:
            commands.extend(_github_run_commands(_load_yaml(os.path.join(workflows_dir, name))))
        return CiCdInfo(platform="github", files=files, commands=commands)

    gitlab_path = os.path.join(root_path, GITLAB_CI_FILE)
    if os.path.isfile(gitlab_path):
        return CiCdInfo(
            platform="gitlab",
            files=[GITLAB_CI_FILE],
            commands=_gitlab_script_commands(_load_yaml(gitlab_path)),
        )

    return None
