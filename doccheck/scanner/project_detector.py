"""
Project Detector
================
Detects the package manager from manifest marker files at the project root.

Detection is deterministic: MANIFEST_SIGNALS is checked in order and the
first marker present wins. Only package.json is parsed; requirements.txt and
Cargo.toml identify the ecosystem but contribute no dependency or script data.

A package.json that cannot be parsed is logged and treated as "no manifest".
The scan carries on without a package manager; it does not fall through to
later markers.
"""
import json
import logging
import os
from typing import Any, Optional

from doccheck.core.constants import MANIFEST_SIGNALS
from doccheck.models.project_info import PackageManagerInfo

logger = logging.getLogger(__name__)

# Distinguishes "manifest not read yet" from "read and found malformed" (None)
_UNREAD = object()


def read_package_json(root_path: str) -> Optional[dict[str, Any]]:
    """
    Load package.json from the project root.

    Returns
    -------
    dict | None
        Parsed manifest, or None if the file is absent, unreadable,
        malformed, or not a JSON object.
    """
    manifest_path = os.path.join(root_path, "package.json")
    if not os.path.isfile(manifest_path):
        return None

    try:
        with open(manifest_path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.warning("Ignoring unreadable package.json in %s: %s", root_path, e)
        return None

    if not isinstance(data, dict):
        logger.warning("Ignoring package.json in %s: top level is not an object", root_path)
        return None
    return data


def _string_map(value: Any) -> dict[str, str]:
    """Coerce a manifest section into name → string, dropping anything malformed."""
    if not isinstance(value, dict):
        return {}
    return {str(k): str(v) for k, v in value.items()}


def detect_signal(root_path: str) -> Optional[tuple[str, str]]:
    """
    Return the first (marker_file, package_manager_type) present at the root.

    Only the root directory is checked (no recursive search).
    """
    for signal_file, pm_type in MANIFEST_SIGNALS:
        if os.path.isfile(os.path.join(root_path, signal_file)):
            return signal_file, pm_type
    return None


def detect_package_manager(root_path: str, manifest: Any = _UNREAD) -> Optional[PackageManagerInfo]:
    """
    Build PackageManagerInfo for the first manifest found.

    Parameters
    ----------
    root_path : str
        Absolute path to the project root.
    manifest : dict | None, optional
        Already-parsed package.json (as returned by read_package_json);
        read from disk when omitted.

    Returns
    -------
    PackageManagerInfo | None
        None when no marker file exists or package.json is malformed.
    """
    signal = detect_signal(root_path)
    if signal is None:
        return None

    signal_file, pm_type = signal
    if signal_file != "package.json":
        return PackageManagerInfo(type=pm_type, config_file=signal_file)

    pkg = read_package_json(root_path) if manifest is _UNREAD else manifest
    if pkg is None:
        return None

    return PackageManagerInfo(
        type=pm_type,
        config_file=signal_file,
        dependencies=_string_map(pkg.get("dependencies")),
        dev_dependencies=_string_map(pkg.get("devDependencies")),
        scripts=_string_map(pkg.get("scripts")),
    )


def detect_project_name(root_path: str, manifest: Any = _UNREAD) -> str:
    """package.json "name" if set, else the root directory's base name."""
    pkg = read_package_json(root_path) if manifest is _UNREAD else manifest
    if pkg and isinstance(pkg.get("name"), str) and pkg["name"]:
        return pkg["name"]
    return os.path.basename(os.path.normpath(root_path)) or "unknown"
