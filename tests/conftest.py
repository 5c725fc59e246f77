"""Shared test fixtures for doccheck tests."""

import json
import os
from typing import Callable, Optional

import pytest


def write_tree(root: str, files: dict) -> None:
    """
    Materialise a project on disk.

    Keys ending in "/" become directories; other keys become files with
    the given text (dict values are written as JSON).
    """
    for rel_path, content in files.items():
        full_path = os.path.join(root, *rel_path.rstrip("/").split("/"))
        if rel_path.endswith("/"):
            os.makedirs(full_path, exist_ok=True)
            continue
        os.makedirs(os.path.dirname(full_path), exist_ok=True)
        with open(full_path, "w", encoding="utf-8") as f:
            f.write(json.dumps(content) if isinstance(content, dict) else content)


@pytest.fixture
def make_project(tmp_path) -> Callable[..., str]:
    """Factory: make_project(files, name="demo-app") → absolute project root."""

    def _make(files: Optional[dict] = None, name: str = "demo-app") -> str:
        root = tmp_path / name
        root.mkdir(exist_ok=True)
        write_tree(str(root), files or {})
        return str(root)

    return _make


@pytest.fixture(autouse=True)
def isolated_config_dir(tmp_path, monkeypatch) -> str:
    """Point the profiles store at a per-test directory."""
    config_dir = tmp_path / "doccheck-config"
    monkeypatch.setenv("DOCCHECK_CONFIG_DIR", str(config_dir))
    return str(config_dir)
