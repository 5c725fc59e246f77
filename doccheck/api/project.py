"""
Project API
===========
GET  /api/project — scan snapshot, current documentation text, findings
POST /api/save    — replace the documentation file
GET  /api/check   — re-run validation against the saved documentation

Every request scans the project afresh; nothing is cached between requests.
The documentation file is rewritten whole with no locking (last write wins).
"""
import logging
import os
from typing import Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from doccheck.core.config import DOC_FILENAME, get_project_root
from doccheck.core.exceptions import ProjectPathError
from doccheck.core.output_formatter import finding_to_dict
from doccheck.scanner.project_scanner import scan
from doccheck.validator.drift_validator import validate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Project"])


class SaveRequest(BaseModel):
    content: str


def _doc_path(project_root: str) -> str:
    return os.path.join(project_root, DOC_FILENAME)


def _read_doc(project_root: str) -> Optional[str]:
    path = _doc_path(project_root)
    if not os.path.isfile(path):
        return None
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


@router.get("/project")
def get_project(project_root: str = Depends(get_project_root)):
    info = scan(project_root)
    doc = _read_doc(project_root)
    findings = validate(doc, info) if doc is not None else []
    return {
        "projectInfo": info.to_json_dict(),
        "claudeMd": doc,
        "validationResults": [finding_to_dict(f) for f in findings],
    }


@router.post("/save")
def save_doc(body: SaveRequest, project_root: str = Depends(get_project_root)):
    if not os.path.isdir(project_root):
        raise ProjectPathError(f"Project path does not exist or is not a directory: {project_root}")
    path = _doc_path(project_root)
    with open(path, "w", encoding="utf-8") as f:
        f.write(body.content)
    logger.info("Saved %s (%d chars)", path, len(body.content))
    return {"success": True}


@router.get("/check")
def check_doc(project_root: str = Depends(get_project_root)):
    info = scan(project_root)
    doc = _read_doc(project_root)
    findings = validate(doc, info) if doc is not None else []
    return {"results": [finding_to_dict(f) for f in findings]}
