"""
Config API
==========
GET  /api/config    — current profiles config (defaults when none saved)
POST /api/config    — validate and replace the profiles config
GET  /api/defaults  — merged suggested answers for a profile
"""
import json
from typing import Optional

from fastapi import APIRouter, Request

from doccheck.core.exceptions import ConfigError
from doccheck.services.config_store import (
    get_profile,
    load_config,
    merge_with_defaults,
    parse_config,
    save_config,
)

router = APIRouter(prefix="/api", tags=["Config"])


@router.get("/config")
def get_config():
    return load_config().to_json_dict()


@router.post("/config")
async def post_config(request: Request):
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise ConfigError("Invalid JSON in request body") from e

    save_config(parse_config(payload))
    return {"success": True}


@router.get("/defaults")
def get_defaults(profile: Optional[str] = None):
    config = load_config()
    resolved = get_profile(config, profile)
    return {
        "profile": resolved.name if resolved else None,
        "answers": merge_with_defaults(config, profile),
    }
