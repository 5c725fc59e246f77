"""
Config Store
============
Reads and writes the profiles file (``$DOCCHECK_CONFIG_DIR/config.json``).

Persistence:
    - Whole-file read, whole-file replace on save.
    - No locking: concurrent writers race and the last write wins. This is
      a single-user local tool, so that is accepted rather than engineered away.

Loading never fails: a missing file gives DEFAULT_CONFIG, and an unreadable
or malformed file is logged and also gives DEFAULT_CONFIG.

Merging (merge_with_defaults) is a pure function of the loaded config and a
profile name. Global defaults are applied first and the profile's own
defaults override them.
"""
import json
import logging
import os
from typing import Any, Optional

from pydantic import ValidationError

from doccheck.core.config import get_config_dir, get_config_path
from doccheck.core.exceptions import ConfigError
from doccheck.models.profile import DocCheckConfig, GlobalDefaults, Profile

logger = logging.getLogger(__name__)

DEFAULT_PROFILE_NAME = "default"


def default_config() -> DocCheckConfig:
    return DocCheckConfig(
        global_defaults=GlobalDefaults(practices="", architecture="", quality="", gotchas=""),
        profiles=[Profile(name=DEFAULT_PROFILE_NAME, description="Basic defaults for any project")],
    )


def parse_config(data: Any) -> DocCheckConfig:
    """
    Validate a raw JSON payload and layer it over the defaults.

    Top-level keys present in the payload replace the defaults;
    ``globalDefaults`` is merged key by key.

    Raises
    ------
    ConfigError
        If the payload is not an object or fails model validation.
    """
    if not isinstance(data, dict):
        raise ConfigError("Config must be a JSON object")

    global_overrides = data.get("globalDefaults") or {}
    if not isinstance(global_overrides, dict):
        raise ConfigError("globalDefaults must be a JSON object")

    base = default_config().to_json_dict()
    merged = {**base, **data}
    merged["globalDefaults"] = {**base["globalDefaults"], **global_overrides}
    try:
        return DocCheckConfig.model_validate(merged)
    except ValidationError as e:
        raise ConfigError(f"Invalid config: {e.error_count()} validation error(s)") from e


def load_config() -> DocCheckConfig:
    config_path = get_config_path()
    if not os.path.isfile(config_path):
        return default_config()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            return parse_config(json.load(f))
    except (OSError, json.JSONDecodeError, ConfigError) as e:
        logger.error("Failed to parse config file %s, using defaults: %s", config_path, e)
        return default_config()


def save_config(config: DocCheckConfig) -> str:
    """Write the config and return the path written."""
    os.makedirs(get_config_dir(), exist_ok=True)
    config_path = get_config_path()
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config.to_json_dict(), f, indent=2)
    logger.info("Saved config to %s", config_path)
    return config_path


def get_profile(config: DocCheckConfig, name: Optional[str] = None) -> Optional[Profile]:
    """Profile by explicit name, else the active profile, else "default"."""
    profile_name = name or config.active_profile or DEFAULT_PROFILE_NAME
    return next((p for p in config.profiles if p.name == profile_name), None)


def merge_with_defaults(config: DocCheckConfig, profile_name: Optional[str] = None) -> dict[str, str]:
    """
    Suggested section answers for a profile.

    Global defaults first, then the profile's defaults on top, so a value
    set on the profile always wins. Unset (None) values are skipped; an
    explicit empty string on the profile still overrides a global value.
    An unknown profile yields the global defaults alone.
    """
    profile = get_profile(config, profile_name)
    merged = config.global_defaults.model_dump(exclude_none=True)
    if profile is not None:
        merged.update(profile.defaults.model_dump(exclude_none=True))
    return merged
