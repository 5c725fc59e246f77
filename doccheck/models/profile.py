"""
Profile Models
==============
Pydantic models for the on-disk profiles store (config.json).

A profile is a named set of default answers for the documentation
sections; global defaults apply to every profile and are overridden by the
active profile's own values (see services.config_store.merge_with_defaults).
"""
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class _ConfigModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionDefaults(_ConfigModel):
    purpose: Optional[str] = None
    goals: Optional[str] = None
    practices: Optional[str] = None
    architecture: Optional[str] = None
    domain: Optional[str] = None
    gotchas: Optional[str] = None
    quality: Optional[str] = None


class GlobalDefaults(_ConfigModel):
    practices: Optional[str] = None
    architecture: Optional[str] = None
    quality: Optional[str] = None
    gotchas: Optional[str] = None


class ProfileTechStack(_ConfigModel):
    language: Optional[str] = None
    framework: Optional[str] = None
    styling: Optional[str] = None
    testing: Optional[str] = None
    other: list[str] = []


class Profile(_ConfigModel):
    name: str
    description: Optional[str] = None
    defaults: SectionDefaults = SectionDefaults()
    tech_stack: Optional[ProfileTechStack] = None


class DocCheckConfig(_ConfigModel):
    active_profile: Optional[str] = None
    global_defaults: GlobalDefaults = GlobalDefaults()
    profiles: list[Profile] = []

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
