"""Pydantic request/response schemas for API."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class OrgLayoutRequest(BaseModel):
    """Lay out a tree supplied by the caller. Entities stay loose dicts: invalid ones are skipped, not rejected."""
    model_config = ConfigDict(populate_by_name=True)
    tree: List[Any] = Field(default_factory=list, description="Root departments")
    constants: Optional[Dict[str, Any]] = Field(None, description="Layout constant overrides (camelCase)")


class UpstreamSettings(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    base_url: Optional[str] = Field(None, alias="baseUrl")
    timeout: Optional[Any] = None


class SettingsRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")
    layout: Optional[Dict[str, Any]] = None
    upstream: Optional[UpstreamSettings] = None
