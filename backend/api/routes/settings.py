"""Settings API routes. Backend maintains settings.json; frontend fetches and overwrites on save."""

import math

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from db import get_settings, resolve_layout_constants, resolve_upstream_config, save_settings
from layout import LayoutConstants

from ..schemas import SettingsRequest

router = APIRouter()


@router.get("")
async def get_settings_route():
    """Return settings.json contents plus the effective layout constants and upstream config."""
    settings = await get_settings()
    return {
        "settings": settings,
        "effective": {
            "layout": resolve_layout_constants(settings).to_dict(),
            "upstream": resolve_upstream_config(settings),
        },
    }


@router.post("")
async def save_settings_route(body: SettingsRequest):
    """Overwrite settings.json with request body. Layout constants are validated first."""
    if body.layout:
        try:
            LayoutConstants.from_dict(body.layout)
        except ValueError as e:
            return JSONResponse(status_code=422, content={"error": str(e)})
    if body.upstream and not _valid_timeout(body.upstream.timeout):
        return JSONResponse(status_code=422, content={"error": "upstream.timeout must be a positive number"})
    await save_settings(body.model_dump(by_alias=True, exclude_none=True))
    return {"success": True}


def _valid_timeout(value) -> bool:
    if value is None:
        return True
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0
