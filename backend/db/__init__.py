"""
Database Module
File-based storage: db/settings.json holds layout constants and upstream config.
Uses orjson for faster JSON parsing; json_repair recovers hand-edited or truncated files.
"""

import os
from pathlib import Path

import aiofiles
import json_repair
import orjson
from loguru import logger

from layout import DEFAULT_LAYOUT_CONSTANTS, LayoutConstants

DB_DIR = Path(__file__).parent
SETTINGS_FILE = "settings.json"

DEFAULT_UPSTREAM_URL = "http://localhost:5000/api"
DEFAULT_UPSTREAM_TIMEOUT = 10.0


async def get_settings() -> dict:
    """Get full settings from db/settings.json. Missing or unreadable file -> {}."""
    file_path = DB_DIR / SETTINGS_FILE
    try:
        async with aiofiles.open(file_path, "rb") as f:
            raw = await f.read()
    except FileNotFoundError:
        return {}
    try:
        data = orjson.loads(raw)
    except orjson.JSONDecodeError:
        logger.warning("Invalid JSON in {}, attempting repair", file_path)
        data = json_repair.loads(raw.decode("utf-8", errors="replace"))
    return data if isinstance(data, dict) else {}


async def save_settings(settings: dict) -> dict:
    """Save settings to db/settings.json. Atomic write to avoid corruption."""
    DB_DIR.mkdir(parents=True, exist_ok=True)
    file_path = DB_DIR / SETTINGS_FILE
    tmp_path = file_path.with_suffix(file_path.suffix + ".tmp")
    content = orjson.dumps(settings or {}, option=orjson.OPT_INDENT_2).decode("utf-8")
    async with aiofiles.open(tmp_path, "w", encoding="utf-8") as f:
        await f.write(content)
    tmp_path.replace(file_path)
    return {"success": True}


def resolve_layout_constants(raw: dict) -> LayoutConstants:
    """settings["layout"] -> LayoutConstants. Invalid values fall back to defaults."""
    layout_cfg = (raw or {}).get("layout")
    if not layout_cfg:
        return DEFAULT_LAYOUT_CONSTANTS
    try:
        return LayoutConstants.from_dict(layout_cfg)
    except (TypeError, ValueError) as e:
        logger.warning("Invalid layout settings, using defaults: {}", e)
        return DEFAULT_LAYOUT_CONSTANTS


def resolve_upstream_config(raw: dict) -> dict:
    """settings["upstream"] with env fallbacks. Returns {baseUrl, timeout}."""
    upstream = (raw or {}).get("upstream")
    upstream = upstream if isinstance(upstream, dict) else {}
    base_url = upstream.get("baseUrl") or os.environ.get("ORGCHART_UPSTREAM_URL") or DEFAULT_UPSTREAM_URL
    timeout = upstream.get("timeout") or os.environ.get("ORGCHART_UPSTREAM_TIMEOUT") or DEFAULT_UPSTREAM_TIMEOUT
    try:
        timeout = float(timeout)
    except (TypeError, ValueError):
        logger.warning("Invalid upstream timeout {!r}, using {}", timeout, DEFAULT_UPSTREAM_TIMEOUT)
        timeout = DEFAULT_UPSTREAM_TIMEOUT
    return {"baseUrl": base_url, "timeout": timeout}


async def get_layout_constants() -> LayoutConstants:
    return resolve_layout_constants(await get_settings())


async def get_upstream_config() -> dict:
    return resolve_upstream_config(await get_settings())
