"""Org chart API - chart (fetch + layout), layout of a posted tree."""

from typing import Optional

from fastapi import APIRouter, Header
from fastapi.responses import JSONResponse
from loguru import logger

from db import get_layout_constants, get_upstream_config
from layout import LayoutConstants, OrgStructureError, compute_bounds, compute_org_layout
from shared.graph import check_layout_integrity, node_type_counts
from shared.org_client import fetch_org_tree_result

from ..schemas import OrgLayoutRequest

router = APIRouter()


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def _layout_payload(tree, constants: LayoutConstants) -> dict:
    """Build nodes + edges + bounds + per-type summary payload for the renderer."""
    layout = compute_org_layout(tree, constants)
    problems = check_layout_integrity(layout)
    if problems:
        logger.warning("Org layout integrity problems: {}", "; ".join(problems))
    return {**layout, "bounds": compute_bounds(layout["nodes"]), "summary": node_type_counts(layout)}


@router.get("/chart")
async def get_org_chart(authorization: Optional[str] = Header(None)):
    """Fetch the org tree from the HR backend and lay it out. Upstream failure -> empty chart + error."""
    upstream = await get_upstream_config()
    tree, error = await fetch_org_tree_result(
        upstream["baseUrl"], _bearer_token(authorization), timeout=upstream["timeout"]
    )
    constants = await get_layout_constants()
    try:
        payload = _layout_payload(tree, constants)
    except OrgStructureError as e:
        return JSONResponse(status_code=422, content={"error": str(e)})
    return {**payload, "error": error}


@router.post("/layout")
async def post_org_layout(body: OrgLayoutRequest):
    """Lay out the posted tree. Body constants override stored settings."""
    try:
        if body.constants:
            constants = LayoutConstants.from_dict(body.constants)
        else:
            constants = await get_layout_constants()
        return _layout_payload(body.tree, constants)
    except ValueError as e:
        # OrgStructureError is a ValueError too
        return JSONResponse(status_code=422, content={"error": str(e)})
