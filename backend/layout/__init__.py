"""Layout module - computes positioned node/edge graphs for the organization chart."""

from .constants import DEFAULT_LAYOUT_CONSTANTS, LayoutConstants
from .org_layout import OrgStructureError, compute_bounds, compute_org_layout

__all__ = [
    "DEFAULT_LAYOUT_CONSTANTS",
    "LayoutConstants",
    "OrgStructureError",
    "compute_bounds",
    "compute_org_layout",
]
