"""Shared utilities for layout, API and the upstream client."""

from .graph import build_layout_graph, check_layout_integrity

__all__ = ["build_layout_graph", "check_layout_integrity"]
