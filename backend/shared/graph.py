"""
Graph utilities for laid-out organization charts.
Used by the API (post-layout integrity check) and tests.
"""

from collections import Counter
from typing import Any, Dict, List

import networkx as nx


def build_layout_graph(layout: Dict[str, Any]) -> nx.DiGraph:
    """Build a directed graph from layout output. Edges with unknown endpoints are still added."""
    G = nx.DiGraph()
    for n in (layout or {}).get("nodes") or []:
        pos = n.get("position") or {}
        G.add_node(n["id"], type=n.get("type"), x=pos.get("x"), y=pos.get("y"))
    for e in (layout or {}).get("edges") or []:
        G.add_edge(e["source"], e["target"], id=e.get("id"))
    return G


def check_layout_integrity(layout: Dict[str, Any]) -> List[str]:
    """
    Return problems found in a layout; empty list when it is a well-formed forest:
    unique node ids, no dangling edge endpoints, at most one parent per node, no cycles.
    """
    nodes = (layout or {}).get("nodes") or []
    edges = (layout or {}).get("edges") or []
    problems: List[str] = []

    counts = Counter(n["id"] for n in nodes)
    for nid, c in sorted(counts.items()):
        if c > 1:
            problems.append(f"Duplicate node id {nid} ({c} times)")

    ids = set(counts)
    for e in edges:
        for end in ("source", "target"):
            if e[end] not in ids:
                problems.append(f"Edge {e.get('id')} has unknown {end} {e[end]}")

    G = build_layout_graph(layout)
    for nid, deg in sorted(G.in_degree()):
        if deg > 1:
            problems.append(f"Node {nid} has {deg} parents")

    if G.number_of_nodes() and not nx.is_directed_acyclic_graph(G):
        problems.append("Layout graph contains a cycle")
    return problems


def node_type_counts(layout: Dict[str, Any]) -> Dict[str, int]:
    """Count nodes per type, e.g. {'department': 2, 'team': 5, ...}."""
    return dict(Counter(n.get("type") for n in (layout or {}).get("nodes") or []))
