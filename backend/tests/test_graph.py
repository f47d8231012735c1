"""Tests for layout graph integrity helpers."""

from shared.graph import build_layout_graph, check_layout_integrity, node_type_counts


def _node(nid, node_type="team"):
    return {"id": nid, "type": node_type, "position": {"x": 0, "y": 0}, "data": {}}


def _edge(source, target):
    return {"id": f"{source}-{target}", "source": source, "target": target}


def test_well_formed_forest_has_no_problems():
    layout = {
        "nodes": [_node("dept-a", "department"), _node("team-t"), _node("dept-b", "department")],
        "edges": [_edge("dept-a", "team-t")],
    }

    assert check_layout_integrity(layout) == []
    G = build_layout_graph(layout)
    assert G.nodes["dept-a"]["type"] == "department"
    assert list(G.successors("dept-a")) == ["team-t"]


def test_empty_layout():
    assert check_layout_integrity({"nodes": [], "edges": []}) == []
    assert check_layout_integrity(None) == []
    assert node_type_counts(None) == {}


def test_reports_duplicates_dangling_edges_and_multiple_parents():
    layout = {
        "nodes": [_node("a"), _node("a"), _node("b"), _node("c")],
        "edges": [_edge("a", "c"), _edge("b", "c"), _edge("a", "ghost")],
    }

    problems = check_layout_integrity(layout)

    assert "Duplicate node id a (2 times)" in problems
    assert "Edge a-ghost has unknown target ghost" in problems
    assert "Node c has 2 parents" in problems


def test_reports_cycle():
    layout = {"nodes": [_node("a"), _node("b")], "edges": [_edge("a", "b"), _edge("b", "a")]}

    assert "Layout graph contains a cycle" in check_layout_integrity(layout)


def test_node_type_counts():
    layout = {"nodes": [_node("d", "department"), _node("t1"), _node("t2")], "edges": []}

    assert node_type_counts(layout) == {"department": 1, "team": 2}
