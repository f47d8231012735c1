"""
Organization chart layout: departments -> teams -> members, with nested sub-departments.

Two passes over the tree:
  1. prepare (bottom-up): validate entities, split members into managers/employees,
     compute each subtree's horizontal width.
  2. place (top-down): center every child inside the band of its parent and emit
     positioned nodes plus parent -> child edges.

Each subtree gets a contiguous band, so sibling subtrees never overlap. Output depends
only on the tree and the constants; the input is never mutated.

居中策略（统一公式 pad = (container - content) / (n + 1)）:
  额外空间平均分成 n+1 份作为兄弟节点两侧和之间的留白，子节点宽度不被拉伸。
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Set, Tuple

from loguru import logger

from .constants import DEFAULT_LAYOUT_CONSTANTS, LayoutConstants

MANAGER_ROLES = ("admin", "hr", "manager")
MEMBER_ROLES = MANAGER_ROLES + ("employee",)

DEPARTMENT_EDGE_COLOR = "#3B82F6"
MANAGER_EDGE_COLOR = "#F59E0B"
EMPLOYEE_EDGE_COLOR = "#6B7280"
SUB_DEPARTMENT_EDGE_COLOR = "#8B5CF6"


class OrgStructureError(ValueError):
    """The department hierarchy is not a tree (a department is its own ancestor)."""


@dataclass
class _Member:
    id: str
    name: str
    role: str
    email: Optional[str]


@dataclass
class _Team:
    id: str
    name: str
    managers: List[_Member]
    employees: List[_Member]
    width: float = 0

    @property
    def members(self) -> List[_Member]:
        return self.managers + self.employees


@dataclass
class _Department:
    id: str
    name: str
    description: Optional[str]
    teams: List[_Team] = field(default_factory=list)
    children: List["_Department"] = field(default_factory=list)
    width: float = 0


def entity_id(entity: Mapping[str, Any]) -> Optional[str]:
    """Read `id`, falling back to MongoDB's `_id`. Returns None when absent or blank."""
    raw = entity.get("id")
    if raw is None or raw == "":
        raw = entity.get("_id")
    if raw is None or isinstance(raw, bool):
        return None
    value = str(raw).strip()
    return value or None


def _has_text(entity: Mapping[str, Any], key: str) -> bool:
    value = entity.get(key)
    return isinstance(value, str) and bool(value.strip())


def is_valid_department(dept: Any) -> bool:
    return isinstance(dept, Mapping) and entity_id(dept) is not None and _has_text(dept, "name")


def is_valid_team(team: Any) -> bool:
    return isinstance(team, Mapping) and entity_id(team) is not None and _has_text(team, "name")


def is_valid_member(member: Any) -> bool:
    return (
        isinstance(member, Mapping)
        and entity_id(member) is not None
        and _has_text(member, "firstName")
        and _has_text(member, "lastName")
    )


def _list_field(entity: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = entity.get(key)
    return value if isinstance(value, (list, tuple)) else ()


def _member_node_id(member: _Member) -> str:
    prefix = "manager" if member.role in MANAGER_ROLES else "user"
    return f"{prefix}-{member.id}"


# ---------------------------------------------------------------------------
# 1. Prepare: validation + widths (bottom-up)
# ---------------------------------------------------------------------------

def team_width(member_count: int, constants: LayoutConstants) -> float:
    """max(min_node_spacing, members * member_spacing)."""
    return max(constants.min_node_spacing, member_count * constants.member_spacing)


def _band_width(widths: Sequence[float], gap: float) -> float:
    """Width needed by siblings laid side by side: sum(widths) + gaps between them."""
    if not widths:
        return 0
    return sum(widths) + (len(widths) - 1) * gap


def _prepare_team(raw: Mapping[str, Any], seen: Set[str], constants: LayoutConstants) -> _Team:
    managers: List[_Member] = []
    employees: List[_Member] = []
    for m in _list_field(raw, "members"):
        if not is_valid_member(m):
            logger.warning("Skipping invalid member in team {}: {!r}", entity_id(raw), m)
            continue
        role = m.get("role")
        if role not in MEMBER_ROLES:
            role = "employee"
        member = _Member(
            id=entity_id(m),
            name=f"{m['firstName'].strip()} {m['lastName'].strip()}",
            role=role,
            email=m.get("email"),
        )
        node_id = _member_node_id(member)
        if node_id in seen:
            logger.warning("Skipping duplicate member {} in team {}", node_id, entity_id(raw))
            continue
        seen.add(node_id)
        (managers if role in MANAGER_ROLES else employees).append(member)

    team = _Team(id=entity_id(raw), name=raw["name"].strip(), managers=managers, employees=employees)
    team.width = team_width(len(team.members), constants)
    return team


def _prepare_department(
    raw: Mapping[str, Any],
    path: Tuple[str, ...],
    seen: Set[str],
    constants: LayoutConstants,
) -> _Department:
    dept_id = entity_id(raw)
    dept = _Department(id=dept_id, name=raw["name"].strip(), description=raw.get("description"))
    path = path + (dept_id,)

    for t in _list_field(raw, "teams"):
        if not is_valid_team(t):
            logger.warning("Skipping invalid team in department {}: {!r}", dept_id, t)
            continue
        node_id = f"team-{entity_id(t)}"
        if node_id in seen:
            logger.warning("Skipping duplicate team {} in department {}", node_id, dept_id)
            continue
        seen.add(node_id)
        dept.teams.append(_prepare_team(t, seen, constants))

    for c in _list_field(raw, "children"):
        if not is_valid_department(c):
            logger.warning("Skipping invalid sub-department of {}: {!r}", dept_id, c)
            continue
        child_id = entity_id(c)
        if child_id in path:
            raise OrgStructureError(
                f"Department {child_id} is its own ancestor: {' -> '.join(path + (child_id,))}"
            )
        if f"dept-{child_id}" in seen:
            logger.warning("Skipping duplicate department {} under {}", child_id, dept_id)
            continue
        seen.add(f"dept-{child_id}")
        dept.children.append(_prepare_department(c, path, seen, constants))

    dept.width = department_width(dept, constants)
    return dept


def department_width(dept: _Department, constants: LayoutConstants) -> float:
    """
    Teams and child departments sit on different rows below the department, both
    centered on it, so the department needs the wider of the two bands.
    An empty department still reserves min_node_spacing.
    """
    teams = _band_width([t.width for t in dept.teams], constants.team_spacing)
    children = _band_width([c.width for c in dept.children], constants.team_spacing)
    return max(teams, children) or constants.min_node_spacing


def prepare_tree(tree: Any, constants: LayoutConstants = DEFAULT_LAYOUT_CONSTANTS) -> List[_Department]:
    """Validate the raw tree and compute widths. Non-list input is an empty tree."""
    if not isinstance(tree, (list, tuple)):
        if tree is not None:
            logger.warning("Org tree is not a list ({}), treating as empty", type(tree).__name__)
        return []
    seen: Set[str] = set()
    roots: List[_Department] = []
    for d in tree:
        if not is_valid_department(d):
            logger.warning("Skipping invalid root department: {!r}", d)
            continue
        node_id = f"dept-{entity_id(d)}"
        if node_id in seen:
            logger.warning("Skipping duplicate root department {}", node_id)
            continue
        seen.add(node_id)
        roots.append(_prepare_department(d, (), seen, constants))
    return roots


# ---------------------------------------------------------------------------
# 2. Place: positions + edges (top-down)
# ---------------------------------------------------------------------------

def distribute_children(
    parent_x: float,
    parent_width: float,
    widths: Sequence[float],
    gap: float,
) -> List[float]:
    """
    Center x of each child inside the parent band (flexbox-like, space-evenly).

    The band is max(parent_width, content) where content = sum(widths) + (n-1)*gap,
    centered on parent_x. Leftover space is split into n+1 equal paddings.
    """
    n = len(widths)
    if n == 0:
        return []
    content = _band_width(widths, gap)
    available = max(parent_width, content)
    pad = (available - content) / (n + 1)

    positions = []
    x = parent_x - available / 2 + pad
    for w in widths:
        positions.append(x + w / 2)
        x += w + gap + pad
    return positions


def _node(node_id: str, node_type: str, x: float, y: float, data: Dict[str, Any]) -> Dict[str, Any]:
    return {
        "id": node_id,
        "type": node_type,
        "position": {"x": round(x, 1), "y": round(y, 1)},
        "data": {"type": node_type, **data},
    }


def _edge(source: str, target: str, color: str, stroke_width: float, dashed: bool = False) -> Dict[str, Any]:
    style: Dict[str, Any] = {"stroke": color, "strokeWidth": stroke_width}
    if dashed:
        style["strokeDasharray"] = "5,5"
    return {
        "id": f"{source}-{target}",
        "source": source,
        "target": target,
        "type": "smoothstep",
        "animated": False,
        "style": style,
        "markerEnd": {"type": "arrowclosed", "color": color},
    }


def _place_team(
    team: _Team, x: float, depth: int, constants: LayoutConstants
) -> Tuple[List[Dict], List[Dict]]:
    team_id = f"team-{team.id}"
    lead = team.managers[0].name if team.managers else None
    nodes = [_node(team_id, "team", x, depth * constants.level_spacing, {
        "label": team.name,
        "membersCount": len(team.members),
        "lead": lead,
    })]
    edges: List[Dict] = []

    members = team.members
    # Member nodes are member_width wide; leftover slot space becomes even padding.
    slots = distribute_children(x, team.width, [constants.member_width] * len(members), 0)
    first_manager = _member_node_id(team.managers[0]) if team.managers else None

    for member, mx in zip(members, slots):
        member_id = _member_node_id(member)
        is_manager = member.role in MANAGER_ROLES
        member_depth = depth + 1 if is_manager else depth + 2
        nodes.append(_node(
            member_id,
            "manager" if is_manager else "user",
            mx,
            member_depth * constants.level_spacing,
            {"label": member.name, "role": member.role, "email": member.email},
        ))
        if is_manager:
            edges.append(_edge(team_id, member_id, MANAGER_EDGE_COLOR, 2))
        else:
            # First manager in list order takes all employees; no manager -> team.
            edges.append(_edge(first_manager or team_id, member_id, EMPLOYEE_EDGE_COLOR, 1.5))
    return nodes, edges


def _place_department(
    dept: _Department, x: float, band: float, depth: int, constants: LayoutConstants
) -> Tuple[List[Dict], List[Dict]]:
    dept_id = f"dept-{dept.id}"
    band = max(band, dept.width)
    nodes = [_node(dept_id, "department", x, depth * constants.level_spacing, {
        "label": dept.name,
        "description": dept.description,
        "teamsCount": len(dept.teams),
        "membersCount": sum(len(t.members) for t in dept.teams),
    })]
    edges: List[Dict] = []

    team_xs = distribute_children(x, band, [t.width for t in dept.teams], constants.team_spacing)
    for team, tx in zip(dept.teams, team_xs):
        edges.append(_edge(dept_id, f"team-{team.id}", DEPARTMENT_EDGE_COLOR, 2))
        team_nodes, team_edges = _place_team(team, tx, depth + 1, constants)
        nodes.extend(team_nodes)
        edges.extend(team_edges)

    child_xs = distribute_children(x, band, [c.width for c in dept.children], constants.team_spacing)
    for child, cx in zip(dept.children, child_xs):
        edges.append(_edge(dept_id, f"dept-{child.id}", SUB_DEPARTMENT_EDGE_COLOR, 3, dashed=True))
        child_nodes, child_edges = _place_department(
            child, cx, child.width, depth + constants.child_department_depth, constants
        )
        nodes.extend(child_nodes)
        edges.extend(child_edges)
    return nodes, edges


def compute_org_layout(
    tree: Any,
    constants: LayoutConstants = DEFAULT_LAYOUT_CONSTANTS,
) -> Dict[str, List[Dict[str, Any]]]:
    """
    Lay out an organization tree (list of root departments).

    Returns {nodes: [{id, type, position: {x, y}, data}], edges: [{id, source, target, ...}]}.
    Root departments are placed left-to-right centered on x = 0, separated by
    department_spacing. Raises OrgStructureError if a department is its own ancestor.
    """
    roots = prepare_tree(tree, constants)
    nodes: List[Dict[str, Any]] = []
    edges: List[Dict[str, Any]] = []
    if not roots:
        return {"nodes": nodes, "edges": edges}

    root_xs = distribute_children(0, 0, [r.width for r in roots], constants.department_spacing)
    for root, rx in zip(roots, root_xs):
        root_nodes, root_edges = _place_department(root, rx, root.width, 0, constants)
        nodes.extend(root_nodes)
        edges.extend(root_edges)
    logger.debug("Org layout: {} nodes, {} edges from {} root departments", len(nodes), len(edges), len(roots))
    return {"nodes": nodes, "edges": edges}


def compute_bounds(nodes: Sequence[Mapping[str, Any]]) -> Dict[str, float]:
    """Bounding box of node positions, for fitting the view. Zeros when there are no nodes."""
    if not nodes:
        return {"minX": 0, "minY": 0, "maxX": 0, "maxY": 0, "width": 0, "height": 0}
    xs = [n["position"]["x"] for n in nodes]
    ys = [n["position"]["y"] for n in nodes]
    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    return {
        "minX": min_x,
        "minY": min_y,
        "maxX": max_x,
        "maxY": max_y,
        "width": round(max_x - min_x, 1),
        "height": round(max_y - min_y, 1),
    }
