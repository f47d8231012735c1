"""
Layout constants for the organization chart.
Spacing values are in layout units (the renderer treats them as pixels).
"""

import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, Mapping, Optional

# Vertical spacing between levels (department -> team -> manager -> employee)
DEFAULT_LEVEL_SPACING = 100

# Minimum horizontal width reserved for a team (and for an empty department)
DEFAULT_MIN_NODE_SPACING = 120

# Gap between siblings under one department (teams, child departments)
DEFAULT_TEAM_SPACING = 160

# Horizontal slot per team member
DEFAULT_MEMBER_SPACING = 90

# Gap between root departments
DEFAULT_DEPARTMENT_SPACING = 400

# Member node width as a fraction of its slot
DEFAULT_MEMBER_WIDTH_RATIO = 0.8

# Depth jump from a department to its child departments: skips the team,
# manager and employee rows of the parent.
DEFAULT_CHILD_DEPARTMENT_DEPTH = 4

_CAMEL_KEYS = {
    "levelSpacing": "level_spacing",
    "minNodeSpacing": "min_node_spacing",
    "teamSpacing": "team_spacing",
    "memberSpacing": "member_spacing",
    "departmentSpacing": "department_spacing",
    "memberWidthRatio": "member_width_ratio",
    "childDepartmentDepth": "child_department_depth",
}
_SNAKE_TO_CAMEL = {v: k for k, v in _CAMEL_KEYS.items()}


@dataclass(frozen=True)
class LayoutConstants:
    level_spacing: float = DEFAULT_LEVEL_SPACING
    min_node_spacing: float = DEFAULT_MIN_NODE_SPACING
    team_spacing: float = DEFAULT_TEAM_SPACING
    member_spacing: float = DEFAULT_MEMBER_SPACING
    department_spacing: float = DEFAULT_DEPARTMENT_SPACING
    member_width_ratio: float = DEFAULT_MEMBER_WIDTH_RATIO
    child_department_depth: int = DEFAULT_CHILD_DEPARTMENT_DEPTH

    def __post_init__(self):
        for name in ("level_spacing", "min_node_spacing", "member_spacing"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{_SNAKE_TO_CAMEL[name]} must be positive")
        for name in ("team_spacing", "department_spacing"):
            if getattr(self, name) < 0:
                raise ValueError(f"{_SNAKE_TO_CAMEL[name]} must not be negative")
        if not 0 < self.member_width_ratio <= 1:
            raise ValueError("memberWidthRatio must be in (0, 1]")
        if self.min_node_spacing < self.member_width:
            raise ValueError("minNodeSpacing must be at least memberSpacing * memberWidthRatio")
        if self.child_department_depth < 4:
            # Shallower jumps would put child departments on the parent's member rows.
            raise ValueError("childDepartmentDepth must be at least 4")

    @property
    def member_width(self) -> float:
        return self.member_spacing * self.member_width_ratio

    @classmethod
    def from_dict(cls, values: Optional[Mapping[str, Any]]) -> "LayoutConstants":
        """Build from camelCase or snake_case keys. Unknown keys and None values are ignored."""
        if not values:
            return cls()
        if not isinstance(values, Mapping):
            raise ValueError("Layout constants must be an object")
        kwargs: Dict[str, Any] = {}
        for key, value in values.items():
            field_name = _CAMEL_KEYS.get(key, key)
            if field_name not in _SNAKE_TO_CAMEL or value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, (int, float, str)):
                raise ValueError(f"{_SNAKE_TO_CAMEL[field_name]} must be a number")
            try:
                number = float(value)
            except ValueError:
                raise ValueError(f"{_SNAKE_TO_CAMEL[field_name]} must be a number") from None
            if not math.isfinite(number):
                raise ValueError(f"{_SNAKE_TO_CAMEL[field_name]} must be finite")
            if field_name == "child_department_depth":
                if not number.is_integer():
                    raise ValueError("childDepartmentDepth must be an integer")
                number = int(number)
            kwargs[field_name] = number
        return cls(**kwargs)

    def to_dict(self) -> Dict[str, Any]:
        """camelCase mapping, the shape stored in settings and sent to the frontend."""
        return {_SNAKE_TO_CAMEL[k]: v for k, v in asdict(self).items()}


DEFAULT_LAYOUT_CONSTANTS = LayoutConstants()
