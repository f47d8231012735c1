"""Tests for layout constants parsing and validation."""

import pytest

from layout import DEFAULT_LAYOUT_CONSTANTS, LayoutConstants


def test_defaults():
    assert DEFAULT_LAYOUT_CONSTANTS.level_spacing == 100
    assert DEFAULT_LAYOUT_CONSTANTS.member_width == pytest.approx(72)


def test_from_dict_accepts_camel_and_snake_case():
    """Both key styles map onto the same fields; unknown keys and None are ignored."""
    constants = LayoutConstants.from_dict({
        "levelSpacing": 150,
        "member_spacing": "80",
        "childDepartmentDepth": 5.0,
        "teamSpacing": None,
        "colour": "blue",
    })

    assert constants.level_spacing == 150
    assert constants.member_spacing == 80
    assert constants.child_department_depth == 5
    assert constants.team_spacing == DEFAULT_LAYOUT_CONSTANTS.team_spacing


def test_from_empty_dict_is_default():
    assert LayoutConstants.from_dict(None) == DEFAULT_LAYOUT_CONSTANTS
    assert LayoutConstants.from_dict({}) == DEFAULT_LAYOUT_CONSTANTS


@pytest.mark.parametrize("values, message", [
    ({"levelSpacing": 0}, "levelSpacing must be positive"),
    ({"memberSpacing": -5}, "memberSpacing must be positive"),
    ({"departmentSpacing": -1}, "departmentSpacing must not be negative"),
    ({"memberWidthRatio": 1.5}, "memberWidthRatio"),
    ({"minNodeSpacing": 50}, "minNodeSpacing must be at least"),
    ({"memberSpacing": 200}, "minNodeSpacing must be at least"),
    ({"childDepartmentDepth": 2}, "childDepartmentDepth must be at least 4"),
    ({"childDepartmentDepth": 4.5}, "childDepartmentDepth must be an integer"),
    ({"levelSpacing": "wide"}, "levelSpacing must be a number"),
    ({"levelSpacing": True}, "levelSpacing must be a number"),
    ({"levelSpacing": [100]}, "levelSpacing must be a number"),
    ({"levelSpacing": "inf"}, "levelSpacing must be finite"),
])
def test_from_dict_rejects_invalid(values, message):
    with pytest.raises(ValueError, match=message):
        LayoutConstants.from_dict(values)


def test_from_dict_rejects_non_mapping():
    with pytest.raises(ValueError):
        LayoutConstants.from_dict([("levelSpacing", 100)])


def test_to_dict_round_trips_camel_case():
    constants = LayoutConstants(level_spacing=120, team_spacing=80)

    data = constants.to_dict()

    assert data["levelSpacing"] == 120
    assert data["teamSpacing"] == 80
    assert set(data) == {
        "levelSpacing", "minNodeSpacing", "teamSpacing", "memberSpacing",
        "departmentSpacing", "memberWidthRatio", "childDepartmentDepth",
    }
    assert LayoutConstants.from_dict(data) == constants
