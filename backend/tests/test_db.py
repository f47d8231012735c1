"""Tests for settings persistence."""

import asyncio

import db
from layout import DEFAULT_LAYOUT_CONSTANTS


def test_missing_settings_file_is_empty(isolated_db):
    assert asyncio.run(db.get_settings()) == {}


def test_save_and_read_settings(isolated_db):
    settings = {"layout": {"levelSpacing": 140}, "upstream": {"baseUrl": "http://hr/api"}}

    assert asyncio.run(db.save_settings(settings)) == {"success": True}

    assert asyncio.run(db.get_settings()) == settings
    assert (isolated_db / "settings.json").exists()
    assert not (isolated_db / "settings.json.tmp").exists()


def test_corrupted_settings_are_repaired(isolated_db):
    (isolated_db / "settings.json").write_text('{"layout": {"levelSpacing": 140}', encoding="utf-8")

    assert asyncio.run(db.get_settings()) == {"layout": {"levelSpacing": 140}}


def test_layout_constants_from_settings(isolated_db):
    asyncio.run(db.save_settings({"layout": {"levelSpacing": 140, "memberSpacing": 60}}))

    constants = asyncio.run(db.get_layout_constants())

    assert constants.level_spacing == 140
    assert constants.member_spacing == 60


def test_invalid_layout_settings_fall_back_to_defaults():
    assert db.resolve_layout_constants({"layout": {"levelSpacing": -1}}) == DEFAULT_LAYOUT_CONSTANTS
    assert db.resolve_layout_constants({}) == DEFAULT_LAYOUT_CONSTANTS


def test_upstream_config_defaults():
    assert db.resolve_upstream_config({}) == {
        "baseUrl": db.DEFAULT_UPSTREAM_URL,
        "timeout": db.DEFAULT_UPSTREAM_TIMEOUT,
    }


def test_upstream_config_env_and_settings(monkeypatch):
    monkeypatch.setenv("ORGCHART_UPSTREAM_URL", "http://env/api")
    monkeypatch.setenv("ORGCHART_UPSTREAM_TIMEOUT", "3")

    assert db.resolve_upstream_config({}) == {"baseUrl": "http://env/api", "timeout": 3.0}
    assert db.resolve_upstream_config({"upstream": {"baseUrl": "http://cfg/api", "timeout": 5}}) == {
        "baseUrl": "http://cfg/api",
        "timeout": 5.0,
    }


def test_upstream_invalid_timeout():
    config = db.resolve_upstream_config({"upstream": {"timeout": "soon"}})

    assert config["timeout"] == db.DEFAULT_UPSTREAM_TIMEOUT
