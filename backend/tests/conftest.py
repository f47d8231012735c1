import pytest

import db


@pytest.fixture(autouse=True)
def isolated_db(tmp_path, monkeypatch):
    """Point settings storage at a temp dir and clear upstream env overrides."""
    monkeypatch.setattr(db, "DB_DIR", tmp_path)
    monkeypatch.delenv("ORGCHART_UPSTREAM_URL", raising=False)
    monkeypatch.delenv("ORGCHART_UPSTREAM_TIMEOUT", raising=False)
    return tmp_path
