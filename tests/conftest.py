from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the accounts package importable when running tests from a checkout
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from accounts.core import config as core_config  # noqa: E402
from accounts.db import create_tables  # noqa: E402
from accounts.db import session as db_session  # noqa: E402


def _clear_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def db_env(tmp_path, monkeypatch):
    """Point DATABASE_URL at a temporary SQLite file and reset settings/engine caches."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("PASSWORD_MIN_LENGTH", "8")
    _clear_caches()

    create_tables.drop_all()
    create_tables.create_all()

    yield db_file

    engine = db_session.get_engine()
    create_tables.drop_all()
    engine.dispose()
    _clear_caches()
