import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from timesince.shared.storage.event_store import EventStore


class FixedClock:
    """Callable clock that only moves when a test advances it."""

    def __init__(self, start: datetime) -> None:
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def data_file(tmp_path):
    return tmp_path / "config" / "timesince" / "data.json"


@pytest.fixture
def store(data_file):
    return EventStore(data_file)


@pytest.fixture
def clock():
    return FixedClock(datetime(2024, 1, 1, tzinfo=timezone.utc))


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep tests away from the real user config directory."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))
    monkeypatch.delenv("TIMESINCE_DATA_FILE", raising=False)
    monkeypatch.delenv("TIMESINCE_LOG_DIR", raising=False)
    monkeypatch.delenv("TIMESINCE_LOG_LEVEL", raising=False)
    monkeypatch.delenv("NO_COLOR", raising=False)
    monkeypatch.chdir(tmp_path)
