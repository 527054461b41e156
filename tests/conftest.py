import pytest

from pausestream.bootstrap.config.loader import CONFIG_ENV
from pausestream.bootstrap.deps import get_config
from pausestream.core.helpers.spawn import TaskSpawner


@pytest.fixture
def spawner():
    return TaskSpawner()


@pytest.fixture
def test_data():
    return list(range(30))


@pytest.fixture
def clean_config(monkeypatch):
    monkeypatch.delenv(CONFIG_ENV, raising=False)
    for name in ("COUNT", "PRODUCER", "INITIALLY_PAUSED", "PAUSE_THRESHOLD", "PAUSE_SECONDS"):
        monkeypatch.delenv(f"PAUSESTREAM_{name}", raising=False)

    get_config.cache_clear()
    yield monkeypatch
    get_config.cache_clear()
