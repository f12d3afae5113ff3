import pytest

TWIN_ENV_VARS = ("TWIN_DATA_SOURCE", "TWIN_FLEET_SIZE", "TWIN_SEED", "TWIN_TOP_FAILURES", "TWIN_LOG_LEVEL")


@pytest.fixture
def clean_env(monkeypatch):
    for name in TWIN_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
