import pytest

from merchant_twin.rules_engine.config import EngineConfig
from merchant_twin.rules_engine.runner import RulesRunner


@pytest.fixture
def make_runner():
    def _make(*, catalog=None, **config) -> RulesRunner:
        return RulesRunner(catalog=catalog, config=EngineConfig.from_mapping(config))

    return _make


@pytest.fixture
def runner(make_runner) -> RulesRunner:
    return make_runner()

