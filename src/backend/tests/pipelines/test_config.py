import pytest

from pipelines.config import FleetSettings, get_fleet_settings


def test_defaults(clean_env):
    assert get_fleet_settings() == FleetSettings()


def test_reads_environment(clean_env):
    clean_env.setenv("TWIN_DATA_SOURCE", " Generated ")
    clean_env.setenv("TWIN_FLEET_SIZE", "40")
    clean_env.setenv("TWIN_SEED", "7")
    clean_env.setenv("TWIN_TOP_FAILURES", "3")
    clean_env.setenv("TWIN_LOG_LEVEL", "debug")
    settings = get_fleet_settings()
    assert settings == FleetSettings(
        data_source="generated", fleet_size=40, seed=7, top_failures=3, log_level="DEBUG"
    )


@pytest.mark.parametrize(
    "name, value",
    [
        ("TWIN_DATA_SOURCE", "database"),
        ("TWIN_FLEET_SIZE", "many"),
        ("TWIN_FLEET_SIZE", "0"),
        ("TWIN_SEED", "1.5"),
        ("TWIN_TOP_FAILURES", "-2"),
    ],
)
def test_invalid_values_name_the_variable(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ValueError) as exc:
        get_fleet_settings()
    assert name in str(exc.value)
