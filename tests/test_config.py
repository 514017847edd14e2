import pytest

from teambalance.config import EngineSettings, get_formation, is_position_code, iter_formations
from teambalance.config.settings import DEFAULT_MODEL


def test_get_formation_known_side_size():
    guide = get_formation(7)
    assert guide is not None
    assert "1-2-3-1" in guide.formations


def test_get_formation_missing_returns_none():
    assert get_formation(11) is None


def test_iter_formations_largest_first():
    sizes = [guide.players_per_side for guide in iter_formations()]
    assert sizes == sorted(sizes, reverse=True)


def test_is_position_code():
    assert is_position_code("CDM")
    assert not is_position_code("cdm")
    assert not is_position_code("SW")


def test_settings_defaults_without_env():
    settings = EngineSettings.from_env({})
    assert settings.api_key is None
    assert settings.model == DEFAULT_MODEL
    assert settings.max_tokens == 2048


def test_settings_reads_overrides_and_fallback_key():
    settings = EngineSettings.from_env(
        {
            "ANTHROPIC_API_KEY": "fallback",
            "TEAMBALANCE_TIMEOUT": "5000",
            "TEAMBALANCE_MAX_TOKENS": "1024",
            "TEAMBALANCE_BASE_URL": "http://localhost:9000/",
        }
    )
    assert settings.api_key == "fallback"
    assert settings.timeout_seconds == pytest.approx(600.0)
    assert settings.max_tokens == 1024
    assert settings.base_url == "http://localhost:9000"


def test_settings_invalid_numbers_fall_back_to_defaults():
    settings = EngineSettings.from_env(
        {"TEAMBALANCE_API_KEY": "key", "TEAMBALANCE_TIMEOUT": "soon", "TEAMBALANCE_MAX_TOKENS": "many"}
    )
    assert settings.api_key == "key"
    assert settings.timeout_seconds == pytest.approx(60.0)
    assert settings.max_tokens == 2048


def test_settings_clamp_small_values_to_lower_bounds():
    settings = EngineSettings.from_env({"TEAMBALANCE_TIMEOUT": "0.1", "TEAMBALANCE_MAX_TOKENS": "10"})
    assert settings.timeout_seconds == pytest.approx(1.0)
    assert settings.max_tokens == 256
