import pytest

from places_search.core import config
from places_search.core.models import ConfigError, Coordinate, PlaceTypeFilter

_ENV_VARS = (
    "GOOGLE_API_KEY",
    "PLACES_TYPE_FILTER",
    "PLACES_BIAS_LAT",
    "PLACES_BIAS_LNG",
    "PLACES_BIAS_RADIUS",
    "PLACES_STRICT_BOUNDS",
    "PLACES_REQUEST_TIMEOUT",
    "PLACES_INPUT_PLACEHOLDER",
    "PORT",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.setattr(config, "load_dotenv", lambda: None)
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    config.get_settings.cache_clear()
    yield
    config.get_settings.cache_clear()


def test_get_settings_reads_env(monkeypatch):
    monkeypatch.setenv("GOOGLE_API_KEY", "abc123")
    monkeypatch.setenv("PLACES_TYPE_FILTER", "cities")
    monkeypatch.setenv("PLACES_BIAS_LAT", "55.75")
    monkeypatch.setenv("PLACES_BIAS_LNG", "37.61")
    monkeypatch.setenv("PLACES_BIAS_RADIUS", "1500")
    monkeypatch.setenv("PLACES_STRICT_BOUNDS", "yes")
    monkeypatch.setenv("PLACES_REQUEST_TIMEOUT", "4.5")
    monkeypatch.setenv("PORT", "9100")

    settings = config.get_settings()

    assert settings.google_api_key == "abc123"
    assert settings.place_type is PlaceTypeFilter.CITIES
    assert settings.strict_bounds is True
    assert settings.port == 9100

    session_config = settings.session_config()
    assert session_config.api_key == "abc123"
    assert session_config.timeout_sec == 4.5
    assert session_config.bias.coordinate == Coordinate(55.75, 37.61)
    assert session_config.bias.radius_meters == 1500


def test_get_settings_warns_when_missing(caplog):
    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert "GOOGLE_API_KEY is not configured" in " ".join(caplog.messages)
    assert settings.google_api_key == ""
    assert settings.place_type is PlaceTypeFilter.ALL
    assert settings.input_placeholder == "Enter Address"
    assert settings.port == 8080
    assert settings.search_bias().coordinate is None
    with pytest.raises(ConfigError):
        settings.session_config()


def test_get_settings_falls_back_on_bad_values(monkeypatch, caplog):
    monkeypatch.setenv("PLACES_TYPE_FILTER", "restaurants")
    monkeypatch.setenv("PLACES_BIAS_RADIUS", "-5")
    monkeypatch.setenv("PLACES_REQUEST_TIMEOUT", "soon")
    monkeypatch.setenv("PORT", "eighty")

    with caplog.at_level("WARNING"):
        settings = config.get_settings()

    assert settings.place_type is PlaceTypeFilter.ALL
    assert settings.bias_radius == 0.0
    assert settings.request_timeout == 10.0
    assert settings.port == 8080
    assert "PLACES_TYPE_FILTER" in " ".join(caplog.messages)
