import pytest

from weather_chat.providers import create_provider
from weather_chat.providers.open_meteo_client import OpenMeteoClient
from weather_chat.providers.openweather_client import OpenWeatherClient
from weather_chat.providers.registry import get_provider_config


def test_create_provider_default(monkeypatch):
    class DummySettings:
        default_provider = "openweather"
        weather_api_key = "k" * 32
        http_timeout = 1.0

    monkeypatch.setattr("weather_chat.providers.settings", DummySettings())
    provider = create_provider()
    assert isinstance(provider, OpenWeatherClient)


def test_create_provider_explicit(monkeypatch):
    class DummySettings:
        default_provider = "openweather"
        weather_api_key = None
        http_timeout = 1.0

    monkeypatch.setattr("weather_chat.providers.settings", DummySettings())
    provider = create_provider("Open_Meteo")
    assert isinstance(provider, OpenMeteoClient)


def test_unknown_provider():
    with pytest.raises(KeyError):
        get_provider_config("accuweather")
