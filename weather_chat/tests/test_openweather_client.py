import asyncio
import json

import httpx
import pytest

from weather_chat.domain.exceptions import NetworkError, ParseError, RateLimitError
from weather_chat.providers.openweather_client import OpenWeatherClient, parse_openweather_payload


class SettingsStub:
    weather_api_key = "k" * 32
    http_timeout = 1.0
    openweather_base_url = "https://api.openweathermap.org/data/2.5"


def _fake_client(status_code, body, captured=None):
    class Resp:
        def __init__(self):
            self.status_code = status_code
            self.text = body if isinstance(body, str) else json.dumps(body)

        def json(self):
            if isinstance(body, str):
                return json.loads(body)
            return body

    class Client:
        def __init__(self, *a, **kw):
            if captured is not None:
                captured["client_kwargs"] = kw

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def get(self, url, params=None, **kw):
            if captured is not None:
                captured["url"] = url
                captured["params"] = params
            return Resp()

    return Client


def test_fetch_success(monkeypatch):
    captured = {}
    body = {
        "cod": 200,
        "name": "Hyderabad",
        "main": {"temp": 31.2},
        "weather": [{"main": "Haze", "description": "haze"}],
    }
    monkeypatch.setattr("httpx.AsyncClient", _fake_client(200, body, captured))
    snap = asyncio.run(OpenWeatherClient(SettingsStub()).fetch("Hyderabad"))
    assert snap.is_success
    assert snap.name == "Hyderabad"
    assert snap.temperature == 31.2
    assert snap.primary_condition.main == "Haze"
    assert captured["url"] == "https://api.openweathermap.org/data/2.5/weather"
    assert captured["params"]["q"] == "Hyderabad"
    assert captured["params"]["units"] == "metric"
    assert captured["client_kwargs"]["timeout"] == 1.0


def test_fetch_city_not_found_is_not_an_error(monkeypatch):
    monkeypatch.setattr("httpx.AsyncClient", _fake_client(404, {"cod": "404", "message": "city not found"}))
    snap = asyncio.run(OpenWeatherClient(SettingsStub()).fetch("Nowhereistan"))
    assert snap.status_code == 404
    assert not snap.is_success
    assert not snap.has_conditions


def test_fetch_without_api_key_still_sends_request(monkeypatch):
    class NoKey(SettingsStub):
        weather_api_key = None

    captured = {}
    body = {"cod": 401, "message": "Invalid API key"}
    monkeypatch.setattr("httpx.AsyncClient", _fake_client(401, body, captured))
    snap = asyncio.run(OpenWeatherClient(NoKey()).fetch("Paris"))
    assert captured["params"]["appid"] == ""
    assert snap.status_code == 401
    assert not snap.is_success


def test_fetch_network_error(monkeypatch):
    class Client:
        def __init__(self, *a, **kw):
            pass

        async def __aenter__(self):
            return self

        async def __aexit__(self, *a):
            return False

        async def get(self, *a, **kw):
            raise httpx.ConnectError("connection refused")

    monkeypatch.setattr("httpx.AsyncClient", Client)
    with pytest.raises(NetworkError):
        asyncio.run(OpenWeatherClient(SettingsStub()).fetch("Paris"))


def test_fetch_rate_limit(monkeypatch):
    monkeypatch.setattr("httpx.AsyncClient", _fake_client(429, {"cod": 429}))
    with pytest.raises(RateLimitError):
        asyncio.run(OpenWeatherClient(SettingsStub()).fetch("Paris"))


def test_fetch_malformed_body(monkeypatch):
    monkeypatch.setattr("httpx.AsyncClient", _fake_client(200, "<html>oops</html>"))
    with pytest.raises(ParseError):
        asyncio.run(OpenWeatherClient(SettingsStub()).fetch("Paris"))


def test_parse_cached_payload_without_cod():
    snap = parse_openweather_payload({"weather": [{"main": "Rain", "description": "light rain"}]})
    assert snap.status_code is None
    assert snap.primary_condition.description == "light rain"


def test_parse_success_without_weather_list():
    snap = parse_openweather_payload({"cod": 200, "name": "Hyderabad", "main": {"temp": 30}})
    assert snap.is_success
    assert snap.temperature == 30.0
    assert not snap.has_conditions
