"""Open-Meteo Provider 适配器（免 API key）。

查询分两步：先用地理编码接口把城市名换成经纬度，再查 current_weather。
Open-Meteo 只返回 WMO 天气代码，这里把代码映射成与 OpenWeatherMap 相同的
main/description 词汇，使建议规则表对两个 Provider 一致生效。
"""

import httpx
from typing import Any, Dict, Mapping, Tuple

from weather_chat.domain.models import ConditionEntry, WeatherSnapshot, STATUS_OK
from weather_chat.domain.exceptions import ApiError, NetworkError, ParseError, RateLimitError
from weather_chat.providers.registry import OPEN_METEO_CONFIG

STATUS_NOT_FOUND = 404

# WMO weather code -> (main, description)
WMO_CONDITIONS: Dict[int, Tuple[str, str]] = {
    0: ("Clear", "clear sky"),
    1: ("Clear", "mainly clear"),
    2: ("Clouds", "partly cloudy"),
    3: ("Clouds", "overcast clouds"),
    45: ("Fog", "fog"),
    48: ("Fog", "depositing rime fog"),
    51: ("Drizzle", "light drizzle"),
    53: ("Drizzle", "moderate drizzle"),
    55: ("Drizzle", "dense drizzle"),
    56: ("Drizzle", "light freezing drizzle"),
    57: ("Drizzle", "dense freezing drizzle"),
    61: ("Rain", "slight rain"),
    63: ("Rain", "moderate rain"),
    65: ("Rain", "heavy rain"),
    66: ("Rain", "light freezing rain"),
    67: ("Rain", "heavy freezing rain"),
    71: ("Snow", "slight snow fall"),
    73: ("Snow", "moderate snow fall"),
    75: ("Snow", "heavy snow fall"),
    77: ("Snow", "snow grains"),
    80: ("Rain", "slight rain showers"),
    81: ("Rain", "moderate rain showers"),
    82: ("Rain", "violent rain showers"),
    85: ("Snow", "slight snow showers"),
    86: ("Snow", "heavy snow showers"),
    95: ("Thunderstorm", "thunderstorm"),
    96: ("Thunderstorm", "thunderstorm with slight hail"),
    99: ("Thunderstorm", "thunderstorm with heavy hail"),
}


class OpenMeteoClient:
    name = "open-meteo"

    def __init__(self, settings):
        self._settings = settings

    async def fetch(self, city: str) -> WeatherSnapshot:
        """查询城市当前天气；城市无法地理编码时返回 status_code=404 的快照。"""

        geo_base = getattr(self._settings, "open_meteo_geocoding_url", None) or OPEN_METEO_CONFIG.geocoding_url
        base = getattr(self._settings, "open_meteo_base_url", None) or OPEN_METEO_CONFIG.base_url
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                geo = await self._get_json(
                    client,
                    f"{geo_base}/search",
                    {"name": city, "count": 1, "language": "en", "format": "json"},
                )
                results = geo.get("results") or []
                if not results:
                    return WeatherSnapshot(status_code=STATUS_NOT_FOUND, raw=geo)
                place = results[0]
                data = await self._get_json(
                    client,
                    f"{base}/forecast",
                    {
                        "latitude": place["latitude"],
                        "longitude": place["longitude"],
                        "current_weather": "true",
                        "timezone": "auto",
                    },
                )
        except httpx.RequestError as e:
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)
        except (KeyError, TypeError) as e:
            raise ParseError(code="PARSE_ERROR", message=f"geocoding result malformed: {e}", provider=self.name)
        return self._parse_current(data, place)

    async def _get_json(self, client: httpx.AsyncClient, url: str, params: Dict[str, Any]) -> Dict[str, Any]:
        resp = await client.get(url, params=params)
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="Open-Meteo rate limit", provider=self.name)
        if resp.status_code >= 400:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code, provider=self.name)
        try:
            data = resp.json()
        except ValueError as e:
            raise ParseError(code="PARSE_ERROR", message=str(e), provider=self.name)
        if not isinstance(data, dict):
            raise ParseError(code="PARSE_ERROR", message="response is not a JSON object", provider=self.name)
        return data

    def _parse_current(self, data: Dict[str, Any], place: Mapping[str, Any]) -> WeatherSnapshot:
        current = data.get("current_weather")
        if not isinstance(current, Mapping):
            raise ParseError(code="PARSE_ERROR", message="current_weather missing", provider=self.name)
        temperature = current.get("temperature")
        if isinstance(temperature, bool) or not isinstance(temperature, (int, float)):
            raise ParseError(code="PARSE_ERROR", message=f"temperature is not a number: {temperature!r}", provider=self.name)
        code = current.get("weathercode", current.get("weather_code"))
        try:
            main, description = WMO_CONDITIONS.get(int(code), ("Unknown", "unknown conditions"))
        except (TypeError, ValueError):
            main, description = "Unknown", "unknown conditions"
        return WeatherSnapshot(
            conditions=(ConditionEntry(main=main, description=description),),
            name=place.get("name"),
            temperature=float(temperature),
            status_code=STATUS_OK,
            raw=data,
        )
