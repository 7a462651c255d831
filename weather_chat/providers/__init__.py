"""天气 Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 Provider 默认配置 (registry)。
- 提供各天气服务的具体实现 (openweather_client、open_meteo_client)。
"""

from typing import Optional

from weather_chat.config.settings import settings
from weather_chat.providers.base import WeatherLookupClient
from weather_chat.providers.open_meteo_client import OpenMeteoClient
from weather_chat.providers.openweather_client import OpenWeatherClient, parse_openweather_payload
from weather_chat.providers.registry import get_provider_config


def create_provider(name: Optional[str] = None) -> WeatherLookupClient:
    """根据名称创建 Provider 实例，默认取配置中的 provider。"""

    provider_name = name or getattr(settings, "default_provider", "openweather")
    cfg = get_provider_config(provider_name)
    if cfg.name == "open-meteo":
        return OpenMeteoClient(settings)
    return OpenWeatherClient(settings)


__all__ = [
    "WeatherLookupClient",
    "OpenWeatherClient",
    "OpenMeteoClient",
    "parse_openweather_payload",
    "create_provider",
]
