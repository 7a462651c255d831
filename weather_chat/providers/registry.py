"""天气 Provider 配置。

集中维护每个天气服务的默认地址与单位制。settings 中的同名字段可以覆盖
base_url，未配置时回落到这里的默认值。"""

from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass
class ProviderConfig:
    """某个天气 Provider 的整体配置。"""

    name: str
    base_url: str
    units: str = "metric"
    geocoding_url: Optional[str] = None


OPENWEATHER_CONFIG = ProviderConfig(
    name="openweather",
    base_url="https://api.openweathermap.org/data/2.5",
)

# Open-Meteo 无需 API key，但需要先做一次地理编码
OPEN_METEO_CONFIG = ProviderConfig(
    name="open-meteo",
    base_url="https://api.open-meteo.com/v1",
    geocoding_url="https://geocoding-api.open-meteo.com/v1",
)


PROVIDER_REGISTRY: Mapping[str, ProviderConfig] = {
    "openweather": OPENWEATHER_CONFIG,
    "open-meteo": OPEN_METEO_CONFIG,
}


def get_provider_config(name: str) -> ProviderConfig:
    """根据名称获取 ProviderConfig，名称不区分大小写，下划线视同连字符。"""

    key = name.lower().replace("_", "-")
    for k, cfg in PROVIDER_REGISTRY.items():
        if k == key:
            return cfg
    raise KeyError(f"Unknown provider: {name!r}")
