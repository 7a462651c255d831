"""OpenWeatherMap Provider 适配器。

本模块负责：

1. 接收城市名。
2. 将其转换为 OpenWeatherMap `/weather` 接口的 HTTP 请求（metric 单位）。
3. 调用 HTTP 接口并处理网络/API 异常。
4. 将响应 JSON 解析为统一的 WeatherSnapshot。

注意：OpenWeatherMap 在“城市不存在”时同样返回 JSON（cod="404"），
这类结果不是异常，而是 status_code != 200 的快照，由路由层给出提示。
"""

import httpx
from typing import Any, Mapping, Optional

from weather_chat.domain.models import ConditionEntry, WeatherSnapshot
from weather_chat.domain.exceptions import ApiError, NetworkError, ParseError, RateLimitError
from weather_chat.providers.registry import OPENWEATHER_CONFIG


class OpenWeatherClient:
    """OpenWeatherMap 客户端实现。

    - name: Provider 名称（供日志/调试使用）。
    - fetch: 对外统一调用入口，返回 WeatherSnapshot。
    """

    name = "openweather"

    def __init__(self, settings):
        # Settings 里包含 base_url、api_key、超时等配置
        self._settings = settings

    async def fetch(self, city: str) -> WeatherSnapshot:
        """查询某个城市的当前天气。

        步骤：
        1. 构造查询参数（q / appid / units）。缺少 API key 时照常请求，
           由服务端返回 cod=401，按“查询未成功”处理。
        2. 发送请求并捕获网络错误/限流/服务端错误。
        3. 使用 parse_openweather_payload 构造 WeatherSnapshot。
        """

        api_key = getattr(self._settings, "weather_api_key", None) or ""
        base = getattr(self._settings, "openweather_base_url", None) or OPENWEATHER_CONFIG.base_url
        params = {"q": city, "appid": api_key, "units": OPENWEATHER_CONFIG.units}
        try:
            async with httpx.AsyncClient(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = await client.get(f"{base}/weather", params=params)
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e), provider=self.name)
        if resp.status_code == 429:
            raise RateLimitError(code="RATE_LIMIT", message="OpenWeatherMap rate limit", provider=self.name)
        if resp.status_code >= 500:
            raise ApiError(code="API_ERROR", message=resp.text, http_status=resp.status_code, provider=self.name)
        try:
            data = resp.json()
        except ValueError as e:
            raise ParseError(code="PARSE_ERROR", message=str(e), provider=self.name)
        return parse_openweather_payload(data, http_status=resp.status_code)


def parse_openweather_payload(data: Any, http_status: Optional[int] = None) -> WeatherSnapshot:
    """将 OpenWeatherMap 的原始响应 JSON 解析为 WeatherSnapshot。

    也可直接用于调用方已持有的天气 JSON（例如界面层缓存的当前天气），
    这类数据可能没有 cod 字段，此时 status_code 为 None。

    缺少天气状况或温度的响应照常返回快照，是否可用由路由层按意图判断。
    """

    if not isinstance(data, Mapping):
        raise ParseError(code="PARSE_ERROR", message="weather payload is not a JSON object")

    conditions = []
    for item in data.get("weather") or []:
        if not isinstance(item, Mapping):
            continue
        conditions.append(
            ConditionEntry(
                main=str(item.get("main") or ""),
                description=str(item.get("description") or ""),
            )
        )

    main = data.get("main")
    temperature = main.get("temp") if isinstance(main, Mapping) else None
    status_code = _as_status(data.get("cod"), http_status)

    return WeatherSnapshot(
        conditions=tuple(conditions),
        name=data.get("name") or None,
        temperature=float(temperature) if isinstance(temperature, (int, float)) else None,
        status_code=status_code,
        raw=dict(data),
    )


def _as_status(cod: Any, http_status: Optional[int]) -> Optional[int]:
    """cod 字段在成功时是整数 200，失败时常是字符串（如 "404"）。"""

    if cod is None:
        return http_status
    try:
        return int(cod)
    except (TypeError, ValueError):
        return http_status
