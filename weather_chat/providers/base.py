"""天气 Provider 抽象接口。

上层 IntentRouter 不直接依赖具体天气服务的 HTTP 细节，而是依赖此协议：

- 每个天气服务实现一个 WeatherLookupClient（如 OpenWeatherClient）。
- 负责：按城市名发起查询，并把响应 JSON 解析为 WeatherSnapshot。

这样可以在不改路由代码的前提下切换或接入更多天气服务。
"""

from typing import Protocol

from weather_chat.domain.models import WeatherSnapshot


class WeatherLookupClient(Protocol):
    """天气查询客户端协议。

    实现者需要提供：
    - name: Provider 名称，用于日志。
    - fetch(city): 查询一次当前天气，返回统一的 WeatherSnapshot；
      网络/解析失败时抛出 domain.exceptions 中的异常。
    """

    name: str

    async def fetch(self, city: str) -> WeatherSnapshot:
        ...
