"""统一的天气快照与意图数据模型。

本模块定义了路由层与各天气 Provider 之间共享的标准数据结构：

- ConditionEntry: 一条天气状况（main + description）。
- WeatherSnapshot: 某一时刻的天气读数，可由调用方缓存传入，也可由 Provider 现查。
- Intent: 一句用户输入被归类到的意图。

所有 Provider 适配器（如 OpenWeatherClient）都必须只产出这些模型，
并负责在各自的 API JSON 和这些模型之间做转换。
"""

from dataclasses import dataclass, field
from typing import Literal, Optional, Tuple


# 意图集合是封闭的，检测顺序见 agents.intent_router.INTENT_RULES
Intent = Literal["greeting", "thanks", "help", "recommend", "city_query", "fallback"]

# Provider 约定的“查询成功”状态码（OpenWeatherMap 的 cod 字段）
STATUS_OK = 200


@dataclass(frozen=True)
class ConditionEntry:
    """单条天气状况。

    - main: 天气大类，如 "Rain"、"Clouds"。
    - description: 细分描述，如 "light rain"。
    """

    main: str
    description: str


@dataclass(frozen=True)
class WeatherSnapshot:
    """一次天气查询的结果（创建后不可变）。

    - conditions: 天气状况列表，通常只用第一条。
    - name: Provider 返回的规范城市名。
    - temperature: 温度（摄氏度）。
    - status_code: 应用层状态码，200 表示查询成功；与 HTTP 状态码无关。
    - raw: 原始响应 JSON，仅用于调试，不参与相等比较。
    """

    conditions: Tuple[ConditionEntry, ...] = ()
    name: Optional[str] = None
    temperature: Optional[float] = None
    status_code: Optional[int] = None
    raw: Optional[dict] = field(default=None, compare=False, hash=False, repr=False)

    @property
    def has_conditions(self) -> bool:
        return len(self.conditions) > 0

    @property
    def primary_condition(self) -> Optional[ConditionEntry]:
        return self.conditions[0] if self.conditions else None

    @property
    def is_success(self) -> bool:
        return self.status_code == STATUS_OK
