"""意图路由核心模块。

把一句用户输入按固定优先级归类为意图，再分派到对应处理逻辑：

    greeting → thanks → help → recommend → city_query → fallback

recommend 与 city_query 可能触发一次天气查询；查询中的任何异常都会被
转换成固定的错误回复，不会向调用方抛出。
"""

import asyncio
import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Sequence, Tuple
from uuid import uuid4

from weather_chat.agents.advisory import WeatherConditionClassifier
from weather_chat.agents.city_extractor import CityExtractor
from weather_chat.config.settings import settings
from weather_chat.domain.exceptions import BusinessError
from weather_chat.domain.models import Intent, WeatherSnapshot
from weather_chat.infrastructure.logging.logger import logger
from weather_chat.prompts import load_reply
from weather_chat.providers.base import WeatherLookupClient

GREETING_PATTERN = re.compile(r"\b(?:hi|hello|hey)\b")


def normalize(utterance: str) -> str:
    return utterance.strip().lower()


@dataclass(frozen=True)
class IntentRule:
    intent: Intent
    predicate: Callable[[str], bool]


def build_intent_rules(extractor: CityExtractor) -> Tuple[IntentRule, ...]:
    """按顺序求值，第一条命中的规则决定意图；谓词的输入是 normalize 之后的文本。

    city_query 使用传入的 extractor，保证意图检测与城市提取用同一个模式。
    """

    return (
        IntentRule("greeting", lambda msg: GREETING_PATTERN.search(msg) is not None),
        IntentRule("thanks", lambda msg: "thank" in msg),
        IntentRule("help", lambda msg: "help" in msg),
        IntentRule("recommend", lambda msg: "recommend" in msg or "suggest" in msg),
        IntentRule("city_query", lambda msg: extractor.extract(msg) is not None),
    )


INTENT_RULES: Tuple[IntentRule, ...] = build_intent_rules(CityExtractor())


def detect_intent(utterance: str, rules: Sequence[IntentRule] = INTENT_RULES) -> Intent:
    msg = normalize(utterance)
    for rule in rules:
        if rule.predicate(msg):
            return rule.intent
    return "fallback"


def format_temperature(value: float) -> str:
    """整数温度不带小数位（30 而不是 30.0）。"""

    if float(value).is_integer():
        return str(int(value))
    return str(value)


@dataclass
class RouterConfig:
    default_city: str = "Hyderabad"
    lookup_timeout: Optional[float] = 15.0  # None 表示不限时


class IntentRouter:
    """对话入口：respond(utterance, cached_weather) -> 回复文本。

    路由本身无状态，同样的输入（以及确定性的天气查询结果）总是得到同样的回复。
    """

    def __init__(
        self,
        lookup_client: WeatherLookupClient,
        config: Optional[RouterConfig] = None,
        classifier: Optional[WeatherConditionClassifier] = None,
        extractor: Optional[CityExtractor] = None,
    ):
        """初始化路由。

        Args:
            lookup_client: 天气查询客户端
            config: 默认城市、查询超时等（可选，默认取 settings）
            classifier: 天气建议分类器（可选）
            extractor: 城市名提取器（可选）
        """
        self._lookup_client = lookup_client
        self._config = config or RouterConfig(
            default_city=settings.default_city,
            lookup_timeout=settings.lookup_timeout,
        )
        self._classifier = classifier or WeatherConditionClassifier()
        self._extractor = extractor or CityExtractor()
        self._intent_rules = build_intent_rules(self._extractor)

    async def respond(self, utterance: str, cached_weather: Optional[WeatherSnapshot] = None) -> str:
        """为一句用户输入生成回复。

        Args:
            utterance: 原始用户输入
            cached_weather: 会话已缓存的天气快照（可选），仅 recommend 使用

        Returns:
            回复文本
        """
        log_ctx: Dict[str, Any] = {"trace_id": f"tr-{uuid4().hex}"}
        intent = detect_intent(utterance, self._intent_rules)
        log_ctx["intent"] = intent
        self._log(logging.INFO, "Detected intent", log_ctx)

        if intent == "recommend":
            return await self._recommend(cached_weather, log_ctx)
        if intent == "city_query":
            return await self._city_weather(utterance, log_ctx)
        if intent == "fallback":
            return load_reply("fallback", default_city=self._config.default_city)
        return load_reply(intent)

    async def _recommend(self, cached_weather: Optional[WeatherSnapshot], log_ctx: Dict[str, Any]) -> str:
        snapshot = cached_weather
        if snapshot is None or not snapshot.has_conditions:
            city = self._config.default_city
            self._log(logging.INFO, "No cached weather, fetching default city", log_ctx, city=city)
            try:
                snapshot = await self._lookup(city)
            except Exception as e:
                self._log(logging.WARNING, "Default weather lookup failed", log_ctx, city=city, **_error_fields(e))
                return load_reply("lookup_error")

        entry = snapshot.primary_condition
        if entry is None:
            return load_reply("missing_weather")

        condition = entry.main.lower()
        description = entry.description.lower()
        rule = self._classifier.match(condition, description)
        self._log(
            logging.INFO,
            "Classified weather",
            log_ctx,
            condition=condition,
            description=description,
            rule=rule.name if rule else None,
        )
        return self._classifier.classify(condition, description)

    async def _city_weather(self, utterance: str, log_ctx: Dict[str, Any]) -> str:
        # 从未转小写的输入中提取，保留用户输入的城市名大小写
        city = self._extractor.extract(utterance.strip())
        if city is None:
            return load_reply("fallback", default_city=self._config.default_city)
        log_ctx["city"] = city
        try:
            snapshot = await self._lookup(city)
        except Exception as e:
            self._log(logging.WARNING, "City weather lookup failed", log_ctx, **_error_fields(e))
            return load_reply("lookup_error")

        if not snapshot.is_success:
            self._log(logging.INFO, "City not found", log_ctx, status_code=snapshot.status_code)
            return load_reply("city_not_found", city=city)
        entry = snapshot.primary_condition
        if entry is None or snapshot.temperature is None:
            self._log(logging.WARNING, "Incomplete weather snapshot", log_ctx)
            return load_reply("lookup_error")
        return load_reply(
            "city_weather",
            name=snapshot.name or city,
            temperature=format_temperature(snapshot.temperature),
            condition=entry.main,
        )

    async def _lookup(self, city: str) -> WeatherSnapshot:
        timeout = self._config.lookup_timeout
        if timeout is None:
            return await self._lookup_client.fetch(city)
        return await asyncio.wait_for(self._lookup_client.fetch(city), timeout=timeout)

    @staticmethod
    def _log(level: int, message: str, log_ctx: Dict[str, Any], **fields: Any) -> None:
        payload = dict(log_ctx)
        payload.update(fields)
        logger.log(level, message, extra={"extra": payload})


def _error_fields(error: Exception) -> Dict[str, Any]:
    if isinstance(error, BusinessError):
        return error.to_log_fields()
    return {"error": repr(error)}
