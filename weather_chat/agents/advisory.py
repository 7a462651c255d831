"""天气状况 -> 穿衣/出行建议 的规则表。

规则按顺序求值，第一条命中的规则胜出。顺序本身就是冲突裁决策略：
例如描述里同时出现 "cloud" 和 "rain" 时，rain 排在前面，所以返回雨天建议。
调用方需保证 condition 与 description 已经转成小写。
"""

from dataclasses import dataclass
from typing import Optional, Sequence, Tuple


@dataclass(frozen=True)
class AdvisoryRule:
    """一条建议规则：condition 或 description 包含任一关键字即命中。"""

    name: str
    advisory: str
    condition_keywords: Tuple[str, ...] = ()
    description_keywords: Tuple[str, ...] = ()

    def matches(self, condition: str, description: str) -> bool:
        return any(k in condition for k in self.condition_keywords) or any(
            k in description for k in self.description_keywords
        )


ADVISORY_RULES: Tuple[AdvisoryRule, ...] = (
    AdvisoryRule(
        name="rain",
        advisory="☔ It’s rainy — wear a waterproof jacket and carry an umbrella!",
        condition_keywords=("rain",),
        description_keywords=("rain",),
    ),
    AdvisoryRule(
        name="clear",
        advisory="😎 Clear skies — go for light cotton clothes, sunglasses, and drink water!",
        condition_keywords=("clear",),
        description_keywords=("sunny",),
    ),
    AdvisoryRule(
        name="clouds",
        advisory="☁️ Cloudy — you might want a light hoodie or a comfy tee.",
        condition_keywords=("cloud",),
        description_keywords=("overcast",),
    ),
    AdvisoryRule(
        name="snow",
        advisory="❄️ Snowy weather — wear a thick jacket, gloves, and boots!",
        condition_keywords=("snow",),
    ),
    AdvisoryRule(
        name="drizzle",
        advisory="🌦️ Light drizzle — keep a compact umbrella or raincoat handy.",
        condition_keywords=("drizzle",),
    ),
    AdvisoryRule(
        name="fog",
        advisory="🌫️ Misty/foggy — wear visible colors and be cautious outdoors.",
        condition_keywords=("mist", "fog"),
    ),
    AdvisoryRule(
        name="haze",
        advisory="😷 Air quality seems poor — wear a mask and avoid staying out too long.",
        condition_keywords=("haze", "smoke"),
    ),
    AdvisoryRule(
        name="dust",
        advisory="🌬️ Dusty — wear a mask or scarf to protect yourself!",
        condition_keywords=("dust", "sand"),
    ),
    AdvisoryRule(
        name="thunderstorm",
        advisory="⚡ Thunderstorms — better stay indoors and unplug electronics!",
        condition_keywords=("thunder",),
    ),
    AdvisoryRule(
        name="volcanic_ash",
        advisory="🌋 Volcanic ash detected — stay indoors and keep windows shut.",
        condition_keywords=("ash", "volcanic"),
    ),
    AdvisoryRule(
        name="squall",
        advisory="💨 Strong winds ahead — secure loose items and wear a windbreaker!",
        condition_keywords=("squall",),
    ),
    AdvisoryRule(
        name="tornado",
        advisory="🌪️ Tornado alert — stay in a safe shelter immediately!",
        condition_keywords=("tornado",),
    ),
)

FALLBACK_ADVISORY = "🌍 The weather is {description}. Dress comfortably and stay safe!"


class WeatherConditionClassifier:
    """按 ADVISORY_RULES 的顺序把天气状况映射为一条建议。"""

    def __init__(self, rules: Sequence[AdvisoryRule] = ADVISORY_RULES):
        self._rules = tuple(rules)

    def match(self, condition: str, description: str) -> Optional[AdvisoryRule]:
        for rule in self._rules:
            if rule.matches(condition, description):
                return rule
        return None

    def classify(self, condition: str, description: str) -> str:
        rule = self.match(condition, description)
        if rule is None:
            return FALLBACK_ADVISORY.format(description=description)
        return rule.advisory


_default_classifier = WeatherConditionClassifier()


def classify(condition: str, description: str) -> str:
    """使用默认规则表分类。"""

    return _default_classifier.classify(condition, description)
