"""从用户输入中提取城市名。"""

import re
from typing import Optional, Pattern

# "weather" 之后可选 in/at/for，再捕获一段字母与空白作为城市名。
# 不校验城市是否真实存在，以天气查询结果为准。
CITY_PATTERN: Pattern[str] = re.compile(r"weather\s*(?:in|at|for)?\s*([a-z\s]+)", re.IGNORECASE)


class CityExtractor:
    def __init__(self, pattern: Pattern[str] = CITY_PATTERN):
        self._pattern = pattern

    def extract(self, utterance: str) -> Optional[str]:
        """返回去除首尾空白的城市名；未匹配或捕获为空时返回 None。

        >>> CityExtractor().extract("weather in Hyderabad")
        'Hyderabad'
        >>> CityExtractor().extract("how are you") is None
        True
        """

        match = self._pattern.search(utterance)
        if match is None:
            return None
        city = match.group(1).strip()
        return city or None


_default_extractor = CityExtractor()


def extract_city(utterance: str) -> Optional[str]:
    return _default_extractor.extract(utterance)
