"""固定回复文案。

路由层的每个分支都只返回这里登记的模板之一；需要插值的模板
（城市名、温度等）由 load_reply 统一格式化。
"""

from typing import Any, Dict


REPLIES: Dict[str, str] = {
    "greeting": "Hello! 👋 How are you today?",
    "thanks": "You're very welcome! 😊 Stay safe!",
    "help": "I can tell you the weather 🌦️ or give outfit suggestions! 👕",
    "missing_weather": "Please check the weather first or ask me about a city 🌍",
    "city_weather": "🌤️ Weather in {name}: {temperature}°C, {condition}",
    "city_not_found": "❌ I couldn’t find weather for \"{city}\". Try another city.",
    "lookup_error": "⚠️ Error fetching weather data.",
    "fallback": "I'm still learning 🤖. Try 'weather in {default_city}' or 'recommend something'.",
}


def load_reply(key: str, **fields: Any) -> str:
    """按 key 取回复模板；提供 fields 时做 str.format 插值。"""

    template = REPLIES[key]
    if fields:
        return template.format(**fields)
    return template
