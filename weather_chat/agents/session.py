"""会话包装。

持有内存中的消息记录与会话级缓存天气，把每次发送交给 IntentRouter。
"""

from typing import Optional, Tuple

from weather_chat.agents.intent_router import IntentRouter
from weather_chat.domain.conversation import ConversationHistory, Message
from weather_chat.domain.models import WeatherSnapshot


class ConversationSession:
    """单用户、单次会话。

    调用方应 await 完一次 send 再发起下一次；消息只追加，不修改。
    """

    def __init__(self, router: IntentRouter, weather: Optional[WeatherSnapshot] = None):
        self._router = router
        self._weather = weather
        self._history = ConversationHistory()

    @property
    def weather(self) -> Optional[WeatherSnapshot]:
        return self._weather

    def update_weather(self, weather: Optional[WeatherSnapshot]) -> None:
        """替换会话缓存的天气（例如界面刚展示了某城市的天气）。"""
        self._weather = weather

    @property
    def messages(self) -> Tuple[Message, ...]:
        return self._history.list_messages()

    async def send(self, text: str) -> Optional[Tuple[Message, Message]]:
        """发送一条用户输入。

        Returns:
            (用户消息, 机器人回复)；输入为空白时返回 None 且不记录。
        """
        trimmed = text.strip()
        if not trimmed:
            return None
        user_message = Message(sender="user", text=trimmed)
        reply = await self._router.respond(trimmed, self._weather)
        bot_message = Message(sender="bot", text=reply)
        self._history.append_exchange(user_message, bot_message)
        return user_message, bot_message
