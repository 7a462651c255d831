"""对外 API 服务模块。

提供简化的函数接口供界面层调用。
"""

from typing import Any, Dict, Optional

from weather_chat.agents.intent_router import IntentRouter
from weather_chat.agents.session import ConversationSession
from weather_chat.domain.conversation import Message
from weather_chat.infrastructure.logging.logger import logger
from weather_chat.providers import create_provider, parse_openweather_payload


_router: Optional[IntentRouter] = None
_session: Optional[ConversationSession] = None


def get_default_router() -> IntentRouter:
    """获取默认的 IntentRouter 实例（单例）。"""
    global _router
    if _router is None:
        _router = IntentRouter(lookup_client=create_provider())
    return _router


def get_default_session() -> ConversationSession:
    """获取默认会话（单例）。"""
    global _session
    if _session is None:
        _session = ConversationSession(router=get_default_router())
    return _session


def reset_default_session() -> None:
    """丢弃当前默认会话及其消息记录。"""
    global _session
    _session = None


def set_session_weather(payload: Optional[Dict[str, Any]]) -> None:
    """用界面层持有的 OpenWeatherMap JSON 更新会话缓存天气；传 None 清空。

    Raises:
        ParseError: payload 不是合法的天气 JSON
    """
    session = get_default_session()
    if payload is None:
        session.update_weather(None)
        return
    session.update_weather(parse_openweather_payload(payload))


async def run_weather_chat(user_input: str) -> Optional[Dict[str, Any]]:
    """处理一次用户发送。

    Args:
        user_input: 用户输入内容

    Returns:
        包含用户消息与机器人回复的字典；空白输入返回 None
    """
    try:
        exchange = await get_default_session().send(user_input)
    except Exception as e:
        logger.error(f"Chat failed: {e}", extra={"extra": {"error": str(e)}})
        raise
    if exchange is None:
        return None
    user_msg, bot_msg = exchange
    return {
        "user_message": _message_to_dict(user_msg),
        "bot_message": _message_to_dict(bot_msg),
    }


def list_messages() -> list[Dict[str, Any]]:
    """获取默认会话的所有消息（按发送顺序）。"""
    return [_message_to_dict(m) for m in get_default_session().messages]


def _message_to_dict(message: Message) -> Dict[str, Any]:
    return {
        "sender": message.sender,
        "text": message.text,
        "created_at": message.created_at.isoformat(),
    }
