"""Weather Chat 顶层包。

该包提供天气聊天机器人的核心实现，包括配置加载、领域模型、
天气 Provider 适配、意图路由与天气建议规则表，以及内存会话。
"""

from weather_chat.agents.intent_router import IntentRouter, detect_intent
from weather_chat.agents.session import ConversationSession

__all__ = ["IntentRouter", "ConversationSession", "detect_intent"]
