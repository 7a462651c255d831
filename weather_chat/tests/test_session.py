import asyncio

import pytest

from weather_chat.agents.advisory import ADVISORY_RULES
from weather_chat.agents.intent_router import IntentRouter, RouterConfig
from weather_chat.agents.session import ConversationSession
from weather_chat.api import service
from weather_chat.domain.conversation import ConversationHistory, Message
from weather_chat.domain.models import ConditionEntry, WeatherSnapshot
from weather_chat.prompts import load_reply


class FakeLookup:
    name = "fake"

    async def fetch(self, city):
        return WeatherSnapshot(status_code=404)


def _session(weather=None):
    router = IntentRouter(lookup_client=FakeLookup(), config=RouterConfig(default_city="Hyderabad"))
    return ConversationSession(router=router, weather=weather)


def test_send_appends_pair():
    session = _session()
    user_msg, bot_msg = asyncio.run(session.send("  hi  "))
    assert user_msg.sender == "user"
    assert user_msg.text == "hi"
    assert bot_msg.sender == "bot"
    assert bot_msg.text == load_reply("greeting")
    assert session.messages == (user_msg, bot_msg)


def test_blank_input_is_ignored():
    session = _session()
    assert asyncio.run(session.send("   ")) is None
    assert session.messages == ()


def test_session_weather_feeds_recommend():
    session = _session()
    asyncio.run(session.send("recommend something"))
    session.update_weather(WeatherSnapshot(conditions=(ConditionEntry(main="Rain", description="light rain"),)))
    asyncio.run(session.send("recommend something"))
    texts = [m.text for m in session.messages]
    assert texts == [
        "recommend something",
        load_reply("missing_weather"),
        "recommend something",
        ADVISORY_RULES[0].advisory,
    ]


def test_history_rejects_out_of_order_exchange():
    history = ConversationHistory()
    with pytest.raises(ValueError):
        history.append_exchange(Message(sender="bot", text="a"), Message(sender="user", text="b"))
    assert len(history) == 0


def test_service_roundtrip(monkeypatch):
    router = IntentRouter(lookup_client=FakeLookup(), config=RouterConfig(default_city="Hyderabad"))
    monkeypatch.setattr(service, "_router", router)
    monkeypatch.setattr(service, "_session", None)

    service.set_session_weather({"weather": [{"main": "Clear", "description": "clear sky"}]})
    result = asyncio.run(service.run_weather_chat("recommend something"))
    assert result["bot_message"]["text"] == ADVISORY_RULES[1].advisory
    assert asyncio.run(service.run_weather_chat("")) is None
    assert [m["sender"] for m in service.list_messages()] == ["user", "bot"]

    service.reset_default_session()
    assert service.list_messages() == []
