from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Literal, Tuple


Sender = Literal["user", "bot"]


@dataclass(frozen=True)
class Message:
    sender: Sender
    text: str
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


class ConversationHistory:
    """只追加的内存会话记录。

    每次发送都以 (用户消息, 机器人回复) 成对写入，消息不会被修改或删除。
    """

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def append_exchange(self, user_message: Message, bot_message: Message) -> None:
        if user_message.sender != "user" or bot_message.sender != "bot":
            raise ValueError("exchange must be a user message followed by a bot reply")
        self._messages.extend((user_message, bot_message))

    def list_messages(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
