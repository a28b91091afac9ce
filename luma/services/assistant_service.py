"""
Scripted learning assistant.

Not a language model: replies come from a fixed lookup keyed by the
suggested questions, with a fallback for anything else. The configured
delay only imitates typing.
"""

from __future__ import annotations

import time
import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone

from luma.core.exceptions import ValidationError
from luma.data.mock_data import (
    ASSISTANT_FALLBACK,
    ASSISTANT_GREETING,
    ASSISTANT_RESPONSES,
    SUGGESTED_QUESTIONS,
)


@dataclass
class ChatMessage:
    role: str
    content: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    def to_dict(self) -> dict:
        return asdict(self)


def greeting() -> ChatMessage:
    return ChatMessage(role="assistant", content=ASSISTANT_GREETING)


def suggestions() -> list[str]:
    return list(SUGGESTED_QUESTIONS)


def answer_for(text: str) -> str:
    return ASSISTANT_RESPONSES.get(text.strip(), ASSISTANT_FALLBACK)


def reply(message: str | None, delay_seconds: float = 0.0) -> tuple[ChatMessage, ChatMessage]:
    """Return the (user, assistant) message pair for ``message``.

    Raises:
        ValidationError: message is empty or whitespace.
    """
    text = message or ""
    if not text.strip():
        raise ValidationError("message cannot be empty", details={"message": "required"})

    user_msg = ChatMessage(role="user", content=text)
    if delay_seconds > 0:
        time.sleep(delay_seconds)
    return user_msg, ChatMessage(role="assistant", content=answer_for(text))
