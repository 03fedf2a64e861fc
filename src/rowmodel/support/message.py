"""User-facing feedback messages.

A ``Message`` lives next to ``Model.fail`` but is meant for presentation
layers: short text plus a severity, never a stack trace.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class MessageType(StrEnum):
    """Severity of a feedback message."""

    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class Message:
    """Fluent feedback holder.

    Example:
        message = Message().warning("Fill in the required fields: name")
        message.render()  # "warning: Fill in the required fields: name"
    """

    def __init__(self) -> None:
        self.type: MessageType | None = None
        self.text: str | None = None

    def _set(self, type_: MessageType, text: str) -> Message:
        self.type = type_
        self.text = text
        return self

    def info(self, text: str) -> Message:
        return self._set(MessageType.INFO, text)

    def success(self, text: str) -> Message:
        return self._set(MessageType.SUCCESS, text)

    def warning(self, text: str) -> Message:
        return self._set(MessageType.WARNING, text)

    def error(self, text: str) -> Message:
        return self._set(MessageType.ERROR, text)

    @property
    def is_empty(self) -> bool:
        return self.text is None

    def render(self) -> str:
        """Plain-text form, or an empty string when no message is set."""
        if self.text is None:
            return ""
        return f"{self.type}: {self.text}"

    def flash(self) -> str:
        """Render the message and clear it."""
        rendered = self.render()
        self.clear()
        return rendered

    def clear(self) -> None:
        self.type = None
        self.text = None

    def to_dict(self) -> dict[str, Any]:
        return {"type": str(self.type) if self.type else None, "text": self.text}

    def __str__(self) -> str:
        return self.render()

    def __repr__(self) -> str:
        return f"Message(type={self.type!r}, text={self.text!r})"
