"""Support helpers shared by models and presentation layers."""

from rowmodel.support.message import Message, MessageType

__all__ = ["Message", "MessageType"]
