"""Protocolos e contratos do core da aplicação."""

from .announcement_store import AnnouncementStoreProtocol
from .message_sink import DeliveryResult, MessageSinkProtocol
from .question_store import QuestionStoreProtocol
from .subscriber_store import SubscriberStoreProtocol

__all__ = [
    "AnnouncementStoreProtocol",
    "DeliveryResult",
    "MessageSinkProtocol",
    "QuestionStoreProtocol",
    "SubscriberStoreProtocol",
]
