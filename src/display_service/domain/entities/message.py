from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from display_service.domain.value_objects.enums import MessageType, Outcome, Priority
from display_service.domain.value_objects.ids import MessageId


@dataclass(frozen=True, slots=True)
class Message:
    id: MessageId
    text: str
    priority: Priority
    type: MessageType
    duration: int
    source: str
    created_at: datetime


@dataclass(frozen=True, slots=True)
class HistoryEntry:
    """A finished message lifecycle. The message is a frozen snapshot."""

    message: Message
    outcome: Outcome
    completed_at: datetime
