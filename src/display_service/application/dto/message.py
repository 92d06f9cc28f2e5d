from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields
from datetime import datetime
from typing import Any

from display_service.domain.value_objects.enums import (
    MessageType,
    Outcome,
    Priority,
    QueueStatus,
)
from display_service.domain.value_objects.ids import MessageId


@dataclass(frozen=True, slots=True)
class QueueMessageDTO:
    """Raw enqueue request. ``None`` means "use the default"; the mailbox validates."""

    text: Any = None
    priority: Any = None
    type: Any = None
    duration: Any = None
    source: Any = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> QueueMessageDTO:
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})


@dataclass(frozen=True, slots=True)
class QueueResult:
    message_id: MessageId
    status: QueueStatus
    current_message_id: MessageId | None = None
    estimated_display_time: datetime | None = None
    display_until: datetime | None = None


@dataclass(frozen=True, slots=True)
class HistoryFilterDTO:
    priority: Priority | None = None
    type: MessageType | None = None
    source: str | None = None
    status: Outcome | None = None
    limit: int | None = None

    def applied(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self) if getattr(self, f.name) is not None}


@dataclass(frozen=True, slots=True)
class CurrentMessagePreview:
    id: MessageId
    preview: str
    priority: Priority
    type: MessageType
    source: str
    queued_at: datetime


@dataclass(frozen=True, slots=True)
class HistoryPreview:
    preview: str
    priority: Priority
    source: str
    status: Outcome
    timestamp: datetime


@dataclass(frozen=True, slots=True)
class HistorySummary:
    total: int
    recent: list[HistoryPreview] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class SourceCount:
    source: str
    count: int


@dataclass(frozen=True, slots=True)
class Statistics:
    total_messages: int
    last_24_hours: int
    last_7_days: int
    priority_distribution: dict[str, int]
    top_sources: list[SourceCount]
    average_messages_per_day: float


@dataclass(frozen=True, slots=True)
class MailboxStatus:
    has_pending_message: bool
    current_message: CurrentMessagePreview | None
    message_history: HistorySummary
    statistics: Statistics
