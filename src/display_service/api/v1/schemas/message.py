from __future__ import annotations

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from display_service.domain.entities.message import HistoryEntry
from display_service.domain.value_objects.enums import (
    MessageType,
    Outcome,
    Priority,
    QueueStatus,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class SendMessageRequest(BaseModel):
    """Loosely typed on purpose: the mailbox validates and reports valid values."""

    text: Any = None
    priority: Any = None
    type: Any = None
    duration: Any = None
    source: Any = None


class BulkSendRequest(BaseModel):
    messages: Any = None


class MessageResponse(CamelModel):
    id: UUID
    text: str
    priority: Priority
    type: MessageType
    duration: int
    source: str
    created_at: datetime


class PendingMessageResponse(CamelModel):
    message: MessageResponse | None = None


class QueueResultResponse(CamelModel):
    message_id: UUID
    status: QueueStatus
    current_message_id: UUID | None = None
    estimated_display_time: datetime | None = None
    display_until: datetime | None = None


class SendMessageResponse(QueueResultResponse):
    success: bool = True


class ClearMessageResponse(CamelModel):
    success: bool = True
    was_cleared: bool
    message: str


class HistoryEntryResponse(CamelModel):
    message: MessageResponse
    status: Outcome
    completed_at: datetime

    @classmethod
    def from_entry(cls, entry: HistoryEntry) -> HistoryEntryResponse:
        return cls(
            message=MessageResponse.model_validate(entry.message),
            status=entry.outcome,
            completed_at=entry.completed_at,
        )


class HistoryResponse(CamelModel):
    history: list[HistoryEntryResponse]
    filters: dict[str, Any]
    total: int


class SourceCountResponse(CamelModel):
    source: str
    count: int


class StatisticsResponse(CamelModel):
    total_messages: int
    last_24_hours: int
    last_7_days: int
    priority_distribution: dict[str, int]
    top_sources: list[SourceCountResponse]
    average_messages_per_day: float


class CurrentMessagePreviewResponse(CamelModel):
    id: UUID
    preview: str
    priority: Priority
    type: MessageType
    source: str
    queued_at: datetime


class HistoryPreviewResponse(CamelModel):
    preview: str
    priority: Priority
    source: str
    status: Outcome
    timestamp: datetime


class HistorySummaryResponse(CamelModel):
    total: int
    recent: list[HistoryPreviewResponse]


class StatusResponse(CamelModel):
    has_pending_message: bool
    current_message: CurrentMessagePreviewResponse | None
    message_history: HistorySummaryResponse
    statistics: StatisticsResponse


class BulkResultItem(QueueResultResponse):
    index: int


class BulkErrorItem(CamelModel):
    index: int
    error: str


class BulkSummary(CamelModel):
    total: int
    successful: int
    failed: int


class BulkSendResponse(CamelModel):
    success: bool
    results: list[BulkResultItem]
    errors: list[BulkErrorItem]
    summary: BulkSummary
