"""Single-slot, priority-based message mailbox for the projector display.

The mailbox holds at most one pending message. A new message only takes the
slot when it is empty or when the new message strictly outranks the pending
one; otherwise the new message is dropped. Every finished lifecycle (sent,
replaced, cleared) is recorded in a bounded, newest-retained history.
"""
from __future__ import annotations

import logging
import math
import threading
from collections import Counter, deque
from collections.abc import Callable
from datetime import timedelta
from typing import Any

from display_service.application.dto.message import (
    CurrentMessagePreview,
    HistoryFilterDTO,
    HistoryPreview,
    HistorySummary,
    MailboxStatus,
    QueueMessageDTO,
    QueueResult,
    SourceCount,
    Statistics,
)
from display_service.application.exceptions import ValidationError
from display_service.application.ports.clock import Clock, SystemClock
from display_service.config import settings
from display_service.domain.entities.message import HistoryEntry, Message
from display_service.domain.value_objects.enums import (
    MessageType,
    Outcome,
    Priority,
    QueueStatus,
)
from display_service.domain.value_objects.ids import MessageId, new_message_id

logger = logging.getLogger(__name__)

VALID_PRIORITIES = [p.value for p in Priority]
VALID_TYPES = [t.value for t in MessageType]

CURRENT_PREVIEW_CHARS = 50
HISTORY_PREVIEW_CHARS = 30
RECENT_HISTORY_SIZE = 5
TOP_SOURCES_SIZE = 5


def _invalid(detail: str) -> ValidationError:
    return ValidationError(
        detail,
        valid_priorities=VALID_PRIORITIES,
        valid_types=VALID_TYPES,
    )


def _preview(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:width] + "..."


class MessageMailbox:
    def __init__(
        self,
        *,
        clock: Clock | None = None,
        history_max_size: int = settings.HISTORY_MAX_SIZE,
        min_duration_ms: int = settings.MIN_DURATION_MS,
        max_duration_ms: int = settings.MAX_DURATION_MS,
        default_duration_ms: int = settings.DEFAULT_DURATION_MS,
        default_source: str = settings.DEFAULT_SOURCE,
        id_factory: Callable[[], MessageId] = new_message_id,
    ) -> None:
        if history_max_size < 1:
            raise ValueError("history_max_size must be positive")
        if min_duration_ms > max_duration_ms:
            raise ValueError("min_duration_ms must not exceed max_duration_ms")
        self._clock = clock or SystemClock()
        self._min_duration_ms = min_duration_ms
        self._max_duration_ms = max_duration_ms
        self._default_duration_ms = default_duration_ms
        self._default_source = default_source
        self._id_factory = id_factory

        self._lock = threading.RLock()
        self._current: Message | None = None
        self._history: deque[HistoryEntry] = deque(maxlen=history_max_size)

    @property
    def history_max_size(self) -> int:
        return self._history.maxlen  # type: ignore[return-value]

    # -- validation ---------------------------------------------------------

    def _build_message(self, request: QueueMessageDTO) -> Message:
        text = request.text
        if not isinstance(text, str) or not text.strip():
            raise _invalid("text required")

        priority_raw = Priority.NORMAL if request.priority is None else request.priority
        try:
            priority = Priority(priority_raw)
        except (TypeError, ValueError):
            raise _invalid(
                f"Invalid priority {priority_raw!r}. Must be one of: {', '.join(VALID_PRIORITIES)}"
            ) from None

        type_raw = MessageType.INFO if request.type is None else request.type
        try:
            msg_type = MessageType(type_raw)
        except (TypeError, ValueError):
            raise _invalid(
                f"Invalid type {type_raw!r}. Must be one of: {', '.join(VALID_TYPES)}"
            ) from None

        source = self._default_source if request.source is None else request.source
        if not isinstance(source, str):
            raise _invalid("source must be a string")

        return Message(
            id=self._id_factory(),
            text=text.strip(),
            priority=priority,
            type=msg_type,
            duration=self._clamp_duration(request.duration),
            source=source.strip(),
            created_at=self._clock.now(),
        )

    def _clamp_duration(self, value: Any) -> int:
        if value is None:
            value = self._default_duration_ms
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise _invalid("duration must be an integer number of milliseconds")
        if isinstance(value, float):
            if not math.isfinite(value):
                raise _invalid("duration must be an integer number of milliseconds")
            value = int(value)
        return max(self._min_duration_ms, min(self._max_duration_ms, value))

    # -- mutations ----------------------------------------------------------

    def queue_message(self, request: QueueMessageDTO) -> QueueResult:
        message = self._build_message(request)

        with self._lock:
            current = self._current
            if current is not None and not message.priority.outranks(current.priority):
                logger.info(
                    "Dropped %s message from %s: %s message %s is still pending",
                    message.priority, message.source, current.priority, current.id,
                )
                return QueueResult(
                    message_id=message.id,
                    status=QueueStatus.QUEUED_LOWER_PRIORITY,
                    current_message_id=current.id,
                )

            if current is not None:
                logger.info(
                    "Replacing message %r with higher priority message %s",
                    current.text, message.id,
                )
                self._record(current, Outcome.REPLACED)
            self._current = message

        logger.info(
            "Message queued: %r (%s/%s) from %s",
            message.text, message.priority, message.type, message.source,
        )
        return QueueResult(
            message_id=message.id,
            status=QueueStatus.QUEUED,
            estimated_display_time=message.created_at,
            display_until=message.created_at + timedelta(milliseconds=message.duration),
        )

    def get_pending_message(self) -> Message | None:
        """Consume the pending message, recording it as sent."""
        with self._lock:
            message = self._current
            if message is None:
                return None
            self._record(message, Outcome.SENT)
            self._current = None

        logger.info("Message sent to display: %r", message.text)
        return message

    def clear_pending_message(self) -> bool:
        with self._lock:
            if self._current is None:
                return False
            self._record(self._current, Outcome.CLEARED)
            self._current = None

        logger.info("Pending message cleared")
        return True

    def _record(self, message: Message, outcome: Outcome) -> None:
        # deque(maxlen=...) evicts the oldest entry on overflow
        self._history.append(
            HistoryEntry(message=message, outcome=outcome, completed_at=self._clock.now())
        )

    # -- reads --------------------------------------------------------------

    def get_status(self) -> MailboxStatus:
        with self._lock:
            current = self._current
            history = list(self._history)
            statistics = self.get_statistics()

        current_preview = None
        if current is not None:
            current_preview = CurrentMessagePreview(
                id=current.id,
                preview=_preview(current.text, CURRENT_PREVIEW_CHARS),
                priority=current.priority,
                type=current.type,
                source=current.source,
                queued_at=current.created_at,
            )

        recent = [
            HistoryPreview(
                preview=_preview(entry.message.text, HISTORY_PREVIEW_CHARS),
                priority=entry.message.priority,
                source=entry.message.source,
                status=entry.outcome,
                timestamp=entry.completed_at,
            )
            for entry in reversed(history[-RECENT_HISTORY_SIZE:])
        ]

        return MailboxStatus(
            has_pending_message=current is not None,
            current_message=current_preview,
            message_history=HistorySummary(total=len(history), recent=recent),
            statistics=statistics,
        )

    def get_statistics(self) -> Statistics:
        with self._lock:
            history = list(self._history)

        now = self._clock.now()
        day_ago = now - timedelta(days=1)
        week_ago = now - timedelta(days=7)

        last_24_hours = sum(1 for entry in history if entry.completed_at >= day_ago)
        last_7_days = sum(1 for entry in history if entry.completed_at >= week_ago)

        priority_counts = Counter(entry.message.priority.value for entry in history)
        # most_common keeps insertion order among equal counts
        source_counts = Counter(entry.message.source for entry in history)

        return Statistics(
            total_messages=len(history),
            last_24_hours=last_24_hours,
            last_7_days=last_7_days,
            priority_distribution=dict(priority_counts),
            top_sources=[
                SourceCount(source=source, count=count)
                for source, count in source_counts.most_common(TOP_SOURCES_SIZE)
            ],
            average_messages_per_day=last_7_days / 7,
        )

    def get_history(self, filters: HistoryFilterDTO | None = None) -> list[HistoryEntry]:
        """Return finished lifecycles, newest first.

        Filters are conjunctive. ``limit`` keeps the most recent N matches.
        """
        filters = filters or HistoryFilterDTO()
        if filters.limit is not None and filters.limit < 1:
            raise _invalid("limit must be a positive integer")

        with self._lock:
            history = list(self._history)

        if filters.priority is not None:
            history = [e for e in history if e.message.priority == filters.priority]
        if filters.type is not None:
            history = [e for e in history if e.message.type == filters.type]
        if filters.source is not None:
            history = [e for e in history if e.message.source == filters.source]
        if filters.status is not None:
            history = [e for e in history if e.outcome == filters.status]
        if filters.limit is not None:
            history = history[-filters.limit:]

        history.reverse()
        return history
