from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]

    def outranks(self, other: Priority) -> bool:
        return self.rank > other.rank


_PRIORITY_RANK: dict[Priority, int] = {
    Priority.LOW: 1,
    Priority.NORMAL: 2,
    Priority.HIGH: 3,
    Priority.URGENT: 4,
}


class MessageType(StrEnum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ALERT = "alert"


class Outcome(StrEnum):
    SENT = "sent"
    REPLACED = "replaced"
    CLEARED = "cleared"


class QueueStatus(StrEnum):
    QUEUED = "queued"
    QUEUED_LOWER_PRIORITY = "queued_lower_priority"
