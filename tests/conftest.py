"""Shared test fixtures."""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import pytest

from display_service.application.dto.message import QueueMessageDTO
from display_service.services.mailbox import MessageMailbox


@dataclass
class FakeClock:
    """Manually advanced clock for window-based statistics."""

    current: datetime = field(
        default_factory=lambda: datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
    )

    def now(self) -> datetime:
        return self.current

    def advance(self, **kwargs: float) -> None:
        self.current += timedelta(**kwargs)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def mailbox(clock: FakeClock) -> MessageMailbox:
    return MessageMailbox(clock=clock)


def make_request(text: str = "hello", **overrides) -> QueueMessageDTO:
    return QueueMessageDTO(text=text, **overrides)


@pytest.fixture
def request_factory():
    return make_request
