from __future__ import annotations

import random

import pytest

from display_service.application.dto.message import QueueMessageDTO
from display_service.application.exceptions import ValidationError
from display_service.domain.value_objects.enums import MessageType, Priority, QueueStatus
from display_service.services.templates import (
    ENCOURAGEMENTS,
    MORNING_MESSAGES,
    MessageTemplates,
    MessageUtils,
)


@pytest.fixture
def templates(mailbox):
    return MessageTemplates(mailbox, rng=random.Random(7))


@pytest.fixture
def utils(mailbox):
    return MessageUtils(mailbox)


def test_morning_motivation_picks_from_list(templates, mailbox):
    templates.morning_motivation()
    message = mailbox.get_pending_message()

    assert message.text in MORNING_MESSAGES
    assert message.priority == Priority.NORMAL
    assert message.type == MessageType.SUCCESS
    assert message.source == "Morning Coach"


def test_morning_motivation_custom_text(templates, mailbox):
    templates.morning_motivation("Up and at it")
    assert mailbox.get_pending_message().text == "Up and at it"


@pytest.mark.parametrize(
    ("minutes", "priority", "msg_type", "duration"),
    [
        (90, Priority.LOW, MessageType.INFO, 15000),
        (45, Priority.NORMAL, MessageType.WARNING, 15000),
        (20, Priority.HIGH, MessageType.WARNING, 10000),
        (5, Priority.URGENT, MessageType.ALERT, 3000),
    ],
)
def test_workout_deadline_escalates(templates, mailbox, minutes, priority, msg_type, duration):
    templates.workout_deadline(minutes)
    message = mailbox.get_pending_message()

    assert message.priority == priority
    assert message.type == msg_type
    assert message.duration == duration
    assert message.source == "Deadline Monitor"


def test_achievement_with_bonus(templates, mailbox):
    templates.achievement("Perfect Week", bonus=50)
    message = mailbox.get_pending_message()

    assert "Perfect Week" in message.text
    assert "$50" in message.text
    assert message.priority == Priority.HIGH
    assert message.duration == 12000


def test_punishment_is_urgent(templates, mailbox):
    templates.punishment("Missed workout", "No dessert")
    message = mailbox.get_pending_message()

    assert message.priority == Priority.URGENT
    assert message.type == MessageType.ALERT
    assert message.source == "Accountability Judge"


@pytest.mark.parametrize(
    ("current", "priority", "msg_type"),
    [
        (10, Priority.HIGH, MessageType.SUCCESS),
        (8, Priority.NORMAL, MessageType.INFO),
        (5, Priority.NORMAL, MessageType.WARNING),
        (2, Priority.HIGH, MessageType.WARNING),
    ],
)
def test_progress_update_levels(templates, mailbox, current, priority, msg_type):
    templates.progress_update("Pushups", current, 10)
    message = mailbox.get_pending_message()

    assert message.priority == priority
    assert message.type == msg_type
    assert f"({current * 10}%)" in message.text


def test_progress_update_rejects_zero_target(templates):
    with pytest.raises(ValidationError):
        templates.progress_update("Pushups", 1, 0)


@pytest.mark.parametrize(
    ("grade", "msg_type"),
    [(85, MessageType.SUCCESS), (65, MessageType.WARNING), (40, MessageType.ALERT)],
)
def test_weekly_review_type_follows_grade(templates, mailbox, grade, msg_type):
    templates.weekly_review(grade=grade, workouts=4, earnings=425)
    message = mailbox.get_pending_message()

    assert message.type == msg_type
    assert message.source == "Weekly Analyzer"


def test_urgent_alert_replaces_pending(templates, mailbox):
    templates.encouragement()
    result = templates.urgent_alert("Door open", source="Sensor")

    assert result.status == QueueStatus.QUEUED
    message = mailbox.get_pending_message()
    assert message.text == "URGENT: Door open"
    assert message.source == "Sensor"


def test_encouragement_unknown_context_falls_back(templates, mailbox):
    templates.encouragement("cooking")
    assert mailbox.get_pending_message().text in ENCOURAGEMENTS["general"]


def test_utils_test_message_levels(utils, mailbox):
    utils.test("urgent")
    message = mailbox.get_pending_message()
    assert message.priority == Priority.URGENT
    assert message.source == "Test System"
    assert message.duration == 5000

    utils.test("bogus")
    assert mailbox.get_pending_message().priority == Priority.NORMAL


def test_clear_and_send_bypasses_priority(utils, mailbox):
    mailbox.queue_message(QueueMessageDTO(text="blocking", priority="urgent"))
    result = utils.clear_and_send(QueueMessageDTO(text="gentle", priority="low"))

    assert result.status == QueueStatus.QUEUED
    assert mailbox.get_pending_message().text == "gentle"


def test_status_summary(utils, mailbox):
    assert utils.status_summary() == "No pending messages"

    mailbox.queue_message(QueueMessageDTO(text="hello", priority="high", type="warning", source="bot"))
    assert utils.status_summary() == 'Pending: "hello" (high/warning) from bot'


@pytest.mark.asyncio
async def test_send_sequence(utils, mailbox):
    results = await utils.send_sequence(
        [
            QueueMessageDTO(text="one", priority="low"),
            QueueMessageDTO(text="two", priority="high"),
            QueueMessageDTO(text="three", priority="normal"),
        ],
        delay_between=0,
    )

    assert [r.status for r in results] == [
        QueueStatus.QUEUED,
        QueueStatus.QUEUED,
        QueueStatus.QUEUED_LOWER_PRIORITY,
    ]
    assert mailbox.get_pending_message().text == "two"


@pytest.mark.asyncio
async def test_schedule_message(utils, mailbox):
    result = await utils.schedule_message(QueueMessageDTO(text="later"), delay=0)

    assert result.status == QueueStatus.QUEUED
    assert mailbox.get_pending_message().text == "later"
