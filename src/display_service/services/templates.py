"""Canned message producers built on top of the mailbox."""
from __future__ import annotations

import asyncio
import random
from collections.abc import Iterable

from display_service.application.dto.message import QueueMessageDTO, QueueResult
from display_service.application.exceptions import ValidationError
from display_service.domain.value_objects.enums import MessageType, Priority
from display_service.services.mailbox import MessageMailbox

MORNING_MESSAGES = [
    "Good morning! Time to dominate this day with intention and energy",
    "Rise and grind! Your future self is counting on today's actions",
    "New day, new opportunities to become legendary. Let's go!",
    "Morning warrior! Your body and mind are ready for greatness",
]

ENCOURAGEMENTS: dict[str, list[str]] = {
    "workout": [
        "Your body is capable of amazing things. Show it what you're made of!",
        "Every rep brings you closer to the person you're becoming",
        "Strong bodies build strong minds. You've got this!",
    ],
    "focus": [
        "Deep work creates extraordinary results. Focus is your superpower",
        "This moment of concentration could change everything",
        "Eliminate distractions. Your future self will thank you",
    ],
    "general": [
        "You have everything within you to succeed. Trust the process",
        "Small consistent actions create massive results",
        "Today is another opportunity to become legendary",
    ],
}

TEST_MESSAGES: dict[Priority, tuple[str, MessageType]] = {
    Priority.LOW: ("Low priority test message", MessageType.INFO),
    Priority.NORMAL: ("Normal test message", MessageType.INFO),
    Priority.HIGH: ("High priority test message", MessageType.WARNING),
    Priority.URGENT: ("URGENT TEST MESSAGE", MessageType.ALERT),
}


class MessageTemplates:
    def __init__(self, mailbox: MessageMailbox, rng: random.Random | None = None) -> None:
        self._mailbox = mailbox
        self._rng = rng or random.Random()

    def _send(
        self,
        text: str,
        priority: Priority,
        msg_type: MessageType,
        duration: int,
        source: str,
    ) -> QueueResult:
        return self._mailbox.queue_message(
            QueueMessageDTO(
                text=text,
                priority=priority,
                type=msg_type,
                duration=duration,
                source=source,
            )
        )

    def morning_motivation(self, custom_text: str | None = None) -> QueueResult:
        text = custom_text or self._rng.choice(MORNING_MESSAGES)
        return self._send(text, Priority.NORMAL, MessageType.SUCCESS, 8000, "Morning Coach")

    def workout_deadline(self, minutes_remaining: int) -> QueueResult:
        """Escalate priority as the deadline approaches."""
        if minutes_remaining > 60:
            priority, msg_type = Priority.LOW, MessageType.INFO
            text = f"{minutes_remaining} minutes to complete your workout. Plenty of time to crush it!"
        elif minutes_remaining > 30:
            priority, msg_type = Priority.NORMAL, MessageType.WARNING
            text = f"{minutes_remaining} minutes remaining for your workout. Time to get moving!"
        elif minutes_remaining > 15:
            priority, msg_type = Priority.HIGH, MessageType.WARNING
            text = f"ONLY {minutes_remaining} MINUTES LEFT! Get to your workout NOW!"
        else:
            priority, msg_type = Priority.URGENT, MessageType.ALERT
            text = f"FINAL WARNING: {minutes_remaining} minutes to avoid punishment!"

        # mailbox clamps this to its duration bounds
        duration = min(15000, minutes_remaining * 500)
        return self._send(text, priority, msg_type, duration, "Deadline Monitor")

    def achievement(self, title: str, bonus: float | None = None) -> QueueResult:
        if bonus:
            text = f"ACHIEVEMENT UNLOCKED: {title}! Bonus earned: ${bonus}"
        else:
            text = f"ACHIEVEMENT UNLOCKED: {title}! You're building unstoppable momentum!"
        return self._send(text, Priority.HIGH, MessageType.SUCCESS, 12000, "Achievement System")

    def punishment(self, violation: str, details: str) -> QueueResult:
        return self._send(
            f"CONSEQUENCE ASSIGNED: {violation}. Punishment: {details}",
            Priority.URGENT,
            MessageType.ALERT,
            20000,
            "Accountability Judge",
        )

    def progress_update(
        self,
        metric: str,
        current: float,
        target: float,
        timeframe: str = "today",
    ) -> QueueResult:
        if target <= 0:
            raise ValidationError("target must be greater than zero")
        percentage = round(current / target * 100)

        if percentage >= 100:
            priority, msg_type = Priority.HIGH, MessageType.SUCCESS
        elif percentage >= 75:
            priority, msg_type = Priority.NORMAL, MessageType.INFO
        elif percentage >= 50:
            priority, msg_type = Priority.NORMAL, MessageType.WARNING
        else:
            priority, msg_type = Priority.HIGH, MessageType.WARNING

        return self._send(
            f"{metric} Progress ({timeframe}): {current}/{target} ({percentage}%)",
            priority,
            msg_type,
            8000,
            "Progress Tracker",
        )

    def weekly_review(self, grade: float, workouts: int, earnings: float) -> QueueResult:
        if grade >= 80:
            msg_type = MessageType.SUCCESS
        elif grade >= 60:
            msg_type = MessageType.WARNING
        else:
            msg_type = MessageType.ALERT
        return self._send(
            f"Week Complete! Grade: {grade}% | Workouts: {workouts} | Earnings: ${earnings}",
            Priority.HIGH,
            msg_type,
            15000,
            "Weekly Analyzer",
        )

    def urgent_alert(self, message: str, source: str = "Emergency System") -> QueueResult:
        return self._send(f"URGENT: {message}", Priority.URGENT, MessageType.ALERT, 25000, source)

    def encouragement(self, context: str = "general") -> QueueResult:
        choices = ENCOURAGEMENTS.get(context, ENCOURAGEMENTS["general"])
        return self._send(
            self._rng.choice(choices),
            Priority.LOW,
            MessageType.INFO,
            6000,
            "Motivational Coach",
        )


class MessageUtils:
    def __init__(self, mailbox: MessageMailbox) -> None:
        self._mailbox = mailbox

    def test(self, level: str = "normal") -> QueueResult:
        try:
            priority = Priority(level)
        except ValueError:
            priority = Priority.NORMAL
        text, msg_type = TEST_MESSAGES[priority]
        return self._mailbox.queue_message(
            QueueMessageDTO(
                text=text,
                priority=priority,
                type=msg_type,
                duration=5000,
                source="Test System",
            )
        )

    def clear_and_send(self, request: QueueMessageDTO) -> QueueResult:
        self._mailbox.clear_pending_message()
        return self._mailbox.queue_message(request)

    def status_summary(self) -> str:
        status = self._mailbox.get_status()
        current = status.current_message
        if current is None:
            return "No pending messages"
        return f'Pending: "{current.preview}" ({current.priority}/{current.type}) from {current.source}'

    async def schedule_message(self, request: QueueMessageDTO, delay: float) -> QueueResult:
        await asyncio.sleep(delay)
        return self._mailbox.queue_message(request)

    async def send_sequence(
        self,
        requests: Iterable[QueueMessageDTO],
        delay_between: float = 3.0,
    ) -> list[QueueResult]:
        results: list[QueueResult] = []
        for i, request in enumerate(requests):
            if i > 0:
                await asyncio.sleep(delay_between)
            results.append(self._mailbox.queue_message(request))
        return results
