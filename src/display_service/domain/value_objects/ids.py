from __future__ import annotations

import uuid
from typing import NewType
from uuid import UUID

MessageId = NewType("MessageId", UUID)


def new_message_id() -> MessageId:
    return MessageId(uuid.uuid4())
