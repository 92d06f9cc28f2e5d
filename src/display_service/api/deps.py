"""FastAPI dependency injection helpers."""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from display_service.services.mailbox import MessageMailbox


def get_mailbox(request: Request) -> MessageMailbox:
    return request.app.state.mailbox


MailboxDep = Annotated[MessageMailbox, Depends(get_mailbox)]
