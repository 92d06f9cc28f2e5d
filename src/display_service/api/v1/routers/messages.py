from __future__ import annotations

from dataclasses import asdict

from fastapi import APIRouter, Query

from display_service.api.deps import MailboxDep
from display_service.api.v1.schemas.message import (
    BulkErrorItem,
    BulkResultItem,
    BulkSendRequest,
    BulkSendResponse,
    BulkSummary,
    ClearMessageResponse,
    HistoryEntryResponse,
    HistoryResponse,
    MessageResponse,
    PendingMessageResponse,
    SendMessageRequest,
    SendMessageResponse,
    StatisticsResponse,
    StatusResponse,
)
from display_service.application.dto.message import HistoryFilterDTO, QueueMessageDTO
from display_service.application.exceptions import ValidationError
from display_service.config import settings
from display_service.domain.value_objects.enums import MessageType, Outcome, Priority

router = APIRouter(prefix=settings.API_PREFIX, tags=["messages"])

BULK_EXAMPLE = {
    "messages": [
        {"text": "First message", "priority": "normal"},
        {"text": "Second message", "priority": "high"},
    ],
}


@router.get("/pending", response_model=PendingMessageResponse)
async def get_pending(mailbox: MailboxDep) -> PendingMessageResponse:
    message = mailbox.get_pending_message()
    if message is None:
        return PendingMessageResponse(message=None)
    return PendingMessageResponse(message=MessageResponse.model_validate(message))


@router.post("/send", response_model=SendMessageResponse, response_model_exclude_none=True)
async def send_message(body: SendMessageRequest, mailbox: MailboxDep) -> SendMessageResponse:
    result = mailbox.queue_message(QueueMessageDTO.from_mapping(body.model_dump()))
    return SendMessageResponse.model_validate(result)


@router.delete("/clear", response_model=ClearMessageResponse)
async def clear_message(mailbox: MailboxDep) -> ClearMessageResponse:
    was_cleared = mailbox.clear_pending_message()
    return ClearMessageResponse(
        was_cleared=was_cleared,
        message="Message cleared" if was_cleared else "No message to clear",
    )


@router.get("/status", response_model=StatusResponse)
async def get_status(mailbox: MailboxDep) -> StatusResponse:
    return StatusResponse.model_validate(mailbox.get_status())


@router.get("/history", response_model=HistoryResponse)
async def get_history(
    mailbox: MailboxDep,
    priority: Priority | None = Query(None),
    type: MessageType | None = Query(None),
    source: str | None = Query(None),
    status: Outcome | None = Query(None),
    limit: int | None = Query(None, ge=1),
) -> HistoryResponse:
    filters = HistoryFilterDTO(
        priority=priority,
        type=type,
        source=source,
        status=status,
        limit=limit,
    )
    history = mailbox.get_history(filters)
    return HistoryResponse(
        history=[HistoryEntryResponse.from_entry(entry) for entry in history],
        filters=filters.applied(),
        total=len(history),
    )


@router.get("/stats", response_model=StatisticsResponse)
async def get_stats(mailbox: MailboxDep) -> StatisticsResponse:
    return StatisticsResponse.model_validate(mailbox.get_statistics())


@router.post("/bulk", response_model=BulkSendResponse, response_model_exclude_none=True)
async def send_bulk(body: BulkSendRequest, mailbox: MailboxDep) -> BulkSendResponse:
    if not isinstance(body.messages, list):
        raise ValidationError("messages must be an array", example=BULK_EXAMPLE)

    results: list[BulkResultItem] = []
    errors: list[BulkErrorItem] = []
    for index, item in enumerate(body.messages):
        if not isinstance(item, dict):
            errors.append(BulkErrorItem(index=index, error="message must be an object"))
            continue
        try:
            result = mailbox.queue_message(QueueMessageDTO.from_mapping(item))
        except ValidationError as exc:
            errors.append(BulkErrorItem(index=index, error=exc.detail))
            continue
        results.append(BulkResultItem(index=index, **asdict(result)))

    return BulkSendResponse(
        success=not errors,
        results=results,
        errors=errors,
        summary=BulkSummary(
            total=len(body.messages),
            successful=len(results),
            failed=len(errors),
        ),
    )
