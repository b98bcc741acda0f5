from typing import Any, Dict, Optional, Union

from .exceptions import ValidationError
from .models import (
    BatchMessageResponse,
    BatchPreviewResponse,
    CancelScheduledMessageResponse,
    ListBatchesResponse,
    ListMessagesResponse,
    ListScheduledMessagesResponse,
    Message,
    ScheduledMessage,
    ScheduleMessageRequest,
    SendBatchRequest,
    SendMessageRequest,
)
from .utils import build_query_string, coerce_request, require_id


class MessagesService:
    """Message operations: single sends, scheduled messages and batches"""

    def __init__(self, client):
        self._client = client

    async def send(self, request: Union[SendMessageRequest, Dict[str, Any], None]) -> Message:
        """Send an SMS message"""
        request = coerce_request(request, SendMessageRequest)
        if not request.to:
            raise ValidationError("to is required")
        if not request.text:
            raise ValidationError("text is required")
        return await self._client.request("POST", "/messages", body=request, response_model=Message)

    async def list(self, *, limit: int = 0, offset: int = 0, status: Optional[str] = None, to: Optional[str] = None) -> ListMessagesResponse:
        """List sent messages, newest first (server default limit is 20, max 100)"""
        query = build_query_string({"limit": limit, "offset": offset, "status": status, "to": to})
        return await self._client.request("GET", "/messages" + query, response_model=ListMessagesResponse)

    async def get(self, message_id: str) -> Message:
        path = "/messages/" + require_id(message_id, "message ID is required")
        return await self._client.request("GET", path, response_model=Message)

    async def schedule(self, request: Union[ScheduleMessageRequest, Dict[str, Any], None]) -> ScheduledMessage:
        """Schedule an SMS message for future delivery; scheduled_at is ISO 8601"""
        request = coerce_request(request, ScheduleMessageRequest)
        if not request.to:
            raise ValidationError("to is required")
        if not request.text:
            raise ValidationError("text is required")
        if not request.scheduled_at:
            raise ValidationError("scheduledAt is required")
        return await self._client.request("POST", "/messages/schedule", body=request, response_model=ScheduledMessage)

    async def list_scheduled(self, *, limit: int = 0, offset: int = 0, status: Optional[str] = None) -> ListScheduledMessagesResponse:
        query = build_query_string({"limit": limit, "offset": offset, "status": status})
        return await self._client.request("GET", "/messages/scheduled" + query, response_model=ListScheduledMessagesResponse)

    async def get_scheduled(self, scheduled_id: str) -> ScheduledMessage:
        path = "/messages/scheduled/" + require_id(scheduled_id, "scheduled message ID is required")
        return await self._client.request("GET", path, response_model=ScheduledMessage)

    async def cancel_scheduled(self, scheduled_id: str) -> CancelScheduledMessageResponse:
        """Cancel a scheduled message; reserved credits are refunded"""
        path = "/messages/scheduled/" + require_id(scheduled_id, "scheduled message ID is required")
        return await self._client.request("DELETE", path, response_model=CancelScheduledMessageResponse)

    @staticmethod
    def _validate_batch(request) -> SendBatchRequest:
        request = coerce_request(request, SendBatchRequest)
        if not request.messages:
            raise ValidationError("messages are required")
        for index, item in enumerate(request.messages):
            if not item.to:
                raise ValidationError(f"to is required for message at index {index}")
            if not item.text:
                raise ValidationError(f"text is required for message at index {index}")
        return request

    async def send_batch(self, request: Union[SendBatchRequest, Dict[str, Any], None]) -> BatchMessageResponse:
        """
        Send many messages in one call.

        Every item is checked before anything is sent. The result reports per-message
        outcomes, so a successful call can still contain failed messages.
        """
        request = self._validate_batch(request)
        return await self._client.request("POST", "/messages/batch", body=request, response_model=BatchMessageResponse)

    async def preview_batch(self, request: Union[SendBatchRequest, Dict[str, Any], None]) -> BatchPreviewResponse:
        """Dry run of send_batch: credits needed and which messages would be blocked"""
        request = self._validate_batch(request)
        return await self._client.request("POST", "/messages/batch/preview", body=request, response_model=BatchPreviewResponse)

    async def get_batch(self, batch_id: str) -> BatchMessageResponse:
        path = "/messages/batch/" + require_id(batch_id, "batch ID is required")
        return await self._client.request("GET", path, response_model=BatchMessageResponse)

    async def list_batches(self, *, limit: int = 0, offset: int = 0, status: Optional[str] = None) -> ListBatchesResponse:
        query = build_query_string({"limit": limit, "offset": offset, "status": status})
        return await self._client.request("GET", "/messages/batches" + query, response_model=ListBatchesResponse)
