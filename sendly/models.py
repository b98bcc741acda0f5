from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


class MessageStatus(str, Enum):
    QUEUED = "queued"
    SENT = "sent"
    DELIVERED = "delivered"
    FAILED = "failed"


class ScheduledMessageStatus(str, Enum):
    SCHEDULED = "scheduled"
    SENT = "sent"
    CANCELLED = "cancelled"
    FAILED = "failed"


class BatchStatus(str, Enum):
    PROCESSING = "processing"
    COMPLETED = "completed"
    PARTIAL_FAILURE = "partial_failure"
    FAILED = "failed"


class MessageType(str, Enum):
    """Compliance category; marketing messages are subject to quiet hours"""
    MARKETING = "marketing"
    TRANSACTIONAL = "transactional"


class SenderType(str, Enum):
    NUMBER_POOL = "number_pool"
    ALPHANUMERIC = "alphanumeric"
    SANDBOX = "sandbox"


class WebhookMode(str, Enum):
    ALL = "all"
    TEST = "test"
    LIVE = "live"


class CircuitState(str, Enum):
    CLOSED = "closed"
    OPEN = "open"
    HALF_OPEN = "half_open"


class DeliveryStatus(str, Enum):
    PENDING = "pending"
    DELIVERED = "delivered"
    FAILED = "failed"
    CANCELLED = "cancelled"


class TransactionType(str, Enum):
    PURCHASE = "purchase"
    USAGE = "usage"
    REFUND = "refund"
    ADJUSTMENT = "adjustment"
    BONUS = "bonus"


class WebhookEventType(str, Enum):
    MESSAGE_QUEUED = "message.queued"
    MESSAGE_SENT = "message.sent"
    MESSAGE_DELIVERED = "message.delivered"
    MESSAGE_FAILED = "message.failed"
    MESSAGE_UNDELIVERED = "message.undelivered"


class SendlyModel(BaseModel):
    """
    Snapshot of an API resource; camelCase on the wire, snake_case accepted too.

    Missing fields and explicit nulls both decode to the field's default.
    """
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None and info.field_name:
            field = cls.model_fields[info.field_name]
            if not field.is_required():
                return field.get_default(call_default_factory=True)
        return value


class RequestModel(BaseModel):
    """Request payload; serialized by alias with unset optional fields dropped"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class APIErrorPayload(SendlyModel):
    code: str = ""
    message: str = ""
    details: Optional[Dict[str, Any]] = None


# Messages

class Message(SendlyModel):
    id: str = ""
    to: str = ""
    from_: Optional[str] = Field(None, alias="from")
    text: str = ""
    status: str = ""
    direction: Optional[str] = None
    error: Optional[str] = None
    segments: int = 0
    credits_used: int = 0
    is_sandbox: bool = False
    sender_type: Optional[str] = None
    telnyx_message_id: Optional[str] = None
    warning: Optional[str] = None
    sender_note: Optional[str] = None
    created_at: Optional[str] = None
    delivered_at: Optional[str] = None


class SendMessageRequest(RequestModel):
    to: str = ""
    text: str = ""
    message_type: Optional[MessageType] = None


class ListMessagesResponse(SendlyModel):
    data: List[Message] = []
    count: int = 0


class ScheduledMessage(SendlyModel):
    id: str = ""
    to: str = ""
    from_: Optional[str] = Field(None, alias="from")
    text: str = ""
    scheduled_at: str = ""
    status: str = ""
    credits_reserved: int = 0
    created_at: Optional[str] = None
    sent_at: Optional[str] = None
    cancelled_at: Optional[str] = None
    message_id: Optional[str] = None


class ScheduleMessageRequest(RequestModel):
    to: str = ""
    text: str = ""
    scheduled_at: str = ""
    from_: Optional[str] = Field(None, alias="from")
    message_type: Optional[MessageType] = None


class ListScheduledMessagesResponse(SendlyModel):
    data: List[ScheduledMessage] = []
    count: int = 0


class CancelScheduledMessageResponse(SendlyModel):
    id: str = ""
    status: str = ""
    credits_refunded: int = 0


# Batches

class BatchMessageItem(RequestModel):
    to: str = ""
    text: str = ""


class SendBatchRequest(RequestModel):
    messages: List[BatchMessageItem] = []
    from_: Optional[str] = Field(None, alias="from")
    message_type: Optional[MessageType] = None


class BatchMessageResult(SendlyModel):
    to: str = ""
    message_id: Optional[str] = None
    status: str = ""
    error: Optional[str] = None


class BatchMessageResponse(SendlyModel):
    batch_id: str = ""
    status: str = ""
    total: int = 0
    queued: int = 0
    sent: int = 0
    failed: int = 0
    credits_used: int = 0
    messages: List[BatchMessageResult] = []
    created_at: Optional[str] = None
    completed_at: Optional[str] = None

    @property
    def failed_results(self) -> List[BatchMessageResult]:
        return [result for result in self.messages if result.error]


class ListBatchesResponse(SendlyModel):
    data: List[BatchMessageResponse] = []
    count: int = 0


class BatchPreviewItem(SendlyModel):
    to: str = ""
    text: str = ""
    segments: int = 0
    credits: int = 0
    can_send: bool = False
    block_reason: Optional[str] = None
    country: Optional[str] = None
    pricing_tier: Optional[str] = None


class BatchPreviewResponse(SendlyModel):
    can_send: bool = False
    total_messages: int = 0
    will_send: int = 0
    blocked: int = 0
    credits_needed: int = 0
    current_balance: int = 0
    has_enough_credits: bool = False
    messages: List[BatchPreviewItem] = []
    block_reasons: Optional[Dict[str, int]] = None


# Webhooks

class Webhook(SendlyModel):
    id: str = ""
    url: str = ""
    events: List[str] = []
    description: Optional[str] = None
    mode: str = WebhookMode.ALL.value
    is_active: bool = False
    failure_count: int = 0
    last_failure_at: Optional[str] = None
    circuit_state: str = CircuitState.CLOSED.value
    circuit_opened_at: Optional[str] = None
    api_version: str = ""
    metadata: Optional[Dict[str, Any]] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    total_deliveries: int = 0
    successful_deliveries: int = 0
    success_rate: float = 0.0
    last_delivery_at: Optional[str] = None


class WebhookCreatedResponse(Webhook):
    # Signing secret; the API only returns it once
    secret: str = ""


class CreateWebhookRequest(RequestModel):
    url: str = ""
    events: List[str] = []
    description: Optional[str] = None
    mode: Optional[WebhookMode] = None
    metadata: Optional[Dict[str, Any]] = None


class UpdateWebhookRequest(RequestModel):
    url: Optional[str] = None
    events: Optional[List[str]] = None
    description: Optional[str] = None
    is_active: Optional[bool] = Field(None, alias="is_active")
    mode: Optional[WebhookMode] = None
    metadata: Optional[Dict[str, Any]] = None


class WebhookDelivery(SendlyModel):
    id: str = ""
    webhook_id: str = ""
    event_id: str = ""
    event_type: str = ""
    attempt_number: int = 0
    max_attempts: int = 0
    status: str = ""
    response_status_code: Optional[int] = None
    response_time_ms: Optional[int] = None
    error_message: Optional[str] = None
    error_code: Optional[str] = None
    next_retry_at: Optional[str] = None
    created_at: Optional[str] = None
    delivered_at: Optional[str] = None


class WebhookTestResult(SendlyModel):
    success: bool = False
    status_code: Optional[int] = None
    response_time_ms: Optional[int] = None
    error: Optional[str] = None


class WebhookSecretRotation(SendlyModel):
    webhook: Webhook = Field(default_factory=Webhook)
    new_secret: str = ""
    old_secret_expires_at: str = ""
    message: str = ""


class WebhookMessageData(SendlyModel):
    message_id: str = ""
    status: str = ""
    to: str = ""
    from_: str = Field("", alias="from")
    error: Optional[str] = None
    error_code: Optional[str] = None
    delivered_at: Optional[str] = None
    failed_at: Optional[str] = None
    segments: int = 0
    credits_used: int = 0


class WebhookEvent(SendlyModel):
    id: str = ""
    type: str = ""
    data: WebhookMessageData = WebhookMessageData()
    created_at: str = ""
    api_version: str = ""


# Account & credits

class Account(SendlyModel):
    id: str = ""
    email: str = ""
    name: Optional[str] = None
    created_at: Optional[str] = None


class Credits(SendlyModel):
    balance: int = 0
    # Credits held for scheduled messages
    reserved_balance: int = 0
    available_balance: int = 0


class CreditTransaction(SendlyModel):
    id: str = ""
    type: str = ""
    # Positive for credits in, negative for credits out
    amount: int = 0
    balance_after: int = 0
    description: str = ""
    message_id: Optional[str] = None
    created_at: Optional[str] = None


class APIKey(SendlyModel):
    id: str = ""
    name: str = ""
    type: str = ""
    prefix: str = ""
    last_four: str = ""
    permissions: List[str] = []
    created_at: Optional[str] = None
    last_used_at: Optional[str] = None
    expires_at: Optional[str] = None
    is_revoked: bool = False


class APIKeyUsage(SendlyModel):
    key_id: str = ""
    messages_sent: int = 0
    messages_delivered: int = 0
    messages_failed: int = 0
    credits_used: int = 0
    period_start: str = ""
    period_end: str = ""


class CreateAPIKeyRequest(RequestModel):
    name: str = ""
    expires_at: Optional[str] = None


class CreateAPIKeyResponse(SendlyModel):
    api_key: APIKey = Field(default_factory=APIKey)
    # Full key value; the API only returns it once
    key: str = ""
