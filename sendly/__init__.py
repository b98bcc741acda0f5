from .auth import AuthStrategy, BearerTokenAuth
from .client import SendlyClient
from .config import ClientConfig, DEFAULT_BASE_URL, DEFAULT_MAX_RETRIES, DEFAULT_TIMEOUT, VERSION
from .exceptions import (
    AuthenticationError,
    InsufficientCreditsError,
    InvalidSignatureError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SendlyError,
    ServiceError,
    ValidationError,
    WebhookError,
    WebhookPayloadError,
    error_from_response,
    is_authentication_error,
    is_insufficient_credits_error,
    is_network_error,
    is_not_found_error,
    is_rate_limit_error,
    is_retryable,
    is_service_error,
    is_validation_error,
)
from .models import (
    MessageStatus,
    ScheduledMessageStatus,
    BatchStatus,
    MessageType,
    SenderType,
    WebhookMode,
    CircuitState,
    DeliveryStatus,
    TransactionType,
    WebhookEventType,
    APIErrorPayload,
    Message,
    SendMessageRequest,
    ListMessagesResponse,
    ScheduledMessage,
    ScheduleMessageRequest,
    ListScheduledMessagesResponse,
    CancelScheduledMessageResponse,
    BatchMessageItem,
    SendBatchRequest,
    BatchMessageResult,
    BatchMessageResponse,
    ListBatchesResponse,
    BatchPreviewItem,
    BatchPreviewResponse,
    Webhook,
    WebhookCreatedResponse,
    CreateWebhookRequest,
    UpdateWebhookRequest,
    WebhookDelivery,
    WebhookTestResult,
    WebhookSecretRotation,
    WebhookMessageData,
    WebhookEvent,
    Account,
    Credits,
    CreditTransaction,
    APIKey,
    APIKeyUsage,
    CreateAPIKeyRequest,
    CreateAPIKeyResponse,
)
from .webhooks import SIGNATURE_HEADER, generate_signature, get_signature_header, parse_event, verify_signature

__version__ = VERSION
