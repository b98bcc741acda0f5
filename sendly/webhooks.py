import hashlib
import hmac
import json
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from .exceptions import InvalidSignatureError, ValidationError, WebhookPayloadError
from .models import (
    CreateWebhookRequest,
    UpdateWebhookRequest,
    Webhook,
    WebhookCreatedResponse,
    WebhookDelivery,
    WebhookEvent,
    WebhookSecretRotation,
    WebhookTestResult,
)
from .utils import build_query_string, coerce_request, require_id

SIGNATURE_HEADER = "X-Sendly-Signature"
SIGNATURE_PREFIX = "sha256="


def generate_signature(payload: Union[str, bytes], secret: str) -> str:
    """Signature in the X-Sendly-Signature format: 'sha256=<hex HMAC-SHA256 of the body>'"""
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    digest = hmac.new(secret.encode("utf-8"), payload, hashlib.sha256).hexdigest()
    return SIGNATURE_PREFIX + digest


def verify_signature(payload: Union[str, bytes], signature: str, secret: str) -> bool:
    """Check a webhook signature against the raw request body, in constant time"""
    if not payload or not signature or not secret:
        return False
    expected = generate_signature(payload, secret)
    if len(signature) != len(expected):
        return False
    return hmac.compare_digest(signature.encode("utf-8"), expected.encode("utf-8"))


def parse_event(payload: Union[str, bytes], signature: str, secret: str) -> WebhookEvent:
    """Verify and decode a webhook delivery"""
    if not verify_signature(payload, signature, secret):
        raise InvalidSignatureError()
    try:
        event = WebhookEvent.model_validate(json.loads(payload))
    except (ValueError, PydanticValidationError) as e:
        raise WebhookPayloadError(f"failed to parse webhook payload: {e}") from e
    if not event.id or not event.type or not event.created_at:
        raise WebhookPayloadError("invalid event structure")
    return event


class WebhooksService:
    """Webhook endpoint management, plus the signature helpers for incoming deliveries"""
    generate_signature = staticmethod(generate_signature)
    verify_signature = staticmethod(verify_signature)
    parse_event = staticmethod(parse_event)

    def __init__(self, client):
        self._client = client

    async def create(self, request: Union[CreateWebhookRequest, Dict[str, Any], None]) -> WebhookCreatedResponse:
        """Register a webhook; the signing secret is only returned by this call"""
        request = coerce_request(request, CreateWebhookRequest)
        if not request.url:
            raise ValidationError("url is required")
        if not request.events:
            raise ValidationError("events are required")
        return await self._client.request("POST", "/webhooks", body=request, response_model=WebhookCreatedResponse)

    async def list(self) -> List[Webhook]:
        return await self._client.request("GET", "/webhooks", response_model=List[Webhook])

    async def get(self, webhook_id: str) -> Webhook:
        path = "/webhooks/" + require_id(webhook_id, "webhook ID is required")
        return await self._client.request("GET", path, response_model=Webhook)

    async def update(self, webhook_id: str, request: Union[UpdateWebhookRequest, Dict[str, Any], None]) -> Webhook:
        path = "/webhooks/" + require_id(webhook_id, "webhook ID is required")
        request = coerce_request(request, UpdateWebhookRequest)
        return await self._client.request("PATCH", path, body=request, response_model=Webhook)

    async def delete(self, webhook_id: str) -> None:
        path = "/webhooks/" + require_id(webhook_id, "webhook ID is required")
        await self._client.request("DELETE", path)

    async def test(self, webhook_id: str) -> WebhookTestResult:
        """Ask the API to deliver a test event to the endpoint"""
        path = "/webhooks/" + require_id(webhook_id, "webhook ID is required") + "/test"
        return await self._client.request("POST", path, response_model=WebhookTestResult)

    async def rotate_secret(self, webhook_id: str) -> WebhookSecretRotation:
        """Issue a new signing secret; the old one stays valid for a grace period"""
        path = "/webhooks/" + require_id(webhook_id, "webhook ID is required") + "/rotate-secret"
        return await self._client.request("POST", path, response_model=WebhookSecretRotation)

    async def list_deliveries(self, webhook_id: str, *, limit: int = 0, offset: int = 0) -> List[WebhookDelivery]:
        path = "/webhooks/" + require_id(webhook_id, "webhook ID is required") + "/deliveries"
        query = build_query_string({"limit": limit, "offset": offset})
        return await self._client.request("GET", path + query, response_model=List[WebhookDelivery])


def get_signature_header(headers: Optional[Dict[str, str]]) -> str:
    """Signature header value from a mapping of request headers, matched case-insensitively"""
    for name, value in (headers or {}).items():
        if name.lower() == SIGNATURE_HEADER.lower():
            return value
    return ""
