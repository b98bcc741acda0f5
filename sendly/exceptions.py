import json
from typing import Any, Dict, Mapping, Optional


class SendlyError(Exception):
    """Base class for every error returned by a Sendly API call"""
    retryable: bool = False

    def __init__(self, message: str = "", *, code: str = "", details: Optional[Dict[str, Any]] = None, status_code: Optional[int] = None):
        self.message = message
        self.code = code
        self.details = details
        self.status_code = status_code
        super().__init__(str(self))

    def __str__(self):
        return f"sendly: {self.message} (code: {self.code}, status: {self.status_code})"


class ServiceError(SendlyError):
    """Any API error status without a more specific variant; treated as transient"""
    retryable = True

    def __init__(self, message: str = "", *, status_code: int, code: str = "", details: Optional[Dict[str, Any]] = None):
        super().__init__(message, code=code, details=details, status_code=status_code)


class AuthenticationError(SendlyError):
    """Invalid or missing API credentials"""

    def __str__(self):
        return f"sendly: authentication failed: {self.message}"


class RateLimitError(SendlyError):
    """The API rate limit has been exceeded"""
    retryable = True

    def __init__(self, message: str = "", *, retry_after: int = 0, **kwargs):
        # Seconds to wait before retrying, as sent in the Retry-After header
        self.retry_after = retry_after
        super().__init__(message, **kwargs)

    def __str__(self):
        if self.retry_after > 0:
            return f"sendly: rate limit exceeded, retry after {self.retry_after} seconds"
        return f"sendly: rate limit exceeded: {self.message}"


class InsufficientCreditsError(SendlyError):
    """The account does not have enough credits"""

    def __str__(self):
        return f"sendly: insufficient credits: {self.message}"


class ValidationError(SendlyError):
    """Invalid request parameters, detected locally or by the API"""

    def __init__(self, message: str = "", *, err: Optional[BaseException] = None, **kwargs):
        self.err = err
        super().__init__(message, **kwargs)

    def __str__(self):
        if self.err is not None:
            return f"sendly: validation error: {self.err}"
        return f"sendly: validation error: {self.message}"


class NotFoundError(SendlyError):
    """The requested resource does not exist"""

    def __str__(self):
        return f"sendly: not found: {self.message}"


class NetworkError(SendlyError):
    """Transport-level failure: connect, timeout, DNS or an unreadable response"""
    retryable = True

    def __init__(self, message: str = "", *, err: Optional[BaseException] = None):
        self.err = err
        super().__init__(message)

    def __str__(self):
        if self.err is not None:
            return f"sendly: network error: {self.message}: {self.err}"
        return f"sendly: network error: {self.message}"


def parse_retry_after(value: Optional[str]) -> int:
    """Seconds from a Retry-After header; 0 when absent or not an integer"""
    if not value:
        return 0
    try:
        return int(value.strip())
    except ValueError:
        return 0


def parse_error_payload(body: bytes) -> Dict[str, Any]:
    """Decode an API error body, falling back to the raw text as the message"""
    try:
        payload = json.loads(body)
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        return {"code": "UNKNOWN_ERROR", "message": body.decode("utf-8", errors="replace"), "details": None}
    details = payload.get("details")
    return {
        "code": str(payload.get("code") or ""),
        "message": str(payload.get("message") or ""),
        "details": details if isinstance(details, dict) else None,
    }


def error_from_response(status_code: int, body: bytes, headers: Optional[Mapping[str, str]] = None) -> SendlyError:
    """Map an HTTP error status and body to exactly one error variant"""
    payload = parse_error_payload(body)
    kwargs = dict(code=payload["code"], details=payload["details"], status_code=status_code)
    message = payload["message"]
    if status_code == 401:
        return AuthenticationError(message, **kwargs)
    if status_code == 429:
        retry_after = parse_retry_after((headers or {}).get("Retry-After"))
        return RateLimitError(message, retry_after=retry_after, **kwargs)
    if status_code == 402:
        return InsufficientCreditsError(message, **kwargs)
    if status_code == 404:
        return NotFoundError(message, **kwargs)
    if status_code in (400, 422):
        return ValidationError(message, **kwargs)
    return ServiceError(message, **kwargs)


def is_retryable(exc: Optional[BaseException]) -> bool:
    return isinstance(exc, SendlyError) and exc.retryable


def is_authentication_error(exc: Optional[BaseException]) -> bool:
    return isinstance(exc, AuthenticationError)


def is_rate_limit_error(exc: Optional[BaseException]) -> bool:
    return isinstance(exc, RateLimitError)


def is_insufficient_credits_error(exc: Optional[BaseException]) -> bool:
    return isinstance(exc, InsufficientCreditsError)


def is_validation_error(exc: Optional[BaseException]) -> bool:
    return isinstance(exc, ValidationError)


def is_not_found_error(exc: Optional[BaseException]) -> bool:
    return isinstance(exc, NotFoundError)


def is_network_error(exc: Optional[BaseException]) -> bool:
    return isinstance(exc, NetworkError)


def is_service_error(exc: Optional[BaseException]) -> bool:
    return isinstance(exc, ServiceError)


class WebhookError(Exception):
    """Base class for webhook payload verification failures"""


class InvalidSignatureError(WebhookError):
    def __init__(self, message: str = "invalid webhook signature"):
        super().__init__(message)


class WebhookPayloadError(WebhookError): ...
