from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from httpx import QueryParams
from pydantic import ValidationError as PydanticValidationError
from tenacity import RetryCallState

from .exceptions import RateLimitError, ValidationError
from .models import RequestModel


def build_query_string(params: Dict[str, Any]) -> str:
    """Build '?k=v&...' from the filters that are set; zero, empty and None values are left out"""
    values = {}
    for key, value in params.items():
        if value is None or value == "" or value is False:
            continue
        if isinstance(value, int) and not isinstance(value, bool) and value <= 0:
            continue
        values[key] = getattr(value, "value", value)
    if not values:
        return ""
    return "?" + str(QueryParams(values))


def path_segment(value: str) -> str:
    """Percent-encode a caller supplied identifier so it stays a single path segment"""
    # Dot segments would be resolved away when the URL is normalized
    if value in (".", ".."):
        return value.replace(".", "%2E")
    return quote(value, safe="")


def require_id(value: Optional[str], message: str) -> str:
    if not value:
        raise ValidationError(message)
    return path_segment(value)


def coerce_request(request: Union[RequestModel, Dict[str, Any], None], model: type):
    """Accept a request model or a plain dict; anything unusable is a local validation error"""
    if request is None:
        raise ValidationError("request is required")
    if isinstance(request, model):
        return request
    if isinstance(request, dict):
        try:
            return model.model_validate(request)
        except PydanticValidationError as e:
            raise ValidationError("invalid request", err=e) from e
    raise ValidationError(f"request must be a {model.__name__} or dict, got {type(request).__name__}")


def wait_retry_after(retry_state: RetryCallState) -> float:
    """Extra wait requested by the API through Retry-After on a rate limited attempt"""
    outcome = retry_state.outcome
    if outcome is None or not outcome.failed:
        return 0
    exc = outcome.exception()
    if isinstance(exc, RateLimitError) and exc.retry_after > 0:
        return float(exc.retry_after)
    return 0
