import asyncio
import json
from typing import Any, Optional

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .exceptions import NetworkError, SendlyError, error_from_response


class APIResponse:
    """One HTTP round trip's response, decoded into a typed result or a typed error"""
    response: httpx.Response
    response_model: Optional[Any] = None

    def __init__(self, response: httpx.Response, response_model: Optional[Any] = None):
        self.response = response
        self.response_model = response_model

    @property
    def status_code(self) -> int:
        return self.response.status_code

    @property
    def is_error(self) -> bool:
        return self.response.status_code >= 400

    @property
    def is_rate_limit_error(self) -> bool:
        return self.response.status_code == 429

    def to_error(self) -> SendlyError:
        return error_from_response(self.response.status_code, self.response.content, self.response.headers)

    def _decode(self) -> Any:
        data = json.loads(self.response.content)
        return TypeAdapter(self.response_model).validate_python(data)

    async def async_parse_content(self) -> Any:
        """Deserialize a success body; None when the body is empty or no result is expected"""
        if self.response_model is None or not self.response.content:
            return None
        try:
            return await asyncio.to_thread(self._decode)
        except (ValueError, PydanticValidationError) as e:
            raise NetworkError("failed to unmarshal response", err=e) from e
