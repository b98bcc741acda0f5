from typing import Optional, Any, Type, Union, Dict
import json
import logging

import httpx
import structlog
from aiolimiter import AsyncLimiter
from pydantic import BaseModel
from tenacity import AsyncRetrying, RetryCallState, retry_if_exception, stop_after_attempt, wait_exponential

from .account import AccountService
from .auth import AuthStrategy, BearerTokenAuth
from .config import ClientConfig, DEFAULT_BASE_URL, DEFAULT_MAX_RETRIES, DEFAULT_RATE_LIMIT, DEFAULT_RATE_PERIOD, DEFAULT_TIMEOUT
from .exceptions import NetworkError, SendlyError, ValidationError, is_retryable
from .logging_config import configure_structlog, enable_debug_logging
from .messages import MessagesService
from .response import APIResponse
from .utils import wait_retry_after
from .webhooks import WebhooksService

configure_structlog()
_logger = logging.getLogger(__name__)
log = structlog.wrap_logger(_logger)


class SendlyClient:
    """Client for the Sendly SMS API"""
    auth_strategy: AuthStrategy
    config: ClientConfig

    def __init__(self,
                 api_key: str = None,
                 *,  # Force key-value pairs for options
                 config: Optional[ClientConfig] = None,
                 base_url: str = DEFAULT_BASE_URL,
                 timeout: float = DEFAULT_TIMEOUT,
                 max_retries: int = DEFAULT_MAX_RETRIES,
                 debug: bool = False,
                 transport: Optional[httpx.AsyncBaseTransport] = None,
                 rate_limit: float = DEFAULT_RATE_LIMIT,
                 rate_period: float = DEFAULT_RATE_PERIOD,
                 sleep=None,
                 httpx_kwargs: dict = None,
                 ):
        self.config = config or ClientConfig(
            api_key=api_key or "", base_url=base_url, timeout=timeout, max_retries=max_retries, debug=debug,
            transport=transport, rate_limit=rate_limit, rate_period=rate_period, sleep=sleep,
            httpx_kwargs=httpx_kwargs)
        self.auth_strategy = BearerTokenAuth(self.config.api_key)
        if self.config.debug:
            enable_debug_logging()
        # Shared by every call made through this instance
        self._limiter = AsyncLimiter(self.config.rate_limit, self.config.rate_period)

        self.messages = MessagesService(self)
        self.webhooks = WebhooksService(self)
        self.account = AccountService(self)

    async def __aenter__(self) -> 'SendlyClient':
        return self

    async def __aexit__(self, exc_type: Optional[Type[BaseException]], exc_value: Optional[BaseException], traceback: Optional[Any]):
        await self.aclose()

    async def aclose(self):
        if self.config.client:
            await self.config.client.aclose()

    @property
    def api_key(self) -> str:
        return self.config.api_key

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def timeout(self) -> float:
        return self.config.timeout

    @property
    def max_retries(self) -> int:
        return self.config.max_retries

    @property
    def debug(self) -> bool:
        return self.config.debug

    @property
    def transport(self) -> Optional[httpx.AsyncBaseTransport]:
        return self.config.transport

    def log_verbose(self, msg, logger=None, **kwargs):
        if not logger:
            logger = log
        if self.config.debug:
            logger.debug(msg, **kwargs)

    @staticmethod
    def _serialize_body(body: Union[BaseModel, Dict, None]) -> Optional[bytes]:
        if body is None:
            return None
        if hasattr(body, "to_payload"):
            body = body.to_payload()
        elif isinstance(body, BaseModel):
            body = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        try:
            return json.dumps(body).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise ValidationError("failed to marshal request body", err=e) from e

    async def _perform_request(self, method: str, path: str, content: Optional[bytes]) -> httpx.Response:
        """Helper function to send the HTTP request."""
        request = self.config.client.build_request(method=method, url=path, content=content)
        self.auth_strategy.authenticate(request)
        try:
            return await self.config.client.send(request)
        except httpx.RequestError as e:
            raise NetworkError("request failed", err=e) from e

    async def _attempt(self, method: str, path: str, content: Optional[bytes], response_model: Optional[Any], logger) -> Any:
        """One HTTP round trip: returns the decoded result or raises one typed error"""
        response = await self._perform_request(method, path, content)
        self.log_verbose("Received response", status_code=response.status_code, logger=logger)
        response_obj = APIResponse(response=response, response_model=response_model)
        if response_obj.is_error:
            raise response_obj.to_error()
        return await response_obj.async_parse_content()

    def _retrying(self, logger) -> AsyncRetrying:
        max_retries = self.config.max_retries

        def before_sleep(retry_state: RetryCallState):
            logger.warning(
                "Retrying request",
                attempt=retry_state.attempt_number,
                max_retries=max_retries,
                wait=retry_state.next_action.sleep,
                error=str(retry_state.outcome.exception()),
            )

        # Before attempt i (i > 0) wait 2^(i-1) seconds, plus any Retry-After from a 429
        return AsyncRetrying(
            stop=stop_after_attempt(max_retries + 1),
            wait=wait_exponential(multiplier=1, exp_base=2) + wait_retry_after,
            retry=retry_if_exception(is_retryable),
            sleep=self.config.sleep,
            before_sleep=before_sleep,
            reraise=True,
        )

    async def request(self, method: str, path: str, body: Union[BaseModel, Dict, None] = None, response_model: Optional[Any] = None) -> Any:
        """
        Execute one API operation: rate limit, send, retry transient failures, decode the result.

        Args:
            method (str): HTTP method to use for the request (e.g., 'GET', 'POST')
            path (str): Path relative to the base URL, including any query string
            body (optional): Request model or dict sent as the JSON body
            response_model (optional): Type the success body is validated into; None discards the body

        Returns:
            The decoded result, or None when no result is expected or the body is empty

        Raises:
            AuthenticationError, InsufficientCreditsError, NotFoundError, ValidationError: Immediately, never retried.
            RateLimitError, ServiceError, NetworkError: After the retry budget is spent, the last one seen.
            asyncio.CancelledError: If the calling task is cancelled at any wait (rate limiter, backoff
                or the HTTP call). It is raised bare, never wrapped in NetworkError and never retried.
        """
        __logger = log.new(method=method, path=path)
        if self.config.client is None:
            raise RuntimeError("HTTP client is not initialized")
        content = self._serialize_body(body)

        await self._limiter.acquire()

        self.log_verbose("Sending request", logger=__logger)
        try:
            async for attempt in self._retrying(__logger):
                with attempt:
                    return await self._attempt(method, path, content, response_model, __logger)
        except SendlyError as e:
            if e.retryable and self.config.max_retries > 0:
                __logger.error(f"Exceeded maximum retries ({self.config.max_retries})", error=str(e))
            else:
                __logger.error("Request failed", error=str(e))
            raise

    async def get(self, path: str, response_model: Optional[Any] = None) -> Any:
        """Send a GET request"""
        return await self.request("GET", path, response_model=response_model)

    async def post(self, path: str, body: Union[BaseModel, Dict, None] = None, response_model: Optional[Any] = None) -> Any:
        """Send a POST request"""
        return await self.request("POST", path, body=body, response_model=response_model)

    async def patch(self, path: str, body: Union[BaseModel, Dict, None] = None, response_model: Optional[Any] = None) -> Any:
        """Send a PATCH request"""
        return await self.request("PATCH", path, body=body, response_model=response_model)

    async def delete(self, path: str, response_model: Optional[Any] = None) -> Any:
        """Send a DELETE request"""
        return await self.request("DELETE", path, response_model=response_model)
