import asyncio
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

DEFAULT_BASE_URL = "https://sendly.live/api/v1"
DEFAULT_TIMEOUT = 30.0
DEFAULT_MAX_RETRIES = 3
# Client-side limit: 10 requests per second sustained per client instance, burst of 10
DEFAULT_RATE_LIMIT = 10
DEFAULT_RATE_PERIOD = 1.0
VERSION = "1.2.0"
USER_AGENT = f"sendly-python/{VERSION}"


@dataclass
class ClientConfig:
    """Configuration for a SendlyClient; the HTTP client is built from it on init"""
    api_key: str = field(default="", repr=False)
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    debug: bool = False
    transport: Optional[httpx.AsyncBaseTransport] = None
    rate_limit: float = DEFAULT_RATE_LIMIT
    rate_period: float = DEFAULT_RATE_PERIOD
    # Coroutine used for backoff and Retry-After waits
    sleep: Optional[Callable[[float], Awaitable[Any]]] = None
    httpx_kwargs: Optional[Dict] = None
    client: httpx.AsyncClient = field(init=False, repr=False)

    @property
    def client_params(self):
        client_params = {
            "base_url": self.base_url,
            "timeout": self.timeout,
            "transport": self.transport,
            "headers": {
                "Content-Type": "application/json",
                "Accept": "application/json",
                "User-Agent": USER_AGENT,
            },
        }
        client_params = {k: v for k, v in client_params.items() if v is not None}
        client_params.update(self.httpx_kwargs)
        return client_params

    def __post_init__(self):
        if self.max_retries < 0:
            raise ValueError(f"max_retries must be >= 0, got {self.max_retries}")
        if self.rate_limit <= 0 or self.rate_period <= 0:
            raise ValueError("rate_limit and rate_period must be positive")
        self.httpx_kwargs = self.httpx_kwargs or {}
        self.sleep = self.sleep or asyncio.sleep
        self.client = httpx.AsyncClient(**self.client_params)
