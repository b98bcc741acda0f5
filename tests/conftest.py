import json

import httpx
import pytest

from sendly.client import SendlyClient

BASE_URL = "https://api.example.com"


class RecordingSleep:
    """Stand-in for asyncio.sleep that records requested waits instead of sleeping"""

    def __init__(self):
        self.calls = []

    async def __call__(self, seconds):
        self.calls.append(seconds)


class MockAPI:
    """Serves queued responses through httpx.MockTransport and keeps every request"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if len(self.responses) > 1:
            response = self.responses.pop(0)
        else:
            response = self.responses[0]
        if isinstance(response, Exception):
            raise response
        # Fresh copy per request so one queued response can be served repeatedly
        return httpx.Response(response.status_code, headers=response.headers, content=response.content)

    @property
    def calls(self) -> int:
        return len(self.requests)

    @property
    def last_request(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last_request.content)


def json_response(status_code: int, payload=None, headers=None) -> httpx.Response:
    if payload is None:
        return httpx.Response(status_code, headers=headers)
    return httpx.Response(status_code, json=payload, headers=headers)


@pytest.fixture
def sleep():
    return RecordingSleep()


@pytest.fixture
def make_client(sleep):
    def _make_client(*responses, **kwargs):
        api = MockAPI(*responses)
        kwargs.setdefault("sleep", sleep)
        client = SendlyClient("test-api-key", base_url=BASE_URL, transport=httpx.MockTransport(api), **kwargs)
        return client, api
    return _make_client
