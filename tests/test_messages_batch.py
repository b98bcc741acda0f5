import pytest

from sendly.exceptions import AuthenticationError, InsufficientCreditsError, NotFoundError, RateLimitError, ServiceError, ValidationError
from sendly.models import (
    BatchMessageItem,
    BatchMessageResponse,
    BatchPreviewResponse,
    BatchStatus,
    ListBatchesResponse,
    SendBatchRequest,
)

from .conftest import json_response

BATCH = {
    "batchId": "batch_123",
    "status": "partial_failure",
    "total": 2,
    "queued": 1,
    "sent": 0,
    "failed": 1,
    "creditsUsed": 1,
    "messages": [
        {"to": "+1234567890", "messageId": "msg_1", "status": "queued"},
        {"to": "+1987654321", "status": "failed", "error": "Invalid destination"},
    ],
    "createdAt": "2024-01-01T00:00:00Z",
}


def batch_request(*items):
    return SendBatchRequest(messages=[BatchMessageItem(to=to, text=text) for to, text in items])


@pytest.mark.asyncio
async def test_send_batch_success(make_client):
    client, api = make_client(json_response(200, BATCH))
    result = await client.messages.send_batch(batch_request(("+1234567890", "First"), ("+1987654321", "Second")))

    assert api.last_request.method == "POST"
    assert api.last_request.url.path == "/messages/batch"
    assert api.last_json() == {"messages": [
        {"to": "+1234567890", "text": "First"},
        {"to": "+1987654321", "text": "Second"},
    ]}
    assert isinstance(result, BatchMessageResponse)
    assert result.batch_id == "batch_123"
    assert result.status == BatchStatus.PARTIAL_FAILURE
    assert result.messages[0].message_id == "msg_1"
    assert [r.to for r in result.failed_results] == ["+1987654321"]


@pytest.mark.asyncio
async def test_send_batch_with_shared_options(make_client):
    client, api = make_client(json_response(200, BATCH))
    await client.messages.send_batch({
        "messages": [{"to": "+1234567890", "text": "Hi"}],
        "from": "MyBrand",
        "message_type": "transactional",
    })
    assert api.last_json() == {
        "messages": [{"to": "+1234567890", "text": "Hi"}],
        "from": "MyBrand",
        "messageType": "transactional",
    }


@pytest.mark.parametrize("request_obj, expected", [
    (None, "request is required"),
    (SendBatchRequest(), "messages are required"),
    (batch_request(("", "First")), "to is required for message at index 0"),
    (batch_request(("+1234567890", "First"), ("", "Second")), "to is required for message at index 1"),
    (batch_request(("+1234567890", "First"), ("+1987654321", "")), "text is required for message at index 1"),
])
@pytest.mark.asyncio
async def test_send_batch_validation_errors(make_client, request_obj, expected):
    client, api = make_client(json_response(200, BATCH))
    with pytest.raises(ValidationError) as exc_info:
        await client.messages.send_batch(request_obj)
    assert expected in str(exc_info.value)
    assert api.calls == 0


@pytest.mark.asyncio
async def test_send_batch_reports_first_invalid_index(make_client):
    client, api = make_client(json_response(200, BATCH))
    with pytest.raises(ValidationError) as exc_info:
        await client.messages.send_batch(batch_request(("+1234567890", "ok"), ("", "bad"), ("", "")))
    assert "index 1" in str(exc_info.value)
    assert "index 2" not in str(exc_info.value)
    assert api.calls == 0


@pytest.mark.parametrize("status_code, error_class", [
    (400, ValidationError),
    (401, AuthenticationError),
    (402, InsufficientCreditsError),
])
@pytest.mark.asyncio
async def test_send_batch_api_errors(make_client, status_code, error_class):
    client, api = make_client(json_response(status_code, {"code": "ERR", "message": "nope"}), max_retries=3)
    with pytest.raises(error_class):
        await client.messages.send_batch(batch_request(("+1234567890", "Hi")))
    assert api.calls == 1


@pytest.mark.asyncio
async def test_send_batch_rate_limit_error(make_client):
    client, api = make_client(json_response(429, {"code": "RATE_LIMITED", "message": "slow"}, headers={"Retry-After": "10"}), max_retries=0)
    with pytest.raises(RateLimitError) as exc_info:
        await client.messages.send_batch(batch_request(("+1234567890", "Hi")))
    assert exc_info.value.retry_after == 10


@pytest.mark.asyncio
async def test_send_batch_server_error(make_client):
    client, api = make_client(json_response(503, {"code": "UNAVAILABLE", "message": "down"}), max_retries=1)
    with pytest.raises(ServiceError) as exc_info:
        await client.messages.send_batch(batch_request(("+1234567890", "Hi")))
    assert exc_info.value.status_code == 503
    assert api.calls == 2


@pytest.mark.asyncio
async def test_preview_batch(make_client):
    preview = {
        "canSend": False,
        "totalMessages": 2,
        "willSend": 1,
        "blocked": 1,
        "creditsNeeded": 1,
        "currentBalance": 10,
        "hasEnoughCredits": True,
        "messages": [
            {"to": "+1234567890", "text": "Hi", "segments": 1, "credits": 1, "canSend": True, "country": "US"},
            {"to": "+999", "text": "Hi", "segments": 1, "credits": 0, "canSend": False, "blockReason": "unsupported_country"},
        ],
        "blockReasons": {"unsupported_country": 1},
    }
    client, api = make_client(json_response(200, preview))
    result = await client.messages.preview_batch(batch_request(("+1234567890", "Hi"), ("+999", "Hi")))
    assert api.last_request.url.path == "/messages/batch/preview"
    assert isinstance(result, BatchPreviewResponse)
    assert result.will_send == 1
    assert result.messages[1].block_reason == "unsupported_country"
    assert result.block_reasons == {"unsupported_country": 1}


@pytest.mark.asyncio
async def test_preview_batch_validates_items(make_client):
    client, api = make_client(json_response(200, {}))
    with pytest.raises(ValidationError):
        await client.messages.preview_batch(batch_request(("+1234567890", "")))
    assert api.calls == 0


@pytest.mark.asyncio
async def test_get_batch_success(make_client):
    client, api = make_client(json_response(200, dict(BATCH, status="completed", completedAt="2024-01-01T00:01:00Z")))
    result = await client.messages.get_batch("batch_123")
    assert api.last_request.method == "GET"
    assert api.last_request.url.path == "/messages/batch/batch_123"
    assert result.status == BatchStatus.COMPLETED
    assert result.completed_at == "2024-01-01T00:01:00Z"


@pytest.mark.asyncio
async def test_get_batch_empty_id(make_client):
    client, api = make_client(json_response(200, BATCH))
    with pytest.raises(ValidationError) as exc_info:
        await client.messages.get_batch("")
    assert "batch ID is required" in str(exc_info.value)
    assert api.calls == 0


@pytest.mark.asyncio
async def test_get_batch_not_found(make_client):
    client, api = make_client(json_response(404, {"code": "NOT_FOUND", "message": "Batch not found"}))
    with pytest.raises(NotFoundError):
        await client.messages.get_batch("batch_missing")
    assert api.calls == 1


@pytest.mark.asyncio
async def test_list_batches_success(make_client):
    client, api = make_client(json_response(200, {"data": [BATCH], "count": 1}))
    result = await client.messages.list_batches(limit=5, status=BatchStatus.PROCESSING)
    assert api.last_request.url.path == "/messages/batches"
    assert dict(api.last_request.url.params) == {"limit": "5", "status": "processing"}
    assert isinstance(result, ListBatchesResponse)
    assert result.data[0].batch_id == "batch_123"


@pytest.mark.asyncio
async def test_list_batches_no_params(make_client):
    client, api = make_client(json_response(200, {"data": [], "count": 0}))
    result = await client.messages.list_batches()
    assert api.last_request.url.raw_path == b"/messages/batches"
    assert result.count == 0
