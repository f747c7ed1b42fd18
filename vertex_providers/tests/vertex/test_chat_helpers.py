"""Non-streaming call path and reply extraction tests."""
from __future__ import annotations

import asyncio
import json
from typing import List

import httpx
import pytest

from vertex_providers.base.cancellation import CancellationToken, CancelledError
from vertex_providers.base.errors import ErrorCode, ProviderContractViolation, ProviderError
from vertex_providers.vertex.chat_helpers import call_once, extract_replies

HEADERS = {"Authorization": "Bearer t", "Content-Type": "application/json; charset=utf-8"}
BODY = {"anthropic_version": "vertex-2023-10-16", "messages": [{"role": "user", "content": "hi"}], "max_tokens": 8, "stream": False}


class TestCallOnce:
    pytestmark = pytest.mark.asyncio

    async def test_returns_parsed_json_and_posts_body(self, make_provider, log_events):
        seen: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=[{"content": [{"type": "text", "text": "hello"}]}])

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            provider = make_provider(client)
            result = await call_once(provider, BODY, HEADERS)

        assert result == [{"content": [{"type": "text", "text": "hello"}]}]
        (request,) = seen
        assert request.method == "POST"
        assert request.url.host == "us-east5-aiplatform.googleapis.com"
        assert request.url.path.endswith("/publishers/anthropic/models/claude-3-opus@20240229:streamRawPredict")
        assert request.headers["Authorization"] == "Bearer t"
        assert request.headers["Content-Type"] == "application/json; charset=utf-8"
        assert json.loads(request.content) == BODY
        assert log_events.names()[-2:] == ["chat.start", "chat.end"]

    async def test_error_status_with_json_body(self, make_provider):
        handler = lambda request: httpx.Response(429, json={"error": {"code": 429, "status": "RESOURCE_EXHAUSTED"}})  # noqa: E731
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ProviderError) as excinfo:
                await call_once(make_provider(client), BODY, HEADERS)

        err = excinfo.value
        assert err.http_status == 429
        assert err.code is ErrorCode.RATE_LIMIT
        assert err.retryable is True
        assert err.error_json["error"]["status"] == "RESOURCE_EXHAUSTED"
        assert err.error_body is None

    async def test_error_status_with_text_body(self, make_provider, log_events):
        handler = lambda request: httpx.Response(404, text="<html>not found</html>")  # noqa: E731
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ProviderError) as excinfo:
                await call_once(make_provider(client), BODY, HEADERS)

        err = excinfo.value
        assert err.http_status == 404
        assert err.error_json is None
        assert err.error_body == "<html>not found</html>"
        assert err.message == "Failed to send message. HTTP 404 - <html>not found</html>"
        assert log_events.named("chat.error")[0]["http_status"] == 404

    async def test_transport_error_is_classified(self, make_provider):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ProviderError) as excinfo:
                await call_once(make_provider(client), BODY, HEADERS)

        assert excinfo.value.code is ErrorCode.TIMEOUT
        assert excinfo.value.retryable is True
        assert isinstance(excinfo.value.__cause__, httpx.ReadTimeout)

    async def test_non_json_success_body_is_contract_violation(self, make_provider):
        handler = lambda request: httpx.Response(200, text="not json")  # noqa: E731
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(ProviderContractViolation):
                await call_once(make_provider(client), BODY, HEADERS)

    async def test_cancelled_token_prevents_request(self, make_provider):
        calls: List[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=[])

        token = CancellationToken()
        token.cancel("no longer needed")
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            with pytest.raises(CancelledError, match="no longer needed"):
                await call_once(make_provider(client), BODY, HEADERS, token)
        assert calls == []

    async def test_cancel_while_waiting_for_response(self, make_provider, log_events):
        entered = asyncio.Event()

        async def handler(request: httpx.Request) -> httpx.Response:
            entered.set()
            await asyncio.Event().wait()
            return httpx.Response(200, json=[])  # pragma: no cover - never reached

        token = CancellationToken()
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            task = asyncio.create_task(call_once(make_provider(client), BODY, HEADERS, token))
            await entered.wait()
            token.cancel()
            with pytest.raises(CancelledError, match="Request aborted"):
                await asyncio.wait_for(task, timeout=5)

        assert log_events.named("chat.aborted")
        assert log_events.named("chat.error") == []


class TestExtractReplies:
    def test_single_candidate(self):
        assert extract_replies([{"content": [{"text": "hello"}]}]) == ["hello"]

    def test_candidates_keep_their_positions(self):
        result = [
            {"content": [{"type": "text", "text": "first"}, {"type": "text", "text": "ignored"}]},
            {"content": [{"type": "text", "text": "second"}]},
        ]
        assert extract_replies(result) == ["first", "second"]

    def test_outputs_envelope(self):
        assert extract_replies({"outputs": [{"content": [{"text": "a"}]}]}) == ["a"]

    def test_single_message_document(self):
        message = {"id": "msg_1", "type": "message", "role": "assistant", "content": [{"type": "text", "text": "hi"}]}
        assert extract_replies(message) == ["hi"]

    def test_empty_candidate_list(self):
        assert extract_replies([]) == []

    @pytest.mark.parametrize(
        "result",
        [
            [{"content": []}],
            [{"no_content": True}],
            [{"content": [{"type": "image"}]}],
            [{"content": [{"text": 7}]}],
            [{"content": "plain"}],
            ["oops"],
            {"unexpected": True},
            "text",
            None,
        ],
    )
    def test_shape_violations_raise(self, result):
        with pytest.raises(ProviderContractViolation) as excinfo:
            extract_replies(result)
        assert excinfo.value.code is ErrorCode.INTERNAL
