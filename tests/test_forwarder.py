from unittest.mock import AsyncMock, patch

import httpx
import pytest
from httpx import Request, Response

from assistant_tools.core.config import Settings
from assistant_tools.core.exceptions import ConfigurationError, ForwardingError
from assistant_tools.forwarder.client import QuestionForwarder
from tests.conftest import TEST_PERPLEXITY_URL


@pytest.mark.asyncio
async def test_ask_posts_chat_request_and_returns_raw_body(forwarder) -> None:
    raw_body = '{"id": "cmpl-1", "choices": [{"message": {"content": "Paris."}}]}'
    mock_response = Response(200, text=raw_body, request=Request("POST", TEST_PERPLEXITY_URL))

    with patch(
        "assistant_tools.forwarder.client.httpx.AsyncClient.post",
        AsyncMock(return_value=mock_response),
    ) as mock_post:
        answer = await forwarder.ask("What is the capital of France?")

    assert answer == raw_body
    mock_post.assert_called_once_with(
        TEST_PERPLEXITY_URL,
        json={
            "model": "test-model",
            "messages": [
                {"role": "system", "content": "Be precise and concise."},
                {"role": "user", "content": "What is the capital of France?"},
            ],
        },
        headers={
            "accept": "application/json",
            "content-type": "application/json",
            "Authorization": "Bearer test-key",
        },
    )


@pytest.mark.asyncio
async def test_non_success_status_raises_forwarding_error(forwarder) -> None:
    mock_response = Response(
        401,
        text='{"error": "invalid api key"}',
        request=Request("POST", TEST_PERPLEXITY_URL),
    )

    with patch(
        "assistant_tools.forwarder.client.httpx.AsyncClient.post",
        AsyncMock(return_value=mock_response),
    ):
        with pytest.raises(ForwardingError) as exc_info:
            await forwarder.ask("hello")

    assert exc_info.value.status_code == 401
    assert "invalid api key" in str(exc_info.value)


@pytest.mark.asyncio
async def test_transport_error_raises_forwarding_error(forwarder) -> None:
    with patch(
        "assistant_tools.forwarder.client.httpx.AsyncClient.post",
        AsyncMock(side_effect=httpx.ConnectError("connection refused")),
    ) as mock_post:
        with pytest.raises(ForwardingError) as exc_info:
            await forwarder.ask("hello")

    # No retry
    assert mock_post.call_count == 1
    assert exc_info.value.status_code is None
    assert "connection refused" in str(exc_info.value)


@pytest.mark.parametrize("api_key", [None, "", "   "])
def test_missing_api_key_is_a_configuration_error(api_key) -> None:
    with pytest.raises(ConfigurationError):
        QuestionForwarder(
            api_key=api_key,
            url=TEST_PERPLEXITY_URL,
            model="test-model",
            system_prompt="Be precise and concise.",
        )


def test_from_settings_uses_perplexity_defaults() -> None:
    forwarder = QuestionForwarder.from_settings(Settings(PERPLEXITY_API_KEY="pplx-123"))

    assert forwarder.url == "https://api.perplexity.ai/chat/completions"
    assert forwarder.model == "llama-3.1-sonar-small-128k-online"
    assert forwarder.timeout is None
    assert forwarder.build_payload("hi")["messages"][0] == {
        "role": "system",
        "content": "Be precise and concise.",
    }


def test_blank_settings_key_is_treated_as_missing() -> None:
    with pytest.raises(ConfigurationError):
        QuestionForwarder.from_settings(Settings(PERPLEXITY_API_KEY=""))
