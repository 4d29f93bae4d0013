"""Wire format and error mapping of the OpenAI-compatible adapters."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from consult_providers.base.errors import AdapterError, ErrorCode, TransportError
from consult_providers.base.factory import ProviderFactory
from consult_providers.base.interfaces import CompletionProvider
from consult_providers.config.defaults import SYSTEM_INSTRUCTION
from consult_providers.deepseek import DeepseekProvider
from consult_providers.groq import GroqProvider
from consult_providers.openai import OpenAIProvider

ENDPOINT = "https://api.openai.test/v1/chat/completions"


def _ok(text="Recursion is..."):
    return httpx.Response(200, json={"choices": [{"message": {"role": "assistant", "content": text}}]})


def _adapter(make_config, mock_client, handler, provider_id="openai", display_name="OpenAI"):
    cfg = make_config(provider_id, display_name, {"gpt-4o-mini": "GPT-4o Mini"}, endpoint=ENDPOINT, api_key="sk-abc")
    return ProviderFactory.create(provider_id, cfg, client=mock_client(handler))


def test_request_shape(make_config, mock_client):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return _ok("hi there")

    adapter = _adapter(make_config, mock_client, handler)
    text = asyncio.run(adapter.send_completion("Explain recursion", "gpt-4o-mini"))

    assert text == "hi there"
    (req,) = seen
    assert req.method == "POST"
    assert str(req.url) == ENDPOINT
    assert req.headers["Authorization"] == "Bearer sk-abc"
    assert json.loads(req.content) == {
        "model": "gpt-4o-mini",
        "messages": [
            {"role": "system", "content": SYSTEM_INSTRUCTION},
            {"role": "user", "content": "Explain recursion"},
        ],
        "max_tokens": 2000,
        "temperature": 0.7,
    }


@pytest.mark.parametrize(
    "provider_id, klass",
    [("openai", OpenAIProvider), ("deepseek", DeepseekProvider), ("groq", GroqProvider)],
)
def test_factory_builds_openai_style_classes(make_config, mock_client, provider_id, klass):
    adapter = _adapter(make_config, mock_client, lambda r: _ok(), provider_id=provider_id)
    assert isinstance(adapter, klass)
    assert isinstance(adapter, CompletionProvider)
    assert adapter.provider_name == provider_id


def test_provider_error_message_is_surfaced(make_config, mock_client):
    def handler(request):
        return httpx.Response(401, json={"error": {"message": "Incorrect API key provided"}})

    adapter = _adapter(make_config, mock_client, handler)
    with pytest.raises(AdapterError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    err = ei.value
    assert err.message == "Incorrect API key provided"
    assert err.status == 401
    assert err.code is ErrorCode.AUTH
    assert (err.provider, err.model) == ("openai", "gpt-4o-mini")


@pytest.mark.parametrize(
    "body, message",
    [
        ({"error": "quota exceeded"}, "quota exceeded"),
        ({"message": "slow down"}, "slow down"),
    ],
)
def test_alternate_error_shapes(make_config, mock_client, body, message):
    adapter = _adapter(make_config, mock_client, lambda r: httpx.Response(429, json=body))
    with pytest.raises(AdapterError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    assert ei.value.message == message
    assert ei.value.code is ErrorCode.RATE_LIMIT


def test_generic_error_when_body_has_no_message(make_config, mock_client):
    adapter = _adapter(make_config, mock_client, lambda r: httpx.Response(500, text="<html>oops</html>"))
    with pytest.raises(AdapterError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    assert ei.value.message == "OpenAI API Error"
    assert ei.value.code is ErrorCode.SERVER_ERROR


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, json={"choices": []}),
        httpx.Response(200, json={"choices": [{"message": {"content": None}}]}),
        httpx.Response(200, json={"unexpected": True}),
        httpx.Response(200, text="not json"),
    ],
)
def test_unexpected_success_payload(make_config, mock_client, response):
    adapter = _adapter(make_config, mock_client, lambda r: response)
    with pytest.raises(AdapterError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    assert ei.value.message == "OpenAI API returned an unexpected response"
    assert ei.value.code is ErrorCode.BAD_RESPONSE


def test_connect_error_becomes_transport_error(make_config, mock_client):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    adapter = _adapter(make_config, mock_client, handler)
    with pytest.raises(TransportError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    assert ei.value.message == "Could not reach OpenAI: ConnectError"
    assert ei.value.code is ErrorCode.TRANSPORT


def test_transport_timeout_is_classified(make_config, mock_client):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    adapter = _adapter(make_config, mock_client, handler, provider_id="groq", display_name="Groq")
    with pytest.raises(TransportError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    assert ei.value.message == "Could not reach Groq: ReadTimeout"
    assert ei.value.code is ErrorCode.TIMEOUT


def test_chat_events_logged_without_prompt(make_config, mock_client, capsys):
    adapter = _adapter(make_config, mock_client, lambda r: _ok("answer"))
    asyncio.run(adapter.send_completion("a secret prompt", "gpt-4o-mini"))
    err = capsys.readouterr().err
    events = [json.loads(line)["event"] for line in err.strip().splitlines() if line.startswith("{")]
    assert "chat.start" in events and "chat.end" in events
    assert "a secret prompt" not in err


def test_undecodable_body_is_an_unexpected_response(make_config, mock_client, capsys):
    def handler(request):
        return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not-gzip-at-all")

    adapter = _adapter(make_config, mock_client, handler)
    with pytest.raises(AdapterError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    assert ei.value.message == "OpenAI API returned an unexpected response"
    assert ei.value.code is ErrorCode.BAD_RESPONSE
    events = [json.loads(line)["event"] for line in capsys.readouterr().err.strip().splitlines() if line.startswith("{")]
    assert "chat.error" in events


def test_other_request_errors_become_transport_errors(make_config, mock_client):
    def handler(request):
        raise httpx.TooManyRedirects("redirect loop", request=request)

    adapter = _adapter(make_config, mock_client, handler)
    with pytest.raises(TransportError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    assert ei.value.message == "Could not reach OpenAI: TooManyRedirects"
    assert ei.value.code is ErrorCode.TRANSPORT


def test_invalid_url_becomes_transport_error(make_config, mock_client):
    def handler(request):
        raise httpx.InvalidURL("Invalid non-printable ASCII character in URL")

    adapter = _adapter(make_config, mock_client, handler)
    with pytest.raises(TransportError) as ei:
        asyncio.run(adapter.send_completion("hi", "gpt-4o-mini"))
    assert ei.value.message == "Could not reach OpenAI: InvalidURL"
