"""Behavioral properties of the dispatcher."""

from __future__ import annotations

import asyncio
import json

import httpx
import pytest

from consult_providers.base.catalog import ModelCatalog
from consult_providers.base.errors import AdapterError, ErrorCode, TransportError, ValidationError
from consult_providers.base.models import ChatRequest, ModelFailure, ModelSuccess
from consult_providers.dispatch import Dispatcher, build_dispatcher
from consult_providers.mock import MockProvider
from consult_providers.openai import OpenAIProvider


def _dispatcher(make_config, **mock_kwargs):
    configs = (
        make_config("openai", "OpenAI", {"gpt-4o": "GPT-4o", "gpt-4o-mini": "GPT-4o Mini"}),
        make_config("groq", "Groq", {"fast": "Fast", "slow": "Slow"}),
    )
    catalog = ModelCatalog.from_configs(configs)
    adapters = {
        "openai": MockProvider(configs[0], **mock_kwargs),
        "groq": MockProvider(configs[1], **mock_kwargs),
    }
    return Dispatcher(catalog, adapters), adapters


def _run(dispatcher, prompt, ids):
    return asyncio.run(dispatcher.dispatch(prompt, ids))


def test_order_follows_request_under_uneven_latency(make_config):
    dispatcher, _ = _dispatcher(make_config, delay={"slow": 0.05, "gpt-4o": 0.02})
    ids = ["groq:slow", "openai:gpt-4o", "groq:fast"]
    batch = _run(dispatcher, "hi", ids)
    assert [o.addressable_id for o in batch] == ids
    assert all(o.success for o in batch)
    assert batch[0].text == "[groq:slow] hi"


class _BarrierProvider:
    """Answers only once ``expected`` calls are in flight at the same time."""

    provider_name = "openai"

    def __init__(self, expected: int) -> None:
        self.expected = expected
        self.started = 0
        self.all_started = asyncio.Event()

    async def send_completion(self, prompt: str, model_key: str) -> str:
        self.started += 1
        if self.started == self.expected:
            self.all_started.set()
        await asyncio.wait_for(self.all_started.wait(), timeout=2)
        return model_key


def test_calls_run_concurrently(make_config):
    cfg = make_config("openai", "OpenAI", {"a": "A", "b": "B", "c": "C"})

    async def scenario():
        provider = _BarrierProvider(expected=3)
        dispatcher = Dispatcher(ModelCatalog.from_configs([cfg]), {"openai": provider})
        return await dispatcher.dispatch("hi", ["openai:a", "openai:b", "openai:c"])

    batch = asyncio.run(scenario())
    assert [o.text for o in batch] == ["a", "b", "c"]


@pytest.mark.parametrize(
    "prompt, ids, message",
    [
        ("", ["openai:gpt-4o"], "Please enter a prompt"),
        ("   \n\t", ["openai:gpt-4o"], "Please enter a prompt"),
        (None, ["openai:gpt-4o"], "Please enter a prompt"),
        ("hello", [], "Please select at least one model"),
        ("hello", None, "Please select at least one model"),
    ],
)
def test_invalid_requests_make_no_calls(make_config, prompt, ids, message):
    dispatcher, adapters = _dispatcher(make_config)
    with pytest.raises(ValidationError) as ei:
        _run(dispatcher, prompt, ids)
    assert ei.value.message == message
    assert ei.value.code is ErrorCode.VALIDATION
    assert all(not a.calls for a in adapters.values())


def test_unknown_provider_is_isolated(make_config):
    dispatcher, adapters = _dispatcher(make_config)
    batch = _run(dispatcher, "hi", ["openai:gpt-4o", "bogus:x"])
    assert len(batch) == 2
    assert isinstance(batch[0], ModelSuccess)
    failure = batch[1]
    assert isinstance(failure, ModelFailure)
    assert failure.error_message == "Unknown provider: bogus"
    assert failure.error_code is ErrorCode.UNKNOWN_PROVIDER
    assert failure.display_name == "x"
    assert failure.provider_display_name == "Bogus"
    assert adapters["openai"].calls == [("hi", "gpt-4o")]


def test_unknown_model_fails_without_call(make_config):
    dispatcher, adapters = _dispatcher(make_config)
    batch = _run(dispatcher, "hi", ["openai:nope", "openai"])
    assert [o.error_message for o in batch] == ["Unknown model: nope", "Unknown model: "]
    assert all(o.error_code is ErrorCode.UNKNOWN_MODEL for o in batch)
    assert batch[0].provider_display_name == "OpenAI"
    assert adapters["openai"].calls == []


def test_failures_do_not_affect_siblings(make_config):
    fail = {
        "gpt-4o": AdapterError("Rate limit reached", provider="openai", model="gpt-4o", status=429,
                               code=ErrorCode.RATE_LIMIT),
        "slow": RuntimeError("adapter bug"),
        "fast": TransportError("Could not reach Groq: ConnectError", provider="groq", model="fast"),
    }
    dispatcher, _ = _dispatcher(make_config, fail=fail)
    batch = _run(dispatcher, "hi", ["openai:gpt-4o", "groq:slow", "openai:gpt-4o-mini", "groq:fast"])
    assert [o.success for o in batch] == [False, False, True, False]
    assert batch[0].error_message == "Rate limit reached"
    assert batch[0].error_code is ErrorCode.RATE_LIMIT
    assert batch[1].error_message == "adapter bug"
    assert batch[1].error_code is ErrorCode.INTERNAL
    assert batch[2].text == "[openai:gpt-4o-mini] hi"
    assert batch[3].error_code is ErrorCode.TRANSPORT
    assert batch.success_count == 1 and batch.failure_count == 3


def test_elapsed_time_is_per_call(make_config):
    dispatcher, _ = _dispatcher(make_config, delay={"slow": 0.1})
    batch = _run(dispatcher, "hi", ["groq:slow", "groq:fast"])
    slow, fast = batch
    assert isinstance(slow.elapsed_ms, int) and isinstance(fast.elapsed_ms, int)
    assert slow.elapsed_ms >= 90
    assert 0 <= fast.elapsed_ms < slow.elapsed_ms


def test_duplicate_ids_each_get_an_outcome(make_config):
    dispatcher, adapters = _dispatcher(make_config)
    batch = _run(dispatcher, "hi", ["openai:gpt-4o", "openai:gpt-4o"])
    assert len(batch) == 2
    assert all(o.addressable_id == "openai:gpt-4o" and o.success for o in batch)
    assert len(adapters["openai"].calls) == 2


def test_list_models_exposes_catalog(make_config):
    dispatcher, _ = _dispatcher(make_config)
    assert [d.addressable_id for d in dispatcher.list_models()] == [
        "openai:gpt-4o",
        "openai:gpt-4o-mini",
        "groq:fast",
        "groq:slow",
    ]


def test_dispatch_events_logged(make_config, capsys):
    dispatcher, _ = _dispatcher(make_config)
    _run(dispatcher, "hi", ["openai:gpt-4o", "bogus:x"])
    events = {}
    for line in capsys.readouterr().err.strip().splitlines():
        data = json.loads(line)
        events[data["event"]] = data
    assert events["dispatch.start"]["count"] == 2
    assert events["dispatch.end"]["successes"] == 1
    assert events["dispatch.end"]["failures"] == 1


def test_end_to_end_consultation(make_config, mock_client):
    def handler(request):
        body = json.loads(request.content)
        assert body["messages"][1]["content"] == "Explain recursion"
        return httpx.Response(200, json={"choices": [{"message": {"content": "A function calling itself."}}]})

    cfg = make_config("openai", "OpenAI", {"gpt-4o-mini": "GPT-4o Mini"})
    adapter = OpenAIProvider(cfg, client=mock_client(handler))
    dispatcher = Dispatcher(ModelCatalog.from_configs([cfg]), {"openai": adapter})

    batch = _run(dispatcher, "Explain recursion", ["openai:gpt-4o-mini", "bogus:x"])
    first, second = batch.to_list()
    response_time = first.pop("responseTime")
    assert isinstance(response_time, int) and response_time >= 0
    assert first == {
        "modelId": "openai:gpt-4o-mini",
        "modelName": "GPT-4o Mini",
        "provider": "OpenAI",
        "response": "A function calling itself.",
        "success": True,
    }
    assert second == {
        "modelId": "bogus:x",
        "modelName": "x",
        "provider": "Bogus",
        "error": "Unknown provider: bogus",
        "code": "unknown_provider",
        "success": False,
    }


def test_build_dispatcher_with_mocks():
    dispatcher = build_dispatcher(use_mocks=True)
    batch = asyncio.run(dispatcher.dispatch("ping", ["anthropic:claude-3-haiku-20240307"]))
    assert batch[0].text == "[anthropic:claude-3-haiku-20240307] ping"
    assert batch[0].provider_display_name == "Anthropic"


def test_consult_accepts_chat_request(make_config):
    dispatcher, _ = _dispatcher(make_config)
    batch = asyncio.run(dispatcher.consult(ChatRequest.of("hi", ["groq:fast"])))
    assert batch[0].text == "[groq:fast] hi"
