"""Deterministic mock provider for offline testing and demos.

Purpose
-------
Implement the ``CompletionProvider`` contract without any network traffic so
the dispatcher, the service and the CLI can be exercised end to end. Enabled
for every configured provider when ``CONSULT_USE_MOCKS=1``.

Behavior
--------
- Returns ``reply`` when given, else an echo of the model key and prompt.
- ``delay`` (seconds, or a mapping of model key to seconds) is awaited with
  ``asyncio.sleep`` before answering, to simulate uneven latency.
- ``fail`` (an exception instance, or a mapping of model key to exception)
  is raised instead of answering.
- Every call is recorded in ``calls`` as ``(prompt, model_key)``.
"""

from __future__ import annotations

import asyncio
from typing import List, Mapping, Optional, Tuple, Union

from ..base.logging import LogContext, get_logger, log_event
from ..base.models import ProviderConfig

DelaySpec = Union[float, Mapping[str, float]]
FailSpec = Union[BaseException, Mapping[str, BaseException], None]


class MockProvider:
    """Adapter that returns canned or echoed text instead of calling an API."""

    def __init__(
        self,
        config: Optional[ProviderConfig] = None,
        *,
        provider: str = "mock",
        reply: Optional[str] = None,
        delay: DelaySpec = 0.0,
        fail: FailSpec = None,
        **_: object,
    ) -> None:
        self._provider = config.provider_id if config is not None else provider
        self._reply = reply
        self._delay = delay
        self._fail = fail
        self.calls: List[Tuple[str, str]] = []
        self._logger = get_logger(f"consult.providers.{self._provider}")

    @property
    def provider_name(self) -> str:
        return self._provider

    def _delay_for(self, model_key: str) -> float:
        if isinstance(self._delay, Mapping):
            return float(self._delay.get(model_key, 0.0))
        return float(self._delay)

    def _failure_for(self, model_key: str) -> Optional[BaseException]:
        if isinstance(self._fail, Mapping):
            return self._fail.get(model_key)
        return self._fail

    async def send_completion(self, prompt: str, model_key: str) -> str:
        self.calls.append((prompt, model_key))
        ctx = LogContext(provider=self._provider, model=model_key, extra={"mock": True})
        log_event(self._logger, "chat.start", ctx, prompt_chars=len(prompt))
        delay = self._delay_for(model_key)
        if delay > 0:
            await asyncio.sleep(delay)
        failure = self._failure_for(model_key)
        if failure is not None:
            raise failure
        text = self._reply if self._reply is not None else f"[{self._provider}:{model_key}] {prompt}"
        log_event(self._logger, "chat.end", ctx, response_chars=len(text))
        return text


__all__ = ["MockProvider"]
