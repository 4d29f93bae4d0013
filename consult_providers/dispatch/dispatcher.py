"""Concurrent consultation of several providers with per-model isolation.

Flow
----
1. Reject the request (``ValidationError``) when the prompt is blank or no
   model ids are given. Nothing is dispatched in that case.
2. Resolve every requested id against the catalog. Unknown providers and
   unknown models become failure outcomes immediately, without a network call.
3. Run the remaining calls in one ``asyncio.TaskGroup``, one task per
   requested id. Each task times its own call with ``time.perf_counter`` and
   converts any exception into a failure, so no task ever fails and no
   sibling is cancelled.
4. Once every task has settled, hand the outcomes to :func:`aggregate`, which
   restores request order.

Duplicate ids are dispatched independently and each receives its own outcome.
There is no bound on fan-out width.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Dict, Iterable, Mapping, Optional, Sequence

from ..base.catalog import ModelCatalog, split_addressable_id
from ..base.errors import (
    ConsultError,
    UnknownModelError,
    UnknownProviderError,
    ValidationError,
    classify_exception,
)
from ..base.interfaces import CompletionProvider
from ..base.logging import LogContext, get_logger, log_event
from ..base.models import (
    ChatRequest,
    ChatResponseBatch,
    ModelDescriptor,
    ModelFailure,
    ModelOutcome,
    ModelSuccess,
    ProviderConfig,
)
from ..base.factory import build_adapters
from ..config import get_settings, load_provider_configs
from ..config.defaults import EMPTY_MODELS_MESSAGE, EMPTY_PROMPT_MESSAGE
from .aggregator import aggregate


def _capitalize(provider_id: str) -> str:
    return provider_id[:1].upper() + provider_id[1:]


def _elapsed_ms(started: float, finished: float) -> int:
    return max(0, int(round((finished - started) * 1000)))


class Dispatcher:
    """Fan a prompt out to the requested models and collect an ordered batch.

    Parameters:
        catalog: Immutable catalog of configured providers and models.
        adapters: ``provider_id -> CompletionProvider``; shared, read-only.
    """

    def __init__(self, catalog: ModelCatalog, adapters: Mapping[str, CompletionProvider]) -> None:
        self._catalog = catalog
        self._adapters = dict(adapters)
        self._logger = get_logger("consult.dispatch")

    @property
    def catalog(self) -> ModelCatalog:
        return self._catalog

    def list_models(self) -> tuple[ModelDescriptor, ...]:
        """Return every addressable model in catalog order."""
        return self._catalog.list_models()

    async def consult(self, request: ChatRequest) -> ChatResponseBatch:
        return await self.dispatch(request.prompt, request.addressable_model_ids)

    async def dispatch(self, prompt: str, addressable_model_ids: Sequence[str]) -> ChatResponseBatch:
        """Consult every requested model concurrently.

        Returns:
            A batch with exactly one outcome per requested id, in request order.

        Raises:
            ValidationError: Blank prompt or empty id sequence.
        """
        request = self._validate(prompt, addressable_model_ids)
        ids = request.addressable_model_ids
        log_event(self._logger, "dispatch.start", count=len(ids), prompt_chars=len(request.prompt))
        started = time.perf_counter()

        outcomes: Dict[int, ModelOutcome] = {}
        async with asyncio.TaskGroup() as tg:
            for index, addressable_id in enumerate(ids):
                immediate = self._resolve_or_fail(addressable_id)
                if isinstance(immediate, ModelFailure):
                    outcomes[index] = immediate
                    continue
                cfg, model_key, adapter = immediate
                tg.create_task(self._run_one(outcomes, index, addressable_id, cfg, model_key, adapter, request.prompt))

        batch = aggregate(ids, outcomes)
        log_event(
            self._logger,
            "dispatch.end",
            count=len(batch),
            successes=batch.success_count,
            failures=batch.failure_count,
            total_ms=_elapsed_ms(started, time.perf_counter()),
        )
        return batch

    # ----- helpers -----

    def _validate(self, prompt: str, addressable_model_ids: Sequence[str]) -> ChatRequest:
        if not isinstance(prompt, str) or not prompt.strip():
            raise ValidationError(EMPTY_PROMPT_MESSAGE)
        if isinstance(addressable_model_ids, str) or not addressable_model_ids:
            raise ValidationError(EMPTY_MODELS_MESSAGE)
        ids = tuple(addressable_model_ids)
        if any(not isinstance(i, str) for i in ids):
            raise ValidationError("Model ids must be strings")
        return ChatRequest.of(prompt, ids)

    def _resolve_or_fail(self, addressable_id: str):
        """Return ``(config, model_key, adapter)`` or an immediate failure."""
        cfg, model_key = self._catalog.resolve(addressable_id)
        adapter = self._adapters.get(cfg.provider_id) if cfg is not None else None
        if cfg is None or adapter is None:
            provider_id, _ = split_addressable_id(addressable_id)
            err = UnknownProviderError(f"Unknown provider: {provider_id}")
            return ModelFailure(
                addressable_id=addressable_id,
                display_name=(cfg.model_display_name(model_key) if cfg else model_key),
                provider_display_name=(cfg.display_name if cfg else _capitalize(provider_id)),
                error_message=err.message,
                error_code=err.code,
            )
        if not cfg.has_model(model_key):
            err = UnknownModelError(f"Unknown model: {model_key}")
            return ModelFailure(
                addressable_id=addressable_id,
                display_name=model_key,
                provider_display_name=cfg.display_name,
                error_message=err.message,
                error_code=err.code,
            )
        return cfg, model_key, adapter

    async def _run_one(
        self,
        outcomes: Dict[int, ModelOutcome],
        index: int,
        addressable_id: str,
        cfg: ProviderConfig,
        model_key: str,
        adapter: CompletionProvider,
        prompt: str,
    ) -> None:
        display_name = cfg.model_display_name(model_key)
        try:
            t0 = time.perf_counter()
            text = await adapter.send_completion(prompt, model_key)
            t1 = time.perf_counter()
        except Exception as exc:  # noqa: BLE001
            outcomes[index] = self._failure_from(exc, addressable_id, display_name, cfg, model_key)
            return
        outcomes[index] = ModelSuccess(
            addressable_id=addressable_id,
            display_name=display_name,
            provider_display_name=cfg.display_name,
            text=text,
            elapsed_ms=_elapsed_ms(t0, t1),
        )

    def _failure_from(
        self,
        exc: Exception,
        addressable_id: str,
        display_name: str,
        cfg: ProviderConfig,
        model_key: str,
    ) -> ModelFailure:
        code = classify_exception(exc)
        if isinstance(exc, ConsultError):
            message = exc.message
        else:
            message = str(exc) or type(exc).__name__
            log_event(
                self._logger,
                "dispatch.adapter_crash",
                LogContext(provider=cfg.provider_id, model=model_key, addressable_id=addressable_id),
                level=logging.ERROR,
                error_type=type(exc).__name__,
            )
        return ModelFailure(
            addressable_id=addressable_id,
            display_name=display_name,
            provider_display_name=cfg.display_name,
            error_message=message,
            error_code=code,
        )


def build_dispatcher(
    configs: Optional[Iterable[ProviderConfig]] = None,
    *,
    use_mocks: Optional[bool] = None,
    **adapter_kwargs,
) -> Dispatcher:
    """Build the catalog, the adapters and the dispatcher in one step.

    ``configs`` defaults to :func:`load_provider_configs`; ``use_mocks``
    defaults to ``CONSULT_USE_MOCKS``.

    Raises:
        CatalogConfigurationError: Malformed catalog or a provider without adapter.
    """
    configs = tuple(configs) if configs is not None else load_provider_configs()
    if use_mocks is None:
        use_mocks = get_settings().use_mocks
    catalog = ModelCatalog.from_configs(configs)
    adapters = build_adapters(catalog.providers(), use_mocks=use_mocks, **adapter_kwargs)
    return Dispatcher(catalog, adapters)


__all__ = ["Dispatcher", "build_dispatcher"]
