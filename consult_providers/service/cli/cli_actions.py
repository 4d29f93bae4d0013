"""CLI action handlers.

Purpose
-------
Subcommand handlers for the consultation CLI, keeping the entrypoint minimal.
This module has no top-level side effects and is safe to import in tests.

Fallback & Error Semantics
--------------------------
- A malformed catalog is reported as JSON on stderr with exit code 1.
- A rejected request (blank prompt, no models) is reported the same way with
  exit code 2.
- Per-model failures are part of a normal batch and exit with 0.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from typing import Any, Optional, TextIO

from ...base.errors import CatalogConfigurationError, ValidationError
from ...base.http import aclose_all_clients
from ...base.models import ChatResponseBatch, ModelOutcome
from ...dispatch import Dispatcher, build_dispatcher

EXIT_OK = 0
EXIT_CONFIG = 1
EXIT_VALIDATION = 2


def _print_error(code: str, message: str, err: TextIO) -> None:
    print(json.dumps({"success": False, "code": code, "error": message}), file=err)


def _load_dispatcher(args: argparse.Namespace, err: TextIO) -> Optional[Dispatcher]:
    try:
        return build_dispatcher(use_mocks=getattr(args, "mock", None))
    except CatalogConfigurationError as e:
        _print_error(e.code.value, e.message, err)
        return None


def format_outcome(outcome: ModelOutcome) -> str:
    """Render one outcome as a short human-readable block."""
    head = f"{outcome.addressable_id} ({outcome.display_name}, {outcome.provider_display_name})"
    if outcome.success:
        return f"[ok] {head} {outcome.elapsed_ms} ms\n{outcome.text}\n"
    return f"[failed] {head} {outcome.error_code.value}: {outcome.error_message}\n"


def handle_models(args: argparse.Namespace, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """List every addressable model in catalog order."""
    out = out or sys.stdout
    err = err or sys.stderr
    dispatcher = _load_dispatcher(args, err)
    if dispatcher is None:
        return EXIT_CONFIG
    models = dispatcher.list_models()
    if args.json:
        print(json.dumps({"success": True, "models": [m.to_dict() for m in models]}, indent=2), file=out)
        return EXIT_OK
    for m in models:
        print(f"{m.addressable_id}\t{m.display_name}\t{m.provider_display_name}", file=out)
    return EXIT_OK


async def _consult(dispatcher: Dispatcher, prompt: str, models: list[str]) -> ChatResponseBatch:
    try:
        return await dispatcher.dispatch(prompt, models)
    finally:
        await aclose_all_clients()


def handle_ask(args: argparse.Namespace, out: Optional[TextIO] = None, err: Optional[TextIO] = None) -> int:
    """Run one consultation and print each outcome in request order."""
    out = out or sys.stdout
    err = err or sys.stderr
    dispatcher = _load_dispatcher(args, err)
    if dispatcher is None:
        return EXIT_CONFIG
    try:
        batch = asyncio.run(_consult(dispatcher, args.prompt, list(args.models)))
    except ValidationError as e:
        _print_error(e.code.value, e.message, err)
        return EXIT_VALIDATION
    if args.json:
        payload: dict[str, Any] = {"success": True, "responses": batch.to_list()}
        print(json.dumps(payload, indent=2, ensure_ascii=False), file=out)
        return EXIT_OK
    for outcome in batch:
        print(format_outcome(outcome), file=out)
    return EXIT_OK


__all__ = ["handle_ask", "handle_models", "format_outcome"]
