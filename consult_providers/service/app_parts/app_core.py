from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi.responses import JSONResponse
from pydantic import BaseModel

from consult_providers.base.errors import ValidationError
from consult_providers.dispatch import Dispatcher

INVALID_BODY_MESSAGE = "Request body must be a JSON object with 'prompt' and 'models'"


class ChatBody(BaseModel):
    """Represents the body of a consultation request.

    Both fields are optional at the schema level so that a missing prompt or
    model list is reported with the same message as an empty one.
    """

    prompt: Optional[str] = None
    models: Optional[List[str]] = None


def error_response(message: str, status_code: int = 400) -> JSONResponse:
    """Return the ``{"success": false, "error": ...}`` envelope."""
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _build_models_response(dispatcher: Dispatcher) -> Dict[str, Any]:
    return {"success": True, "models": [d.to_dict() for d in dispatcher.list_models()]}


def _build_health_response() -> Dict[str, Any]:
    ts = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return {"status": "ok", "timestamp": ts}


async def _handle_chat(body: ChatBody, dispatcher: Dispatcher) -> Dict[str, Any] | JSONResponse:
    """Validate and run one consultation, returning the response payload.

    Validation failures become a 400 envelope; per-model failures are part of
    a normal 200 batch.
    """
    try:
        batch = await dispatcher.dispatch(body.prompt or "", body.models or [])
    except ValidationError as e:
        return error_response(e.message)
    return {"success": True, "responses": batch.to_list()}


__all__ = [
    "ChatBody",
    "INVALID_BODY_MESSAGE",
    "error_response",
    "_build_models_response",
    "_build_health_response",
    "_handle_chat",
]
