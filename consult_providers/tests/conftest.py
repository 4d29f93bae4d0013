"""Pytest configuration for the consultation test suite.

Every test runs against a clean environment: provider keys, endpoint
overrides and ``CONSULT_*`` settings are removed, ``.env`` loading is pointed
at a file that does not exist, and cached timeout config is dropped.
"""

from __future__ import annotations

import asyncio
from typing import Callable, Iterator, Mapping, Optional

import httpx
import pytest

from consult_providers.base.http import aclose_all_clients
from consult_providers.base.models import ProviderConfig
from consult_providers.base.timeouts import reset_timeout_config
from consult_providers.config import reset_dotenv_state

_ENV_VARS = (
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "GOOGLE_API_KEY",
    "GEMINI_API_KEY",
    "DEEPSEEK_API_KEY",
    "GROQ_API_KEY",
    "OPENAI_ENDPOINT",
    "ANTHROPIC_ENDPOINT",
    "GOOGLE_ENDPOINT",
    "DEEPSEEK_ENDPOINT",
    "GROQ_ENDPOINT",
    "CONSULT_CATALOG_FILE",
    "CONSULT_HTTP_TIMEOUT_SECONDS",
    "CONSULT_CONNECT_TIMEOUT_SECONDS",
    "CONSULT_CORS_ORIGINS",
    "CONSULT_SERVICE_HOST",
    "CONSULT_SERVICE_PORT",
    "CONSULT_SERVICE_RELOAD",
    "CONSULT_USE_MOCKS",
    "CONSULT_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Isolate each test from the developer's environment and ``.env`` file."""
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("DOTENV_FILE", str(tmp_path / "absent.env"))
    reset_dotenv_state()
    reset_timeout_config()
    yield
    reset_dotenv_state()
    reset_timeout_config()
    asyncio.run(aclose_all_clients())


@pytest.fixture()
def make_config() -> Callable[..., ProviderConfig]:
    """Return a builder for small provider configs."""

    def _make(
        provider_id: str = "openai",
        display_name: Optional[str] = None,
        models: Optional[Mapping[str, str]] = None,
        endpoint: str = "https://api.test/v1/chat/completions",
        api_key: str = "sk-test",
    ) -> ProviderConfig:
        return ProviderConfig(
            provider_id=provider_id,
            display_name=display_name or provider_id.capitalize(),
            api_key=api_key,
            models=models if models is not None else {"m1": "Model One"},
            endpoint_template=endpoint,
        )

    return _make


@pytest.fixture()
def mock_client() -> Callable[[Callable[[httpx.Request], httpx.Response]], httpx.AsyncClient]:
    """Return a builder for ``httpx.AsyncClient`` backed by ``MockTransport``."""

    def _make(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(handler))

    return _make
