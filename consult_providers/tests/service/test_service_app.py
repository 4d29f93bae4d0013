from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from consult_providers.base.catalog import ModelCatalog
from consult_providers.base.errors import AdapterError, CatalogConfigurationError
from consult_providers.config import ServiceSettings
from consult_providers.dispatch import Dispatcher
from consult_providers.mock import MockProvider
from consult_providers.service.app import create_app


@pytest.fixture()
def client(make_config):
    cfg = make_config("openai", "OpenAI", {"gpt-4o-mini": "GPT-4o Mini", "gpt-4o": "GPT-4o"})
    fail = {"gpt-4o": AdapterError("Incorrect API key provided", provider="openai", model="gpt-4o")}
    dispatcher = Dispatcher(ModelCatalog.from_configs([cfg]), {"openai": MockProvider(cfg, reply="Answer", fail=fail)})
    with TestClient(create_app(dispatcher, settings=ServiceSettings())) as c:
        yield c


def test_health_ok(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["timestamp"].endswith("Z")
    datetime.fromisoformat(data["timestamp"].replace("Z", "+00:00"))


def test_models_listing(client):
    r = client.get("/api/models")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["models"][0] == {
        "id": "openai:gpt-4o-mini",
        "name": "GPT-4o Mini",
        "provider": "OpenAI",
        "providerId": "openai",
    }
    assert len(body["models"]) == 2


def test_chat_returns_every_outcome_in_order(client):
    r = client.post("/api/chat", json={"prompt": "Explain recursion", "models": ["openai:gpt-4o", "openai:gpt-4o-mini", "bogus:x"]})
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    first, second, third = body["responses"]
    assert first["success"] is False and first["error"] == "Incorrect API key provided"
    assert second["success"] is True and second["response"] == "Answer"
    assert isinstance(second["responseTime"], int)
    assert third["error"] == "Unknown provider: bogus"


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"prompt": "", "models": ["openai:gpt-4o"]}, "Please enter a prompt"),
        ({"prompt": "   ", "models": ["openai:gpt-4o"]}, "Please enter a prompt"),
        ({"models": ["openai:gpt-4o"]}, "Please enter a prompt"),
        ({"prompt": "hi", "models": []}, "Please select at least one model"),
        ({"prompt": "hi"}, "Please select at least one model"),
    ],
)
def test_chat_validation_errors(client, payload, message):
    r = client.post("/api/chat", json=payload)
    assert r.status_code == 400
    assert r.json() == {"success": False, "error": message}


@pytest.mark.parametrize("payload", [["openai:gpt-4o"], {"prompt": "hi", "models": "openai:gpt-4o"}, "text"])
def test_chat_malformed_body(client, payload):
    r = client.post("/api/chat", json=payload)
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert "prompt" in body["error"]


def test_create_app_with_mocks_uses_bundled_catalog(monkeypatch):
    monkeypatch.setenv("CONSULT_USE_MOCKS", "1")
    with TestClient(create_app()) as c:
        ids = [m["id"] for m in c.get("/api/models").json()["models"]]
        assert "google:gemini-1.5-pro" in ids
        r = c.post("/api/chat", json={"prompt": "ping", "models": ["google:gemini-1.5-pro"]})
        assert r.json()["responses"][0]["response"] == "[google:gemini-1.5-pro] ping"


def test_malformed_catalog_aborts_startup(tmp_path, monkeypatch):
    bad = tmp_path / "catalog.yaml"
    bad.write_text("providers:\n  - id: openai\n    endpoint: ''\n    models: {}\n", encoding="utf-8")
    monkeypatch.setenv("CONSULT_CATALOG_FILE", str(bad))
    with pytest.raises(CatalogConfigurationError):
        create_app()


def test_cors_origins_from_settings(make_config):
    cfg = make_config()
    dispatcher = Dispatcher(ModelCatalog.from_configs([cfg]), {"openai": MockProvider(cfg)})
    app = create_app(dispatcher, settings=ServiceSettings(cors_origins=("https://ui.example",)))
    with TestClient(app) as c:
        r = c.get("/api/health", headers={"Origin": "https://ui.example"})
    assert r.headers["access-control-allow-origin"] == "https://ui.example"
