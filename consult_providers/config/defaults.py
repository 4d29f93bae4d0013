"""consult_providers.config.defaults
=================================

Central place for small, stable default values used across the adapters, the
dispatcher and the service layer. Environment variables or an external
catalog override some of them; the adapter request constants do not vary per
request.

This module intentionally imports nothing from the rest of the package so any
layer can depend on it without cycles.
"""

from __future__ import annotations

# ---- Adapter request constants ----
# Fixed system instruction sent with every completion request.
SYSTEM_INSTRUCTION = "You are a smart and helpful assistant. Answer clearly and in detail."
# Upper bound on generated tokens per call.
MAX_OUTPUT_TOKENS = 2000
# Sampling temperature for every provider.
TEMPERATURE = 0.7
# Anthropic Messages API version header.
ANTHROPIC_API_VERSION = "2023-06-01"

# ---- Transport ----
DEFAULT_HTTP_TIMEOUT_SECONDS = 60.0
DEFAULT_CONNECT_TIMEOUT_SECONDS = 10.0

# ---- Catalog ----
# Bundled catalog resource (package, file name).
CATALOG_PACKAGE = "consult_providers.catalog"
CATALOG_RESOURCE = "providers.yaml"
# Separator between provider id and model key in addressable ids.
ADDRESS_DELIMITER = ":"
# Providers whose endpoint must carry the model key in the URL path.
MODEL_IN_PATH_PROVIDERS = ("google",)

# ---- Service / HTTP layer ----
# Comma-separated list of allowed origins for the dev server.
SERVICE_CORS_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173"
SERVICE_DEFAULT_HOST = "127.0.0.1"
SERVICE_DEFAULT_PORT = 3001

# ---- Validation messages returned to callers ----
EMPTY_PROMPT_MESSAGE = "Please enter a prompt"
EMPTY_MODELS_MESSAGE = "Please select at least one model"


__all__ = [
    "SYSTEM_INSTRUCTION",
    "MAX_OUTPUT_TOKENS",
    "TEMPERATURE",
    "ANTHROPIC_API_VERSION",
    "DEFAULT_HTTP_TIMEOUT_SECONDS",
    "DEFAULT_CONNECT_TIMEOUT_SECONDS",
    "CATALOG_PACKAGE",
    "CATALOG_RESOURCE",
    "ADDRESS_DELIMITER",
    "SERVICE_CORS_DEFAULT_ORIGINS",
    "SERVICE_DEFAULT_HOST",
    "SERVICE_DEFAULT_PORT",
    "EMPTY_PROMPT_MESSAGE",
    "EMPTY_MODELS_MESSAGE",
]
