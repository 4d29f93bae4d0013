"""Request models and handlers backing :mod:`consult_providers.service.app`."""
