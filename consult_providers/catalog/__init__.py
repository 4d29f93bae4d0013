"""Bundled catalog data (``providers.yaml``), read via ``importlib.resources``."""
