"""Outer surfaces of the consultation core: HTTP service, dev server and CLI."""
