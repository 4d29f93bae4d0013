"""Multi-provider dispatch: concurrent fan-out and ordered aggregation."""

from .aggregator import aggregate
from .dispatcher import Dispatcher, build_dispatcher

__all__ = ["Dispatcher", "aggregate", "build_dispatcher"]
