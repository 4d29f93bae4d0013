"""Model catalog: addressable ids and the immutable catalog built at startup."""

from .addressing import make_addressable_id, split_addressable_id
from .model_catalog import ModelCatalog

__all__ = ["ModelCatalog", "make_addressable_id", "split_addressable_id"]
