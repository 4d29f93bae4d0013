"""Addressable model id helpers.

An addressable id is ``"<provider_id>:<model_key>"``. Only the first
delimiter separates the parts, so model keys may themselves contain ``":"``.
"""
from __future__ import annotations

from typing import Tuple

from ...config.defaults import ADDRESS_DELIMITER


def split_addressable_id(addressable_id: str) -> Tuple[str, str]:
    """Split on the first delimiter into ``(provider_id, model_key)``.

    An id without a delimiter is all provider id with an empty model key.
    """
    provider_id, _, model_key = (addressable_id or "").partition(ADDRESS_DELIMITER)
    return provider_id, model_key


def make_addressable_id(provider_id: str, model_key: str) -> str:
    return f"{provider_id}{ADDRESS_DELIMITER}{model_key}"


__all__ = ["split_addressable_id", "make_addressable_id"]
