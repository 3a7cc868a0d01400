"""
Normalization of partial avatar descriptors.

The comparator never operates on absent data: every descriptor is first
completed with the catalog defaults. Caller-supplied values are kept
verbatim (they are not validated here), so an unknown token simply scores
zero later instead of failing the whole comparison.
"""

import logging
import math
from typing import Any, Dict, Mapping

from ..catalog import ALL_ATTRIBUTES, DEFAULT_AVATAR_CONFIG, attribute_name
from .schema import StoredAvatar

logger = logging.getLogger(__name__)


def _is_missing(value: Any) -> bool:
    """None and NaN (blank CSV cells) count as absent."""
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def extract_config(avatar: Any) -> Mapping[Any, Any]:
    """
    Unwrap the attribute mapping from any accepted descriptor form.

    Accepted forms:
    - None: no descriptor at all
    - StoredAvatar, or a mapping with a "config" mapping (stored record)
    - A plain (possibly partial) attribute -> value mapping

    Args:
        avatar: Descriptor in any accepted form

    Returns:
        Attribute mapping (empty if nothing usable was supplied)
    """
    if avatar is None:
        return {}
    if isinstance(avatar, StoredAvatar):
        return avatar.config or {}
    if isinstance(avatar, Mapping):
        wrapped = avatar.get("config")
        if isinstance(wrapped, Mapping):
            return wrapped
        return avatar

    logger.debug(f"Unsupported descriptor type {type(avatar).__name__}, using defaults")
    return {}


def normalize(partial: Any = None) -> Dict[str, str]:
    """
    Complete a partial descriptor with catalog defaults.

    Attributes missing from the input (or set to None/NaN) take the default
    value; present attributes keep the caller's value. Keys that are not
    catalog attributes are dropped. Never raises.

    Args:
        partial: Partial descriptor, stored avatar, or None

    Returns:
        Complete descriptor with one value for every attribute
    """
    supplied = {}
    for key, value in extract_config(partial).items():
        name = attribute_name(key)
        if name not in DEFAULT_AVATAR_CONFIG:
            logger.debug(f"Ignoring unknown attribute {name!r}")
            continue
        if _is_missing(value):
            continue
        supplied[name] = value

    return {attr: supplied.get(attr, DEFAULT_AVATAR_CONFIG[attr]) for attr in ALL_ATTRIBUTES}
