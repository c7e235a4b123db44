# chronolens/core/cache_keys.py
"""
Cache key construction.

Keys look like ``chronolens_events_<view_type>_<category>_<date>``. View types
and categories never contain ``_``, so distinct triples give distinct keys.
"""
import hashlib
import re
from enum import Enum
from typing import Union

from chronolens.core.models import Category, ViewType

KEY_PREFIX = "chronolens_events"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^a-zA-Z0-9\-_:]")


def _text(value: Union[str, Enum]) -> str:
    return value.value if isinstance(value, Enum) else str(value)


def build_cache_key(date: str, category: Union[Category, str], view_type: Union[ViewType, str]) -> str:
    """Build the lookup key for a (date, category, view type) triple. The date is used verbatim."""
    return f"{KEY_PREFIX}_{_text(view_type)}_{_text(category)}_{date}"


def sanitize_key(key: str) -> str:
    """Replace anything outside ``[A-Za-z0-9_:-]`` with ``_`` so the key can be used as a filename."""
    return _UNSAFE_FILENAME_CHARS.sub("_", key)


def key_filename(key: str) -> str:
    """
    Filename stem for ``key``. Keys that needed sanitizing get a short hash of
    the raw key appended, so two keys never share a file.
    """
    safe = sanitize_key(key)
    if safe == key:
        return safe
    digest = hashlib.sha256(key.encode("utf-8")).hexdigest()[:12]
    return f"{safe}-{digest}"
