"""Values override map parsing and ``{{NAME}}`` indirection.

``PLUGIN_VALUES`` (or ``HELM_VALUES``) holds a flat JSON object whose
entries become ``helm --set key=value`` pairs.  A value whose *entire*
content is ``{{NAME}}`` is an indirection marker: the real value is read
from the environment variable ``NAME``.  This keeps secrets out of the
pipeline definition::

    PLUGIN_VALUES='{"image.tag": "1.4.2", "db.password": "{{DB_PASSWORD}}"}'
"""

from __future__ import annotations

import json
import logging
import re
from typing import Dict, Optional

from yakp.config.environment import EnvSnapshot
from yakp.config.models import DEFAULT_VALUES, VALUES_FALLBACK, VALUES_PRIMARY
from yakp.errors import MalformedValues, UnresolvedIndirection

logger = logging.getLogger(__name__)

MARKER_PATTERN = re.compile(r"\{\{(\w+)\}\}")


def parse_marker(value: str) -> Optional[str]:
    """Return the variable name if *value* is exactly ``{{NAME}}``."""
    match = MARKER_PATTERN.fullmatch(value)
    return match.group(1) if match else None


def read_raw_values(env: EnvSnapshot) -> str:
    """Return the raw JSON override text, ``"{}"`` when none is set."""
    for name in (VALUES_PRIMARY, VALUES_FALLBACK):
        if name in env:
            return env[name]
    return DEFAULT_VALUES


def parse_values(raw_json: str) -> Dict[str, str]:
    """Parse *raw_json* into an ordered ``str -> str`` mapping.

    Raises :class:`~yakp.errors.MalformedValues` when the text is not JSON,
    not an object, or holds a non-string value.
    """
    try:
        data = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        raise MalformedValues(f"invalid JSON ({exc.msg})") from exc

    if not isinstance(data, dict):
        raise MalformedValues("values must be an object")

    for key, value in data.items():
        if not isinstance(value, str):
            raise MalformedValues(
                f"value of '{key}' must be a string, got {type(value).__name__}"
            )
    return data


def resolve_values(raw_json: str, env: EnvSnapshot) -> Dict[str, str]:
    """Parse *raw_json* and replace indirection markers from *env*.

    Markers are looked up directly by name (no ``PLUGIN_``/``HELM_``
    fallback).  A single pass: resolved values are never re-scanned.
    """
    resolved: Dict[str, str] = {}
    for key, value in parse_values(raw_json).items():
        name = parse_marker(value)
        if name is None:
            resolved[key] = value
            continue
        if name not in env:
            raise UnresolvedIndirection(key, name)
        logger.debug("Values key %s resolved from %s", key, name)
        resolved[key] = env[name]
    return resolved
