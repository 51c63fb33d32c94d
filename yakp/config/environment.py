"""Two-tier environment lookup with typed coercion.

Every setting can be supplied under a generic ``PLUGIN_*`` name or a
tool-specific ``HELM_*`` name.  Resolution precedence:

1. ``PLUGIN_<NAME>``: if set at all, even to the empty string
2. ``HELM_<NAME>``
3. The field default, or :class:`~yakp.errors.MissingConfiguration` when
   the field is required

Resolution reads an explicit snapshot (:func:`capture_environment`) rather
than ``os.environ`` so it stays a pure function of its inputs.
"""

from __future__ import annotations

import logging
import os
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from yakp.config.models import ENV_FIELDS, Coercion
from yakp.errors import InvalidConfigurationType, MissingConfiguration

logger = logging.getLogger(__name__)

#: Immutable view of the process environment taken once per run.
EnvSnapshot = Mapping[str, str]

_BOOLEANS = {"true": True, "false": False}


def capture_environment(source: Optional[Mapping[str, str]] = None) -> EnvSnapshot:
    """Return a read-only copy of *source* (default ``os.environ``)."""
    data = dict(os.environ if source is None else source)
    return MappingProxyType(data)


def coerce(name: str, raw: str, coercion: Coercion) -> Any:
    """Convert *raw* according to *coercion*.

    Booleans accept only the canonical ``"true"`` / ``"false"`` forms.
    """
    if coercion is Coercion.BOOLEAN:
        try:
            return _BOOLEANS[raw]
        except KeyError:
            raise InvalidConfigurationType(name, coercion.value, raw) from None
    return raw


def lookup(
    env: EnvSnapshot,
    primary: str,
    fallback: str,
    *,
    required: bool = False,
    default: Any = None,
    coercion: Coercion = Coercion.STRING,
) -> Any:
    """Resolve one setting from *env*.

    Raises:
        MissingConfiguration: neither name is set (or the value is empty)
            and the setting is required.
        InvalidConfigurationType: the value does not coerce.
    """
    for name in (primary, fallback):
        if name not in env:
            continue
        raw = env[name]
        if required and raw == "":
            raise MissingConfiguration(primary, fallback)
        logger.debug("Resolved %s from %s", primary, name)
        return coerce(name, raw, coercion)

    if required:
        raise MissingConfiguration(primary, fallback)
    return default


def load_environment(env: EnvSnapshot) -> Dict[str, Any]:
    """Resolve every field in :data:`~yakp.config.models.ENV_FIELDS`.

    Returns a mapping of attribute name to coerced value, in table order.
    """
    resolved: Dict[str, Any] = {}
    for spec in ENV_FIELDS:
        resolved[spec.attr] = lookup(
            env,
            spec.primary,
            spec.fallback,
            required=spec.required,
            default=spec.default,
            coercion=spec.coercion,
        )
    return resolved
