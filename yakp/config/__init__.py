"""Configuration loading: environment lookup, values indirection, model."""

from yakp.config.environment import (
    EnvSnapshot,
    capture_environment,
    load_environment,
    lookup,
)
from yakp.config.loader import build_config, load_config, write_credentials
from yakp.config.models import (
    ENV_FIELDS,
    Coercion,
    EnvField,
    PluginConfig,
)
from yakp.config.values import parse_marker, read_raw_values, resolve_values

__all__ = [
    "ENV_FIELDS",
    "Coercion",
    "EnvField",
    "EnvSnapshot",
    "PluginConfig",
    "build_config",
    "capture_environment",
    "load_config",
    "load_environment",
    "lookup",
    "parse_marker",
    "read_raw_values",
    "resolve_values",
    "write_credentials",
]
