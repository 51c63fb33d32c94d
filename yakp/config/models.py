"""Data model for the plugin configuration.

Defines:
- :class:`Coercion`: how a raw environment string becomes a field value
- :class:`EnvField`: one row of the environment-variable table
- :data:`ENV_FIELDS`: every setting read through the two-tier lookup
- :class:`PluginConfig`: the resolved, read-only configuration of a run
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Tuple

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator


class Coercion(str, Enum):
    """Type a raw environment value is coerced to."""

    STRING = "string"
    BOOLEAN = "bool"


@dataclass(frozen=True)
class EnvField:
    """A configuration field and the environment names that feed it.

    Attributes:
        attr: Attribute name on :class:`PluginConfig`.
        primary: Generic ``PLUGIN_*`` name, tried first.
        fallback: Tool-specific ``HELM_*`` name, tried second.
        required: Absence is fatal when *True*.
        default: Value used when neither name is set and not required.
        coercion: How the raw string is converted.
    """

    attr: str
    primary: str
    fallback: str
    required: bool = False
    default: Any = None
    coercion: Coercion = Coercion.STRING


ENV_FIELDS: Tuple[EnvField, ...] = (
    EnvField("chart", "PLUGIN_CHART", "HELM_CHART", required=True),
    EnvField("master", "PLUGIN_MASTER", "HELM_MASTER", required=True),
    EnvField("namespace", "PLUGIN_NAMESPACE", "HELM_NAMESPACE", default="default"),
    EnvField("release", "PLUGIN_RELEASE", "HELM_RELEASE", required=True),
    EnvField(
        "skip_tls", "PLUGIN_SKIP_TLS", "HELM_SKIP_TLS",
        default=False, coercion=Coercion.BOOLEAN,
    ),
    EnvField("token", "PLUGIN_TOKEN", "HELM_TOKEN", required=True),
    EnvField(
        "clean_before_release",
        "PLUGIN_CLEAN_BEFORE_RELEASE",
        "HELM_CLEAN_BEFORE_RELEASE",
        default=False,
        coercion=Coercion.BOOLEAN,
    ),
)

#: Names of the raw JSON values override variables.
VALUES_PRIMARY = "PLUGIN_VALUES"
VALUES_FALLBACK = "HELM_VALUES"

#: Raw values used when neither override variable is set.
DEFAULT_VALUES = "{}"


class PluginConfig(BaseModel):
    """Resolved configuration of a single deployment run.

    Frozen once built.  ``token`` is a :class:`~pydantic.SecretStr` so it
    never shows up in ``repr()`` or log output; use
    ``config.token.get_secret_value()`` where the raw value is required.
    """

    model_config = ConfigDict(frozen=True)

    chart: str = Field(min_length=1)
    master: str = Field(min_length=1)
    namespace: str = "default"
    release: str = Field(min_length=1)
    skip_tls: bool = False
    token: SecretStr
    clean_before_release: bool = False
    values: Dict[str, str] = Field(default_factory=dict)

    @field_validator("token")
    @classmethod
    def _token_not_empty(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value():
            raise ValueError("token must not be empty")
        return value

    def summary(self) -> Dict[str, str]:
        """Human-readable view of the configuration with the token masked."""
        return {
            "chart": self.chart,
            "master": self.master,
            "namespace": self.namespace,
            "release": self.release,
            "skip_tls": _bool_text(self.skip_tls),
            "token": "***",
            "clean_before_release": _bool_text(self.clean_before_release),
            "values": ", ".join(self.values) or "(none)",
        }


def _bool_text(value: bool) -> str:
    return "true" if value else "false"
