"""Exception hierarchy for the yakp deployment plugin.

Every failure in a run is fatal.  The exceptions carry the field, key or
variable name involved so the operator can fix the environment and re-run,
and so callers (tests, the workflow) can tell the failure kinds apart.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class PluginError(Exception):
    """Base class for every yakp failure."""


# ---------------------------------------------------------------------------
# Configuration resolution
# ---------------------------------------------------------------------------


class ConfigurationError(PluginError, ValueError):
    """The environment does not describe a usable deployment."""


class MissingConfiguration(ConfigurationError):
    """A required setting is unset (or set to the empty string)."""

    def __init__(self, name: str, fallback: Optional[str] = None) -> None:
        self.name = name
        self.fallback = fallback
        if fallback:
            msg = f"{name} (or {fallback}) env must be set"
        else:
            msg = f"{name} env must be set"
        super().__init__(msg)


class InvalidConfigurationType(ConfigurationError):
    """A setting could not be coerced to its declared type."""

    def __init__(self, name: str, expected: str, actual: str) -> None:
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(f"{name} must be {expected}, got {actual!r}")


class MalformedValues(ConfigurationError):
    """The values override map is not a flat JSON object of strings."""

    def __init__(self, reason: str) -> None:
        self.reason = reason
        super().__init__(f"Failed to parse values: {reason}")


class UnresolvedIndirection(ConfigurationError):
    """A ``{{NAME}}`` marker points at an unset environment variable."""

    def __init__(self, key: str, referenced_var: str) -> None:
        self.key = key
        self.referenced_var = referenced_var
        super().__init__(
            f"{referenced_var} is not set (referenced by values key '{key}')"
        )


# ---------------------------------------------------------------------------
# Credentials file
# ---------------------------------------------------------------------------


class CredentialsError(PluginError, RuntimeError):
    """The credentials file could not be rendered or written."""


class HomeDirectoryUnavailable(CredentialsError):
    def __init__(self) -> None:
        super().__init__("Failed to find home directory")


class DirectoryCreationFailed(CredentialsError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to create config directory {path}")


class TemplateRenderFailed(CredentialsError):
    """The fixed template references a placeholder nothing binds."""

    def __init__(self, placeholder: str) -> None:
        self.placeholder = placeholder
        super().__init__(f"Failed to render kube config: unbound '{placeholder}'")


class FileWriteFailed(CredentialsError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Failed to write config {path}")


# ---------------------------------------------------------------------------
# Command execution
# ---------------------------------------------------------------------------


class ExecutableNotFound(PluginError):
    """A tool the plugin invokes is not on ``PATH`` or cannot be executed."""

    def __init__(self, program: str, reason: Optional[str] = None) -> None:
        self.program = program
        self.reason = reason
        if reason:
            msg = f"{program} CLI could not be executed: {reason}"
        else:
            msg = f"{program} CLI not found on PATH"
        super().__init__(msg)
