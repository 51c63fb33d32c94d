"""helm / kubectl command construction and execution."""

from yakp.plugin.commands import (
    HELM,
    KUBECTL,
    CommandSpec,
    build_clean_command,
    build_commands,
    build_upgrade_command,
)
from yakp.plugin.runner import CommandResult, resolve_executable, run_command

__all__ = [
    "HELM",
    "KUBECTL",
    "CommandResult",
    "CommandSpec",
    "build_clean_command",
    "build_commands",
    "build_upgrade_command",
    "resolve_executable",
    "run_command",
]
