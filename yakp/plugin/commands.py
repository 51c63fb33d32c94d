"""Argument vectors for the cleanup and upgrade tool invocations.

Pure projections of a resolved :class:`~yakp.config.models.PluginConfig`.
Nothing here resolves executables or runs processes; see
:mod:`yakp.plugin.runner` for that.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import FrozenSet, List, Mapping, Set, Tuple

from yakp.config.models import PluginConfig

KUBECTL = "kubectl"
HELM = "helm"

_REDACTED = "***"


@dataclass(frozen=True)
class CommandSpec:
    """A logical program name plus its ordered arguments.

    ``secret_args`` holds the indexes into ``args`` of the ``k=v`` operands
    of ``--set``; :meth:`redacted` masks their values.
    """

    program: str
    args: Tuple[str, ...] = field(default_factory=tuple)
    secret_args: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def argv(self) -> List[str]:
        return [self.program, *self.args]

    def redacted(self) -> str:
        """Render for logs with every ``--set`` value masked."""
        parts: List[str] = [self.program]
        for index, arg in enumerate(self.args):
            if index in self.secret_args:
                key, _, _ = arg.partition("=")
                arg = f"{key}={_REDACTED}"
            parts.append(arg)
        return " ".join(parts)


def build_clean_command(release: str) -> CommandSpec:
    """``kubectl delete jobs -l release=<release>``."""
    return CommandSpec(KUBECTL, ("delete", "jobs", "-l", f"release={release}"))


def build_upgrade_command(
    release: str, values: Mapping[str, str], chart: str
) -> CommandSpec:
    """``helm upgrade -i <release> [--set k=v]... <chart>``.

    One ``--set`` per entry of *values*, in iteration order.
    """
    args: List[str] = ["upgrade", "-i", release]
    secret_args: Set[int] = set()
    for key, value in values.items():
        args.append("--set")
        secret_args.add(len(args))
        args.append(f"{key}={value}")
    args.append(chart)
    return CommandSpec(HELM, tuple(args), frozenset(secret_args))


def build_commands(config: PluginConfig) -> List[CommandSpec]:
    """Commands of a run in execution order.

    The cleanup command comes first, and only when
    ``clean_before_release`` is set.
    """
    commands: List[CommandSpec] = []
    if config.clean_before_release:
        commands.append(build_clean_command(config.release))
    commands.append(
        build_upgrade_command(config.release, config.values, config.chart)
    )
    return commands
