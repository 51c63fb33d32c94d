"""Operator-facing console output for a deploy step.

The CI log is the only place an operator sees what the plugin did, so
every stage, planned command and outcome is printed here through a
shared :mod:`rich` console.  ``logger.*`` calls stay in the calling
modules for structured logging.

Command lines are printed in their redacted form only, and all dynamic
text is escaped so ``--set list[0]=x`` is not read as Rich markup.
"""

from __future__ import annotations

from typing import Mapping

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

from yakp.plugin.commands import CommandSpec

# force_terminal=None lets Rich detect whether the CI runner gives a TTY.
console = Console(stderr=False, force_terminal=None)

_PROMPT = "[bold cyan]$[/]"
_DONE = "[bold green]✓[/]"
_ABORT = "[bold red]✗[/]"

# Panel titles per aborting failure kind.
ABORT_TITLES = {
    "configuration": "Configuration error",
    "credentials": "Credentials error",
    "toolchain": "Toolchain error",
}


# ── Stages ────────────────────────────────────────────────────────────────


def stage(name: str) -> None:
    """Header for one stage of the run (``CONFIGURE``, ``DEPLOY``...)."""
    console.print()
    console.print(f"[bold blue]── {escape(name)} ──[/]")


def target(release: str, chart: str) -> None:
    console.print(
        f"  {_DONE} release [bold]{escape(release)}[/] → chart "
        f"[bold]{escape(chart)}[/]",
        highlight=False,
    )


def kubeconfig_written() -> None:
    console.print(f"  {_DONE} kube config written")


def settings(summary: Mapping[str, str]) -> None:
    """Resolved settings as an aligned ``key: value`` list."""
    width = max((len(k) for k in summary), default=0)
    for key, value in summary.items():
        console.print(
            f"    [bold]{escape(key.ljust(width))}[/]  {escape(value)}",
            highlight=False,
        )


# ── Commands ──────────────────────────────────────────────────────────────


def command(spec: CommandSpec) -> None:
    """Shell-style line for a planned or starting command, values masked."""
    console.print(f"  {_PROMPT} {escape(spec.redacted())}", highlight=False)


def command_done(spec: CommandSpec) -> None:
    console.print(f"  {_DONE} {escape(spec.program)} finished")


def command_failed(spec: CommandSpec, returncode: int) -> None:
    console.print(
        f"  {_ABORT} [red]{escape(spec.program)} exited with rc={returncode}[/]"
    )


def dry_run_notice() -> None:
    console.print("  [dim]dry run: kube config not written, nothing executed[/]")


# ── Outcome panels ────────────────────────────────────────────────────────


def aborted(kind: str, message: str) -> None:
    """Red panel naming why the run stopped before any command finished.

    *kind* is a key of :data:`ABORT_TITLES`.
    """
    console.print()
    console.print(
        Panel(
            escape(message),
            title=f"[bold red]{ABORT_TITLES[kind]}[/]",
            border_style="red",
            padding=(1, 2),
        )
    )


def deployed(release: str, chart: str, namespace: str) -> None:
    """Green panel summarizing the upgraded release."""
    body = f"release:   {release}\nchart:     {chart}\nnamespace: {namespace}"
    console.print()
    console.print(
        Panel(
            escape(body),
            title="[bold green]Deployed[/]",
            border_style="green",
            padding=(1, 2),
        )
    )
