"""CLI entry point for yakp, built on typer.

Provides ``deploy`` and ``show`` commands.  All deployment settings come
from the environment (``PLUGIN_*`` / ``HELM_*``); the flags only control
how the run behaves.

Usage::

    yakp deploy
    yakp deploy --dry-run
    yakp show
"""

from __future__ import annotations

import logging
import os
import sys

import typer

app = typer.Typer(
    name="yakp",
    help="Deploy a Helm chart to Kubernetes from a CI pipeline step.",
    no_args_is_help=True,
    add_completion=False,
)


def _configure_logging(debug: bool) -> None:
    if debug or os.environ.get("YAKP_DEBUG") == "1":
        logging.basicConfig(level=logging.DEBUG)


# ── deploy command ───────────────────────────────────────────────────────────


@app.command()
def deploy(
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Resolve configuration and print the commands without running them.",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging.",
    ),
) -> None:
    """Write the kube config and run helm upgrade (plus cleanup if enabled).

    Environment variables (PLUGIN_* first, then HELM_*):
      CHART, MASTER, RELEASE, TOKEN         Required.
      NAMESPACE                             Default "default".
      SKIP_TLS, CLEAN_BEFORE_RELEASE        "true" or "false".
      VALUES                                JSON object of --set overrides.
    """
    from yakp.workflow.deploy import run_deploy

    _configure_logging(debug)
    rc = run_deploy(dry_run=dry_run)
    raise typer.Exit(rc)


# ── show command ─────────────────────────────────────────────────────────────


@app.command()
def show(
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug logging.",
    ),
) -> None:
    """Print the resolved configuration and planned commands (token hidden)."""
    from yakp.workflow.deploy import show_config

    _configure_logging(debug)
    raise typer.Exit(show_config())


# ── Entry point ──────────────────────────────────────────────────────────────


def main() -> int:
    """Run the CLI and return an exit code."""
    try:
        app()
        return 0
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0


if __name__ == "__main__":
    sys.exit(main())
