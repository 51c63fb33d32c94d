"""Deploy workflow: configure → (clean) → upgrade.

Implements the run of a single CI step:

1. **Configure**: resolve the environment, resolve values, write the
   kube config.
2. **Clean**: ``kubectl delete jobs`` for the release, only when
   ``clean_before_release`` is set.
3. **Upgrade**: ``helm upgrade -i``.

The first failure aborts the run; nothing is retried and a written kube
config is left in place.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional

from yakp import ui
from yakp.config.environment import EnvSnapshot
from yakp.config.loader import load_config
from yakp.errors import ConfigurationError, CredentialsError, ExecutableNotFound
from yakp.plugin.commands import CommandSpec, build_commands
from yakp.plugin.runner import CommandResult, run_command

logger = logging.getLogger(__name__)

# Exit codes
EXIT_SUCCESS = 0
EXIT_CONFIGURATION = 1
EXIT_CREDENTIALS = 2
EXIT_COMMAND_FAILED = 3
EXIT_TOOLCHAIN = 4

Runner = Callable[[CommandSpec], CommandResult]


def run_deploy(
    env: Optional[EnvSnapshot] = None,
    *,
    home: Optional[Path] = None,
    dry_run: bool = False,
    runner: Optional[Runner] = None,
) -> int:
    """End-to-end deployment.  Returns one of the ``EXIT_*`` constants.

    With *dry_run* the kube config is not written and the commands are
    printed instead of executed.
    """
    run = runner if runner is not None else run_command

    # -- 1. Configure ----------------------------------------------------------
    ui.stage("CONFIGURE")
    try:
        config = load_config(env, home=home, write_credentials_file=not dry_run)
    except ConfigurationError as exc:
        logger.error("Configuration failed: %s", exc)
        ui.aborted("configuration", str(exc))
        return EXIT_CONFIGURATION
    except CredentialsError as exc:
        logger.error("Kube config write failed: %s", exc)
        ui.aborted("credentials", str(exc))
        return EXIT_CREDENTIALS

    ui.target(config.release, config.chart)
    if not dry_run:
        ui.kubeconfig_written()

    commands = build_commands(config)

    if dry_run:
        ui.stage("PLAN")
        for spec in commands:
            ui.command(spec)
        ui.dry_run_notice()
        return EXIT_SUCCESS

    # -- 2/3. Clean + upgrade --------------------------------------------------
    ui.stage("DEPLOY")
    for spec in commands:
        ui.command(spec)
        try:
            result = run(spec)
        except ExecutableNotFound as exc:
            logger.error("%s", exc)
            ui.aborted("toolchain", str(exc))
            return EXIT_TOOLCHAIN
        if not result.success:
            ui.command_failed(spec, result.returncode)
            return EXIT_COMMAND_FAILED
        ui.command_done(spec)

    ui.deployed(config.release, config.chart, config.namespace)
    return EXIT_SUCCESS


def show_config(env: Optional[EnvSnapshot] = None) -> int:
    """Print the resolved configuration and planned commands.

    Nothing is written and the token is never shown.
    """
    try:
        config = load_config(env, write_credentials_file=False)
    except ConfigurationError as exc:
        ui.aborted("configuration", str(exc))
        return EXIT_CONFIGURATION

    ui.stage("CONFIG")
    ui.settings(config.summary())

    ui.stage("COMMANDS")
    for spec in build_commands(config):
        ui.command(spec)
    return EXIT_SUCCESS
