"""Orchestration workflows (deploy, show)."""

from yakp.workflow.deploy import (
    EXIT_COMMAND_FAILED,
    EXIT_CONFIGURATION,
    EXIT_CREDENTIALS,
    EXIT_SUCCESS,
    EXIT_TOOLCHAIN,
    run_deploy,
    show_config,
)

__all__ = [
    "EXIT_COMMAND_FAILED",
    "EXIT_CONFIGURATION",
    "EXIT_CREDENTIALS",
    "EXIT_SUCCESS",
    "EXIT_TOOLCHAIN",
    "run_deploy",
    "show_config",
]
