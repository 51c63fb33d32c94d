"""Run a :class:`CommandSpec` as a subprocess.

The tools' own output is not captured: it streams straight into the CI
step log.  A non-zero exit is reported through :class:`CommandResult`,
not raised.
"""

from __future__ import annotations

import logging
import shutil
import subprocess
from dataclasses import dataclass
from typing import Dict, Optional

from yakp.errors import ExecutableNotFound
from yakp.plugin.commands import CommandSpec

logger = logging.getLogger(__name__)


@dataclass
class CommandResult:
    """Outcome of one tool invocation."""

    command: str
    returncode: int
    success: bool = False


def resolve_executable(program: str) -> str:
    """Return the absolute path of *program* on ``PATH``.

    Raises :class:`~yakp.errors.ExecutableNotFound` if it is absent.
    """
    path = shutil.which(program)
    if path is None:
        raise ExecutableNotFound(program)
    return path


def run_command(
    spec: CommandSpec,
    *,
    env: Optional[Dict[str, str]] = None,
) -> CommandResult:
    """Execute *spec* and wait for it to exit.

    Raises :class:`~yakp.errors.ExecutableNotFound` when the program is
    missing from ``PATH`` or the OS refuses to start it.
    """
    argv = spec.argv
    argv[0] = resolve_executable(spec.program)
    command = spec.redacted()
    logger.info("Running: %s", command)

    try:
        proc = subprocess.run(argv, env=env, check=False)
    except OSError as exc:
        logger.error("Could not start %s: %s", argv[0], exc)
        raise ExecutableNotFound(spec.program, reason=str(exc)) from exc

    result = CommandResult(
        command=command,
        returncode=proc.returncode,
        success=proc.returncode == 0,
    )
    if not result.success:
        logger.error("%s exited with rc=%d", spec.program, proc.returncode)
    return result
