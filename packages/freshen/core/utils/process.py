"""Child process helper for build actions."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from freshen.core.errors import CommandError

logger = logging.getLogger(__name__)


def run_command(
    *argv: str,
    cwd: Path | str | None = None,
    timeout_s: float | None = None,
) -> str:
    """Run a command to completion and return its standard output.

    Blocks until the process exits. Output is captured, so a failing command
    produces an error that carries both stderr and stdout.

    Args:
        *argv: Executable followed by its arguments
        cwd: Working directory for the child process
        timeout_s: Kill the process after this many seconds

    Returns:
        Captured standard output

    Raises:
        CommandError: If the executable is missing, times out or exits non-zero
        ValueError: If no executable is given
    """
    if not argv:
        raise ValueError("run_command() requires an executable")
    args = list(argv)

    logger.debug(f"Executing: {' '.join(args)}")
    try:
        result = subprocess.run(
            args,
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout_s,
            check=False,  # We'll check returncode manually
        )
    except FileNotFoundError as e:
        raise CommandError(args, None, message=f"Executable not found: {args[0]!r}") from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(
            args, None, message=f"Command {args[0]!r} timed out after {timeout_s}s"
        ) from e

    if result.returncode != 0:
        raise CommandError(args, result.returncode, result.stdout, result.stderr)

    return result.stdout
