"""Async subprocess execution with rich error context.

Every jj and gh invocation goes through run_subprocess_with_context so that
failures carry the operation, the command line, the exit code and any output.
"""

import asyncio
import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)


async def run_subprocess_with_context(
    cmd: Sequence[str],
    operation_context: str,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> str:
    """Execute a command asynchronously and return its stdout.

    Args:
        cmd: Command and arguments to execute
        operation_context: Human-readable description of operation
        cwd: Working directory for command execution
        env: Full environment for the child process (inherits when None)

    Returns:
        Decoded stdout of the command

    Raises:
        RuntimeError: If the command fails or its binary is not found
    """
    cmd_str = " ".join(str(arg) for arg in cmd)
    logger.debug("Running: %s", cmd_str)

    try:
        process = await asyncio.create_subprocess_exec(
            *cmd,
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as e:
        error_msg = f"Command not found while trying to {operation_context}: {cmd[0]}"
        error_msg += f"\nFull command: {cmd_str}"
        raise RuntimeError(error_msg) from e

    stdout_bytes, stderr_bytes = await process.communicate()
    stdout = stdout_bytes.decode("utf-8", errors="replace")

    if process.returncode != 0:
        error_msg = f"Failed to {operation_context}"
        error_msg += f"\nCommand: {cmd_str}"
        error_msg += f"\nExit code: {process.returncode}"

        stdout_stripped = stdout.strip()
        if stdout_stripped:
            error_msg += f"\nstdout: {stdout_stripped}"

        stderr_stripped = stderr_bytes.decode("utf-8", errors="replace").strip()
        if stderr_stripped:
            error_msg += f"\nstderr: {stderr_stripped}"

        raise RuntimeError(error_msg)

    return stdout
