"""Execution of external commands with merged output capture."""

import asyncio
import codecs
import logging
import os
import signal
from collections.abc import Callable, Sequence
from pathlib import Path

from universal_test_runner.models.result import CommandResult

log = logging.getLogger(__name__)

EXIT_NOT_EXECUTABLE = 126
EXIT_COMMAND_NOT_FOUND = 127
EXIT_TIMED_OUT = 124

READ_CHUNK_SIZE = 64 * 1024

OutputSink = Callable[[str], None]


async def run_command(
    argv: Sequence[str],
    cwd: Path,
    timeout: float | None = None,
    kill_grace_period: float = 5.0,
    sink: OutputSink | None = None,
) -> CommandResult:
    """Run a command and capture its interleaved stdout and stderr.

    Args:
        argv: Program and arguments, executed without a shell
        cwd: Working directory for the process
        timeout: Maximum run time in seconds (None means no limit)
        kill_grace_period: Seconds to wait after SIGTERM before sending SIGKILL
        sink: Called with each chunk of output as it arrives

    Returns:
        The command result. Output collected before a timeout is kept.

    """
    log.debug("Running %s in %s", " ".join(argv), cwd)
    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            cwd=cwd,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.STDOUT,
            start_new_session=True,
        )
    except FileNotFoundError:
        return _launch_failure(argv, EXIT_COMMAND_NOT_FOUND, "command not found", sink)
    except PermissionError:
        return _launch_failure(argv, EXIT_NOT_EXECUTABLE, "permission denied", sink)

    chunks: list[str] = []
    try:
        await asyncio.wait_for(_collect_output(process, chunks, sink), timeout)
    except TimeoutError:
        log.warning("Command %s timed out after %ss, stopping it", argv[0], timeout)
        await _terminate(process, kill_grace_period)
        return CommandResult(
            argv=tuple(argv),
            exit_code=EXIT_TIMED_OUT,
            output="".join(chunks),
            timed_out=True,
        )

    exit_code = await process.wait()
    log.debug("Command %s exited with %d", argv[0], exit_code)
    return CommandResult(argv=tuple(argv), exit_code=exit_code, output="".join(chunks))


async def _collect_output(
    process: asyncio.subprocess.Process,
    chunks: list[str],
    sink: OutputSink | None,
) -> None:
    """Read the process output until EOF, then wait for it to exit."""
    assert process.stdout is not None
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    while data := await process.stdout.read(READ_CHUNK_SIZE):
        _emit(decoder.decode(data), chunks, sink)
    _emit(decoder.decode(b"", final=True), chunks, sink)

    await process.wait()


def _emit(text: str, chunks: list[str], sink: OutputSink | None) -> None:
    if not text:
        return
    chunks.append(text)
    if sink is not None:
        sink(text)


async def _terminate(process: asyncio.subprocess.Process, grace_period: float) -> None:
    """Send SIGTERM, then SIGKILL if the process group outlives the grace period.

    The whole process group is signalled so that children spawned by the
    command (node, test binaries, build steps) stop with it and release the
    output pipe.
    """
    if not _signal_group(process, signal.SIGTERM):
        return

    try:
        await asyncio.wait_for(process.wait(), grace_period)
    except TimeoutError:
        log.warning("Process %d ignored SIGTERM, killing it", process.pid)
        if not _signal_group(process, signal.SIGKILL):
            return
        await process.wait()


def _signal_group(process: asyncio.subprocess.Process, sig: signal.Signals) -> bool:
    """Signal the process group led by the process, False if it is gone."""
    try:
        os.killpg(process.pid, sig)
    except ProcessLookupError:
        return False
    return True


def _launch_failure(
    argv: Sequence[str], exit_code: int, reason: str, sink: OutputSink | None
) -> CommandResult:
    message = f"Could not execute {argv[0]}: {reason}\n"
    log.error("Could not execute %s: %s", argv[0], reason)
    if sink is not None:
        sink(message)
    return CommandResult(argv=tuple(argv), exit_code=exit_code, output=message)
