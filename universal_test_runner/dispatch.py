"""Dispatch of a detected framework to its runner."""

import logging
from pathlib import Path
from typing import assert_never

from universal_test_runner.commands import OutputSink
from universal_test_runner.frameworks import (
    FrameworkRunner,
    GoTestRunner,
    JestRunner,
    PytestRunner,
)
from universal_test_runner.models.config import RunnerConfig
from universal_test_runner.models.framework import SUPPORTED_FRAMEWORKS, FrameworkKind
from universal_test_runner.models.result import ExecutionResult

log = logging.getLogger(__name__)


class DetectionError(Exception):
    """Raised when no supported framework applies to a project."""


def get_runner(framework: FrameworkKind, config: RunnerConfig) -> FrameworkRunner:
    """Return the runner for a framework.

    Raises:
        DetectionError: If the framework is UNKNOWN

    """
    match framework:
        case FrameworkKind.JEST:
            return JestRunner(config=config)
        case FrameworkKind.PYTEST:
            return PytestRunner(config=config)
        case FrameworkKind.GOTEST:
            return GoTestRunner(config=config)
        case FrameworkKind.UNKNOWN:
            supported = ", ".join(SUPPORTED_FRAMEWORKS)
            raise DetectionError(
                f"Could not detect test framework. Supported frameworks: {supported}"
            )
        case _:
            assert_never(framework)


async def run_framework(
    framework: FrameworkKind,
    root_dir: Path,
    config: RunnerConfig,
    sink: OutputSink | None = None,
) -> ExecutionResult:
    """Run one framework's command sequence against a project.

    Args:
        framework: Framework to run, never UNKNOWN
        root_dir: Project directory, used as the working directory
        config: Run configuration
        sink: Receives command output as it is produced

    Returns:
        The execution result. A failing test command is reported through
        the exit code, not raised.

    Raises:
        DetectionError: If the framework is UNKNOWN

    """
    runner = get_runner(framework, config)
    log.info("Using framework: %s", framework)
    result = await runner.run(root_dir, sink)
    log.info("%s finished with exit code %d", framework, result.exit_code)
    return result
