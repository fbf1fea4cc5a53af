"""CLI entry point for the universal test runner."""

import argparse
import asyncio
import logging
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from universal_test_runner.detector import (
    TargetDirectoryError,
    detect,
    resolve_target_dir,
)
from universal_test_runner.dispatch import run_framework
from universal_test_runner.models.config import RunnerConfig
from universal_test_runner.models.framework import (
    DISPLAY_NAMES,
    SUPPORTED_FRAMEWORKS,
    FrameworkKind,
)
from universal_test_runner.models.result import ExecutionResult
from universal_test_runner.report import Report, generate

DEFAULT_TARGET_DIR = Path("/workspace")
DEFAULT_OUTPUT_DIR = Path("/output")

STATUS_SYMBOLS = {
    True: "✓",
    False: "✗",
}

EPILOG = """\
examples:
  # Auto-detect and run tests
  docker run -v $(pwd):/workspace universal-test-runner

  # Run with output directory for reports
  docker run -v $(pwd):/workspace -v $(pwd)/reports:/output universal-test-runner

  # Force a specific framework
  docker run -v $(pwd):/workspace universal-test-runner --framework pytest

supported frameworks:
{frameworks}

The test runner auto-detects your testing framework and runs tests accordingly.
"""


def echo_output(text: str) -> None:
    """Stream command output to the terminal as it arrives."""
    sys.stdout.write(text)
    sys.stdout.flush()


def log_results_summary(
    log: logging.Logger, result: ExecutionResult, report: Report
) -> None:
    """Log a short summary of the run and where its report lives."""
    log.info("=" * 80)
    log.info("Test Results Summary:")
    log.info("=" * 80)
    log.info(
        "%s %s: %s (exit code %d)",
        STATUS_SYMBOLS[report.passed],
        DISPLAY_NAMES[result.framework],
        "passed" if report.passed else "failed",
        result.exit_code,
    )
    if result.install is not None and not result.install.succeeded:
        log.info("  Dependency install exited with %d", result.install.exit_code)
    if report.note:
        log.info("  Note: %s", report.note)
    log.info("  Report: %s", report.path)


def detect_only(target_dir: Path) -> int:
    """Print the framework detected for a directory and return exit code."""
    log = logging.getLogger("universal_test_runner")

    try:
        root_dir = resolve_target_dir(target_dir)
    except TargetDirectoryError as e:
        log.error("%s", e)
        return 1

    framework = detect(root_dir)
    log.info("Detected framework: %s", framework)
    print(framework)
    return 0


async def run(
    target_dir: Path,
    config: RunnerConfig,
    framework: FrameworkKind | None = None,
) -> int:
    """Run the tests of a project and return exit code."""
    log = logging.getLogger("universal_test_runner")

    try:
        root_dir = resolve_target_dir(target_dir)
    except TargetDirectoryError as e:
        log.error("%s", e)
        return 1

    if framework is None:
        framework = detect(root_dir)

    if framework is FrameworkKind.UNKNOWN:
        log.error("Could not detect test framework in %s", root_dir)
        log.warning(
            "Supported frameworks: %s",
            ", ".join(DISPLAY_NAMES[f] for f in SUPPORTED_FRAMEWORKS),
        )
        return 1

    result = await run_framework(framework, root_dir, config, sink=echo_output)
    report = generate(result, config.scratch_dir, config.output_dir)
    log_results_summary(log, result, report)

    return 0 if report.passed else 1


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="universal-test-runner",
        description="Detect a project's test framework and run its tests",
        epilog=EPILOG.format(
            frameworks="\n".join(
                f"  - {DISPLAY_NAMES[f]}" for f in SUPPORTED_FRAMEWORKS
            )
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "target_dir",
        nargs="?",
        type=Path,
        default=DEFAULT_TARGET_DIR,
        help=f"Project directory to test (default: {DEFAULT_TARGET_DIR})",
    )
    parser.add_argument(
        "--detect",
        action="store_true",
        help="Only detect the framework (don't run tests)",
    )
    parser.add_argument(
        "--framework",
        type=FrameworkKind,
        choices=SUPPORTED_FRAMEWORKS,
        help="Force a specific framework",
    )
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=(
            "Directory reports are saved to if it exists "
            f"(default: {DEFAULT_OUTPUT_DIR})"
        ),
    )
    parser.add_argument(
        "--scratch-dir",
        type=Path,
        help="Directory for logs and artifacts (default: a new temporary directory)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        help="Seconds each command may run before it is stopped",
    )
    parser.add_argument(
        "--fail-on-install-error",
        action="store_true",
        help="Do not run tests when dependency installation fails",
    )
    parser.add_argument(
        "--python",
        default="python3",
        help="Python interpreter used for pytest projects (default: python3)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser


def build_config(
    parser: argparse.ArgumentParser, args: argparse.Namespace
) -> RunnerConfig:
    """Build the run configuration from parsed arguments.

    The default scratch directory is only created once the arguments are valid.
    """
    try:
        config = RunnerConfig(
            scratch_dir=(args.scratch_dir or Path(tempfile.gettempdir())).resolve(),
            output_dir=args.output_dir,
            timeout=args.timeout,
            fail_on_install_error=args.fail_on_install_error,
            python_executable=args.python,
        )
    except ValidationError as e:
        parser.error(str(e))

    if args.scratch_dir is None:
        scratch_dir = Path(tempfile.mkdtemp(prefix="universal-test-runner-"))
        config = config.model_copy(update={"scratch_dir": scratch_dir.resolve()})
    return config


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    if args.detect:
        sys.exit(detect_only(args.target_dir))

    config = build_config(parser, args)
    exit_code = asyncio.run(
        run(target_dir=args.target_dir, config=config, framework=args.framework)
    )
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()
