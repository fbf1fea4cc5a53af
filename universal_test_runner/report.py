"""Unified text report generation and artifact persistence."""

import logging
import os
import shutil
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from universal_test_runner.models.framework import FrameworkKind
from universal_test_runner.models.result import ExecutionResult

log = logging.getLogger(__name__)

REPORT_FILENAME = "test-report.txt"
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S UTC"

BANNER = """\
╔═══════════════════════════════════════════════════════════════╗
║              UNIVERSAL TEST RUNNER - REPORT                   ║
╚═══════════════════════════════════════════════════════════════╝"""
SEPARATOR = "═" * 63


@dataclass(frozen=True, kw_only=True)
class Report:
    """Unified report for one framework run."""

    framework: FrameworkKind
    passed: bool
    timestamp: datetime
    body: str
    path: Path
    note: str | None = None

    @property
    def status(self) -> str:
        """Status line value derived from the exit code."""
        return "PASSED ✓" if self.passed else "FAILED ✗"

    def render(self) -> str:
        """Render the fixed report header followed by the captured log."""
        lines = [
            BANNER,
            "",
            f"Framework: {self.framework}",
            f"Status: {self.status}",
            f"Timestamp: {self.timestamp.strftime(TIMESTAMP_FORMAT)}",
        ]
        if self.note:
            lines.append(f"Note: {self.note}")
        lines += ["", SEPARATOR, "", ""]
        return "\n".join(lines) + self.body


def generate(
    result: ExecutionResult,
    scratch_dir: Path,
    output_dir: Path | None = None,
    now: datetime | None = None,
) -> Report:
    """Build the report for a run, write it to scratch and echo it.

    The report and the framework artifacts are additionally copied into
    ``output_dir`` when it is an existing, writable directory. Copy failures
    are logged and never change the outcome of the run.

    Args:
        result: Execution result to report on
        scratch_dir: Directory the report is always written to
        output_dir: Directory to persist the report and artifacts to, if any
        now: Report timestamp, defaults to the current UTC time

    Returns:
        The generated report.

    """
    log.info("Generating test report...")
    report = Report(
        framework=result.framework,
        passed=result.passed,
        timestamp=now or datetime.now(UTC),
        body=result.combined_log,
        path=scratch_dir / REPORT_FILENAME,
        note=_note_for(result),
    )

    scratch_dir.mkdir(parents=True, exist_ok=True)
    text = report.render()
    report.path.write_text(text, encoding="utf-8")
    print(text)

    if report.passed:
        log.info("%s tests passed!", result.framework)
    else:
        log.error("%s tests failed!", result.framework)

    persist_artifacts(report.path, result.artifacts, output_dir)
    return report


def persist_artifacts(
    report_path: Path, artifacts: Mapping[Path, str], output_dir: Path | None
) -> None:
    """Copy the text report and the framework artifacts into the output directory."""
    if output_dir is None or not output_dir.is_dir():
        log.info("No output directory mounted, reports not saved")
        return

    if not os.access(output_dir, os.W_OK):
        log.warning(
            "Output directory %s is not writable, reports not saved", output_dir
        )
        return

    files = {report_path: REPORT_FILENAME, **artifacts}
    for source, name in files.items():
        if not source.is_file():
            log.debug("Artifact %s was not produced, skipping", source)
            continue
        try:
            shutil.copyfile(source, output_dir / name)
        except OSError as e:
            log.warning("Could not write %s to %s: %s", name, output_dir, e)

    log.info("Reports saved to %s", output_dir)


def _note_for(result: ExecutionResult) -> str | None:
    if result.install_aborted:
        return "dependency installation failed, tests were not run"
    if result.timed_out:
        return "test command timed out and was stopped"
    return None
