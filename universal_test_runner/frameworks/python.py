"""Runner for pytest test suites."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from universal_test_runner.frameworks.base import FrameworkRunner
from universal_test_runner.models.framework import FrameworkKind

REPORT_FILENAME = "pytest-report.html"


@dataclass(frozen=True, kw_only=True)
class PytestRunner(FrameworkRunner):
    """Runs pytest verbosely with a self-contained HTML report.

    The HTML report requires the pytest-html plugin in the project's
    environment.
    """

    framework = FrameworkKind.PYTEST

    @property
    def report_path(self) -> Path:
        return self.config.scratch_dir / REPORT_FILENAME

    def install_command(self, root_dir: Path) -> Sequence[str] | None:
        if not (root_dir / "requirements.txt").is_file():
            return None
        return (
            self.config.python_executable,
            "-m",
            "pip",
            "install",
            "-r",
            "requirements.txt",
        )

    def test_command(self) -> Sequence[str]:
        return (
            self.config.python_executable,
            "-m",
            "pytest",
            f"--html={self.report_path}",
            "--self-contained-html",
            "-v",
        )

    def artifacts(self) -> Mapping[Path, str]:
        return {self.report_path: REPORT_FILENAME}
