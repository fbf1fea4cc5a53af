"""Runner for Jest test suites."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from universal_test_runner.frameworks.base import FrameworkRunner
from universal_test_runner.models.framework import FrameworkKind

RESULTS_FILENAME = "jest-results.json"


@dataclass(frozen=True, kw_only=True)
class JestRunner(FrameworkRunner):
    """Runs Jest through npx with JSON results and coverage."""

    framework = FrameworkKind.JEST

    @property
    def results_path(self) -> Path:
        return self.config.scratch_dir / RESULTS_FILENAME

    def install_command(self, root_dir: Path) -> Sequence[str] | None:
        if not (root_dir / "package.json").is_file():
            return None
        return ("npm", "install")

    def test_command(self) -> Sequence[str]:
        return (
            "npx",
            "jest",
            "--json",
            f"--outputFile={self.results_path}",
            "--coverage",
        )

    def artifacts(self) -> Mapping[Path, str]:
        return {self.results_path: RESULTS_FILENAME}
