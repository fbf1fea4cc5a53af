"""Runner for go test suites."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

from universal_test_runner.frameworks.base import FrameworkRunner
from universal_test_runner.models.framework import FrameworkKind

RESULTS_FILENAME = "gotest-results.log"


@dataclass(frozen=True, kw_only=True)
class GoTestRunner(FrameworkRunner):
    """Runs go test across all packages with JSON event output."""

    framework = FrameworkKind.GOTEST

    def install_command(self, root_dir: Path) -> Sequence[str] | None:
        if not (root_dir / "go.mod").is_file():
            return None
        return ("go", "mod", "download")

    def test_command(self) -> Sequence[str]:
        return ("go", "test", "-v", "-json", "./...")

    def artifacts(self) -> Mapping[Path, str]:
        # The raw JSON event log is the go artifact.
        return {self.log_path: RESULTS_FILENAME}
