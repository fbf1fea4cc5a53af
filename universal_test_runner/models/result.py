"""Models for command and test execution results."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from universal_test_runner.models.framework import FrameworkKind


@dataclass(frozen=True, kw_only=True)
class CommandResult:
    """Outcome of a single external process invocation."""

    argv: Sequence[str]
    exit_code: int
    output: str
    timed_out: bool = False

    @property
    def succeeded(self) -> bool:
        """Whether the process exited with status 0."""
        return self.exit_code == 0


@dataclass(frozen=True, kw_only=True)
class ExecutionResult:
    """Result of running one framework's command sequence.

    Contains only the execution outcome of the test step, plus the dependency
    step when one ran. ``artifacts`` maps files in the scratch directory to the
    name they get when persisted to an output directory.
    """

    __test__ = False

    framework: FrameworkKind
    exit_code: int
    combined_log: str
    install: CommandResult | None = None
    artifacts: Mapping[Path, str] = field(default_factory=dict)
    timed_out: bool = False
    install_aborted: bool = False

    @property
    def passed(self) -> bool:
        """Whether the test command exited with status 0."""
        return self.exit_code == 0
