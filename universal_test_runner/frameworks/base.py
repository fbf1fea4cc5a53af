"""Abstract base class for test framework runners."""

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar

from universal_test_runner.commands import OutputSink, run_command
from universal_test_runner.models.config import RunnerConfig
from universal_test_runner.models.framework import FrameworkKind
from universal_test_runner.models.result import CommandResult, ExecutionResult

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class FrameworkRunner(ABC):
    """Abstract base for framework runners.

    A runner declares how to install the project's dependencies and how to
    invoke its tests. The base class runs the two steps in sequence and keeps
    the combined log of the test step in the scratch directory.
    """

    framework: ClassVar[FrameworkKind]

    config: RunnerConfig

    @abstractmethod
    def install_command(self, root_dir: Path) -> Sequence[str] | None:
        """Return the dependency installation command.

        Args:
            root_dir: Project directory the tests run in

        Returns:
            The command to run, or None when the project declares nothing
            to install

        """

    @abstractmethod
    def test_command(self) -> Sequence[str]:
        """Return the command that runs the test suite."""

    def artifacts(self) -> Mapping[Path, str]:
        """Return framework artifacts in scratch mapped to their persisted name."""
        return {}

    @property
    def log_path(self) -> Path:
        """Scratch file receiving the combined output of the test step."""
        return self.config.scratch_dir / f"{self.framework}-output.log"

    async def run(
        self, root_dir: Path, sink: OutputSink | None = None
    ) -> ExecutionResult:
        """Install dependencies, then run the test suite.

        Args:
            root_dir: Project directory the tests run in
            sink: Receives command output as it is produced

        Returns:
            Execution result of the test step. When the install step fails and
            ``fail_on_install_error`` is set, the install result instead.

        """
        self.config.scratch_dir.mkdir(parents=True, exist_ok=True)

        install = None
        if (install_argv := self.install_command(root_dir)) is not None:
            log.info("Installing %s dependencies...", self.framework)
            install = await self._execute(install_argv, root_dir, sink)

            if not install.succeeded:
                if self.config.fail_on_install_error:
                    log.error(
                        "Dependency installation failed with exit code %d, "
                        "not running tests",
                        install.exit_code,
                    )
                    return ExecutionResult(
                        framework=self.framework,
                        exit_code=install.exit_code,
                        combined_log=install.output,
                        install=install,
                        timed_out=install.timed_out,
                        install_aborted=True,
                    )
                log.warning(
                    "Dependency installation failed with exit code %d, "
                    "running tests anyway",
                    install.exit_code,
                )

        for artifact in self.artifacts():
            artifact.unlink(missing_ok=True)

        log.info("Running %s tests...", self.framework)
        test = await self._execute(self.test_command(), root_dir, sink)
        self.log_path.write_text(test.output, encoding="utf-8")

        return ExecutionResult(
            framework=self.framework,
            exit_code=test.exit_code,
            combined_log=test.output,
            install=install,
            artifacts=self.artifacts(),
            timed_out=test.timed_out,
        )

    async def _execute(
        self, argv: Sequence[str], root_dir: Path, sink: OutputSink | None
    ) -> CommandResult:
        return await run_command(
            argv,
            cwd=root_dir,
            timeout=self.config.timeout,
            kill_grace_period=self.config.kill_grace_period,
            sink=sink,
        )
