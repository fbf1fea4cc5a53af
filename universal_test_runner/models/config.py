"""Runtime configuration shared by dispatch and reporting."""

from pathlib import Path

from pydantic import Field

from universal_test_runner.models.base import Model


class RunnerConfig(Model):
    """Explicit configuration for a single test run."""

    scratch_dir: Path = Field(
        ..., description="Directory receiving logs, artifacts and the text report"
    )
    output_dir: Path | None = Field(
        default=None, description="Directory reports are persisted to, if any"
    )
    timeout: float | None = Field(
        default=None,
        gt=0,
        description="Seconds a single command may run (None means no limit)",
    )
    kill_grace_period: float = Field(
        default=5.0,
        ge=0,
        description="Seconds between SIGTERM and SIGKILL once a command times out",
    )
    fail_on_install_error: bool = Field(
        default=False,
        description="Skip the test step when dependency installation fails",
    )
    python_executable: str = Field(
        default="python3", description="Interpreter used to install and run pytest"
    )
