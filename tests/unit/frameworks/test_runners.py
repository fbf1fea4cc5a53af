"""Tests for the framework-specific runners."""

from pathlib import Path

import pytest

from universal_test_runner.frameworks import GoTestRunner, JestRunner, PytestRunner
from universal_test_runner.models.config import RunnerConfig
from universal_test_runner.testing.factories import RunnerConfigFactory


@pytest.fixture
def config() -> RunnerConfig:
    """Create a config with a fixed scratch directory."""
    return RunnerConfigFactory.build(scratch_dir=Path("/scratch"))


class TestJestRunner:
    """Tests for JestRunner."""

    def test_installs_when_manifest_exists(
        self, config: RunnerConfig, tmp_path: Path
    ) -> None:
        """Runs npm install when package.json exists."""
        (tmp_path / "package.json").write_text("{}")

        assert JestRunner(config=config).install_command(tmp_path) == (
            "npm",
            "install",
        )

    def test_no_install_without_manifest(
        self, config: RunnerConfig, tmp_path: Path
    ) -> None:
        """Skips installation when package.json is missing."""
        assert JestRunner(config=config).install_command(tmp_path) is None

    def test_requests_json_results_and_coverage(self, config: RunnerConfig) -> None:
        """Writes JSON results into scratch and enables coverage."""
        assert JestRunner(config=config).test_command() == (
            "npx",
            "jest",
            "--json",
            "--outputFile=/scratch/jest-results.json",
            "--coverage",
        )

    def test_artifacts(self, config: RunnerConfig) -> None:
        """Persists the JSON results file."""
        assert JestRunner(config=config).artifacts() == {
            Path("/scratch/jest-results.json"): "jest-results.json"
        }


class TestPytestRunner:
    """Tests for PytestRunner."""

    def test_installs_requirements(self, tmp_path: Path) -> None:
        """Installs requirements.txt with the configured interpreter."""
        config = RunnerConfigFactory.build(
            scratch_dir=Path("/scratch"), python_executable="/usr/bin/python3.12"
        )
        (tmp_path / "requirements.txt").write_text("requests\n")

        assert PytestRunner(config=config).install_command(tmp_path) == (
            "/usr/bin/python3.12",
            "-m",
            "pip",
            "install",
            "-r",
            "requirements.txt",
        )

    def test_no_install_without_requirements(
        self, config: RunnerConfig, tmp_path: Path
    ) -> None:
        """Skips installation when requirements.txt is missing."""
        (tmp_path / "pyproject.toml").write_text("")

        assert PytestRunner(config=config).install_command(tmp_path) is None

    def test_requests_html_report(self, config: RunnerConfig) -> None:
        """Writes a self-contained HTML report into scratch, verbosely."""
        assert PytestRunner(config=config).test_command() == (
            "python3",
            "-m",
            "pytest",
            "--html=/scratch/pytest-report.html",
            "--self-contained-html",
            "-v",
        )

    def test_artifacts(self, config: RunnerConfig) -> None:
        """Persists the HTML report."""
        assert PytestRunner(config=config).artifacts() == {
            Path("/scratch/pytest-report.html"): "pytest-report.html"
        }


class TestGoTestRunner:
    """Tests for GoTestRunner."""

    def test_downloads_modules(self, config: RunnerConfig, tmp_path: Path) -> None:
        """Downloads modules when go.mod exists."""
        (tmp_path / "go.mod").write_text("module example.com/demo\n")

        assert GoTestRunner(config=config).install_command(tmp_path) == (
            "go",
            "mod",
            "download",
        )

    def test_no_download_without_module(
        self, config: RunnerConfig, tmp_path: Path
    ) -> None:
        """Skips the download when go.mod is missing."""
        assert GoTestRunner(config=config).install_command(tmp_path) is None

    def test_runs_all_packages_with_json(self, config: RunnerConfig) -> None:
        """Runs verbose JSON output across all packages."""
        assert GoTestRunner(config=config).test_command() == (
            "go",
            "test",
            "-v",
            "-json",
            "./...",
        )

    def test_artifacts(self, config: RunnerConfig) -> None:
        """Persists the raw log under its results name."""
        assert GoTestRunner(config=config).artifacts() == {
            Path("/scratch/gotest-output.log"): "gotest-results.log"
        }
