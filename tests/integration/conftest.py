"""Fixtures for integration tests."""

import stat
from pathlib import Path
from typing import Protocol

import pytest


class CreateExecutableFn(Protocol):
    """Protocol for executable creation function."""

    def __call__(self, name: str, body: str) -> Path:
        """Create an executable shell script and return its path."""


@pytest.fixture
def bin_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Create a directory placed first on PATH."""
    path = tmp_path / "bin"
    path.mkdir()
    monkeypatch.setenv("PATH", f"{path}:/usr/bin:/bin")
    return path


@pytest.fixture
def create_executable(bin_dir: Path) -> CreateExecutableFn:
    """Return a function creating fake toolchain executables on PATH."""

    def _create(name: str, body: str) -> Path:
        path = bin_dir / name
        path.write_text(f"#!/bin/sh\n{body}\n")
        path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _create


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """Create an empty project directory."""
    path = tmp_path / "project"
    path.mkdir()
    return path
