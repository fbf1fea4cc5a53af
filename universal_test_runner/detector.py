"""Detect the test framework used by a project directory."""

import fnmatch
import logging
import os
from collections.abc import Iterator, Sequence
from pathlib import Path

from universal_test_runner.models.framework import FrameworkKind

logger = logging.getLogger(__name__)

JEST_MANIFEST = "package.json"
JEST_DEPENDENCY = "jest"
JEST_TEST_PATTERNS = ("*.test.js", "*.test.ts")

PYTEST_CONFIG_FILES = ("pytest.ini", "setup.cfg", "pyproject.toml")
PYTEST_TEST_PATTERNS = ("test_*.py", "*_test.py")

GO_MODULE_MANIFEST = "go.mod"
GO_TEST_PATTERNS = ("*_test.go",)

SKIPPED_DIRECTORIES = frozenset({".git", "node_modules"})


class TargetDirectoryError(Exception):
    """Raised when the target directory does not exist."""


def resolve_target_dir(root_dir: Path) -> Path:
    """Return the absolute target directory.

    Raises:
        TargetDirectoryError: If the path is not an existing directory

    """
    if not root_dir.is_dir():
        raise TargetDirectoryError(f"Directory not found: {root_dir}")
    return root_dir.resolve()


def detect(root_dir: Path) -> FrameworkKind:
    """Detect which test framework applies to a directory.

    Markers are checked in a fixed priority order and the first match wins:
    Jest, then pytest, then go test. Missing or unreadable paths never raise,
    they simply do not match.

    Args:
        root_dir: Project directory to inspect

    Returns:
        The detected framework, or UNKNOWN when no marker is present.

    """
    logger.info("Detecting test framework in: %s", root_dir)

    if declares_jest(root_dir) or has_matching_file(root_dir, JEST_TEST_PATTERNS):
        return FrameworkKind.JEST

    if any((root_dir / name).is_file() for name in PYTEST_CONFIG_FILES):
        return FrameworkKind.PYTEST
    if has_matching_file(root_dir, PYTEST_TEST_PATTERNS):
        return FrameworkKind.PYTEST

    if (root_dir / GO_MODULE_MANIFEST).is_file():
        return FrameworkKind.GOTEST
    if has_matching_file(root_dir, GO_TEST_PATTERNS):
        return FrameworkKind.GOTEST

    return FrameworkKind.UNKNOWN


def declares_jest(root_dir: Path) -> bool:
    """Check if the package manifest mentions jest anywhere."""
    try:
        manifest = (root_dir / JEST_MANIFEST).read_text(
            encoding="utf-8", errors="replace"
        )
    except OSError:
        return False
    return JEST_DEPENDENCY in manifest


def has_matching_file(root_dir: Path, patterns: Sequence[str]) -> bool:
    """Check if any file below the directory matches one of the patterns."""
    return any(
        fnmatch.fnmatchcase(name, pattern)
        for name in iter_file_names(root_dir)
        for pattern in patterns
    )


def iter_file_names(root_dir: Path) -> Iterator[str]:
    """Yield the names of all files below a directory.

    Version control and dependency directories are not descended into.
    Unreadable directories are skipped.
    """
    for _, dirnames, filenames in os.walk(root_dir):
        dirnames[:] = [d for d in dirnames if d not in SKIPPED_DIRECTORIES]
        yield from filenames
