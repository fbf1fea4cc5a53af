"""Supported test frameworks."""

from enum import StrEnum


class FrameworkKind(StrEnum):
    """Test framework identified for a project.

    Values double as CLI identifiers and as the names shown in reports.
    """

    JEST = "jest"
    PYTEST = "pytest"
    GOTEST = "gotest"
    UNKNOWN = "unknown"


SUPPORTED_FRAMEWORKS = (FrameworkKind.JEST, FrameworkKind.PYTEST, FrameworkKind.GOTEST)

DISPLAY_NAMES = {
    FrameworkKind.JEST: "Jest (JavaScript/TypeScript)",
    FrameworkKind.PYTEST: "PyTest (Python)",
    FrameworkKind.GOTEST: "Go test (Go)",
}
