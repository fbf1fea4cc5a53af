"""Test framework runners."""

from universal_test_runner.frameworks.base import FrameworkRunner
from universal_test_runner.frameworks.golang import GoTestRunner
from universal_test_runner.frameworks.jest import JestRunner
from universal_test_runner.frameworks.python import PytestRunner

__all__ = ["FrameworkRunner", "GoTestRunner", "JestRunner", "PytestRunner"]
