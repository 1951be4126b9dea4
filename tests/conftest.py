# Test configuration for pytest
#
# Note: Tests require the package to be installed.
# Run `pip install -e .[test]` from the project root before running tests.

import sys
import pytest


def pytest_configure(config):
    """Register custom markers for platform-specific tests."""
    config.addinivalue_line("markers", "unix: mark test to run only on Unix")
    config.addinivalue_line("markers", "windows: mark test to run only on Windows")


def pytest_collection_modifyitems(config, items):
    """Skip platform-specific tests on incompatible platforms."""
    is_windows = sys.platform.startswith('win')
    skip_unix = pytest.mark.skip(reason="Unix-only test")
    skip_windows = pytest.mark.skip(reason="Windows-only test")

    for item in items:
        if "unix" in item.keywords and is_windows:
            item.add_marker(skip_unix)
        if "windows" in item.keywords and not is_windows:
            item.add_marker(skip_windows)


class ExecCalled(Exception):
    """Raised by FakeExecve so control never falls through a successful exec."""

    def __init__(self, path, argv, env):
        self.path = path
        self.argv = list(argv)
        self.env = dict(env)
        super().__init__(path)


class FakeExecve:
    """Stand-in for os.execve that records the call instead of replacing the process."""

    def __init__(self):
        self.calls = []

    def __call__(self, path, argv, env):
        self.calls.append((path, list(argv), dict(env)))
        raise ExecCalled(path, argv, env)


@pytest.fixture
def fake_execve():
    return FakeExecve()


@pytest.fixture
def base_dir(tmp_path):
    """A MEGA base directory with an empty etc/ subdirectory."""
    base = tmp_path / "mega"
    (base / "etc").mkdir(parents=True)
    return base
