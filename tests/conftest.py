"""Pytest configuration and fixtures for repoenforcer tests."""
from pathlib import Path

import pytest

from repoenforcer.rule.config import CONFIG_ENV_VAR


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep a developer's REPOENFORCER_CONFIG out of test runs."""
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)


def pytest_sessionfinish(session, exitstatus):
    """Check that coverage data was collected if --cov was requested.

    This prevents silent "no data collected" scenarios that produce 0% coverage
    without failing the test run.
    """
    cov_enabled = any("--cov" in str(arg) for arg in session.config.args)

    if not cov_enabled:
        return

    cwd = Path.cwd()
    coverage_files = list(cwd.glob(".coverage*"))

    if not coverage_files:
        pytest.exit(
            "Coverage was enabled but no data was collected. "
            "This suggests tests are not importing/executing package code. "
            "Check that tests import from 'repoenforcer' (the package) not 'src/repoenforcer' (filesystem path).",
            returncode=1
        )
