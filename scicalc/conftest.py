import pytest

from scicalc.session import CalculatorSession


@pytest.fixture(autouse=True)
def clean_settings_env(monkeypatch):
    for name in ("ANGLE_MODE", "HISTORY_LIMIT", "LOG_LEVEL", "HISTORY_FILE"):
        monkeypatch.delenv(f"SCICALC_{name}", raising=False)


@pytest.fixture
def session():
    return CalculatorSession()


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item, call):
    outcome = yield
    report = outcome.get_result()
    if report.when == "call":
        print(f"TEST: {item.name} - {'PASSED' if report.passed else 'FAILED'}")
