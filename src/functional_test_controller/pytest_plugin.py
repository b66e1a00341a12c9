"""Pytest integration: a fresh controller per test and screenshots on failure."""

from __future__ import annotations

from pathlib import Path
from typing import AsyncIterator

import pytest
import pytest_asyncio

from .config import ControllerConfig, load_config
from .controller.playwright_controller import PlaywrightController
from .factory import build_launcher
from .lifecycle.reports import save_failure_screenshot


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("functional-test-controller")
    group.addoption(
        "--controller-browser",
        default=None,
        help="Browser to drive: chromium, firefox, webkit, chrome or msedge.",
    )
    group.addoption(
        "--controller-headed",
        action="store_true",
        default=False,
        help="Show the browser window while tests run.",
    )
    group.addoption(
        "--controller-config",
        default=None,
        help="Path to a YAML configuration file.",
    )
    group.addoption(
        "--run-e2e",
        action="store_true",
        default=False,
        help="Run tests marked e2e, which need a browser and network access.",
    )


def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers", "e2e: drives a real browser against live sites (needs --run-e2e)"
    )


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    if config.getoption("--run-e2e"):
        return
    skip_e2e = pytest.mark.skip(reason="end-to-end test; pass --run-e2e to run")
    for item in items:
        if "e2e" in item.keywords:
            item.add_marker(skip_e2e)


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_makereport(item: pytest.Item, call: pytest.CallInfo[None]):
    outcome = yield
    report = outcome.get_result()
    setattr(item, f"rep_{report.when}", report)


def call_failed(item: pytest.Item) -> bool:
    """Return whether the test body of ``item`` failed."""

    report = getattr(item, "rep_call", None)
    return bool(report is not None and report.failed)


@pytest.fixture(scope="session")
def controller_config(pytestconfig: pytest.Config) -> ControllerConfig:
    path = pytestconfig.getoption("--controller-config")
    headed = pytestconfig.getoption("--controller-headed")
    return load_config(
        Path(path) if path else None,
        browser_name=pytestconfig.getoption("--controller-browser"),
        headless=False if headed else None,
    )


@pytest_asyncio.fixture
async def controller(
    request: pytest.FixtureRequest, controller_config: ControllerConfig
) -> AsyncIterator[PlaywrightController]:
    launcher = build_launcher(controller_config)
    session = await launcher.start()
    try:
        yield session
    finally:
        screenshots = controller_config.screenshots
        if screenshots.take_on_fails and call_failed(request.node):
            await save_failure_screenshot(session, screenshots.path, request.node.nodeid)
        await launcher.stop()
