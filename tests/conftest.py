from __future__ import annotations

from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import pytest

pytest_plugins = ["pytester"]

ELEMENT_COROUTINES = (
    "bounding_box",
    "check",
    "click",
    "dblclick",
    "evaluate",
    "evaluate_handle",
    "fill",
    "get_attribute",
    "get_property",
    "hover",
    "inner_text",
    "is_enabled",
    "press",
    "query_selector_all",
    "screenshot",
    "scroll_into_view_if_needed",
    "select_option",
    "tap",
    "type",
    "wait_for_selector",
)


def _element(name: str = "element") -> MagicMock:
    element = MagicMock(name=name)
    for method in ELEMENT_COROUTINES:
        setattr(element, method, AsyncMock(name=f"{name}.{method}"))
    # attached unless a test says otherwise
    element.evaluate.return_value = True
    return element


def _frame(name: str = "frame") -> MagicMock:
    frame = MagicMock(name=name)
    frame.wait_for_selector = AsyncMock(name=f"{name}.wait_for_selector")
    frame.query_selector = AsyncMock(name=f"{name}.query_selector", return_value=None)
    frame.query_selector_all = AsyncMock(name=f"{name}.query_selector_all", return_value=[])
    frame.evaluate = AsyncMock(name=f"{name}.evaluate")
    frame.evaluate_handle = AsyncMock(name=f"{name}.evaluate_handle")
    return frame


@pytest.fixture
def make_element() -> Callable[..., MagicMock]:
    return _element


@pytest.fixture
def make_frame() -> Callable[..., MagicMock]:
    return _frame


@pytest.fixture
def page() -> MagicMock:
    page = MagicMock(name="page")
    page.url = "https://example.com/start"
    page.main_frame = _frame("main_frame")
    for method in (
        "goto",
        "go_back",
        "go_forward",
        "reload",
        "title",
        "evaluate",
        "set_viewport_size",
        "screenshot",
    ):
        setattr(page, method, AsyncMock(name=f"page.{method}"))
    page.keyboard.press = AsyncMock(name="keyboard.press")
    page.keyboard.type = AsyncMock(name="keyboard.type")
    page.mouse.move = AsyncMock(name="mouse.move")
    page.mouse.down = AsyncMock(name="mouse.down")
    page.mouse.up = AsyncMock(name="mouse.up")
    page.context.cookies = AsyncMock(name="context.cookies", return_value=[])
    page.context.add_cookies = AsyncMock(name="context.add_cookies")
    page.context.clear_cookies = AsyncMock(name="context.clear_cookies")
    return page
