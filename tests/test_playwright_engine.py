"""Adapter commands run against a real Chromium page loaded with local HTML."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError
from playwright.async_api import async_playwright

from functional_test_controller.controller.base import StaleElementError
from functional_test_controller.controller.playwright_controller import PlaywrightController
from functional_test_controller.models import Keys, Rect


@pytest_asyncio.fixture
async def browser_page() -> AsyncIterator:
    async with async_playwright() as playwright:
        try:
            browser = await playwright.chromium.launch()
        except PlaywrightError as exc:
            pytest.skip(f"Chromium is not installed: {exc.message}")
        try:
            page = await browser.new_page()
            page.set_default_timeout(1000)
            yield page
        finally:
            await browser.close()


@pytest.fixture
def controller(browser_page) -> PlaywrightController:
    return PlaywrightController(browser_page)


@pytest.mark.asyncio
async def test_found_element_is_the_one_clicked(browser_page, controller):
    await browser_page.set_content(
        "<button id='go' onclick=\"this.textContent = 'clicked'\">go</button>"
    )

    handle = await controller.find_element("#go")
    before = await controller.get_element_text(handle)
    await controller.click(handle)

    assert before == "go"
    assert await controller.get_element_text(handle) == "clicked"


@pytest.mark.asyncio
async def test_missing_selector_times_out(browser_page, controller):
    await browser_page.set_content("<p>nothing here</p>")

    with pytest.raises(PlaywrightTimeoutError):
        await controller.find_element("#missing")
    assert await controller.find_elements("#missing") == []


@pytest.mark.asyncio
async def test_typing_with_and_without_a_handle(browser_page, controller):
    await browser_page.set_content("<input id='q'>")
    handle = await controller.find_element("#q")
    await controller.click(handle)

    await controller.type(None, "abc")
    await controller.type(handle, "def")
    await controller.type(None, Keys.BACKSPACE)

    assert await controller.get_element_property(handle, "value") == "abcde"
    active = await controller.get_active_element()
    assert await controller.get_element_attribute(active, "id") == "q"


@pytest.mark.asyncio
async def test_title_follows_each_navigation(controller):
    await controller.navigate_to("data:text/html,<title>First</title>")
    first = await controller.get_title()
    await controller.navigate_to("data:text/html,<title>Second</title>")

    assert first == "First"
    assert await controller.get_title() == "Second"
    await controller.back()
    assert await controller.get_title() == "First"


@pytest.mark.asyncio
async def test_async_script_resolves_through_done(browser_page, controller):
    await browser_page.set_content("<p>ready</p>")

    pending = await controller.execute_async_script(
        "(arg, done) => setTimeout(() => done(arg * 2), 10)", 21
    )

    assert await asyncio.wait_for(pending, 5) == 42


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "script",
    [
        "(arg, done) => { throw new Error('sync boom'); }",
        "async (arg, done) => { throw new Error('async boom'); }",
        "(arg, done) => Promise.reject(new Error('rejected boom'))",
    ],
)
async def test_failing_async_script_raises(browser_page, controller, script):
    await browser_page.set_content("<p>ready</p>")

    pending = await controller.execute_async_script(script)

    with pytest.raises(PlaywrightError, match="boom"):
        await asyncio.wait_for(pending, 5)


@pytest.mark.asyncio
async def test_switch_into_frame_by_id(browser_page, controller):
    await browser_page.set_content(
        "<p id='where'>outside</p>"
        "<iframe id='café' srcdoc=\"<p id='where'>inside</p>\"></iframe>"
    )

    await controller.switch_to_frame("café")
    inner = await controller.get_element_text(await controller.find_element("#where"))
    await controller.switch_to_parent_frame()
    outer = await controller.get_element_text(await controller.find_element("#where"))

    assert inner == "inside"
    assert outer == "outside"


@pytest.mark.asyncio
async def test_removed_element_is_stale(browser_page, controller):
    await browser_page.set_content("<p id='gone'>soon removed</p>")
    handle = await controller.find_element("#gone")

    await controller.execute_script("() => document.querySelector('#gone').remove()")

    with pytest.raises(StaleElementError):
        await controller.get_element_text(handle)


@pytest.mark.asyncio
async def test_element_rect_includes_scroll_offset(browser_page, controller):
    await browser_page.set_content(
        "<div style='height: 3000px'></div>"
        "<div id='box' style='position: absolute; left: 10px; top: 2000px;"
        " width: 30px; height: 40px'></div>"
    )
    handle = await controller.find_element("#box")

    await controller.execute_script("() => window.scrollTo(0, 1500)")

    assert await controller.get_element_rect(handle) == Rect(x=10, y=2000, width=30, height=40)
    window = await controller.get_window_rect()
    assert (window.width, window.height) == (1280, 720)


@pytest.mark.asyncio
async def test_select_option_and_checkbox(browser_page, controller):
    await browser_page.set_content(
        "<select id='size'><option value='s'>S</option><option id='large' value='l'>L</option>"
        "</select><input type='checkbox' id='agree'>"
    )
    option = await controller.find_element("#large")
    checkbox = await controller.find_element("#agree")

    await controller.select(option)
    await controller.select(checkbox)

    select = await controller.find_element("#size")
    assert await controller.get_element_property(select, "value") == "l"
    assert await controller.is_element_selected(option) is True
    assert await controller.is_element_selected(checkbox) is True
    assert await controller.get_element_attribute(checkbox, "type") == "checkbox"
