"""Controller adapter backed by a Playwright page."""

from __future__ import annotations

import asyncio
import base64
import logging
from typing import Any, Awaitable, Optional, Union

from playwright.async_api import ElementHandle as PlaywrightElement
from playwright.async_api import Frame, Page

from ..models import Cookie, Keys, Rect
from .base import (
    ControllerError,
    FunctionalTestController,
    NoSuchCookieError,
    NoSuchElementError,
    NoSuchFrameError,
    StaleElementError,
)
from .handle import ElementHandle

LOGGER = logging.getLogger(__name__)

# Attributes reported as "true" when present, regardless of their value.
BOOLEAN_ATTRIBUTES = frozenset(
    {
        "allowfullscreen",
        "async",
        "autofocus",
        "autoplay",
        "checked",
        "controls",
        "default",
        "defer",
        "disabled",
        "formnovalidate",
        "hidden",
        "ismap",
        "loop",
        "multiple",
        "muted",
        "nomodule",
        "novalidate",
        "open",
        "readonly",
        "required",
        "reversed",
        "selected",
    }
)

_WINDOW_METRICS = (
    "() => ({x: window.screenX, y: window.screenY,"
    " width: window.innerWidth, height: window.innerHeight})"
)
_DOCUMENT_RECT = (
    "e => { const r = e.getBoundingClientRect();"
    " return {x: r.x + window.scrollX, y: r.y + window.scrollY,"
    " width: r.width, height: r.height}; }"
)


class PlaywrightController(FunctionalTestController):
    """Facade implementation that drives one Playwright page.

    The page is captured once and every command runs against it. Element
    lookups and scripts use the current frame, which starts at the page's
    main frame and changes with :meth:`switch_to_frame`.
    """

    def __init__(self, page: Page) -> None:
        self._page = page
        self._frames: list[Frame] = []

    @property
    def _scope(self) -> Frame:
        if self._frames:
            return self._frames[-1]
        return self._page.main_frame

    async def navigate_to(self, url: str) -> None:
        LOGGER.debug("Navigating to %s", url)
        self._frames.clear()
        await self._page.goto(url)

    async def get_current_url(self) -> str:
        return self._page.url

    async def back(self) -> None:
        self._frames.clear()
        await self._page.go_back()

    async def forward(self) -> None:
        self._frames.clear()
        await self._page.go_forward()

    async def refresh(self) -> None:
        self._frames.clear()
        await self._page.reload()

    async def get_title(self) -> str:
        return await self._page.title()

    async def switch_to_frame(self, id: str) -> None:
        value = _css_string(id)
        selector = ", ".join(
            f"{tag}[{attribute}={value}]"
            for tag in ("iframe", "frame")
            for attribute in ("id", "name")
        )
        element = await self._scope.query_selector(selector)
        frame = await element.content_frame() if element is not None else None
        if frame is None:
            raise NoSuchFrameError(f"No frame with id or name {id!r}")
        LOGGER.debug("Switched to frame %s", id)
        self._frames.append(frame)

    async def switch_to_parent_frame(self) -> None:
        if self._frames:
            self._frames.pop()

    async def get_window_rect(self) -> Rect:
        return Rect.from_box(await self._page.evaluate(_WINDOW_METRICS))

    async def set_window_rect(self, rect: Rect) -> None:
        # Playwright controls the viewport, not the OS window position.
        LOGGER.debug("Resizing viewport to %sx%s", rect.width, rect.height)
        await self._page.set_viewport_size({"width": rect.width, "height": rect.height})

    async def maximize_window(self) -> None:
        size = await self._page.evaluate(
            "() => ({width: screen.availWidth, height: screen.availHeight})"
        )
        LOGGER.debug("Resizing viewport to %sx%s", size["width"], size["height"])
        await self._page.set_viewport_size(size)

    async def fullscreen_window(self) -> None:
        size = await self._page.evaluate("() => ({width: screen.width, height: screen.height})")
        LOGGER.debug("Resizing viewport to %sx%s", size["width"], size["height"])
        await self._page.set_viewport_size(size)

    async def get_active_element(self) -> ElementHandle[PlaywrightElement]:
        js_handle = await self._scope.evaluate_handle("() => document.activeElement")
        element = js_handle.as_element()
        if element is None:
            raise NoSuchElementError("The document has no active element")
        return ElementHandle(element)

    async def find_element(self, selector: str) -> ElementHandle[PlaywrightElement]:
        LOGGER.debug("Finding element %s", selector)
        element = await self._scope.wait_for_selector(selector, state="attached")
        return ElementHandle(element)

    async def find_elements(self, selector: str) -> list[ElementHandle[PlaywrightElement]]:
        elements = await self._scope.query_selector_all(selector)
        return [ElementHandle(element) for element in elements]

    async def find_element_from_element(
        self, handle: ElementHandle[PlaywrightElement], selector: str
    ) -> ElementHandle[PlaywrightElement]:
        element = await handle.unwrap().wait_for_selector(selector, state="attached")
        return ElementHandle(element)

    async def find_elements_from_element(
        self, handle: ElementHandle[PlaywrightElement], selector: str
    ) -> list[ElementHandle[PlaywrightElement]]:
        elements = await handle.unwrap().query_selector_all(selector)
        return [ElementHandle(element) for element in elements]

    async def is_element_selected(self, handle: ElementHandle[PlaywrightElement]) -> bool:
        element = await _attached(handle)
        return bool(await element.evaluate("e => !!(e.checked || e.selected)"))

    async def get_element_attribute(
        self, handle: ElementHandle[PlaywrightElement], attribute: str
    ) -> Optional[str]:
        element = await _attached(handle)
        value = await element.get_attribute(attribute)
        if value is not None and attribute.lower() in BOOLEAN_ATTRIBUTES:
            return "true"
        return value

    async def get_element_property(
        self, handle: ElementHandle[PlaywrightElement], property: str
    ) -> Any:
        element = await _attached(handle)
        js_handle = await element.get_property(property)
        return await js_handle.json_value()

    async def get_element_css_value(
        self, handle: ElementHandle[PlaywrightElement], style_property: str
    ) -> str:
        element = await _attached(handle)
        return await element.evaluate(
            "(e, name) => getComputedStyle(e).getPropertyValue(name)",
            style_property,
        )

    async def get_element_text(self, handle: ElementHandle[PlaywrightElement]) -> str:
        element = await _attached(handle)
        return await element.inner_text()

    async def get_element_tag_name(self, handle: ElementHandle[PlaywrightElement]) -> str:
        element = await _attached(handle)
        return await element.evaluate("e => e.tagName.toLowerCase()")

    async def get_element_rect(self, handle: ElementHandle[PlaywrightElement]) -> Rect:
        element = await _attached(handle)
        return Rect.from_box(await element.evaluate(_DOCUMENT_RECT))

    async def is_element_enabled(self, handle: ElementHandle[PlaywrightElement]) -> bool:
        element = await _attached(handle)
        return await element.is_enabled()

    async def execute_script(self, script: str, arg: Any = None) -> Any:
        return await self._scope.evaluate(script, arg)

    async def execute_async_script(self, script: str, arg: Any = None) -> Awaitable[Any]:
        wrapped = (
            "(arg) => new Promise((done, fail) => {"
            f" try {{ Promise.resolve(({script})(arg, done)).catch(fail); }}"
            " catch (error) { fail(error); }"
            " })"
        )
        return asyncio.create_task(self._scope.evaluate(wrapped, arg))

    async def get_all_cookies(self) -> list[Cookie]:
        return [Cookie.from_engine(cookie) for cookie in await self._visible_cookies()]

    async def get_named_cookie(self, name: str) -> Cookie:
        for cookie in await self.get_all_cookies():
            if cookie.name == name:
                return cookie
        raise NoSuchCookieError(f"No cookie named {name!r}")

    async def add_cookie(self, name: str, value: str) -> None:
        await self._page.context.add_cookies(
            [{"name": name, "value": value, "url": self._page.url}]
        )

    async def delete_cookie(self, name: str) -> None:
        # Scoped to the cookies get_all_cookies reports.
        for cookie in await self._visible_cookies():
            if cookie["name"] == name:
                await self._page.context.clear_cookies(
                    name=name, domain=cookie["domain"], path=cookie["path"]
                )

    async def delete_all_cookies(self) -> None:
        await self._page.context.clear_cookies()

    async def take_screenshot(self) -> str:
        return _encode(await self._page.screenshot())

    async def take_element_screenshot(self, handle: ElementHandle[PlaywrightElement]) -> str:
        return _encode(await handle.unwrap().screenshot())

    async def click(self, handle: ElementHandle[PlaywrightElement]) -> None:
        await handle.unwrap().click()

    async def double_click(self, handle: ElementHandle[PlaywrightElement]) -> None:
        await handle.unwrap().dblclick()

    async def right_click(self, handle: ElementHandle[PlaywrightElement]) -> None:
        await handle.unwrap().click(button="right")

    async def middle_click(self, handle: ElementHandle[PlaywrightElement]) -> None:
        await handle.unwrap().click(button="middle")

    async def hover(self, handle: ElementHandle[PlaywrightElement]) -> None:
        await handle.unwrap().hover()

    async def drag(
        self,
        handle: ElementHandle[PlaywrightElement],
        target: Optional[ElementHandle[PlaywrightElement]] = None,
        *,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> None:
        start_x, start_y = await _center(handle.unwrap())
        if target is not None:
            end_x, end_y = await _center(target.unwrap())
        else:
            end_x, end_y = start_x + offset_x, start_y + offset_y
        await self._pointer_gesture(start_x, start_y, end_x, end_y)

    async def select(self, handle: ElementHandle[PlaywrightElement]) -> None:
        element = handle.unwrap()
        tag = await element.evaluate("e => e.tagName.toLowerCase()")
        if tag != "option":
            await element.check()
            return
        parent = (await element.evaluate_handle("e => e.closest('select')")).as_element()
        if parent is None:
            raise NoSuchElementError("Option element is not inside a select")
        await parent.select_option(element=element)

    async def type(
        self, handle: Optional[ElementHandle[PlaywrightElement]], keys: Union[str, Keys]
    ) -> None:
        if isinstance(keys, Keys):
            if handle is None:
                await self._page.keyboard.press(keys.value)
            else:
                await handle.unwrap().press(keys.value)
            return
        if handle is None:
            await self._page.keyboard.type(keys)
        else:
            await handle.unwrap().type(keys)

    async def clear(self, handle: ElementHandle[PlaywrightElement]) -> None:
        await handle.unwrap().fill("")

    async def touch(self, handle: ElementHandle[PlaywrightElement]) -> None:
        await handle.unwrap().tap()

    async def swipe(
        self, handle: ElementHandle[PlaywrightElement], *, delta_x: int = 0, delta_y: int = 0
    ) -> None:
        start_x, start_y = await _center(handle.unwrap())
        await self._pointer_gesture(start_x, start_y, start_x + delta_x, start_y + delta_y)

    async def _visible_cookies(self) -> list[Any]:
        url = self._page.url
        urls = [url] if url.startswith(("http://", "https://")) else None
        return await self._page.context.cookies(urls)

    async def _pointer_gesture(
        self, start_x: float, start_y: float, end_x: float, end_y: float
    ) -> None:
        mouse = self._page.mouse
        await mouse.move(start_x, start_y)
        await mouse.down()
        await mouse.move(end_x, end_y, steps=10)
        await mouse.up()


def _css_string(value: str) -> str:
    """Quote ``value`` as a CSS string for use in an attribute selector."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    # Newlines cannot appear raw inside a CSS string.
    escaped = escaped.replace("\n", "\\a ").replace("\r", "\\d ")
    return f'"{escaped}"'


async def _attached(handle: ElementHandle[PlaywrightElement]) -> PlaywrightElement:
    element = handle.unwrap()
    if not await element.evaluate("e => e.isConnected"):
        raise StaleElementError("Element is no longer attached to the document")
    return element


async def _center(element: PlaywrightElement) -> tuple[float, float]:
    await element.scroll_into_view_if_needed()
    box = await element.bounding_box()
    if box is None:
        raise ControllerError("Element is not visible")
    return box["x"] + box["width"] / 2, box["y"] + box["height"] / 2


def _encode(image: bytes) -> str:
    return base64.b64encode(image).decode("ascii")
