"""Per-test browser session lifecycle."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright

from ..config import ControllerConfig
from ..controller.playwright_controller import PlaywrightController
from .display import VirtualDisplay
from .holder import SessionHolder

LOGGER = logging.getLogger(__name__)

ENGINES = ("chromium", "firefox", "webkit")
# Branded browsers Playwright drives through chromium channels.
CHANNELS = ("chrome", "chrome-beta", "msedge", "msedge-beta")


def resolve_browser(name: str, channel: Optional[str] = None) -> tuple[str, Optional[str]]:
    """Map a configured browser name onto a Playwright engine and channel."""

    normalized = name.lower()
    if normalized in ENGINES:
        return normalized, channel
    if normalized in CHANNELS:
        return "chromium", normalized
    raise ValueError(f"Unsupported browser: {name}")


def _to_timeout(timeout: Optional[float]) -> Optional[float]:
    if timeout is None:
        return None
    return timeout * 1000


class SessionLauncher:
    """Open one browser session and hand it to test code as a controller.

    The browser lives inside a producer task that publishes its page through a
    :class:`SessionHolder` and keeps the browser open until :meth:`stop`.
    """

    def __init__(self, config: Optional[ControllerConfig] = None) -> None:
        self._config = config or ControllerConfig()
        browser = self._config.browser
        self._display = VirtualDisplay(
            enabled=browser.virtual_display and not browser.headless,
            width=browser.viewport_width,
            height=browser.viewport_height,
        )
        self._task: Optional[asyncio.Task[None]] = None
        self._closing: Optional[asyncio.Event] = None
        self._controller: Optional[PlaywrightController] = None

    @property
    def controller(self) -> Optional[PlaywrightController]:
        return self._controller

    async def __aenter__(self) -> PlaywrightController:
        return await self.start()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.stop()

    async def start(self) -> PlaywrightController:
        if self._controller is not None:
            return self._controller
        self._display.start()
        holder: SessionHolder[Page] = SessionHolder()
        self._closing = asyncio.Event()
        self._task = asyncio.create_task(self._run_session(holder, self._closing))
        try:
            page = await holder.get(timeout=self._config.launch_timeout)
        except BaseException:
            await self._abort()
            raise
        self._controller = PlaywrightController(page)
        return self._controller

    async def stop(self) -> None:
        task = self._task
        self._task = None
        self._controller = None
        try:
            if task is not None and self._closing is not None:
                LOGGER.debug("Closing browser session")
                self._closing.set()
                await task
        finally:
            self._display.stop()

    async def _abort(self) -> None:
        task = self._task
        self._task = None
        if task is not None:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._display.stop()

    async def _run_session(self, holder: SessionHolder[Page], closing: asyncio.Event) -> None:
        try:
            async with async_playwright() as playwright:
                browser = await self._launch(playwright)
                try:
                    context = await browser.new_context(
                        viewport={
                            "width": self._config.browser.viewport_width,
                            "height": self._config.browser.viewport_height,
                        },
                        has_touch=self._config.browser.has_touch,
                    )
                    page = await context.new_page()
                    implicit_wait = _to_timeout(self._config.implicit_wait)
                    if implicit_wait is not None:
                        page.set_default_timeout(implicit_wait)
                    navigation_timeout = _to_timeout(self._config.navigation_timeout)
                    if navigation_timeout is not None:
                        page.set_default_navigation_timeout(navigation_timeout)
                    holder.capture(page)
                    await closing.wait()
                    await context.close()
                finally:
                    await browser.close()
        except Exception as exc:
            if holder.is_resolved:
                raise
            LOGGER.error("Failed to launch browser session: %s", exc)
            holder.fail(exc)

    async def _launch(self, playwright: Playwright) -> Browser:
        engine, channel = resolve_browser(
            self._config.browser.name, self._config.browser.channel
        )
        LOGGER.debug("Launching %s (channel=%s)", engine, channel)
        browser_type = getattr(playwright, engine)
        return await browser_type.launch(
            headless=self._config.browser.headless,
            channel=channel,
            slow_mo=self._config.browser.slow_mo,
        )
