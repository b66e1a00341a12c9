"""Engine-agnostic browser automation facade.

Commands follow the WebDriver model (https://www.w3.org/TR/webdriver1/) so
test code can stay unchanged when the automation engine underneath changes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Awaitable, Optional, Union

from ..models import Cookie, Keys, Rect
from .handle import ElementHandle


class ControllerError(RuntimeError):
    """Raised by a controller for failures the engine does not report itself."""


class NoSuchFrameError(ControllerError):
    """Raised when switching to a frame that does not exist."""


class NoSuchElementError(ControllerError):
    """Raised when a command needs an element and there is none."""


class NoSuchCookieError(ControllerError):
    """Raised when a named cookie is not set for the current document."""


class StaleElementError(ControllerError):
    """Raised when a handle's element is no longer attached to the document."""


class FunctionalTestController(ABC):
    """Normalized command vocabulary every engine adapter implements."""

    # Navigation

    @abstractmethod
    async def navigate_to(self, url: str) -> None:
        """Navigate the current top-level browsing context to ``url``."""

    @abstractmethod
    async def get_current_url(self) -> str:
        """Return the URL of the current page."""

    @abstractmethod
    async def back(self) -> None:
        """Traverse one step backward in the session history."""

    @abstractmethod
    async def forward(self) -> None:
        """Traverse one step forward in the session history."""

    @abstractmethod
    async def refresh(self) -> None:
        """Reload the current page."""

    @abstractmethod
    async def get_title(self) -> str:
        """Return the current document title."""

    # Frames

    @abstractmethod
    async def switch_to_frame(self, id: str) -> None:
        """Make a child frame of the current context the target of later commands.

        ``id`` matches the frame element's ``id`` or ``name`` attribute.
        """

    @abstractmethod
    async def switch_to_parent_frame(self) -> None:
        """Make the parent of the current context the target of later commands."""

    # Window geometry

    @abstractmethod
    async def get_window_rect(self) -> Rect:
        """Return the size and position of the browser window."""

    @abstractmethod
    async def set_window_rect(self, rect: Rect) -> None:
        """Resize and reposition the browser window."""

    @abstractmethod
    async def maximize_window(self) -> None:
        """Grow the window to the maximum available size without going full-screen."""

    @abstractmethod
    async def fullscreen_window(self) -> None:
        """Size the window to cover the whole screen."""

    # Element lookup

    @abstractmethod
    async def get_active_element(self) -> ElementHandle[Any]:
        """Return the focused element of the current context's document."""

    @abstractmethod
    async def find_element(self, selector: str) -> ElementHandle[Any]:
        """Return the first element matching ``selector``.

        Fails when nothing matches within the engine's implicit wait.
        """

    @abstractmethod
    async def find_elements(self, selector: str) -> list[ElementHandle[Any]]:
        """Return all elements matching ``selector``, possibly none."""

    @abstractmethod
    async def find_element_from_element(
        self, handle: ElementHandle[Any], selector: str
    ) -> ElementHandle[Any]:
        """Return the first descendant of ``handle`` matching ``selector``."""

    @abstractmethod
    async def find_elements_from_element(
        self, handle: ElementHandle[Any], selector: str
    ) -> list[ElementHandle[Any]]:
        """Return all descendants of ``handle`` matching ``selector``."""

    # Element state

    @abstractmethod
    async def is_element_selected(self, handle: ElementHandle[Any]) -> bool:
        """Return whether a checkbox, radio button or option is selected."""

    @abstractmethod
    async def get_element_attribute(
        self, handle: ElementHandle[Any], attribute: str
    ) -> Optional[str]:
        """Return an attribute value. Boolean attributes that are set report ``"true"``."""

    @abstractmethod
    async def get_element_property(self, handle: ElementHandle[Any], property: str) -> Any:
        """Return a DOM property value."""

    @abstractmethod
    async def get_element_css_value(self, handle: ElementHandle[Any], style_property: str) -> str:
        """Return the computed value of a CSS property."""

    @abstractmethod
    async def get_element_text(self, handle: ElementHandle[Any]) -> str:
        """Return the element's text as rendered."""

    @abstractmethod
    async def get_element_tag_name(self, handle: ElementHandle[Any]) -> str:
        """Return the element's lower-cased tag name."""

    @abstractmethod
    async def get_element_rect(self, handle: ElementHandle[Any]) -> Rect:
        """Return the element's position in the document and its size."""

    @abstractmethod
    async def is_element_enabled(self, handle: ElementHandle[Any]) -> bool:
        """Return ``False`` for disabled form controls."""

    # Scripts

    @abstractmethod
    async def execute_script(self, script: str, arg: Any = None) -> Any:
        """Evaluate a JavaScript function in the current context and return its result."""

    @abstractmethod
    async def execute_async_script(self, script: str, arg: Any = None) -> Awaitable[Any]:
        """Start a JavaScript function and return a pending result.

        The function receives ``(arg, done)`` and finishes by calling
        ``done(value)``. Await the returned object to get ``value``.
        """

    # Cookies

    @abstractmethod
    async def get_all_cookies(self) -> list[Cookie]:
        """Return every cookie visible to the current document."""

    @abstractmethod
    async def get_named_cookie(self, name: str) -> Cookie:
        """Return the cookie called ``name``."""

    @abstractmethod
    async def add_cookie(self, name: str, value: str) -> None:
        """Set a cookie for the current document."""

    @abstractmethod
    async def delete_cookie(self, name: str) -> None:
        """Delete the cookie called ``name``."""

    @abstractmethod
    async def delete_all_cookies(self) -> None:
        """Delete every cookie in the session."""

    # Screenshots

    @abstractmethod
    async def take_screenshot(self) -> str:
        """Return a base64-encoded PNG of the viewport."""

    @abstractmethod
    async def take_element_screenshot(self, handle: ElementHandle[Any]) -> str:
        """Return a base64-encoded PNG of the element's bounding box."""

    # Interaction

    @abstractmethod
    async def click(self, handle: ElementHandle[Any]) -> None:
        """Click the element's center point."""

    @abstractmethod
    async def double_click(self, handle: ElementHandle[Any]) -> None:
        """Double-click the element's center point."""

    @abstractmethod
    async def right_click(self, handle: ElementHandle[Any]) -> None:
        """Right-click the element's center point."""

    @abstractmethod
    async def middle_click(self, handle: ElementHandle[Any]) -> None:
        """Middle-click the element's center point."""

    @abstractmethod
    async def hover(self, handle: ElementHandle[Any]) -> None:
        """Move the pointer over the element's center point."""

    @abstractmethod
    async def drag(
        self,
        handle: ElementHandle[Any],
        target: Optional[ElementHandle[Any]] = None,
        *,
        offset_x: int = 0,
        offset_y: int = 0,
    ) -> None:
        """Drag the element onto ``target``, or by the given offset when there is none."""

    @abstractmethod
    async def select(self, handle: ElementHandle[Any]) -> None:
        """Select a checkbox, radio button or option element."""

    @abstractmethod
    async def type(self, handle: Optional[ElementHandle[Any]], keys: Union[str, Keys]) -> None:
        """Send keys to the element, or to the focused element when ``handle`` is ``None``.

        A :class:`Keys` member is pressed as a single key. A plain string is
        typed as text.
        """

    @abstractmethod
    async def clear(self, handle: ElementHandle[Any]) -> None:
        """Clear the value of an editable element."""

    @abstractmethod
    async def touch(self, handle: ElementHandle[Any]) -> None:
        """Tap the element."""

    @abstractmethod
    async def swipe(
        self, handle: ElementHandle[Any], *, delta_x: int = 0, delta_y: int = 0
    ) -> None:
        """Swipe from the element's center by the given distance."""
