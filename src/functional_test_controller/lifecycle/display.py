"""Virtual X display for running headed browsers on machines without a screen."""

from __future__ import annotations

import logging
import os
from typing import Optional

from pyvirtualdisplay import Display

LOGGER = logging.getLogger(__name__)


class VirtualDisplay:
    """Manage a virtual display lifecycle."""

    def __init__(self, enabled: bool = True, width: int = 1920, height: int = 1080) -> None:
        self.enabled = enabled
        self._width = width
        self._height = height
        self._display: Optional[Display] = None

    def __enter__(self) -> Optional[str]:
        return self.start()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stop()

    def start(self) -> Optional[str]:
        """Start the display and return its ``DISPLAY`` value, or ``None`` when disabled."""

        if not self.enabled:
            return None
        if self._display is not None:
            return os.environ.get("DISPLAY")
        LOGGER.debug("Starting virtual display %sx%s", self._width, self._height)
        self._display = Display(visible=False, size=(self._width, self._height))
        self._display.start()
        display_var = os.environ.get("DISPLAY")
        if not display_var:
            raise RuntimeError(
                "DISPLAY environment variable missing after starting virtual display"
            )
        return display_var

    def stop(self) -> None:
        if self._display:
            LOGGER.debug("Stopping virtual display")
            self._display.stop()
        self._display = None

    @property
    def running(self) -> bool:
        return self._display is not None
