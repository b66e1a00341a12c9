"""Failure screenshots written next to test reports."""

from __future__ import annotations

import base64
import logging
import re
from pathlib import Path
from typing import Optional

from ..controller.base import FunctionalTestController

LOGGER = logging.getLogger(__name__)

_UNSAFE = re.compile(r"[^A-Za-z0-9._-]+")


def failure_screenshot_path(directory: Path, test_id: str) -> Path:
    """Return the file a failing test's screenshot is written to."""

    name = _UNSAFE.sub("_", test_id).strip("_") or "screenshot"
    return directory / f"{name}.png"


async def save_failure_screenshot(
    controller: FunctionalTestController,
    directory: Path,
    test_id: str,
) -> Optional[Path]:
    """Capture the viewport and write it for a failed test.

    Returns the written path, or ``None`` when the capture itself failed.
    """

    target = failure_screenshot_path(directory, test_id)
    try:
        encoded = await controller.take_screenshot()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(base64.b64decode(encoded))
    except Exception:
        LOGGER.exception("Failed to capture failure screenshot for %s", test_id)
        return None
    LOGGER.info("Saved failure screenshot to %s", target)
    return target
