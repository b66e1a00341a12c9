"""Value types shared by the controller facade and its adapters."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict


class Rect(BaseModel):
    """Window or element geometry in integer pixels."""

    model_config = ConfigDict(frozen=True)

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @classmethod
    def from_box(cls, box: Mapping[str, float]) -> "Rect":
        """Build a rect from engine geometry, which may be fractional."""

        return cls(
            x=round(box.get("x", 0)),
            y=round(box.get("y", 0)),
            width=round(box.get("width", 0)),
            height=round(box.get("height", 0)),
        )


class Cookie(BaseModel):
    """A browser cookie as exposed to test code."""

    name: str
    value: str
    domain: Optional[str] = None
    path: Optional[str] = None
    expires: Optional[float] = None
    http_only: bool = False
    secure: bool = False
    same_site: Optional[str] = None

    @classmethod
    def from_engine(cls, data: Mapping[str, Any]) -> "Cookie":
        expires = data.get("expires")
        if expires is not None and expires < 0:
            # session cookie
            expires = None
        return cls(
            name=data["name"],
            value=data["value"],
            domain=data.get("domain"),
            path=data.get("path"),
            expires=expires,
            http_only=bool(data.get("httpOnly", False)),
            secure=bool(data.get("secure", False)),
            same_site=data.get("sameSite"),
        )


class Keys(str, enum.Enum):
    """Special keys that ``type`` presses instead of typing as text."""

    ENTER = "Enter"
    TAB = "Tab"
    ESCAPE = "Escape"
    BACKSPACE = "Backspace"
    DELETE = "Delete"
    SPACE = "Space"
    ARROW_UP = "ArrowUp"
    ARROW_DOWN = "ArrowDown"
    ARROW_LEFT = "ArrowLeft"
    ARROW_RIGHT = "ArrowRight"
    HOME = "Home"
    END = "End"
    PAGE_UP = "PageUp"
    PAGE_DOWN = "PageDown"
