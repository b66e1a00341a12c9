"""Opaque element handles passed between test code and controllers."""

from __future__ import annotations

from typing import Generic, TypeVar

T = TypeVar("T")


class ElementHandle(Generic[T]):
    """Carrier for an engine-specific element reference.

    Test code owns handles and passes them back into controller commands, but
    never sees the engine object behind them. Handles are only meaningful for
    the session that produced them.
    """

    __slots__ = ("_element",)

    def __init__(self, element: T) -> None:
        self._element = element

    def unwrap(self) -> T:
        """Return the wrapped engine reference. For use by controller adapters."""

        return self._element

    def __repr__(self) -> str:
        return f"<ElementHandle {type(self._element).__name__}>"
