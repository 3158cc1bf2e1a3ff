"""Pausable cursor over one encoding of one character.

A walker yields code points, UTF-16 code units, or UTF-8 bytes one at a time.
It can be put on hold immediately or after a number of further steps, which is
how the cell synchronizer keeps three differently sized encodings aligned.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import Generic, TypeVar

T = TypeVar("T")


class HoldState(enum.Enum):
    """Advancement state of an ``EncodingWalker``."""

    RUNNING = "running"
    HELD = "held"
    COUNTDOWN = "countdown"


class EncodingWalker(Generic[T]):
    """Step through ``elements`` with hold/resume control.

    While ``HELD`` (or once exhausted) ``next()`` returns ``None`` and the
    position does not move. ``COUNTDOWN`` allows a fixed number of further
    steps and then switches to ``HELD`` by itself.
    """

    def __init__(self, elements: Sequence[T]) -> None:
        self._elements = elements
        self._position = 0
        self._state = HoldState.RUNNING
        self._steps_left = 0

    @property
    def state(self) -> HoldState:
        return self._state

    @property
    def on_hold(self) -> bool:
        return self._state is HoldState.HELD

    @property
    def exhausted(self) -> bool:
        return self._position >= len(self._elements)

    @property
    def position(self) -> int:
        return self._position

    def next(self) -> T | None:
        """Return the current element and advance, or ``None`` when paused."""
        if self._state is HoldState.HELD or self.exhausted:
            return None

        value = self._elements[self._position]
        self._position += 1

        if self._state is HoldState.COUNTDOWN:
            self._steps_left -= 1
            if self._steps_left <= 0:
                self._state = HoldState.HELD
                self._steps_left = 0
        return value

    def hold(self, after: int | None = None) -> None:
        """Pause now, or after ``after`` more successful ``next()`` calls.

        A walker that is already held stays held until ``resume()``.
        """
        if after is None or after <= 0:
            self._state = HoldState.HELD
            self._steps_left = 0
            return
        if self._state is HoldState.HELD:
            return
        self._state = HoldState.COUNTDOWN
        self._steps_left = after

    def resume(self) -> None:
        """Clear any hold or countdown; the position is kept."""
        self._state = HoldState.RUNNING
        self._steps_left = 0

    def __repr__(self) -> str:
        return (
            f"EncodingWalker(position={self._position}, length={len(self._elements)}, "
            f"state={self._state.value}, steps_left={self._steps_left})"
        )


__all__ = ["EncodingWalker", "HoldState"]
