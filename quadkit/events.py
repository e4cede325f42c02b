"""Input events and a queue that fans them out to registered subscribers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, Hashable


class TouchPhase(Enum):
    STARTED = "started"
    STATIONARY = "stationary"
    MOVED = "moved"
    ENDED = "ended"
    CANCELLED = "cancelled"


class MouseButton(Enum):
    LEFT = "left"
    RIGHT = "right"
    MIDDLE = "middle"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class KeyMods:
    """Modifier keys held during a key or character event."""

    shift: bool = False
    ctrl: bool = False
    alt: bool = False
    logo: bool = False


@dataclass(frozen=True)
class InputEvent(ABC):
    """A recorded input event that can be replayed to a handler."""

    @abstractmethod
    def repeat(self, handler: Any) -> None:
        """Call the matching ``*_event`` method of ``handler``."""


@dataclass(frozen=True)
class MouseMotionEvent(InputEvent):
    x: float
    y: float

    def repeat(self, handler: Any) -> None:
        handler.mouse_motion_event(self.x, self.y)


@dataclass(frozen=True)
class MouseWheelEvent(InputEvent):
    x: float
    y: float

    def repeat(self, handler: Any) -> None:
        handler.mouse_wheel_event(self.x, self.y)


@dataclass(frozen=True)
class MouseButtonDownEvent(InputEvent):
    x: float
    y: float
    button: MouseButton

    def repeat(self, handler: Any) -> None:
        handler.mouse_button_down_event(self.button, self.x, self.y)


@dataclass(frozen=True)
class MouseButtonUpEvent(InputEvent):
    x: float
    y: float
    button: MouseButton

    def repeat(self, handler: Any) -> None:
        handler.mouse_button_up_event(self.button, self.x, self.y)


@dataclass(frozen=True)
class CharEvent(InputEvent):
    character: str
    modifiers: KeyMods
    repeated: bool

    def repeat(self, handler: Any) -> None:
        handler.char_event(self.character, self.modifiers, self.repeated)


@dataclass(frozen=True)
class KeyDownEvent(InputEvent):
    keycode: Hashable
    modifiers: KeyMods
    repeated: bool

    def repeat(self, handler: Any) -> None:
        handler.key_down_event(self.keycode, self.modifiers, self.repeated)


@dataclass(frozen=True)
class KeyUpEvent(InputEvent):
    keycode: Hashable
    modifiers: KeyMods

    def repeat(self, handler: Any) -> None:
        handler.key_up_event(self.keycode, self.modifiers)


@dataclass(frozen=True)
class TouchEvent(InputEvent):
    phase: TouchPhase
    touch_id: int
    x: float
    y: float

    def repeat(self, handler: Any) -> None:
        handler.touch_event(self.phase, self.touch_id, self.x, self.y)


class EventQueue:
    """Per-subscriber queues; every pushed event goes to every subscriber."""

    def __init__(self) -> None:
        self._subscribers: list[list[InputEvent]] = []

    def register_subscriber(self) -> int:
        """Add a subscriber and return its id; it sees events pushed from now on."""
        self._subscribers.append([])
        return len(self._subscribers) - 1

    def push(self, event: InputEvent) -> None:
        for queue in self._subscribers:
            queue.append(event)

    def _queue(self, subscriber: int) -> list[InputEvent]:
        if not 0 <= subscriber < len(self._subscribers):
            raise IndexError(f"no input subscriber {subscriber}")
        return self._subscribers[subscriber]

    def drain(self, subscriber: int) -> list[InputEvent]:
        """Return and forget the events queued for ``subscriber``, oldest first."""
        queue = self._queue(subscriber)
        events = list(queue)
        queue.clear()
        return events

    def replay(self, subscriber: int, handler: Any) -> None:
        """Drain ``subscriber``'s events into ``handler`` in order."""
        for event in self.drain(subscriber):
            event.repeat(handler)