"""Per-frame keyboard, mouse and touch state fed by window events."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Hashable

from quadkit.events import (
    CharEvent,
    EventQueue,
    InputEvent,
    KeyDownEvent,
    KeyMods,
    KeyUpEvent,
    MouseButton,
    MouseButtonDownEvent,
    MouseButtonUpEvent,
    MouseMotionEvent,
    MouseWheelEvent,
    TouchEvent,
    TouchPhase,
)
from quadkit.geometry import Vec2


@dataclass(frozen=True)
class Touch:
    """One finger on the screen."""

    id: int
    phase: TouchPhase
    position: Vec2


class InputState:
    """Collects input events and answers questions about the current frame.

    Events arrive through the ``*_event`` methods; :meth:`end_frame` clears
    the per-frame state (presses, releases, wheel, finished touches).
    """

    def __init__(self, width: float = 800.0, height: float = 600.0, dpi_scale: float = 1.0) -> None:
        self.screen_width = width
        self.screen_height = height
        self.dpi_scale = dpi_scale
        self.simulate_mouse_with_touch = True
        self.cursor_grabbed = False

        self._keys_down: set[Hashable] = set()
        self._keys_pressed: dict[Hashable, None] = {}
        self._keys_released: set[Hashable] = set()
        self._mouse_down: set[MouseButton] = set()
        self._mouse_pressed: set[MouseButton] = set()
        self._mouse_released: set[MouseButton] = set()
        self._touches: dict[int, Touch] = {}
        self._chars_pressed: list[str] = []
        self._mouse_position = Vec2(0.0, 0.0)
        self._mouse_wheel = Vec2(0.0, 0.0)
        self._prevent_quit_event = False
        self._quit_requested = False
        self._events = EventQueue()

    # Event intake

    def resize(self, width: float, height: float) -> None:
        self.screen_width = width
        self.screen_height = height

    def mouse_motion_event(self, x: float, y: float) -> None:
        """Absolute pointer motion; ignored while the cursor is grabbed."""
        if self.cursor_grabbed:
            return
        self._mouse_position = Vec2(x, y)
        self._events.push(MouseMotionEvent(x, y))

    def raw_mouse_motion(self, x: float, y: float) -> None:
        """Relative pointer motion; only used while the cursor is grabbed."""
        if not self.cursor_grabbed:
            return
        self._mouse_position = self._mouse_position + Vec2(x, y)
        self._events.push(MouseMotionEvent(self._mouse_position.x, self._mouse_position.y))

    def mouse_wheel_event(self, x: float, y: float) -> None:
        self._mouse_wheel = Vec2(x, y)
        self._events.push(MouseWheelEvent(x, y))

    def mouse_button_down_event(self, button: MouseButton, x: float, y: float) -> None:
        self._mouse_down.add(button)
        self._mouse_pressed.add(button)
        self._events.push(MouseButtonDownEvent(x, y, button))
        if not self.cursor_grabbed:
            self._mouse_position = Vec2(x, y)

    def mouse_button_up_event(self, button: MouseButton, x: float, y: float) -> None:
        self._mouse_down.discard(button)
        self._mouse_released.add(button)
        self._events.push(MouseButtonUpEvent(x, y, button))
        if not self.cursor_grabbed:
            self._mouse_position = Vec2(x, y)

    def touch_event(self, phase: TouchPhase, touch_id: int, x: float, y: float) -> None:
        """Record a touch; also acts as the left mouse button when simulating."""
        self._touches[touch_id] = Touch(touch_id, phase, Vec2(x, y))

        if self.simulate_mouse_with_touch:
            if phase is TouchPhase.STARTED:
                self.mouse_button_down_event(MouseButton.LEFT, x, y)
            elif phase is TouchPhase.ENDED:
                self.mouse_button_up_event(MouseButton.LEFT, x, y)
            elif phase is TouchPhase.MOVED:
                self.mouse_motion_event(x, y)

        self._events.push(TouchEvent(phase, touch_id, x, y))

    def char_event(self, character: str, modifiers: KeyMods, repeat: bool) -> None:
        self._chars_pressed.append(character)
        self._events.push(CharEvent(character, modifiers, repeat))

    def key_down_event(self, keycode: Hashable, modifiers: KeyMods, repeat: bool) -> None:
        self._keys_down.add(keycode)
        if not repeat:
            self._keys_pressed.pop(keycode, None)
            self._keys_pressed[keycode] = None
        self._events.push(KeyDownEvent(keycode, modifiers, repeat))

    def key_up_event(self, keycode: Hashable, modifiers: KeyMods) -> None:
        self._keys_down.discard(keycode)
        self._keys_released.add(keycode)
        self._events.push(KeyUpEvent(keycode, modifiers))

    def quit_requested_event(self) -> bool:
        """Handle a request to close; True if the quit is to be cancelled."""
        if self._prevent_quit_event:
            self._quit_requested = True
            return True
        return False

    def end_frame(self) -> None:
        """Forget this frame's presses, releases, wheel and finished touches."""
        self._mouse_wheel = Vec2(0.0, 0.0)
        self._keys_pressed.clear()
        self._keys_released.clear()
        self._mouse_pressed.clear()
        self._mouse_released.clear()
        self._quit_requested = False

        finished = (TouchPhase.ENDED, TouchPhase.CANCELLED)
        moving = (TouchPhase.STARTED, TouchPhase.MOVED)
        self._touches = {
            touch_id: replace(touch, phase=TouchPhase.STATIONARY) if touch.phase in moving else touch
            for touch_id, touch in self._touches.items()
            if touch.phase not in finished
        }

    # Queries

    def set_cursor_grab(self, grab: bool) -> None:
        """Constrain the mouse to the window."""
        self.cursor_grabbed = grab

    def mouse_position(self) -> tuple[float, float]:
        """Mouse position in logical pixels."""
        return (
            self._mouse_position.x / self.dpi_scale,
            self._mouse_position.y / self.dpi_scale,
        )

    def _to_local(self, pixels: Vec2) -> Vec2:
        return Vec2(pixels.x / self.screen_width, pixels.y / self.screen_height) * 2.0 - Vec2(1.0, 1.0)

    def mouse_position_local(self) -> Vec2:
        """Mouse position mapped to the range [-1, 1]."""
        x, y = self.mouse_position()
        return self._to_local(Vec2(x, y))

    def mouse_wheel(self) -> tuple[float, float]:
        return (self._mouse_wheel.x, self._mouse_wheel.y)

    def touches(self) -> list[Touch]:
        """Current touches with positions in pixels."""
        return list(self._touches.values())

    def touches_local(self) -> list[Touch]:
        """Current touches with positions mapped to [-1, 1]."""
        return [replace(touch, position=self._to_local(touch.position)) for touch in self._touches.values()]

    def is_key_pressed(self, key: Hashable) -> bool:
        """True if the key went down this frame."""
        return key in self._keys_pressed

    def is_key_down(self, key: Hashable) -> bool:
        return key in self._keys_down

    def is_key_released(self, key: Hashable) -> bool:
        return key in self._keys_released

    def get_char_pressed(self) -> str | None:
        """Take the most recently typed character off the queue, or None."""
        return self._chars_pressed.pop() if self._chars_pressed else None

    def get_last_key_pressed(self) -> Hashable | None:
        """The key most recently pressed this frame, or None."""
        return next(reversed(self._keys_pressed), None) if self._keys_pressed else None

    def is_mouse_button_down(self, button: MouseButton) -> bool:
        return button in self._mouse_down

    def is_mouse_button_pressed(self, button: MouseButton) -> bool:
        return button in self._mouse_pressed

    def is_mouse_button_released(self, button: MouseButton) -> bool:
        return button in self._mouse_released

    def prevent_quit(self) -> None:
        """Cancel window close requests; see :meth:`is_quit_requested`."""
        self._prevent_quit_event = True

    def is_quit_requested(self) -> bool:
        return self._quit_requested

    # Event forwarding

    def register_input_subscriber(self) -> int:
        """Register a consumer of raw events and return its id."""
        return self._events.register_subscriber()

    def drain_events(self, subscriber: int) -> list[InputEvent]:
        """Events received since the subscriber last drained, oldest first."""
        return self._events.drain(subscriber)

    def repeat_events(self, subscriber: int, handler: Any) -> None:
        """Replay the subscriber's pending events into ``handler``."""
        self._events.replay(subscriber, handler)