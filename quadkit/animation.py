"""Sprite sheet animations driven by frame time."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Sequence

from quadkit.geometry import Rect, Vec2


@dataclass
class Animation:
    """One row of a sprite sheet played at ``fps`` frames per second."""

    name: str
    row: int
    frames: int
    fps: int


@dataclass
class AnimationFrame:
    """Where to cut the current frame from the sheet, and how big to draw it."""

    source_rect: Rect
    dest_size: Vec2


class AnimatedSprite:
    """A set of animations on a sheet of equally sized tiles."""

    def __init__(
        self,
        tile_width: int,
        tile_height: int,
        animations: Sequence[Animation],
        playing: bool,
    ) -> None:
        self._tile_width = float(tile_width)
        self._tile_height = float(tile_height)
        self._animations = list(animations)
        self._current_animation = 0
        self._time = 0.0
        self._frame = 0
        self.playing = playing

    def set_animation(self, animation: int) -> None:
        """Switch animation, keeping the frame number within its length."""
        self._current_animation = animation
        self._frame %= self._animations[animation].frames

    def current_animation(self) -> int:
        return self._current_animation

    def set_frame(self, frame: int) -> None:
        self._frame = frame

    def update(self, frame_time: float) -> None:
        """Advance the animation by ``frame_time`` seconds."""
        animation = self._animations[self._current_animation]
        if self.playing:
            self._time += frame_time
            period = 1.0 / animation.fps if animation.fps else math.inf
            if self._time > period:
                self._frame += 1
                self._time = 0.0
        self._frame %= animation.frames

    def frame(self) -> AnimationFrame:
        """The source rectangle and draw size of the current frame."""
        animation = self._animations[self._current_animation]
        return AnimationFrame(
            source_rect=Rect(
                self._tile_width * self._frame,
                self._tile_height * animation.row,
                self._tile_width,
                self._tile_height,
            ),
            dest_size=Vec2(self._tile_width, self._tile_height),
        )