"""Tile and rectangle based platformer collision world with actors and solids."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Sequence

from quadkit.geometry import Rect, Vec2


class Tile(Enum):
    """What occupies a cell of a collision layer."""

    EMPTY = "empty"
    SOLID = "solid"
    JUMP_THROUGH = "jump_through"
    COLLIDER = "collider"

    def combine(self, other: Tile) -> Tile:
        """Merge two tiles: empty and jump-through mix, anything else is solid."""
        if self is Tile.EMPTY and other is Tile.EMPTY:
            return Tile.EMPTY
        if {self, other} <= {Tile.EMPTY, Tile.JUMP_THROUGH}:
            return Tile.JUMP_THROUGH
        return Tile.SOLID


@dataclass(frozen=True)
class Actor:
    """Handle of a moving body in a :class:`World`."""

    index: int


@dataclass(frozen=True)
class Solid:
    """Handle of a solid (possibly moving) platform in a :class:`World`."""

    index: int


@dataclass
class _StaticTiledLayer:
    static_colliders: list[Tile]
    tile_width: float
    tile_height: float
    width: int
    tag: int


@dataclass
class _Collider:
    pos: Vec2
    width: int
    height: int
    collidable: bool = True
    squished: bool = False
    x_remainder: float = 0.0
    y_remainder: float = 0.0
    squishers: set[Solid] = field(default_factory=set)
    descent: bool = False
    seen_wood: bool = False

    def rect(self) -> Rect:
        return Rect(self.pos.x, self.pos.y, float(self.width), float(self.height))


def _round(value: float) -> int:
    """Round to the nearest integer, halves away from zero."""
    whole = math.trunc(value)
    if abs(value - whole) >= 0.5:
        whole += 1 if value > 0 else -1
    return whole


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


class World:
    """A collision world made of tiled layers, solids and actors."""

    def __init__(self) -> None:
        self._layers: list[_StaticTiledLayer] = []
        self._solids: list[_Collider] = []
        self._actors: list[_Collider] = []

    def add_static_tiled_layer(
        self,
        static_colliders: Sequence[Tile],
        tile_width: float,
        tile_height: float,
        width: int,
        tag: int,
    ) -> None:
        """Add a grid of tiles, ``width`` tiles per row, marked with ``tag``."""
        self._layers.append(
            _StaticTiledLayer(list(static_colliders), tile_width, tile_height, width, tag)
        )

    def add_actor(self, pos: Vec2, width: int, height: int) -> Actor:
        actor = Actor(len(self._actors))
        inside_wood = self.collide_solids(pos, width, height) is Tile.JUMP_THROUGH
        self._actors.append(
            _Collider(pos=pos, width=width, height=height, descent=inside_wood, seen_wood=inside_wood)
        )
        return actor

    def add_solid(self, pos: Vec2, width: int, height: int) -> Solid:
        solid = Solid(len(self._solids))
        self._solids.append(_Collider(pos=pos, width=width, height=height))
        return solid

    def set_actor_position(self, actor: Actor, pos: Vec2) -> None:
        collider = self._actors[actor.index]
        collider.x_remainder = 0.0
        collider.y_remainder = 0.0
        collider.pos = pos

    def descent(self, actor: Actor) -> None:
        """Let the actor fall through jump-through tiles."""
        self._actors[actor.index].descent = True

    def move_v(self, actor: Actor, dy: float) -> bool:
        """Move vertically pixel by pixel; False if blocked on the way."""
        collider = self._actors[actor.index]
        collider.y_remainder += dy

        steps = _round(collider.y_remainder)
        if steps:
            collider.y_remainder -= steps
            sign = _sign(steps)
            while steps:
                tile = self.collide_solids(
                    collider.pos + Vec2(0.0, float(sign)), collider.width, collider.height
                )
                if tile is Tile.JUMP_THROUGH and collider.descent:
                    collider.seen_wood = True
                if tile is Tile.JUMP_THROUGH and sign < 0:
                    collider.seen_wood = True
                    collider.descent = True
                if tile is Tile.EMPTY or (tile is Tile.JUMP_THROUGH and collider.descent):
                    collider.pos = collider.pos + Vec2(0.0, float(sign))
                    steps -= sign
                else:
                    return False

        if self.collide_solids(collider.pos, collider.width, collider.height) is not Tile.JUMP_THROUGH:
            collider.seen_wood = False
            collider.descent = False
        return True

    def move_h(self, actor: Actor, dx: float) -> bool:
        """Move horizontally pixel by pixel; False if blocked on the way."""
        collider = self._actors[actor.index]
        collider.x_remainder += dx

        steps = _round(collider.x_remainder)
        if steps:
            collider.x_remainder -= steps
            sign = _sign(steps)
            while steps:
                tile = self.collide_solids(
                    collider.pos + Vec2(float(sign), 0.0), collider.width, collider.height
                )
                if tile is Tile.JUMP_THROUGH:
                    collider.descent = True
                    collider.seen_wood = True
                if tile in (Tile.EMPTY, Tile.JUMP_THROUGH):
                    collider.pos = collider.pos + Vec2(float(sign), 0.0)
                    steps -= sign
                else:
                    return False
        return True

    def solid_move(self, solid: Solid, dx: float, dy: float) -> None:
        """Move a solid, carrying riding actors and pushing (or squishing) others."""
        collider = self._solids[solid.index]
        collider.x_remainder += dx
        collider.y_remainder += dy
        move_x = _round(collider.x_remainder)
        move_y = _round(collider.y_remainder)

        riding_rect = Rect(collider.pos.x, collider.pos.y - 1.0, float(collider.width), 1.0)
        pushing_rect = Rect(
            collider.pos.x + move_x, collider.pos.y, float(collider.width), float(collider.height)
        )

        riding: list[Actor] = []
        pushing: list[Actor] = []
        for index, actor_collider in enumerate(self._actors):
            rider_rect = Rect(
                actor_collider.pos.x,
                actor_collider.pos.y + actor_collider.height - 1.0,
                float(actor_collider.width),
                1.0,
            )
            touches = pushing_rect.overlaps(actor_collider.rect())
            if riding_rect.overlaps(rider_rect):
                riding.append(Actor(index))
            elif touches and not actor_collider.squished:
                pushing.append(Actor(index))

            if not touches:
                actor_collider.squishers.discard(solid)
                if not actor_collider.squishers:
                    actor_collider.squished = False

        collider.collidable = False
        for actor in riding:
            self.move_h(actor, float(move_x))
        for actor in pushing:
            if not self.move_h(actor, float(move_x)):
                pushed = self._actors[actor.index]
                pushed.squished = True
                pushed.squishers.add(solid)
        collider.collidable = True

        if move_x:
            collider.x_remainder -= move_x
            collider.pos = collider.pos + Vec2(float(move_x), 0.0)
        if move_y:
            collider.y_remainder -= move_y
            collider.pos = collider.pos + Vec2(0.0, float(move_y))

    def solid_at(self, pos: Vec2) -> bool:
        return self.tag_at(pos, 1)

    def tag_at(self, pos: Vec2, tag: int) -> bool:
        """True if the first occupied layer cell at ``pos`` has ``tag``, or a solid is there."""
        for layer in self._layers:
            y = int(pos.y / layer.tile_width)
            x = int(pos.x / layer.tile_height)
            ix = y * layer.width + x
            if 0 <= ix < len(layer.static_colliders) and layer.static_colliders[ix] is not Tile.EMPTY:
                return layer.tag == tag

        return any(s.collidable and s.rect().contains(pos) for s in self._solids)

    def collide_solids(self, pos: Vec2, width: int, height: int) -> Tile:
        """What a box at ``pos`` would hit among tag-1 tiles and solids."""
        tile = self.collide_tag(1, pos, width, height)
        if tile is not Tile.EMPTY:
            return tile

        box = Rect(pos.x, pos.y, float(width), float(height))
        if any(s.collidable and s.rect().overlaps(box) for s in self._solids):
            return Tile.COLLIDER
        return Tile.EMPTY

    def collide_tag(self, tag: int, pos: Vec2, width: int, height: int) -> Tile:
        """What a box at ``pos`` would hit among the tiles of layers with ``tag``."""
        for layer in self._layers:
            if layer.tag != tag:
                continue
            check = self._tile_checker(layer)

            right = pos.x + width - 1.0
            bottom = pos.y + height - 1.0
            tile = (
                check(pos.x, pos.y)
                .combine(check(right, pos.y))
                .combine(check(right, bottom))
                .combine(check(pos.x, bottom))
            )
            if tile is not Tile.EMPTY:
                return tile

            if width > int(layer.tile_width):
                x = pos.x
                while True:
                    x += layer.tile_width
                    if not x < right:
                        break
                    tile = check(x, pos.y).combine(check(x, bottom))
                    if tile is not Tile.EMPTY:
                        return tile

            if height > int(layer.tile_height):
                y = pos.y
                while True:
                    y += layer.tile_height
                    if not y < bottom:
                        break
                    tile = check(pos.x, y).combine(check(right, y))
                    if tile is not Tile.EMPTY:
                        return tile
        return Tile.EMPTY

    @staticmethod
    def _tile_checker(layer: _StaticTiledLayer) -> Callable[[float, float], Tile]:
        tiles = layer.static_colliders
        layer_height = len(tiles) // layer.width + 1

        def check(px: float, py: float) -> Tile:
            y = int(py / layer.tile_width)
            x = int(px / layer.tile_height)
            ix = y * layer.width + x
            if 0 <= y < layer_height and 0 <= x < layer.width and 0 <= ix < len(tiles):
                return tiles[ix]
            return Tile.EMPTY

        return check

    def squished(self, actor: Actor) -> bool:
        return self._actors[actor.index].squished

    def actor_pos(self, actor: Actor) -> Vec2:
        return self._actors[actor.index].pos

    def solid_pos(self, solid: Solid) -> Vec2:
        return self._solids[solid.index].pos

    def collide_check(self, actor: Actor, pos: Vec2) -> bool:
        """True if the actor placed at ``pos`` would be blocked."""
        collider = self._actors[actor.index]
        tile = self.collide_solids(pos, collider.width, collider.height)
        if collider.descent:
            return tile in (Tile.SOLID, Tile.COLLIDER)
        return tile in (Tile.SOLID, Tile.COLLIDER, Tile.JUMP_THROUGH)