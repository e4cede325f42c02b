import pytest

from quadkit.geometry import Vec2
from quadkit.physics import Actor, Solid, Tile, World

E = Tile.EMPTY
S = Tile.SOLID
J = Tile.JUMP_THROUGH


def floor_world():
    world = World()
    world.add_static_tiled_layer([E, E, E, E, E, E, S, S, S], 8.0, 8.0, 3, 1)
    return world


def wood_world():
    world = World()
    world.add_static_tiled_layer([E, E, E, E, E, E, J, J, J, E, E, E], 8.0, 8.0, 3, 1)
    return world


@pytest.mark.parametrize(
    "a, b, expected",
    [
        (E, E, E),
        (J, J, J),
        (J, E, J),
        (E, J, J),
        (S, E, S),
        (Tile.COLLIDER, J, S),
        (E, Tile.COLLIDER, S),
    ],
)
def test_tile_combine(a, b, expected):
    assert a.combine(b) is expected


def test_handles_are_sequential():
    world = World()
    assert world.add_actor(Vec2(0, 0), 4, 4) == Actor(0)
    assert world.add_actor(Vec2(10, 0), 4, 4) == Actor(1)
    assert world.add_solid(Vec2(0, 50), 4, 4) == Solid(0)


def test_free_horizontal_move():
    world = World()
    start = Vec2(3.0, 4.0)
    actor = world.add_actor(start, 4, 4)
    assert world.move_h(actor, 5.0) is True
    assert world.actor_pos(actor) == start + Vec2(5.0, 0.0)


def test_remainder_accumulates():
    world = World()
    start = Vec2(0.0, 0.0)
    actor = world.add_actor(start, 4, 4)
    world.move_h(actor, 0.4)
    assert world.actor_pos(actor) == start
    world.move_h(actor, 0.4)
    assert world.actor_pos(actor) == start + Vec2(1.0, 0.0)


def test_half_rounds_away_from_zero():
    world = World()
    start = Vec2(10.0, 0.0)
    actor = world.add_actor(start, 4, 4)
    world.move_h(actor, 0.5)
    assert world.actor_pos(actor) == start + Vec2(1.0, 0.0)
    world.set_actor_position(actor, start)
    world.move_h(actor, -2.5)
    assert world.actor_pos(actor) == start - Vec2(3.0, 0.0)


def test_falling_stops_on_solid_floor():
    world = floor_world()
    actor = world.add_actor(Vec2(0.0, 0.0), 8, 8)
    assert world.move_v(actor, 8.0) is True
    assert world.actor_pos(actor).y == 8.0
    assert world.move_v(actor, 1.0) is False
    assert world.actor_pos(actor).y == 8.0


def test_collide_solids_and_tags():
    world = floor_world()
    assert world.collide_solids(Vec2(0.0, 16.0), 8, 8) is Tile.SOLID
    assert world.collide_solids(Vec2(0.0, 0.0), 8, 8) is Tile.EMPTY
    assert world.collide_tag(2, Vec2(0.0, 16.0), 8, 8) is Tile.EMPTY
    assert world.tag_at(Vec2(1.0, 17.0), 1) is True
    assert world.tag_at(Vec2(1.0, 17.0), 2) is False
    assert world.solid_at(Vec2(1.0, 1.0)) is False


def test_wide_box_hits_middle_tile():
    world = World()
    world.add_static_tiled_layer([E, S, E], 8.0, 8.0, 3, 1)
    assert world.collide_solids(Vec2(0.0, 0.0), 24, 8) is Tile.SOLID


def test_jump_through_blocks_until_descent():
    world = wood_world()
    actor = world.add_actor(Vec2(0.0, 8.0), 8, 8)
    assert world.move_v(actor, 1.0) is False
    assert world.collide_check(actor, Vec2(0.0, 9.0)) is True
    world.descent(actor)
    assert world.collide_check(actor, Vec2(0.0, 9.0)) is False
    assert world.move_v(actor, 1.0) is True
    assert world.actor_pos(actor) == Vec2(0.0, 9.0)


def test_jump_through_passes_going_up():
    world = wood_world()
    start = Vec2(0.0, 24.0)
    actor = world.add_actor(start, 8, 8)
    assert world.move_v(actor, -1.0) is True
    assert world.actor_pos(actor) == start - Vec2(0.0, 1.0)
    assert world.collide_check(actor, world.actor_pos(actor)) is False


def test_actor_created_in_wood_may_descend():
    world = wood_world()
    actor = world.add_actor(Vec2(0.0, 16.0), 8, 8)
    assert world.collide_check(actor, Vec2(0.0, 16.0)) is False


def test_solid_blocks_actor_and_is_detected():
    world = World()
    solid = world.add_solid(Vec2(20.0, 0.0), 10, 10)
    actor = world.add_actor(Vec2(0.0, 0.0), 5, 5)
    assert world.collide_solids(Vec2(18.0, 0.0), 5, 5) is Tile.COLLIDER
    assert world.solid_at(Vec2(21.0, 1.0)) is True
    assert world.move_h(actor, 30.0) is False
    assert world.actor_pos(actor).x + 5 < world.solid_pos(solid).x
    assert world.collide_check(actor, Vec2(16.0, 0.0)) is True


def test_solid_pushes_actor():
    world = World()
    solid = world.add_solid(Vec2(0.0, 0.0), 10, 10)
    start = Vec2(12.0, 0.0)
    actor = world.add_actor(start, 5, 5)
    world.solid_move(solid, 5.0, 0.0)
    assert world.solid_pos(solid) == Vec2(5.0, 0.0)
    assert world.actor_pos(actor) == start + Vec2(5.0, 0.0)
    assert world.squished(actor) is False


def test_solid_squishes_actor_against_wall():
    world = World()
    pusher = world.add_solid(Vec2(0.0, 0.0), 10, 10)
    world.add_solid(Vec2(18.0, 0.0), 10, 10)
    actor = world.add_actor(Vec2(12.0, 0.0), 5, 5)
    world.solid_move(pusher, 5.0, 0.0)
    assert world.squished(actor) is True


def test_riding_actor_is_carried():
    world = World()
    platform = world.add_solid(Vec2(0.0, 10.0), 20, 10)
    start = Vec2(0.0, 5.0)
    actor = world.add_actor(start, 5, 5)
    world.solid_move(platform, 3.0, 0.0)
    assert world.actor_pos(actor) == start + Vec2(3.0, 0.0)
    assert world.solid_pos(platform) == Vec2(3.0, 10.0)


def test_set_actor_position_clears_remainder():
    world = World()
    actor = world.add_actor(Vec2(0.0, 0.0), 4, 4)
    world.move_h(actor, 0.4)
    target = Vec2(7.0, 7.0)
    world.set_actor_position(actor, target)
    world.move_h(actor, 0.4)
    assert world.actor_pos(actor) == target


def test_unknown_actor_raises():
    world = World()
    with pytest.raises(IndexError):
        world.actor_pos(Actor(3))