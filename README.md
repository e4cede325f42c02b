# quadkit

Building blocks for small 2D games. The package is plain Python and has no
third-party dependencies.

## What is inside

- `quadkit.color` has the frozen `Color` dataclass with `from_rgba`,
  `from_bytes`, `to_bytes` and `to_tuple`. It also has `color_u8`, `hsl_to_rgb`,
  `rgb_to_hsl` and named colours such as `RED`, `SKYBLUE` and `BLANK`.
- `quadkit.geometry` has `Vec2`, `Rect`, `RectOffset` and `Circle`, plus
  `polar_to_cartesian`, `cartesian_to_polar` and `clamp`.
- `quadkit.shaders` has `preprocess_shader`. It replaces each `#include "name"`
  directive with the content listed in a `PreprocessorConfig`. It raises
  `ShaderIncludeError` when a directive is malformed or names an unknown file.
- `quadkit.physics` has a pixel-exact platformer `World`. The world holds tiled
  static layers, `Actor`s, moving `Solid`s (which carry, push or squish actors)
  and jump-through tiles. Tile kinds are given by the `Tile` enum.
- `quadkit.animation` has `Animation`, `AnimatedSprite` and `AnimationFrame` for
  sprite-sheet animation. `AnimatedSprite.update` takes the elapsed frame time
  in seconds.
- `quadkit.mouse_camera` has `MouseCamera`, which pans with mouse drags and
  zooms around a point.
- `quadkit.genstore` has `GenerationalStorage`. Its `GenerationalId` handles go
  stale once their slot is freed and reused.
- `quadkit.storage` is a process-wide store that holds one value per type. Its
  functions are `store`, `get`, `try_get` and `clear`.
- `quadkit.files` has `load_file` and `load_string`. Both read relative to an
  optional assets folder, which you set with `set_pc_assets_folder`. Failures
  raise `FileError`.
- `quadkit.events` has the input event types (`MouseMotionEvent`, `KeyDownEvent`,
  `TouchEvent` and the others), `TouchPhase`, `MouseButton`, `KeyMods` and
  `EventQueue`. `EventQueue` fans events out to registered subscribers.
- `quadkit.input` has `InputState`, which holds per-frame keyboard, mouse and
  touch state:
  - Feed it through its `*_event` methods.
  - Query it with `is_key_pressed`, `mouse_position`, `touches_local` and the
    like.
  - Call `end_frame` once per frame.
  - Subscribers get raw events through `register_input_subscriber` and
    `drain_events`, or through `repeat_events`.

## Installation

```
pip install .
```

## Example

```python
from quadkit.geometry import Vec2
from quadkit.physics import World, Tile

world = World()
world.add_static_tiled_layer([Tile.EMPTY] * 8 + [Tile.SOLID] * 8, 8.0, 8.0, 8, 1)
player = world.add_actor(Vec2(0.0, 0.0), 4, 4)

while world.move_v(player, 1.0):
    pass
print(world.actor_pos(player))  # Vec2(x=0.0, y=4.0), resting on the solid row
```

Feeding input and reading it back:

```python
from quadkit.events import MouseButton
from quadkit.input import InputState

state = InputState(width=800.0, height=600.0)
state.mouse_button_down_event(MouseButton.LEFT, 400.0, 300.0)
print(state.is_mouse_button_pressed(MouseButton.LEFT))  # True
print(state.mouse_position_local())                     # Vec2(x=0.0, y=0.0)
state.end_frame()
print(state.is_mouse_button_pressed(MouseButton.LEFT))  # False
```

## What it does not do

quadkit opens no window and does no drawing, audio or GPU work. `InputState`
only records the events you pass to it. The package has no runner for
per-frame tasks, no scene graph of nodes and no state machine helper. Your
game loop supplies frame times and calls `update` and `end_frame` itself.

## Running the tests

```
pip install .[test]
pytest
```