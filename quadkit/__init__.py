"""Building blocks for small 2D games: colours, geometry, shader includes, tile physics, animation and input state."""

__version__ = "0.1.0"