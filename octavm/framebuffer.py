"""CHIP-8 framebuffer and sprite drawing.

The display is a boolean jax array of shape ``(width, height)`` indexed as
``display[x, y]``. Sprites are drawn with XOR: the start position wraps around
the screen, but pixels falling past the right or bottom edge are clipped.
"""

from typing import Sequence, Tuple, Union

import jax.numpy as jnp

from octavm.constants import SCREEN_HEIGHT, SCREEN_WIDTH, SPRITE_WIDTH


def create_display(width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> jnp.ndarray:
    """Blank display."""
    return jnp.zeros((width, height), dtype=jnp.bool_)


def clear(display: jnp.ndarray) -> jnp.ndarray:
    """Turn every pixel off."""
    return jnp.zeros_like(display)


def sprite_mask(
    display: jnp.ndarray,
    sprite: Union[Sequence[int], jnp.ndarray],
    x: int,
    y: int,
) -> jnp.ndarray:
    """Boolean mask of the pixels a sprite flips when drawn at (x, y)."""
    width, height = display.shape
    sprite = jnp.asarray(sprite, dtype=jnp.uint8).reshape(-1)
    rows = sprite.shape[0]
    if rows == 0:
        return jnp.zeros_like(display)

    sprite_x = x % width
    sprite_y = y % height

    xx, yy = jnp.meshgrid(jnp.arange(width), jnp.arange(height), indexing='ij')
    col_offset = xx - sprite_x
    row_offset = yy - sprite_y

    # Pixels left of / above the start never match, so nothing wraps mid-sprite
    in_sprite = (col_offset >= 0) & (col_offset < SPRITE_WIDTH) & (row_offset >= 0) & (row_offset < rows)

    sprite_rows = sprite[jnp.clip(row_offset, 0, rows - 1)].astype(jnp.int32)
    bits = (sprite_rows >> (SPRITE_WIDTH - 1 - jnp.clip(col_offset, 0, SPRITE_WIDTH - 1))) & 1
    return in_sprite & (bits == 1)


def draw_sprite(
    display: jnp.ndarray,
    sprite: Union[Sequence[int], jnp.ndarray],
    x: int,
    y: int,
) -> Tuple[jnp.ndarray, bool]:
    """XOR a sprite onto the display.

    Args:
        display: Current display
        sprite: One byte per row, most significant bit leftmost
        x: Column of the sprite's top-left corner (wrapped modulo width)
        y: Row of the sprite's top-left corner (wrapped modulo height)

    Returns:
        Tuple of (new display, collision) where collision is True if any
        pixel that was on got turned off
    """
    mask = sprite_mask(display, sprite, x, y)
    collision = bool(jnp.any(display & mask))
    return display ^ mask, collision
