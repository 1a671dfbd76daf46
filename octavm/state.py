"""CHIP-8 emulator state structures."""

from typing import Optional

import jax
import jax.numpy as jnp
from flax.struct import dataclass, PyTreeNode, field

from octavm.constants import (
    FONT_DATA, FONT_SPRITE_SIZE, FONT_START, MEMORY_SIZE, NUM_KEYS, NUM_REGISTERS,
    PROGRAM_START, SCREEN_HEIGHT, SCREEN_WIDTH, STACK_SIZE,
)
from octavm.framebuffer import create_display
from octavm.profile import MODERN, QuirkProfile
from octavm.ram import load_block
from octavm.rng import new_key


def _zeros(shape, dtype):
    return field(default_factory=lambda: jnp.zeros(shape, dtype=dtype))


@dataclass(frozen=True)
class StackState:
    """Stack state for subroutine calls."""
    data: jnp.ndarray = _zeros(STACK_SIZE, jnp.uint16)
    pointer: int = 0


class EmulatorState(PyTreeNode):
    """Main CHIP-8 emulator state.

    ``V``, ``I``, ``pc``, the two timers and ``stack.pointer`` form the
    register file. ``sprite_addr`` holds the base address of each built-in
    hex digit sprite.
    """
    rng: jax.Array
    memory: jnp.ndarray = _zeros(MEMORY_SIZE, jnp.uint8)
    pc: jnp.ndarray = field(default_factory=lambda: jnp.asarray(PROGRAM_START, dtype=jnp.uint16))
    display: jnp.ndarray = _zeros((SCREEN_WIDTH, SCREEN_HEIGHT), jnp.bool_)
    stack: StackState = field(default_factory=StackState)
    delay_timer: jnp.ndarray = _zeros((), jnp.uint8)
    sound_timer: jnp.ndarray = _zeros((), jnp.uint8)
    keypad: jnp.ndarray = _zeros(NUM_KEYS, jnp.bool_)
    V: jnp.ndarray = _zeros(NUM_REGISTERS, jnp.uint8)
    I: jnp.ndarray = _zeros((), jnp.uint16)
    sprite_addr: jnp.ndarray = _zeros(16, jnp.uint16)
    profile: QuirkProfile = field(pytree_node=False, default=MODERN)


def create_state(
    profile: QuirkProfile = MODERN,
    seed: Optional[int] = None,
    memory_size: int = MEMORY_SIZE,
    width: int = SCREEN_WIDTH,
    height: int = SCREEN_HEIGHT,
) -> EmulatorState:
    """Create initial emulator state with the digit sprites loaded.

    Args:
        profile: Quirk profile for ambiguous instructions
        seed: Seed for the CXNN random source, OS entropy when None
        memory_size: Size of the address space in bytes
        width: Display width in pixels
        height: Display height in pixels
    """
    memory = jnp.zeros(memory_size, dtype=jnp.uint8)
    addresses = []
    address = FONT_START
    for digit in range(16):
        addresses.append(address)
        sprite = FONT_DATA[digit * FONT_SPRITE_SIZE:(digit + 1) * FONT_SPRITE_SIZE]
        memory, address = load_block(memory, address, sprite)

    return EmulatorState(
        rng=new_key(seed),
        memory=memory,
        display=create_display(width, height),
        sprite_addr=jnp.array(addresses, dtype=jnp.uint16),
        profile=profile,
    )
