"""Register file accessors.

Readers return plain Python ints. Writers take values already reduced to the
register width and reject anything else; handlers wrap their arithmetic
before writing.
"""

import jax.numpy as jnp

from octavm.constants import NUM_REGISTERS
from octavm.state import EmulatorState


def _check_width(name: str, value: int, bits: int) -> int:
    value = int(value)
    if not 0 <= value < (1 << bits):
        raise ValueError(f"{name} must fit in {bits} bits, got {value}")
    return value


def _check_register_index(x: int) -> int:
    if not 0 <= x < NUM_REGISTERS:
        raise ValueError(f"Register index must be in 0..{NUM_REGISTERS - 1}, got {x}")
    return x


def read_v(state: EmulatorState, x: int) -> int:
    return int(state.V[_check_register_index(x)])


def write_v(state: EmulatorState, x: int, value: int) -> EmulatorState:
    value = _check_width(f"V{x:X}", value, 8)
    return state.replace(V=state.V.at[_check_register_index(x)].set(value))


def read_index(state: EmulatorState) -> int:
    return int(state.I)


def write_index(state: EmulatorState, value: int) -> EmulatorState:
    value = _check_width("I", value, 16)
    return state.replace(I=jnp.asarray(value, dtype=jnp.uint16))


def read_pc(state: EmulatorState) -> int:
    return int(state.pc)


def write_pc(state: EmulatorState, value: int) -> EmulatorState:
    value = _check_width("PC", value, 16)
    return state.replace(pc=jnp.asarray(value, dtype=jnp.uint16))


def read_sp(state: EmulatorState) -> int:
    return int(state.stack.pointer)


def read_delay_timer(state: EmulatorState) -> int:
    return int(state.delay_timer)


def write_delay_timer(state: EmulatorState, value: int) -> EmulatorState:
    value = _check_width("DT", value, 8)
    return state.replace(delay_timer=jnp.asarray(value, dtype=jnp.uint8))


def read_sound_timer(state: EmulatorState) -> int:
    return int(state.sound_timer)


def write_sound_timer(state: EmulatorState, value: int) -> EmulatorState:
    value = _check_width("ST", value, 8)
    return state.replace(sound_timer=jnp.asarray(value, dtype=jnp.uint8))


def write_flag(state: EmulatorState, value: int) -> EmulatorState:
    """Set VF."""
    return write_v(state, 0xF, value)
