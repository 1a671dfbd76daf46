"""CHIP-8 miscellaneous instructions (Fxxx)."""

import jax.numpy as jnp

from octavm.state import EmulatorState
from octavm.decode import DecodedInstruction
from octavm.constants import WORD_MASK
from octavm.ram import load_block, read_block
from octavm.regs import (
    read_delay_timer, read_index, read_pc, read_v, write_delay_timer, write_index,
    write_pc, write_sound_timer, write_v,
)


def execute_get_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX07 - Set VX to delay timer value."""
    return write_v(state, instruction.x, read_delay_timer(state))


def first_pressed_key(state: EmulatorState):
    """Lowest-numbered pressed key, or None."""
    if not bool(jnp.any(state.keypad)):
        return None
    return int(jnp.argmax(state.keypad))


def execute_wait_for_key(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX0A - Wait for key press.

    With no key down the PC is rewound so the same instruction runs again on
    the next cycle.
    """
    key = first_pressed_key(state)
    if key is None:
        return write_pc(state, (read_pc(state) - 2) & WORD_MASK)
    return write_v(state, instruction.x, key)


def execute_set_delay_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX15 - Set delay timer to VX."""
    return write_delay_timer(state, read_v(state, instruction.x))


def execute_set_sound_timer(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX18 - Set sound timer to VX."""
    return write_sound_timer(state, read_v(state, instruction.x))


def execute_add_to_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX1E - Add VX to I register."""
    return write_index(state, (read_index(state) + read_v(state, instruction.x)) & WORD_MASK)


def execute_font_character(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX29 - Set I to location of sprite for digit VX."""
    digit = read_v(state, instruction.x) & 0xF
    return write_index(state, int(state.sprite_addr[digit]))


def execute_bcd_conversion(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX33 - Store BCD representation of VX at I, I+1, I+2."""
    value = read_v(state, instruction.x)
    digits = (value // 100, (value // 10) % 10, value % 10)
    memory, _ = load_block(state.memory, read_index(state), digits)
    return state.replace(memory=memory)


def _advance_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    return write_index(state, (read_index(state) + instruction.x + 1) & WORD_MASK)


def execute_store_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX55 - Store V0 through VX in memory starting at I."""
    count = instruction.x + 1
    memory, _ = load_block(state.memory, read_index(state), state.V[:count].tolist())
    state = state.replace(memory=memory)

    if state.profile.store_dump_advances_i:
        state = _advance_index(state, instruction)
    return state


def execute_load_registers(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """FX65 - Load V0 through VX from memory starting at I."""
    count = instruction.x + 1
    address = read_index(state)
    values = read_block(state.memory, address, count)
    state = state.replace(V=state.V.at[:count].set(values))

    if state.profile.store_load_advances_i:
        state = _advance_index(state, instruction)
    return state
