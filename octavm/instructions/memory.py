"""CHIP-8 memory and register operations."""

from octavm.state import EmulatorState
from octavm.decode import DecodedInstruction
from octavm.regs import read_v, write_index, write_v
from octavm.rng import random_byte


def execute_set(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """6XNN - Set VX = NN."""
    return write_v(state, instruction.x, instruction.nn)


def execute_add(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """7XNN - Add NN to VX, no carry flag."""
    return write_v(state, instruction.x, (read_v(state, instruction.x) + instruction.nn) & 0xFF)


def execute_set_index(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """ANNN - Set I = NNN."""
    return write_index(state, instruction.nnn)


def execute_random(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """CXNN - Set VX = random & NN."""
    key, random_value = random_byte(state.rng)
    return write_v(state.replace(rng=key), instruction.x, random_value & instruction.nn)
