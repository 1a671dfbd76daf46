"""Main CHIP-8 emulator execution engine."""

from typing import Callable, Dict, Iterable, Optional, Tuple, Union

import jax.numpy as jnp

from octavm.state import EmulatorState
from octavm.decode import DecodedInstruction, decode
from octavm.constants import PROGRAM_START
from octavm.errors import UnknownOpcodeError
from octavm.ram import load_words, read_u16
from octavm.regs import read_delay_timer, read_pc, read_sound_timer, write_pc
from octavm.instructions.system import execute_clear_screen, execute_return
from octavm.instructions.control_flow import (
    execute_jump, execute_call, execute_skip_if_equal_immediate,
    execute_skip_if_not_equal_immediate, execute_skip_if_equal_register,
    execute_skip_if_not_equal_register, execute_jump_with_offset,
    execute_skip_if_key, execute_skip_if_not_key
)
from octavm.instructions.alu import ALU_OPERATIONS
from octavm.instructions.memory import execute_set, execute_add, execute_set_index, execute_random
from octavm.instructions.display import execute_display
from octavm.instructions.misc import (
    execute_get_delay_timer, execute_wait_for_key, execute_set_delay_timer,
    execute_set_sound_timer, execute_add_to_index, execute_font_character,
    execute_bcd_conversion, execute_store_registers, execute_load_registers
)

Handler = Callable[[EmulatorState, DecodedInstruction], EmulatorState]

# Field of the decoded instruction that selects the handler within a class.
# Classes not listed have a single handler.
DISCRIMINANTS = {
    0x0: "nnn",
    0x5: "n",
    0x8: "n",
    0x9: "n",
    0xE: "nn",
    0xF: "nn",
}

OPCODE_TABLE: Dict[Tuple[int, Optional[int]], Handler] = {
    (0x0, 0x0E0): execute_clear_screen,
    (0x0, 0x0EE): execute_return,
    (0x1, None): execute_jump,
    (0x2, None): execute_call,
    (0x3, None): execute_skip_if_equal_immediate,
    (0x4, None): execute_skip_if_not_equal_immediate,
    (0x5, 0x0): execute_skip_if_equal_register,
    (0x6, None): execute_set,
    (0x7, None): execute_add,
    **{(0x8, n): handler for n, handler in ALU_OPERATIONS.items()},
    (0x9, 0x0): execute_skip_if_not_equal_register,
    (0xA, None): execute_set_index,
    (0xB, None): execute_jump_with_offset,
    (0xC, None): execute_random,
    (0xD, None): execute_display,
    (0xE, 0x9E): execute_skip_if_key,
    (0xE, 0xA1): execute_skip_if_not_key,
    (0xF, 0x07): execute_get_delay_timer,
    (0xF, 0x0A): execute_wait_for_key,
    (0xF, 0x15): execute_set_delay_timer,
    (0xF, 0x18): execute_set_sound_timer,
    (0xF, 0x1E): execute_add_to_index,
    (0xF, 0x29): execute_font_character,
    (0xF, 0x33): execute_bcd_conversion,
    (0xF, 0x55): execute_store_registers,
    (0xF, 0x65): execute_load_registers,
}


def dispatch_key(instruction: DecodedInstruction) -> Tuple[int, Optional[int]]:
    """Key into OPCODE_TABLE for a decoded instruction."""
    field_name = DISCRIMINANTS.get(instruction.c)
    discriminant = getattr(instruction, field_name) if field_name else None
    return instruction.c, discriminant


def lookup(instruction: DecodedInstruction) -> Handler:
    """Find the handler for an instruction or raise UnknownOpcodeError."""
    handler = OPCODE_TABLE.get(dispatch_key(instruction))
    if handler is None:
        raise UnknownOpcodeError(instruction.raw)
    return handler


def is_defined(instruction: Union[int, DecodedInstruction]) -> bool:
    """True if the instruction has a handler."""
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode(instruction)
    return dispatch_key(instruction) in OPCODE_TABLE


def execute(state: EmulatorState, instruction: Union[int, DecodedInstruction]) -> EmulatorState:
    """Execute single CHIP-8 instruction."""
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode(instruction)
    return lookup(instruction)(state, instruction)


def fetch(state: EmulatorState) -> Tuple[EmulatorState, int]:
    """Fetch next instruction from memory and advance PC past it."""
    pc = read_pc(state)
    instruction = read_u16(state.memory, pc)
    return write_pc(state, (pc + 2) & 0xFFFF), instruction


def tick_timers(state: EmulatorState) -> EmulatorState:
    """Count both timers down by one, stopping at zero."""
    delay_timer = read_delay_timer(state)
    sound_timer = read_sound_timer(state)
    return state.replace(
        delay_timer=jnp.asarray(max(delay_timer - 1, 0), dtype=jnp.uint8),
        sound_timer=jnp.asarray(max(sound_timer - 1, 0), dtype=jnp.uint8),
    )


def rom_words(rom_data: bytes) -> Iterable[int]:
    """Split ROM bytes into big-endian words, padding an odd tail with 0x00."""
    if len(rom_data) % 2:
        rom_data = bytes(rom_data) + b"\x00"
    for offset in range(0, len(rom_data), 2):
        yield (rom_data[offset] << 8) | rom_data[offset + 1]


def load_rom(state: EmulatorState, rom_data: bytes, start: int = PROGRAM_START) -> Tuple[EmulatorState, int]:
    """Load ROM data into CHIP-8 memory.

    An odd trailing byte is kept and padded with 0x00 to a full word rather
    than dropped.

    Returns:
        Tuple of (new state, first address after the ROM)
    """
    memory, end = load_words(state.memory, start, rom_words(rom_data))
    return state.replace(memory=memory), end

