"""CHIP-8 interpreter package."""

from octavm.state import EmulatorState, StackState, create_state
from octavm.emulator import execute, fetch, load_rom, tick_timers, OPCODE_TABLE
from octavm.decode import DecodedInstruction, decode
from octavm.profile import QuirkProfile, ORIGINAL, MODERN, get_profile
from octavm.errors import (
    OctavmError, UnknownOpcodeError, AddressOutOfRangeError,
    StackOverflowError, StackUnderflowError,
)
from octavm.constants import PROGRAM_START, FONT_START, SCREEN_WIDTH, SCREEN_HEIGHT, MEMORY_SIZE
from octavm.disassemble import disassemble
from octavm.vm import Chip8

__all__ = [
    "Chip8",
    "EmulatorState",
    "StackState",
    "create_state",
    "fetch",
    "execute",
    "tick_timers",
    "load_rom",
    "OPCODE_TABLE",
    "DecodedInstruction",
    "decode",
    "disassemble",
    "QuirkProfile",
    "ORIGINAL",
    "MODERN",
    "get_profile",
    "OctavmError",
    "UnknownOpcodeError",
    "AddressOutOfRangeError",
    "StackOverflowError",
    "StackUnderflowError",
    "PROGRAM_START",
    "FONT_START",
    "SCREEN_WIDTH",
    "SCREEN_HEIGHT",
    "MEMORY_SIZE",
]
