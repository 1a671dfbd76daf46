"""CHIP-8 system instructions (0x0xxx)."""

from octavm.state import EmulatorState
from octavm.decode import DecodedInstruction
from octavm.framebuffer import clear
from octavm.regs import write_pc
from octavm.stack import pop


def execute_clear_screen(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00E0 - Clear display."""
    return state.replace(display=clear(state.display))


def execute_return(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """00EE - Return from subroutine."""
    stack, address = pop(state.stack)
    return write_pc(state.replace(stack=stack), address)
