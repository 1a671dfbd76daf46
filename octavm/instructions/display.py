"""CHIP-8 display operations."""

from octavm.state import EmulatorState
from octavm.decode import DecodedInstruction
from octavm.constants import FLAG_REGISTER
from octavm.framebuffer import draw_sprite
from octavm.ram import read_block
from octavm.regs import read_index, read_v, write_v


def execute_display(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """DXYN - Draw N-byte sprite from memory[I] at (VX, VY), VF = collision."""
    sprite = read_block(state.memory, read_index(state), instruction.n)
    display, collision = draw_sprite(
        state.display, sprite, read_v(state, instruction.x), read_v(state, instruction.y)
    )
    return write_v(state.replace(display=display), FLAG_REGISTER, int(collision))
