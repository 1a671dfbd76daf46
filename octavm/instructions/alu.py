"""CHIP-8 ALU operations (8xxx).

Each ``alu_*`` function maps ``(vx, vy)`` to ``(result, flag)``. A flag of
``None`` leaves VF untouched; otherwise VF is written after VX.
"""

from typing import Optional, Tuple

from octavm.state import EmulatorState
from octavm.decode import DecodedInstruction
from octavm.constants import FLAG_REGISTER
from octavm.regs import read_v, write_v

AluResult = Tuple[int, Optional[int]]


def alu_set(vx: int, vy: int) -> AluResult:
    """8XY0 - Set: VX = VY."""
    return vy, None


def alu_or(vx: int, vy: int) -> AluResult:
    """8XY1 - Binary OR: VX |= VY."""
    return vx | vy, None


def alu_and(vx: int, vy: int) -> AluResult:
    """8XY2 - Binary AND: VX &= VY."""
    return vx & vy, None


def alu_xor(vx: int, vy: int) -> AluResult:
    """8XY3 - Logical XOR: VX ^= VY."""
    return vx ^ vy, None


def alu_add(vx: int, vy: int) -> AluResult:
    """8XY4 - Add: VX += VY, set carry flag."""
    result = vx + vy
    return result & 0xFF, int(result > 0xFF)


def alu_sub_xy(vx: int, vy: int) -> AluResult:
    """8XY5 - Subtract: VX -= VY, VF = NOT borrow."""
    return (vx - vy) & 0xFF, int(vx >= vy)


def alu_shift_right(vx: int, vy: Optional[int]) -> AluResult:
    """8XY6 - Shift right: VX >>= 1, VF = bit shifted out."""
    return vx >> 1, vx & 0x01


def alu_sub_yx(vx: int, vy: int) -> AluResult:
    """8XY7 - Subtract: VX = VY - VX, VF = NOT borrow."""
    return (vy - vx) & 0xFF, int(vy >= vx)


def alu_shift_left(vx: int, vy: Optional[int]) -> AluResult:
    """8XYE - Shift left: VX <<= 1, VF = bit shifted out."""
    return (vx << 1) & 0xFF, (vx & 0x80) >> 7


def make_alu_instruction(operation, copies_vy=None):
    """Wrap an ALU function as an instruction handler.

    Args:
        operation: ``alu_*`` function
        copies_vy: Predicate on the quirk profile for the shift instructions;
            when it holds VY is copied into VX first, otherwise VY is not read
    """
    def alu_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if copies_vy is None:
            vx, vy = read_v(state, instruction.x), read_v(state, instruction.y)
        elif copies_vy(state.profile):
            vx = vy = read_v(state, instruction.y)
        else:
            vx, vy = read_v(state, instruction.x), None

        result, flag = operation(vx, vy)
        state = write_v(state, instruction.x, result)
        if flag is not None:
            state = write_v(state, FLAG_REGISTER, flag)
        return state
    return alu_instruction


ALU_OPERATIONS = {
    0x0: make_alu_instruction(alu_set),
    0x1: make_alu_instruction(alu_or),
    0x2: make_alu_instruction(alu_and),
    0x3: make_alu_instruction(alu_xor),
    0x4: make_alu_instruction(alu_add),
    0x5: make_alu_instruction(alu_sub_xy),
    0x6: make_alu_instruction(alu_shift_right, lambda profile: profile.shr_copies_vy),
    0x7: make_alu_instruction(alu_sub_yx),
    0xE: make_alu_instruction(alu_shift_left, lambda profile: profile.shl_copies_vy),
}
