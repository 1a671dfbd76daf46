"""CHIP-8 control flow instructions."""

from octavm.state import EmulatorState
from octavm.decode import DecodedInstruction
from octavm.constants import WORD_MASK
from octavm.regs import read_pc, read_v, write_pc
from octavm.stack import push


def execute_jump(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """1NNN - Jump to address NNN."""
    return write_pc(state, instruction.nnn)


def execute_call(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """2NNN - Call subroutine at NNN."""
    state = state.replace(stack=push(state.stack, read_pc(state)))
    return execute_jump(state, instruction)


def skip_next(state: EmulatorState) -> EmulatorState:
    """Step over the following instruction."""
    return write_pc(state, (read_pc(state) + 2) & WORD_MASK)


def make_skip_instruction(condition_fn):
    """Factory for skip instructions."""
    def skip_instruction(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
        if condition_fn(state, instruction):
            return skip_next(state)
        return state
    return skip_instruction


execute_skip_if_equal_immediate = make_skip_instruction(
    lambda state, inst: read_v(state, inst.x) == inst.nn
)

execute_skip_if_not_equal_immediate = make_skip_instruction(
    lambda state, inst: read_v(state, inst.x) != inst.nn
)

execute_skip_if_equal_register = make_skip_instruction(
    lambda state, inst: read_v(state, inst.x) == read_v(state, inst.y)
)

execute_skip_if_not_equal_register = make_skip_instruction(
    lambda state, inst: read_v(state, inst.x) != read_v(state, inst.y)
)


def execute_jump_with_offset(state: EmulatorState, instruction: DecodedInstruction) -> EmulatorState:
    """BNNN - Jump to address NNN + V0."""
    return write_pc(state, (instruction.nnn + read_v(state, 0)) & WORD_MASK)


def is_key_pressed(state: EmulatorState, key: int) -> bool:
    return bool(state.keypad[key & 0xF])


execute_skip_if_key = make_skip_instruction(
    lambda state, inst: is_key_pressed(state, read_v(state, inst.x))
)

execute_skip_if_not_key = make_skip_instruction(
    lambda state, inst: not is_key_pressed(state, read_v(state, inst.x))
)
