"""CHIP-8 stack operations."""

from typing import Tuple


from octavm.errors import StackOverflowError, StackUnderflowError
from octavm.state import StackState


def push(stack: StackState, address: int) -> StackState:
    """Push address onto stack."""
    pointer = int(stack.pointer)
    capacity = stack.data.shape[0]
    if pointer >= capacity:
        raise StackOverflowError(capacity)
    new_data = stack.data.at[pointer].set(address & 0xFFFF)
    return stack.replace(data=new_data, pointer=pointer + 1)


def pop(stack: StackState) -> Tuple[StackState, int]:
    """Pop address from stack."""
    pointer = int(stack.pointer)
    if pointer == 0:
        raise StackUnderflowError()
    new_pointer = pointer - 1
    popped_address = int(stack.data[new_pointer])
    new_data = stack.data.at[new_pointer].set(0)
    return stack.replace(data=new_data, pointer=new_pointer), popped_address

