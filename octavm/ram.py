"""CHIP-8 memory operations.

Memory is a flat ``uint8`` jax array. Every helper checks the whole access
against the memory size and raises ``AddressOutOfRangeError`` before anything
is written, so a failed write never leaves memory partially updated.
"""

from typing import Iterable, Tuple

import jax.numpy as jnp
import numpy as np

from octavm.errors import AddressOutOfRangeError


def check_range(memory: jnp.ndarray, address: int, length: int = 1) -> None:
    """Raise if ``[address, address + length)`` is not inside memory."""
    size = memory.shape[0]
    if address < 0 or address >= size:
        raise AddressOutOfRangeError(address, size)
    if length > 0 and address + length > size:
        raise AddressOutOfRangeError(address + length - 1, size)


def read_u8(memory: jnp.ndarray, address: int) -> int:
    """Read one byte."""
    check_range(memory, address)
    return int(memory[address])


def write_u8(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    """Write one byte."""
    check_range(memory, address)
    return memory.at[address].set(value & 0xFF)


def read_u16(memory: jnp.ndarray, address: int) -> int:
    """Read a big-endian 16-bit word."""
    check_range(memory, address, 2)
    high, low = np.asarray(memory[address:address + 2]).tolist()
    return (high << 8) | low


def write_u16(memory: jnp.ndarray, address: int, value: int) -> jnp.ndarray:
    """Write a big-endian 16-bit word."""
    check_range(memory, address, 2)
    high, low = (value >> 8) & 0xFF, value & 0xFF
    return memory.at[address:address + 2].set(jnp.array([high, low], dtype=jnp.uint8))


def read_block(memory: jnp.ndarray, address: int, length: int) -> jnp.ndarray:
    """Read ``length`` bytes starting at ``address``."""
    if length == 0:
        return jnp.zeros(0, dtype=jnp.uint8)
    check_range(memory, address, length)
    return memory[address:address + length]


def load_block(memory: jnp.ndarray, address: int, data: Iterable[int]) -> Tuple[jnp.ndarray, int]:
    """Copy bytes into memory.

    Returns:
        Tuple of (new memory, first address after the copied block)
    """
    data = [int(b) & 0xFF for b in data]
    if not data:
        return memory, address
    check_range(memory, address, len(data))
    new_memory = memory.at[address:address + len(data)].set(jnp.array(data, dtype=jnp.uint8))
    return new_memory, address + len(data)


def load_words(memory: jnp.ndarray, address: int, words: Iterable[int]) -> Tuple[jnp.ndarray, int]:
    """Copy 16-bit words into memory, big-endian."""
    data = []
    for word in words:
        data.extend(((int(word) >> 8) & 0xFF, int(word) & 0xFF))
    return load_block(memory, address, data)
