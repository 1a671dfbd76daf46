"""Test configuration and fixtures for CHIP-8 emulator tests."""

import pytest
import jax.numpy as jnp
from octavm import Chip8, ORIGINAL, MODERN, create_state
from octavm.logging import ConsoleLogger


@pytest.fixture
def fresh_state():
    """Provide a fresh emulator state for each test."""
    return create_state(seed=0)


@pytest.fixture
def modern_state():
    """Provide a fresh state with the modern quirk profile."""
    return create_state(profile=MODERN, seed=0)


@pytest.fixture
def original_state():
    """Provide a fresh state with the original quirk profile."""
    return create_state(profile=ORIGINAL, seed=0)


@pytest.fixture
def quiet_logger():
    return ConsoleLogger(name="test", log_level="CRITICAL")


@pytest.fixture
def vm(quiet_logger):
    """Modern-profile VM with a fixed seed."""
    return Chip8(MODERN, seed=0, logger=quiet_logger)


@pytest.fixture
def original_vm(quiet_logger):
    """Original-profile VM with a fixed seed."""
    return Chip8(ORIGINAL, seed=0, logger=quiet_logger)


def setup_sprite_in_memory(state, address, sprite_bytes):
    """Helper to put sprite data in memory."""
    return state.replace(
        memory=state.memory.at[address:address+len(sprite_bytes)].set(
            jnp.array(sprite_bytes, dtype=jnp.uint8)
        )
    )


def set_registers(state, **registers):
    """Helper to set V registers by name, e.g. set_registers(state, V1=0x42)."""
    V = state.V
    for name, value in registers.items():
        V = V.at[int(name[1:], 16)].set(value)
    return state.replace(V=V)


def run_code(chip, code, start=0x200):
    """Load 16-bit words at ``start`` and execute one cycle per word."""
    rom = b"".join(word.to_bytes(2, "big") for word in code)
    chip.load_rom(rom, start)
    chip.set_pc(start)
    for _ in code:
        chip.cycle()
