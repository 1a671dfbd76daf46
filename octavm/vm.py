"""CHIP-8 virtual machine.

``Chip8`` owns one ``EmulatorState`` and replaces it after every successful
operation. Handlers are pure, so an instruction that raises leaves the machine
exactly as it was before the failing ``cycle()``.
"""

from typing import Optional

import jax.numpy as jnp

from octavm.constants import MEMORY_SIZE, NUM_KEYS, PROGRAM_START, SCREEN_HEIGHT, SCREEN_WIDTH
from octavm.decode import decode
from octavm.disassemble import disassemble
from octavm.emulator import execute, fetch, load_rom, tick_timers
from octavm.errors import AddressOutOfRangeError
from octavm.logging import ConsoleLogger, get_logger
from octavm.profile import MODERN, QuirkProfile
from octavm.state import EmulatorState, create_state
from octavm import regs


class Chip8:
    """CHIP-8 interpreter driven one instruction at a time by its host.

    Args:
        profile: Quirk profile for ambiguous instructions
        seed: Seed for CXNN; OS entropy when None
        memory_size: Address space size in bytes
        width: Display width in pixels
        height: Display height in pixels
        logger: Logger for instruction traces and lifecycle messages
    """

    def __init__(
        self,
        profile: QuirkProfile = MODERN,
        seed: Optional[int] = None,
        *,
        memory_size: int = MEMORY_SIZE,
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        logger: Optional[ConsoleLogger] = None,
    ):
        self.profile = profile
        self.seed = seed
        self.memory_size = memory_size
        self.width = width
        self.height = height
        self.logger = logger if logger is not None else get_logger()
        self.state: EmulatorState = create_state(
            profile=profile, seed=seed, memory_size=memory_size, width=width, height=height
        )
        self.cycles = 0

    def reset(self):
        """Return to power-on state, keeping profile, seed and dimensions."""
        self.state = create_state(
            profile=self.profile, seed=self.seed, memory_size=self.memory_size,
            width=self.width, height=self.height,
        )
        self.cycles = 0
        self.logger.info("Reset")

    # Keypad

    @staticmethod
    def _check_key(key: int) -> int:
        if not 0 <= key < NUM_KEYS:
            raise ValueError(f"Key must be in 0..{NUM_KEYS - 1}, got {key}")
        return key

    def key_press(self, key: int):
        self.state = self.state.replace(keypad=self.state.keypad.at[self._check_key(key)].set(True))

    def key_unpress(self, key: int):
        self.state = self.state.replace(keypad=self.state.keypad.at[self._check_key(key)].set(False))

    def is_key_pressed(self, key: int) -> bool:
        return bool(self.state.keypad[self._check_key(key)])

    # Register file

    def get_register(self, x: int) -> int:
        return regs.read_v(self.state, x)

    def set_register(self, x: int, value: int):
        self.state = regs.write_v(self.state, x, value)

    @property
    def pc(self) -> int:
        return regs.read_pc(self.state)

    def set_pc(self, address: int):
        self.state = regs.write_pc(self.state, address)

    @property
    def index(self) -> int:
        return regs.read_index(self.state)

    @index.setter
    def index(self, value: int):
        self.state = regs.write_index(self.state, value)

    @property
    def delay_timer(self) -> int:
        return regs.read_delay_timer(self.state)

    @delay_timer.setter
    def delay_timer(self, value: int):
        self.state = regs.write_delay_timer(self.state, value)

    @property
    def sound_timer(self) -> int:
        return regs.read_sound_timer(self.state)

    @sound_timer.setter
    def sound_timer(self, value: int):
        self.state = regs.write_sound_timer(self.state, value)

    @property
    def sp(self) -> int:
        return regs.read_sp(self.state)

    # Program loading and execution

    def load_rom(self, rom_data: bytes, start_addr: int = PROGRAM_START) -> int:
        """Copy a ROM image into memory as big-endian words.

        Returns:
            First address after the ROM
        """
        self.state, end = load_rom(self.state, rom_data, start_addr)
        self.logger.info(f"Loaded {len(rom_data)} bytes at 0x{start_addr:03X}-0x{end - 1:03X}")
        return end

    def cycle(self):
        """Fetch, decode and execute one instruction."""
        state, instruction = fetch(self.state)
        decoded = decode(instruction)
        if self.logger.is_enabled_for("DEBUG"):
            self.logger.debug(f"[PC:0x{self.pc:04x}] {disassemble(decoded)}")
        self.state = execute(state, decoded)
        self.cycles += 1

    def run(self, cycles: int):
        """Execute ``cycles`` instructions."""
        for _ in range(cycles):
            self.cycle()

    def is_waiting_for_key(self) -> bool:
        """True when PC sits on an FX0A that no pressed key satisfies yet."""
        try:
            _, instruction = fetch(self.state)
        except AddressOutOfRangeError:
            return False
        decoded = decode(instruction)
        return decoded.c == 0xF and decoded.nn == 0x0A and not bool(jnp.any(self.state.keypad))

    def cycle_timers(self):
        """Count the delay and sound timers down; call at 60 Hz."""
        self.state = tick_timers(self.state)
        if self.logger.is_enabled_for("DEBUG"):
            self.logger.debug(f"cycle_timers, dt={self.delay_timer}, st={self.sound_timer}")

    def is_sound_on(self) -> bool:
        return self.sound_timer > 0

    def get_frame(self) -> jnp.ndarray:
        """Current display as an immutable ``bool[width, height]`` array."""
        return self.state.display
