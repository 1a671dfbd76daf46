"""CHIP-8 machine constants."""

MEMORY_SIZE = 4096
PROGRAM_START = 0x200
FONT_START = 0x000

SCREEN_WIDTH = 64
SCREEN_HEIGHT = 32

NUM_REGISTERS = 16
NUM_KEYS = 16
STACK_SIZE = 16

FLAG_REGISTER = 0xF
SPRITE_WIDTH = 8
FONT_SPRITE_SIZE = 5

BYTE_MASK = 0xFF
WORD_MASK = 0xFFFF
ADDRESS_MASK = 0xFFF

# 4x5 hex digit sprites, 0 through F
FONT_DATA = (
    0x60, 0x90, 0x90, 0x90, 0x60,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xE0, 0x10, 0xE0, 0x10, 0xE0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xE0, 0x10, 0xE0,  # 5
    0x70, 0x80, 0xE0, 0x90, 0xE0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0x60, 0x90, 0x60, 0x90, 0x60,  # 8
    0x60, 0x90, 0x70, 0x10, 0xE0,  # 9
    0x60, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0x70, 0x80, 0x80, 0x80, 0x70,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
)
