"""CHIP-8 instruction handlers.

Every handler takes ``(state, instruction)`` and returns the new state. The
program counter has already been advanced past the instruction.
"""
