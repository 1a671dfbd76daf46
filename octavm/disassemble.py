"""CHIP-8 disassembler using conventional assembler mnemonics."""

from typing import Iterator, Tuple, Union

from octavm.constants import PROGRAM_START
from octavm.decode import DecodedInstruction, decode
from octavm.emulator import dispatch_key, rom_words

# Format strings receive the decoded instruction's fields by name.
MNEMONICS = {
    (0x0, 0x0E0): "CLS",
    (0x0, 0x0EE): "RET",
    (0x1, None): "JP {nnn:#x}",
    (0x2, None): "CALL {nnn:#x}",
    (0x3, None): "SE V{x:X}, {nn:#x}",
    (0x4, None): "SNE V{x:X}, {nn:#x}",
    (0x5, 0x0): "SE V{x:X}, V{y:X}",
    (0x6, None): "LD V{x:X}, {nn:#x}",
    (0x7, None): "ADD V{x:X}, {nn:#x}",
    (0x8, 0x0): "LD V{x:X}, V{y:X}",
    (0x8, 0x1): "OR V{x:X}, V{y:X}",
    (0x8, 0x2): "AND V{x:X}, V{y:X}",
    (0x8, 0x3): "XOR V{x:X}, V{y:X}",
    (0x8, 0x4): "ADD V{x:X}, V{y:X}",
    (0x8, 0x5): "SUB V{x:X}, V{y:X}",
    (0x8, 0x6): "SHR V{x:X}, V{y:X}",
    (0x8, 0x7): "SUBN V{x:X}, V{y:X}",
    (0x8, 0xE): "SHL V{x:X}, V{y:X}",
    (0x9, 0x0): "SNE V{x:X}, V{y:X}",
    (0xA, None): "LD I, {nnn:#x}",
    (0xB, None): "JP V0, {nnn:#x}",
    (0xC, None): "RND V{x:X}, {nn:#x}",
    (0xD, None): "DRW V{x:X}, V{y:X}, {n:#x}",
    (0xE, 0x9E): "SKP V{x:X}",
    (0xE, 0xA1): "SKNP V{x:X}",
    (0xF, 0x07): "LD V{x:X}, DT",
    (0xF, 0x0A): "LD V{x:X}, K",
    (0xF, 0x15): "LD DT, V{x:X}",
    (0xF, 0x18): "LD ST, V{x:X}",
    (0xF, 0x1E): "ADD I, V{x:X}",
    (0xF, 0x29): "LD F, V{x:X}",
    (0xF, 0x33): "LD B, V{x:X}",
    (0xF, 0x55): "LD [I], V{x:X}",
    (0xF, 0x65): "LD V{x:X}, [I]",
}


def disassemble(instruction: Union[int, DecodedInstruction]) -> str:
    """Mnemonic for one instruction; undefined words render as ``DW 0xNNNN``."""
    if not isinstance(instruction, DecodedInstruction):
        instruction = decode(instruction)
    template = MNEMONICS.get(dispatch_key(instruction))
    if template is None:
        return f"DW 0x{instruction.raw:04X}"
    return template.format(
        x=instruction.x, y=instruction.y, n=instruction.n,
        nn=instruction.nn, nnn=instruction.nnn,
    )


def disassemble_rom(rom_data: bytes, start: int = PROGRAM_START) -> Iterator[Tuple[int, int, str]]:
    """Yield ``(address, word, mnemonic)`` for every word of a ROM image."""
    for offset, word in enumerate(rom_words(rom_data)):
        yield start + 2 * offset, word, disassemble(word)
