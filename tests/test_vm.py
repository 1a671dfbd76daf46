"""Tests for the Chip8 virtual machine orchestrator."""

import jax.numpy as jnp
import pytest
from octavm import (
    Chip8, MODERN, ORIGINAL, AddressOutOfRangeError, StackUnderflowError, UnknownOpcodeError,
)
from conftest import run_code


class TestProgramCounter:
    """PC handling across cycles."""

    def test_set_pc(self, vm):
        vm.set_pc(0x200)
        assert vm.pc == 0x200

    def test_one_instr_pc(self, vm):
        run_code(vm, [0x00E0])
        assert vm.pc == 0x202

    def test_few_instr_pc(self, vm):
        code = [0x00E0, 0x00E0]
        run_code(vm, code)
        assert vm.pc == 0x204

        vm.set_pc(0x200)
        vm.run(len(code))
        assert vm.pc == 0x200 + 2 * len(code)
        assert vm.cycles == 4

    def test_load_registers_program(self, vm):
        run_code(vm, [
            0x6222,  # LD V2, 0x22
            0x6015,  # LD V0, 0x15
            0x6FFF,  # LD VF, 0xFF
        ])

        assert vm.get_register(2) == 0x22
        assert vm.get_register(0) == 0x15
        assert vm.get_register(0xF) == 0xFF
        assert vm.pc == 0x206

    def test_satisfied_skip_advances_four(self, vm):
        vm.set_register(2, 0x22)
        run_code(vm, [0x3222])
        assert vm.pc == 0x204

    def test_call_and_return(self, vm):
        run_code(vm, [0x2300])
        assert vm.pc == 0x300
        assert vm.sp == 1

        run_code(vm, [0x00EE], start=0x300)
        assert vm.pc == 0x202
        assert vm.sp == 0


class TestArithmeticScenarios:
    def test_add_with_carry(self, vm):
        vm.set_register(2, 0xFF)
        vm.set_register(3, 0x01)

        run_code(vm, [0x8234])  # ADD V2, V3

        assert vm.get_register(2) == 0x00
        assert vm.get_register(0xF) == 1

    def test_profiles_differ_on_shift(self, vm, original_vm):
        for chip in (vm, original_vm):
            chip.set_register(1, 0x04)
            chip.set_register(2, 0x81)
            run_code(chip, [0x8126])

        assert vm.get_register(1) == 0x02
        assert vm.get_register(0xF) == 0
        assert original_vm.get_register(1) == 0x40
        assert original_vm.get_register(0xF) == 1


class TestDisplay:
    def test_clear_full_screen(self, vm):
        vm.state = vm.state.replace(display=jnp.ones_like(vm.state.display))

        run_code(vm, [0x00E0])

        assert int(jnp.sum(vm.get_frame())) == 0

    def test_draw_font_digit(self, vm):
        vm.set_register(0, 0x8)
        run_code(vm, [0xF029, 0xD115])  # digit 8 at (V1, V1) = (0, 0)

        frame = vm.get_frame()
        assert frame.shape == (64, 32)
        assert int(frame[0, 0]) == 0
        assert int(frame[1, 0]) == 1
        assert int(frame[0, 1]) == 1

    def test_draw_uses_register_values(self, vm):
        vm.set_register(0, 0x8)
        run_code(vm, [0xF029, 0xD005])  # digit 8 at (V0, V0) = (8, 8)

        frame = vm.get_frame()
        assert int(frame[9, 8]) == 1
        assert int(frame[8, 9]) == 1
        assert int(frame[1, 0]) == 0
        assert vm.get_register(0xF) == 0


class TestKeys:
    """Key input and FX0A waiting."""

    def test_wait_for_key(self, vm):
        run_code(vm, [0xF50A])
        assert vm.pc == 0x200
        assert vm.is_waiting_for_key()

        vm.cycle()
        vm.cycle()
        assert vm.pc == 0x200

        vm.key_press(0x9)
        vm.key_press(0x4)
        vm.cycle()

        assert vm.pc == 0x202
        assert vm.get_register(5) == 0x4
        assert not vm.is_waiting_for_key()

    def test_key_press_unpress(self, vm):
        vm.key_press(0xF)
        assert vm.is_key_pressed(0xF)
        vm.key_unpress(0xF)
        assert not vm.is_key_pressed(0xF)

    def test_key_skip(self, vm):
        vm.set_register(1, 0x3)
        vm.key_press(0x3)
        run_code(vm, [0xE19E])
        assert vm.pc == 0x204

    @pytest.mark.parametrize("key", [-1, 16])
    def test_invalid_key(self, vm, key):
        with pytest.raises(ValueError):
            vm.key_press(key)


class TestTimers:
    def test_cycle_timers(self, vm):
        vm.delay_timer = 2
        vm.sound_timer = 1
        assert vm.is_sound_on()

        vm.cycle_timers()
        assert vm.delay_timer == 1
        assert vm.sound_timer == 0
        assert not vm.is_sound_on()

        vm.cycle_timers()
        vm.cycle_timers()
        assert vm.delay_timer == 0
        assert vm.sound_timer == 0

    def test_timers_from_program(self, vm):
        vm.set_register(0, 3)
        run_code(vm, [0xF018, 0xF015])
        assert vm.is_sound_on()
        assert vm.delay_timer == 3


class TestErrors:
    """Failing cycles leave the machine untouched."""

    def test_unknown_opcode(self, vm):
        vm.set_register(1, 0x11)
        vm.load_rom(bytes([0xF1, 0xFF]))
        vm.set_pc(0x200)

        with pytest.raises(UnknownOpcodeError) as excinfo:
            vm.cycle()

        assert excinfo.value.opcode == 0xF1FF
        assert vm.pc == 0x200
        assert vm.get_register(1) == 0x11
        assert vm.cycles == 0

    def test_return_without_call(self, vm):
        vm.load_rom(bytes([0x00, 0xEE]))
        vm.set_pc(0x200)
        with pytest.raises(StackUnderflowError):
            vm.cycle()
        assert vm.pc == 0x200

    def test_fetch_past_end_of_memory(self, vm):
        vm.set_pc(0xFFF)
        with pytest.raises(AddressOutOfRangeError):
            vm.cycle()

    def test_jump_with_offset_past_memory(self, vm):
        vm.set_register(0, 0xFF)
        run_code(vm, [0xBFFF])
        assert vm.pc == 0x10FE
        with pytest.raises(AddressOutOfRangeError):
            vm.cycle()


class TestRomLoading:
    def test_load_rom_returns_end(self, vm):
        end = vm.load_rom(bytes([0x12, 0x34, 0x56, 0x78]), 0x300)
        assert end == 0x304
        assert [int(b) for b in vm.state.memory[0x300:0x304]] == [0x12, 0x34, 0x56, 0x78]

    def test_odd_length_rom_is_padded(self, vm):
        end = vm.load_rom(bytes([0x60, 0x01, 0x70]))
        assert end == 0x204
        assert int(vm.state.memory[0x202]) == 0x70
        assert int(vm.state.memory[0x203]) == 0x00

    def test_rom_too_large(self, vm):
        with pytest.raises(AddressOutOfRangeError):
            vm.load_rom(bytes(4096 - 0x200 + 2))


class TestLifecycle:
    def test_seeded_vms_agree(self, quiet_logger):
        results = []
        for _ in range(2):
            chip = Chip8(MODERN, seed=99, logger=quiet_logger)
            run_code(chip, [0xC0FF, 0xC1FF, 0xC2FF])
            results.append([chip.get_register(r) for r in range(3)])
        assert results[0] == results[1]

    def test_reset(self, original_vm):
        run_code(original_vm, [0x6A12, 0xA456, 0x2300])
        original_vm.key_press(2)

        original_vm.reset()

        assert original_vm.get_register(0xA) == 0
        assert original_vm.index == 0
        assert original_vm.sp == 0
        assert original_vm.pc == 0x200
        assert int(original_vm.state.memory[0x200]) == 0
        assert not original_vm.is_key_pressed(2)
        assert original_vm.state.profile == ORIGINAL

    def test_custom_dimensions(self, quiet_logger):
        chip = Chip8(seed=0, width=128, height=64, logger=quiet_logger)
        assert chip.get_frame().shape == (128, 64)


def test_trace_logging(capsys):
    from octavm.logging import ConsoleLogger
    import sys

    logger = ConsoleLogger(name="trace", log_level="DEBUG", show_timestamps=False, stream=sys.stdout)
    chip = Chip8(seed=0, logger=logger)
    run_code(chip, [0x6222])

    out = capsys.readouterr().out
    assert "[PC:0x0200] LD V2, 0x22" in out
