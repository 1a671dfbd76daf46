"""Run a CHIP-8 ROM headlessly from the command line."""

import argparse
import sys
import time
from typing import List, Optional

from octavm.constants import PROGRAM_START
from octavm.errors import OctavmError
from octavm.logging import ConsoleLogger, get_logger, progress_bar
from octavm.profile import PROFILES, get_profile
from octavm.rendering import COLOR_SCHEMES, frame_to_text, save_frame
from octavm.vm import Chip8

FRAME_RATE = 60


def _int_auto(value: str) -> int:
    """Parse decimal or 0x-prefixed integers."""
    return int(value, 0)


def _hex_key(value: str) -> int:
    key = int(value, 16)
    if not 0 <= key <= 0xF:
        raise argparse.ArgumentTypeError(f"key must be a hex digit 0-F, got {value!r}")
    return key


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="octavm",
        description="Run a CHIP-8 ROM and report the final display",
    )
    parser.add_argument("rom", type=str, help="ROM file name")
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default="modern",
        help="Quirk profile for ambiguous instructions",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for the RND instruction")
    parser.add_argument(
        "--start",
        type=_int_auto,
        default=PROGRAM_START,
        help="Load and start address (default: 0x200)",
    )
    parser.add_argument("--frames", type=int, default=600, help="Number of 60 Hz frames to run")
    parser.add_argument("--ipf", type=int, default=10, help="Instructions executed per frame")
    parser.add_argument(
        "--fast",
        action="store_true",
        help="Run emulation as fast as possible instead of pacing to 60 frames per second",
    )
    parser.add_argument(
        "--hold-key",
        type=_hex_key,
        action="append",
        default=[],
        help="Hex key held down for the whole run (repeatable)",
    )
    parser.add_argument("--screenshot", type=str, default=None, help="Save the final frame to this PNG file")
    parser.add_argument("--scale", type=int, default=8, help="Screenshot upscaling factor")
    parser.add_argument(
        "--color-scheme",
        choices=sorted(COLOR_SCHEMES),
        default="classic",
        help="Screenshot color scheme",
    )
    parser.add_argument("--ascii", action="store_true", help="Print the final frame as text")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Console log level (default: $OCTAVM_LOG_LEVEL or WARNING)",
    )
    return parser


def run(chip: Chip8, frames: int, ipf: int, fast: bool = True, show_progress: bool = True) -> None:
    """Tick timers once per frame, then execute ``ipf`` instructions."""
    frame_interval = 1.0 / FRAME_RATE
    with progress_bar(frames, disable=not show_progress) as bar:
        for _ in range(frames):
            frame_start = time.perf_counter()
            chip.cycle_timers()
            chip.run(ipf)
            bar.update(1)
            if not fast:
                remaining = frame_interval - (time.perf_counter() - frame_start)
                if remaining > 0:
                    time.sleep(remaining)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logger = ConsoleLogger(log_level=args.log_level) if args.log_level else get_logger()

    try:
        with open(args.rom, "rb") as f:
            rom_data = f.read()
    except OSError as e:
        parser.error(f"cannot read ROM {args.rom!r}: {e.strerror}")

    chip = Chip8(get_profile(args.profile), seed=args.seed, logger=logger)
    for key in args.hold_key:
        chip.key_press(key)

    start = time.time()
    status = 0
    try:
        chip.load_rom(rom_data, args.start)
        chip.set_pc(args.start)
        run(chip, args.frames, args.ipf, fast=args.fast, show_progress=sys.stderr.isatty())
    except OctavmError as e:
        logger.error(f"Halted at PC=0x{chip.pc:04X} after {chip.cycles} cycles: {e}")
        status = 1

    elapsed = time.time() - start
    print(f"Cycles: {chip.cycles}", file=sys.stderr)
    print(f"Execution time: {elapsed * 1000:.0f} ms", file=sys.stderr)
    if elapsed > 0:
        print(f"Cycles per second: {chip.cycles / elapsed:.0f}", file=sys.stderr)

    if args.ascii:
        print(frame_to_text(chip.get_frame()))
    if args.screenshot:
        save_frame(chip.get_frame(), args.screenshot, scale=args.scale, color_scheme=args.color_scheme)
        logger.info(f"Saved frame to {args.screenshot}")

    return status


if __name__ == "__main__":
    sys.exit(main())
