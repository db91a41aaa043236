"""Command-line entry point that runs a ROM in a window."""

from __future__ import annotations

import argparse
import sys
import time
from collections.abc import Sequence
from typing import NoReturn

from .cpu import VIDEO_HEIGHT, VIDEO_WIDTH, Chip8, Chip8Error
from .rom import RomError, read_rom

USAGE = "Usage: chip8-emu <video_scale> <delay_ms> <rom_file_bin>"


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        sys.stderr.write(USAGE + "\n")
        raise SystemExit(1)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse the scale, cycle delay and ROM path from the command line."""
    parser = _Parser(prog="chip8-emu", usage=USAGE, add_help=False)
    parser.add_argument("video_scale", type=int)
    parser.add_argument("delay_ms", type=int)
    parser.add_argument("rom")
    return parser.parse_args(argv)


def _millis() -> float:
    return time.monotonic() * 1000.0


def run(machine: Chip8, platform, cycle_delay_ms: int) -> None:
    """Run the machine, one cycle per delay period, until the user quits."""
    last_cycle = _millis()
    quit_requested = False
    while not quit_requested:
        quit_requested = platform.process_input(machine.keys)
        now = _millis()
        if now - last_cycle > cycle_delay_ms:
            last_cycle = now
            machine.cycle()
            platform.update(machine.video)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the emulator; return the process exit status."""
    args = parse_args(argv)
    try:
        rom = read_rom(args.rom)
    except RomError as exc:
        print(exc, file=sys.stderr)
        return 1

    machine = Chip8()
    machine.load_fonts()
    machine.load_rom(rom)

    from .platform import Platform

    with Platform(
        "CHIP-8 Emulator",
        VIDEO_WIDTH * args.video_scale,
        VIDEO_HEIGHT * args.video_scale,
        VIDEO_WIDTH,
        VIDEO_HEIGHT,
    ) as platform:
        try:
            run(machine, platform, args.delay_ms)
        except Chip8Error as exc:
            print(f"Aborting!\n{exc}", file=sys.stderr)
            print(machine.state_text(), file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())