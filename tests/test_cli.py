import os

os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import pytest

from chip8emu.cli import main, parse_args, run
from chip8emu.cpu import Chip8, InvalidOpcodeError


class FakePlatform:
    def __init__(self, frames_before_quit):
        self.frames = []
        self.limit = frames_before_quit
        self.polls = 0

    def process_input(self, keys):
        self.polls += 1
        return len(self.frames) >= self.limit

    def update(self, pixels):
        self.frames.append(list(pixels))


def test_parse_args_reads_all_three():
    args = parse_args(["10", "1", "game.ch8"])
    assert args.video_scale == 10
    assert args.delay_ms == 1
    assert args.rom == "game.ch8"


@pytest.mark.parametrize("argv", [[], ["10", "1"], ["10", "1", "a", "b"], ["ten", "1", "a"]])
def test_parse_args_usage_error(argv, capsys):
    with pytest.raises(SystemExit) as info:
        parse_args(argv)
    assert info.value.code == 1
    assert "Usage: chip8-emu" in capsys.readouterr().err


def test_run_cycles_until_quit():
    machine = Chip8()
    machine.load_rom(bytes([0x12, 0x00]))
    platform = FakePlatform(3)
    run(machine, platform, -1)
    # The cycle after the quit request still runs, as in the main loop.
    assert len(platform.frames) == 4
    assert machine.pc == 0x200
    assert platform.frames[-1] == machine.video


def test_run_propagates_machine_errors():
    machine = Chip8()
    with pytest.raises(InvalidOpcodeError):
        run(machine, FakePlatform(5), -1)


def test_main_missing_rom(tmp_path, capsys):
    missing = tmp_path / "absent.ch8"
    assert main(["1", "0", str(missing)]) == 1
    assert "Could not open ROM file" in capsys.readouterr().err


def test_main_reports_invalid_opcode(tmp_path, capsys):
    rom = tmp_path / "bad.ch8"
    rom.write_bytes(bytes([0x00, 0x00]))
    assert main(["1", "0", str(rom)]) == 1
    err = capsys.readouterr().err
    assert "Aborting!" in err
    assert "Invalid opcode: 0x0000" in err
    assert "PC=0x202" in err