import pytest

from chip8emu.rom import MAX_ROM_SIZE, ROM_OFFSET, RomError, read_rom


def test_read_rom_returns_file_contents(tmp_path):
    payload = bytes([0x00, 0xE0, 0x12, 0x00])
    rom = tmp_path / "game.ch8"
    rom.write_bytes(payload)
    assert read_rom(rom) == payload


def test_read_rom_accepts_string_path(tmp_path):
    payload = b"\x6a\x42"
    rom = tmp_path / "prog.ch8"
    rom.write_bytes(payload)
    assert read_rom(str(rom)) == payload


def test_read_rom_accepts_exactly_max_size(tmp_path):
    payload = bytes(range(256)) * (MAX_ROM_SIZE // 256)
    rom = tmp_path / "full.ch8"
    rom.write_bytes(payload)
    assert len(read_rom(rom)) == MAX_ROM_SIZE


def test_read_rom_rejects_oversized_image(tmp_path):
    rom = tmp_path / "big.ch8"
    rom.write_bytes(bytes(MAX_ROM_SIZE + 1))
    with pytest.raises(RomError, match="exceeds max size of 0xd00"):
        read_rom(rom)


def test_read_rom_missing_file(tmp_path):
    missing = tmp_path / "nope.ch8"
    with pytest.raises(RomError, match="Could not open ROM file"):
        read_rom(missing)


def test_largest_rom_fills_memory_behind_offset(tmp_path):
    rom = tmp_path / "largest.ch8"
    rom.write_bytes(bytes(0xD00))
    data = read_rom(rom)
    assert ROM_OFFSET + len(data) == 4096


def test_read_rom_empty_file(tmp_path):
    rom = tmp_path / "empty.ch8"
    rom.write_bytes(b"")
    assert read_rom(rom) == b""