"""Reading CHIP-8 program images from disk."""

from __future__ import annotations

import os
from pathlib import Path

ROM_OFFSET = 0x200
MAX_ROM_SIZE = 0xD00


class RomError(Exception):
    """A ROM image could not be read or does not fit in memory."""


def read_rom(path: str | os.PathLike[str]) -> bytes:
    """Return the bytes of the ROM at *path*, checking that it fits in memory."""
    try:
        data = Path(path).read_bytes()
    except OSError as exc:
        raise RomError(f"Could not open ROM file '{os.fspath(path)}'") from exc
    if len(data) > MAX_ROM_SIZE:
        raise RomError(
            f"ROM '{os.fspath(path)}' of size 0x{len(data):x} bytes "
            f"exceeds max size of 0x{MAX_ROM_SIZE:x}"
        )
    return data