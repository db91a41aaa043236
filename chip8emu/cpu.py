"""The CHIP-8 machine: memory, registers, timers, display and instruction set."""

from __future__ import annotations

import random

from .rom import MAX_ROM_SIZE, ROM_OFFSET, RomError

MEMORY_SIZE = 4096
REGISTER_COUNT = 16
KEY_COUNT = 16
STACK_LIMIT = 15
VIDEO_WIDTH = 64
VIDEO_HEIGHT = 32
FONT_OFFSET = 0x50
PIXEL_ON = 0xFFFFFFFF
PIXEL_OFF = 0

FONTSET = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)


class Chip8Error(Exception):
    """The machine reached a state it cannot continue from."""


class InvalidOpcodeError(Chip8Error):
    """An opcode that the instruction set does not define."""

    def __init__(self, opcode: int) -> None:
        self.opcode = opcode
        super().__init__(f"Invalid opcode: 0x{opcode:04X}")


class StackError(Chip8Error):
    """A call overflowed the stack or a return found it empty."""


class Chip8:
    """A CHIP-8 interpreter's complete machine state."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.registers = bytearray(REGISTER_COUNT)
        self.index = 0
        self.pc = ROM_OFFSET
        self.stack: list[int] = []
        self.delay_timer = 0
        self.sound_timer = 0
        self.keys = [False] * KEY_COUNT
        self.opcode = 0
        self.memory = bytearray(MEMORY_SIZE)
        self.video = [PIXEL_OFF] * (VIDEO_WIDTH * VIDEO_HEIGHT)

    @property
    def sp(self) -> int:
        """Number of return addresses on the stack."""
        return len(self.stack)

    def load_fonts(self) -> None:
        """Copy the built-in hexadecimal font into memory."""
        self.memory[FONT_OFFSET:FONT_OFFSET + len(FONTSET)] = FONTSET

    def load_rom(self, data: bytes) -> None:
        """Place a program image at the start of program memory."""
        if len(data) > MAX_ROM_SIZE:
            raise RomError(
                f"ROM of size 0x{len(data):x} bytes exceeds max size of 0x{MAX_ROM_SIZE:x}"
            )
        self.memory[ROM_OFFSET:ROM_OFFSET + len(data)] = data

    def cycle(self) -> None:
        """Fetch, decode and execute one instruction, then tick the timers."""
        high = self.memory[self.pc % MEMORY_SIZE]
        low = self.memory[(self.pc + 1) % MEMORY_SIZE]
        self._advance(2)
        self.execute((high << 8) | low)
        if self.delay_timer > 0:
            self.delay_timer -= 1
        if self.sound_timer > 0:
            self.sound_timer -= 1

    def execute(self, opcode: int) -> None:
        """Decode and execute a single opcode."""
        self.opcode = opcode
        v = self.registers
        x = (opcode >> 8) & 0xF
        y = (opcode >> 4) & 0xF
        n = opcode & 0xF
        kk = opcode & 0xFF
        nnn = opcode & 0xFFF

        match (opcode & 0xF000) >> 12:
            case 0x0:
                if kk == 0xE0:
                    self.video = [PIXEL_OFF] * (VIDEO_WIDTH * VIDEO_HEIGHT)
                elif kk == 0xEE:
                    if not self.stack:
                        raise StackError("Invalid SP during RET")
                    self.pc = self.stack.pop()
                else:
                    raise InvalidOpcodeError(opcode)
            case 0x1:
                self.pc = nnn
            case 0x2:
                if len(self.stack) >= STACK_LIMIT:
                    raise StackError("Stack Overflow")
                self.stack.append(self.pc)
                self.pc = nnn
            case 0x3:
                if v[x] == kk:
                    self._advance(2)
            case 0x4:
                if v[x] != kk:
                    self._advance(2)
            case 0x5:
                if v[x] == v[y]:
                    self._advance(2)
            case 0x6:
                v[x] = kk
            case 0x7:
                v[x] = (v[x] + kk) & 0xFF
            case 0x8:
                self._arithmetic(opcode, x, y, n)
            case 0x9:
                if v[x] != v[y]:
                    self._advance(2)
            case 0xA:
                self.index = nnn
            case 0xB:
                # Adds the address to the program counter, not to V0.
                self._advance(nnn)
            case 0xC:
                v[x] = self.rng.randrange(256) & kk
            case 0xD:
                self._draw(x, y, n)
            case 0xE:
                if kk == 0x9E:
                    if self._key_down(v[x]):
                        self._advance(2)
                elif kk == 0xA1:
                    if not self._key_down(v[x]):
                        self._advance(2)
                else:
                    raise InvalidOpcodeError(opcode)
            case 0xF:
                self._misc(opcode, x, kk)

    def state_text(self) -> str:
        """Describe registers and pointers, one per line."""
        lines = [f"V{i}=0x{value:x}" for i, value in enumerate(self.registers)]
        lines += [
            f"PC=0x{self.pc:x}",
            f"ID=0x{self.index:x}",
            f"SP=0x{self.sp:x}",
            f"OP=0x{self.opcode:x}",
        ]
        return "\n".join(lines)

    def _advance(self, amount: int) -> None:
        self.pc = (self.pc + amount) & 0xFFFF

    def _address(self, offset: int) -> int:
        return (self.index + offset) % MEMORY_SIZE

    def _key_down(self, key: int) -> bool:
        return key < KEY_COUNT and bool(self.keys[key])

    def _arithmetic(self, opcode: int, x: int, y: int, n: int) -> None:
        v = self.registers
        match n:
            case 0x0:
                v[x] = v[y]
            case 0x1:
                v[x] |= v[y]
            case 0x2:
                v[x] &= v[y]
            case 0x3:
                v[x] ^= v[y]
            case 0x4:
                total = v[x] + v[y]
                v[0xF] = int(total > 0xFF)
                v[x] = total & 0xFF
            case 0x5:
                diff = (v[x] - v[y]) & 0xFF
                v[0xF] = int(v[x] > v[y])
                v[x] = diff
            case 0x6:
                v[0xF] = v[x] & 1
                v[x] = v[x] >> 1
            case 0x7:
                diff = (v[y] - v[x]) & 0xFF
                v[0xF] = int(v[y] > v[x])
                v[x] = diff
            case 0xE:
                v[0xF] = (v[x] & 0x80) >> 7
                v[x] = (v[x] << 1) & 0xFF
            case _:
                raise InvalidOpcodeError(opcode)

    def _draw(self, x: int, y: int, height: int) -> None:
        v = self.registers
        x_pos = v[x] % VIDEO_WIDTH
        y_pos = v[y] % VIDEO_HEIGHT
        v[0xF] = 0
        for row in range(height):
            sprite = self.memory[self._address(row)]
            base = (y_pos + row) * VIDEO_WIDTH + x_pos
            for col in range(8):
                if not sprite & (0x80 >> col):
                    continue
                position = base + col
                if position >= len(self.video):
                    continue
                if self.video[position]:
                    v[0xF] = 1
                self.video[position] ^= PIXEL_ON

    def _misc(self, opcode: int, x: int, kk: int) -> None:
        v = self.registers
        match kk:
            case 0x07:
                v[x] = self.delay_timer
            case 0x0A:
                pressed = next((key for key, down in enumerate(self.keys) if down), None)
                if pressed is None:
                    self._advance(-2)
                else:
                    v[x] = pressed
            case 0x15:
                self.delay_timer = v[x]
            case 0x18:
                self.sound_timer = v[x]
            case 0x1E:
                self.index = (self.index + v[x]) & 0xFFFF
            case 0x29:
                self.index = FONT_OFFSET + 5 * v[x]
            case 0x33:
                hundreds, rest = divmod(v[x], 100)
                tens, ones = divmod(rest, 10)
                for offset, digit in enumerate((hundreds, tens, ones)):
                    self.memory[self._address(offset)] = digit
            case 0x55:
                for i in range(x + 1):
                    self.memory[self._address(i)] = v[i]
            case 0x65:
                for i in range(x + 1):
                    v[i] = self.memory[self._address(i)]
            case _:
                raise InvalidOpcodeError(opcode)