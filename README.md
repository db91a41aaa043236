# chip8emu

An interpreter for CHIP-8 programs. It runs a ROM image in a pygame window
scaled up from the 64×32 monochrome display, with the sixteen-key hex keypad
mapped onto the keyboard.

## Installing

```
pip install .
```

This pulls in pygame. To run the test suite as well:

```
pip install ".[test]"
pytest
```

## Running a ROM

```
chip8-emu <video_scale> <delay_ms> <rom_file>
```

- `video_scale` – how many window pixels each CHIP-8 pixel takes up
  (10 gives a 640×320 window).
- `delay_ms` – how many milliseconds must pass before the next instruction
  runs. Lower values run the program faster.
- `rom_file` – the program image. It is loaded at address `0x200` and may be
  at most `0xD00` bytes long.

Example:

```
chip8-emu 10 1 test_opcode.ch8
```

With the wrong number of arguments, or arguments that are not whole numbers
where numbers are expected, the command prints its usage line and exits with
status 1. A ROM that cannot be read or is too large is reported the same way.

Close the window or press Escape to quit.

### Keypad

The CHIP-8 keys are laid out like this:

| CHIP-8 | Keyboard |
|--------|----------|
| `1 2 3 C` | `1 2 3 4` |
| `4 5 6 D` | `Q W E R` |
| `7 8 9 E` | `A S D F` |
| `A 0 B F` | `Z X C V` |

## Behaviour

- The delay and sound timers count down by one on each executed instruction.
- The call stack has room for 15 return addresses. Going past that, returning
  with an empty stack, or meeting an unknown opcode stops the interpreter,
  prints `Aborting!` with the reason and the register state, and exits with
  status 1.
- `Bnnn` adds `nnn` to the program counter.
- `Fx0A` waits for a key by repeating itself until one is held down.

## Using it from Python

The interpreter core in `chip8emu.cpu` has no dependency on a display and can
run on its own:

```python
import random

from chip8emu.cpu import Chip8
from chip8emu.rom import read_rom

machine = Chip8(random.Random(0))
machine.load_fonts()
machine.load_rom(read_rom("program.ch8"))
for _ in range(100):
    machine.cycle()
print(machine.state_text())
```

- `read_rom` raises `RomError` when the file can't be read or is too large;
  `Chip8.load_rom` raises it for an oversized image too.
- `Chip8.execute` runs one opcode directly.
- Faults during execution raise `InvalidOpcodeError` or `StackError`, both
  subclasses of `Chip8Error`.
- The machine's display is `Chip8.video`, a list of 64×32 pixels that are
  either `0` or `0xFFFFFFFF`; its keypad is `Chip8.keys`, sixteen booleans.

`chip8emu.platform.Platform` is the pygame window: `update` draws a frame,
`process_input` reads pending events into a keypad list, and it can be used as
a context manager that closes the window on exit. `chip8emu.cli.run` drives a
machine and a platform until the user quits.

## What it does not do

- There is no sound: the sound timer counts down, but nothing is played.
- There is no debugger, save state or configurable key layout.