"""Window, rendering and keyboard input for the emulator."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence
from types import TracebackType

import pygame

# Keyboard layout of the hexadecimal keypad, keyed by keypad value.
KEYMAP: dict[int, int] = {
    pygame.K_x: 0x0,
    pygame.K_1: 0x1,
    pygame.K_2: 0x2,
    pygame.K_3: 0x3,
    pygame.K_q: 0x4,
    pygame.K_w: 0x5,
    pygame.K_e: 0x6,
    pygame.K_a: 0x7,
    pygame.K_s: 0x8,
    pygame.K_d: 0x9,
    pygame.K_z: 0xA,
    pygame.K_c: 0xB,
    pygame.K_4: 0xC,
    pygame.K_r: 0xD,
    pygame.K_f: 0xE,
    pygame.K_v: 0xF,
}


class Platform:
    """A window that shows the machine's display and reads its keypad."""

    def __init__(
        self,
        title: str,
        window_width: int,
        window_height: int,
        texture_width: int,
        texture_height: int,
    ) -> None:
        pygame.display.init()
        pygame.display.set_caption(title)
        self.window_size = (window_width, window_height)
        self.texture_size = (texture_width, texture_height)
        self.screen = pygame.display.set_mode(self.window_size)

    def __enter__(self) -> Platform:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def update(self, pixels: Sequence[int]) -> None:
        """Draw a frame of 32-bit RGBA pixels, scaled to fill the window."""
        width, height = self.texture_size
        if len(pixels) != width * height:
            raise ValueError(
                f"expected {width * height} pixels, got {len(pixels)}"
            )
        data = b"".join((p & 0xFFFFFFFF).to_bytes(4, "big") for p in pixels)
        texture = pygame.image.frombuffer(data, self.texture_size, "RGBA")
        self.screen.fill((0, 0, 0))
        self.screen.blit(pygame.transform.scale(texture, self.window_size), (0, 0))
        pygame.display.flip()

    def handle_event(self, event: pygame.event.Event, keys: MutableSequence[bool]) -> bool:
        """Apply one event to the keypad state; return True if it asks to quit."""
        if event.type == pygame.QUIT:
            return True
        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                return True
            if event.key in KEYMAP:
                keys[KEYMAP[event.key]] = True
        elif event.type == pygame.KEYUP and event.key in KEYMAP:
            keys[KEYMAP[event.key]] = False
        return False

    def process_input(self, keys: MutableSequence[bool]) -> bool:
        """Drain pending events into *keys*; return True if the user asked to quit."""
        quit_requested = False
        for event in pygame.event.get():
            if self.handle_event(event, keys):
                quit_requested = True
        return quit_requested

    def close(self) -> None:
        """Close the window."""
        pygame.display.quit()