"""A CHIP-8 interpreter core with a pygame window and a command-line runner."""

__version__ = "0.1.0"
__all__ = ["cli", "cpu", "platform", "rom"]