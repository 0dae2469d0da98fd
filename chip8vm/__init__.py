"""CHIP-8 virtual machine: CPU core, framebuffer, timers and keypad."""

from .cpu import CPU
from .emulator import Emulator
from .errors import Chip8Error

__version__ = "0.1.0"
