import random

import pytest

from chip8vm.cpu import CPU
from chip8vm.framebuffer import Framebuffer
from chip8vm.keypad import Keypad
from chip8vm.memory import Memory
from chip8vm.timers import TimerClock


class Machine:
    """CPU wired to real components, with a helper to load opcode words."""

    def __init__(self):
        self.memory = Memory()
        self.framebuffer = Framebuffer()
        self.keypad = Keypad()
        self.timers = TimerClock()
        self.cpu = CPU(self.memory, self.framebuffer, self.keypad, self.timers,
                       rng=random.Random(1234))

    def load(self, *words):
        rom = bytearray()
        for w in words:
            rom += bytes([w >> 8, w & 0xFF])
        self.memory.load_program(bytes(rom))

    def run(self, *words):
        self.load(*words)
        for _ in words:
            self.cpu.step()
        return self.cpu


@pytest.fixture
def machine():
    return Machine()
