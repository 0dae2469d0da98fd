from .config import CPU_HZ
from .cpu import CPU
from .framebuffer import Framebuffer
from .keypad import Keypad
from .memory import Memory
from .scheduler import Scheduler
from .timers import TimerClock


class Emulator:
    """A CHIP-8 machine with a program loaded, ready to be driven."""

    def __init__(self, rom_bytes, frequency=CPU_HZ, rng=None):
        self.frequency = frequency
        self.memory = Memory()
        self.memory.load_program(rom_bytes)
        self.framebuffer = Framebuffer()
        self.keypad = Keypad()
        self.timers = TimerClock()
        self.cpu = CPU(self.memory, self.framebuffer, self.keypad, self.timers, rng=rng)
        self.scheduler = None

    def attach(self, input_source, display, audio=None, **kwargs):
        self.scheduler = Scheduler(self.cpu, self.timers, input_source, display,
                                   audio=audio, frequency=self.frequency, **kwargs)
        return self.scheduler

    def run(self, max_cycles=None):
        if self.scheduler is None:
            raise RuntimeError("attach() collaborators before run()")
        self.scheduler.run(max_cycles)
