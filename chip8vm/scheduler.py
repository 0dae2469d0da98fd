import time

from .config import CPU_HZ, FRAME_HZ
from .errors import Chip8Error
from .log import log, logger


class Scheduler:
    """Main loop: input, one CPU cycle, 60 Hz presentation, pacing.

    Collaborators:
      input_source - poll() delivers pending events, exit_requested is truthy
                     once the user wants to quit
      display      - present(frame) and show_stats(cps, fps)
      audio        - optional, start() / stop()
    """

    def __init__(self, cpu, timers, input_source, display, audio=None,
                 frequency=CPU_HZ, frame_hz=FRAME_HZ,
                 clock=time.perf_counter, sleep=time.sleep):
        self.cpu = cpu
        self.timers = timers
        self.input_source = input_source
        self.display = display
        self.audio = audio
        self.frequency = frequency
        self.cycle_time = 1.0 / frequency
        self.frame_time = 1.0 / frame_hz
        self.clock = clock
        self.sleep = sleep

        self.frames = 0
        self.cycles_per_second = 0
        self.frames_per_second = 0

        cpu.key_poll = input_source.poll
        cpu.exit_requested = self.should_exit

    def should_exit(self):
        return bool(self.input_source.exit_requested)

    def present(self):
        self.display.present(self.cpu.framebuffer.snapshot())
        self.frames += 1

    def run(self, max_cycles=None):
        self.timers.start()
        if self.audio is not None:
            self.audio.start()
        log("Running at", self.frequency, "Hz")
        try:
            self._loop(max_cycles)
        except Chip8Error:
            logger.error("Emulation halted after %d cycles (pc=0x%03X)", self.cpu.cycles, self.cpu.pc)
            raise
        finally:
            if self.audio is not None:
                self.audio.stop()
            self.timers.stop()

    def _loop(self, max_cycles):
        now = self.clock()
        next_cycle = now
        next_frame = now + self.frame_time
        next_bench = now + 1.0
        cycles_at_bench = self.cpu.cycles
        frames_at_bench = self.frames
        executed = 0

        while max_cycles is None or executed < max_cycles:
            self.input_source.poll()
            if self.should_exit():
                log("Exit requested")
                break

            self.cpu.step()
            executed += 1

            now = self.clock()
            if now >= next_frame:
                if self.cpu.framebuffer.dirty:
                    self.present()
                next_frame += self.frame_time
                if next_frame < now:
                    next_frame = now + self.frame_time

            if now >= next_bench:
                self.cycles_per_second = self.cpu.cycles - cycles_at_bench
                self.frames_per_second = self.frames - frames_at_bench
                cycles_at_bench = self.cpu.cycles
                frames_at_bench = self.frames
                next_bench = now + 1.0
                self.display.show_stats(self.cycles_per_second, self.frames_per_second)

            # sleep out the rest of this cycle's budget
            next_cycle += self.cycle_time
            remaining = next_cycle - self.clock()
            if remaining > 0:
                self.sleep(remaining)
            elif remaining < -self.frame_time:
                # a blocking key wait or a stall: don't try to catch up
                next_cycle = self.clock()
