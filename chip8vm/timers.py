import threading
import time

from .config import TIMER_HZ
from .log import log


class TimerRegister:
    """One 8-bit countdown cell shared between the CPU and the tick thread.

    get/set/decrement are each atomic; nothing spans two calls.
    """

    def __init__(self, value=0):
        self._value = value & 0xFF
        self._lock = threading.Lock()

    def get(self):
        with self._lock:
            return self._value

    def set(self, value):
        with self._lock:
            self._value = value & 0xFF

    def decrement(self):
        with self._lock:
            if self._value > 0:
                self._value -= 1
            return self._value


class TimerClock:
    """Delay and sound timers, decremented at 60 Hz on their own thread."""

    def __init__(self, hz=TIMER_HZ):
        self.period = 1.0 / hz
        self.delay = TimerRegister()
        self.sound = TimerRegister()
        self._stop = threading.Event()
        self._thread = None

    def get_delay(self):
        return self.delay.get()

    def set_delay(self, value):
        self.delay.set(value)

    def get_sound(self):
        return self.sound.get()

    def set_sound(self, value):
        self.sound.set(value)

    def tick(self):
        self.delay.decrement()
        self.sound.decrement()

    @property
    def running(self):
        return self._thread is not None and self._thread.is_alive()

    def start(self):
        if self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="chip8-timers", daemon=True)
        self._thread.start()
        log("Timers started at", round(1.0 / self.period), "Hz")

    def stop(self):
        if self._thread is None:
            return
        self._stop.set()
        self._thread.join()
        self._thread = None
        log("Timers stopped")

    def _run(self):
        deadline = time.monotonic() + self.period
        while not self._stop.wait(max(0.0, deadline - time.monotonic())):
            self.tick()
            deadline += self.period
            # fell far behind (e.g. suspended process): resync instead of bursting
            now = time.monotonic()
            if deadline < now - self.period:
                deadline = now + self.period

    def __enter__(self):
        self.start()
        return self

    def __exit__(self, *exc):
        self.stop()
