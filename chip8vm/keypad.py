import time
from collections import deque

import numpy as np

from .config import KEY_POLL_INTERVAL


class Keypad:
    """Pressed state of the 16 hex keys plus recent key-down transitions.

    Each key-down is stamped with the CPU cycle it arrived in. The CPU calls
    next_cycle() before every instruction, and a key wait only accepts
    key-downs from the current or previous cycle. The queue keeps the
    last 16 transitions.
    """

    def __init__(self):
        self.keys = np.zeros(16, dtype=np.uint8)
        self.cycle = 0
        self._downs = deque(maxlen=16)

    def next_cycle(self):
        self.cycle += 1

    def press(self, key):
        if not 0 <= key < 16:
            return
        if not self.keys[key]:
            self._downs.append((key, self.cycle))
        self.keys[key] = 1

    def release(self, key):
        if 0 <= key < 16:
            self.keys[key] = 0

    def is_pressed(self, key):
        return 0 <= key < 16 and bool(self.keys[key])

    def pressed_keys(self):
        return [i for i in range(16) if self.keys[i]]

    def reset(self):
        self.keys[:] = 0
        self._downs.clear()

    def _drop_stale(self):
        while self._downs and self._downs[0][1] < self.cycle - 1:
            self._downs.popleft()

    def wait_for_next_key_down(self, poll=None, should_exit=None,
                               interval=KEY_POLL_INTERVAL):
        """Block until a new key goes down and return it.

        Key-downs that arrived since the previous instruction count. Older
        ones are discarded. `poll` is called between checks so the input
        source can keep delivering events. Returns None if `should_exit`
        reports an exit request before any key arrives.
        """
        self._drop_stale()
        while True:
            if self._downs:
                return self._downs.popleft()[0]
            if poll is not None:
                poll()
            if self._downs:
                return self._downs.popleft()[0]
            if should_exit is not None and should_exit():
                return None
            time.sleep(interval)
