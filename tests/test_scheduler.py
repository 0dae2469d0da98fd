"""
Scheduler tests with fake collaborators and a fake clock, so the loop can
be driven deterministically without a window or real sleeping.
"""

import pytest

from chip8vm.emulator import Emulator
from chip8vm.errors import UnknownOpcodeError


def program(*words):
    return b"".join(bytes([w >> 8, w & 0xFF]) for w in words)


class FakeClock:
    def __init__(self):
        self.t = 0.0
        self.slept = 0.0

    def __call__(self):
        return self.t

    def sleep(self, seconds):
        self.t += seconds
        self.slept += seconds


class FakeInput:
    def __init__(self, exit_after=None, on_poll=None):
        self.polls = 0
        self.exit_after = exit_after
        self.on_poll = on_poll
        self.exit_requested = False

    def poll(self):
        self.polls += 1
        if self.on_poll is not None:
            self.on_poll(self.polls)
        if self.exit_after is not None and self.polls >= self.exit_after:
            self.exit_requested = True


class FakeDisplay:
    def __init__(self):
        self.frames = []
        self.stats = []

    def present(self, frame):
        self.frames.append(frame)

    def show_stats(self, cps, fps):
        self.stats.append((cps, fps))


class FakeAudio:
    def __init__(self):
        self.events = []

    def start(self):
        self.events.append("start")

    def stop(self):
        self.events.append("stop")


def make(rom, exit_after=None, on_poll=None, frequency=700):
    emulator = Emulator(rom, frequency)
    clock = FakeClock()
    inp = FakeInput(exit_after, on_poll)
    display = FakeDisplay()
    audio = FakeAudio()
    emulator.attach(inp, display, audio=audio, clock=clock, sleep=clock.sleep)
    return emulator, clock, inp, display, audio


# glyph 0 at (0, 0), then spin on 0x204
DRAW_AND_SPIN = program(0xA050, 0xD005, 0x1204)


def test_runs_until_exit_requested():
    emulator, clock, inp, display, audio = make(DRAW_AND_SPIN, exit_after=5)
    emulator.run()
    assert emulator.cpu.cycles == 4
    assert inp.polls == 5


def test_max_cycles_bounds_the_loop():
    emulator, *_ = make(DRAW_AND_SPIN)
    emulator.run(max_cycles=50)
    assert emulator.cpu.cycles == 50


def test_end_to_end_program():
    emulator, *_ = make(program(0x6005, 0x7003, 0x00E0, 0x1200))
    emulator.run(max_cycles=2)
    assert emulator.cpu.V[0] == 8


def test_paces_to_the_configured_frequency():
    emulator, clock, *_ = make(DRAW_AND_SPIN, frequency=500)
    emulator.run(max_cycles=500)
    assert clock.t == pytest.approx(1.0, rel=0.01)


def test_presents_only_changed_frames():
    emulator, clock, inp, display, audio = make(DRAW_AND_SPIN)
    emulator.run(max_cycles=200)
    assert len(display.frames) == 1
    frame = display.frames[0]
    assert frame.shape == (32, 64)
    assert list(frame[0, :8]) == [True] * 4 + [False] * 4


def test_presents_at_60_hz_while_drawing():
    # draw, then jump back and draw again forever: every frame is dirty
    emulator, clock, inp, display, audio = make(program(0xA050, 0xD005, 0x1202))
    emulator.run(max_cycles=700)
    assert 55 <= len(display.frames) <= 61


def test_reports_stats_every_second():
    emulator, clock, inp, display, audio = make(DRAW_AND_SPIN)
    emulator.run(max_cycles=800)
    assert len(display.stats) == 1
    cps, fps = display.stats[0]
    assert 690 <= cps <= 710


def test_timers_and_audio_lifecycle():
    emulator, clock, inp, display, audio = make(DRAW_AND_SPIN)
    emulator.run(max_cycles=10)
    assert audio.events == ["start", "stop"]
    assert not emulator.timers.running


def test_fatal_error_propagates_after_cleanup():
    emulator, clock, inp, display, audio = make(program(0x6001, 0xFFFF))
    with pytest.raises(UnknownOpcodeError):
        emulator.run()
    assert audio.events == ["start", "stop"]
    assert not emulator.timers.running
    assert emulator.cpu.V[0] == 1


def test_key_wait_keeps_polling_input():
    holder = {}

    def press_on_third_poll(n):
        if n == 3:
            holder["emulator"].keypad.press(0xC)

    emulator, clock, inp, display, audio = make(program(0xF50A, 0x1202),
                                                on_poll=press_on_third_poll)
    holder["emulator"] = emulator
    emulator.run(max_cycles=1)
    assert emulator.cpu.V[5] == 0xC


def test_key_down_just_before_key_wait_is_kept():
    holder = {}

    def press_on_first_poll(n):
        if n == 1:
            holder["emulator"].keypad.press(0x4)

    emulator, clock, inp, display, audio = make(program(0xF50A, 0x1202),
                                                on_poll=press_on_first_poll)
    holder["emulator"] = emulator
    emulator.run(max_cycles=1)
    assert emulator.cpu.V[5] == 0x4
    assert inp.polls == 1


def test_exit_during_key_wait():
    emulator, clock, inp, display, audio = make(program(0xF50A), exit_after=3)
    emulator.run()
    assert emulator.cpu.pc == 0x200
    assert emulator.cpu.V[5] == 0


def test_run_requires_collaborators():
    with pytest.raises(RuntimeError):
        Emulator(DRAW_AND_SPIN).run()
