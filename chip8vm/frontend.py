# We're subclassing pyglet (that'll handle graphics, sound output, and keyboard handling)
# and overriding whatever def we need from there. The scheduler owns the loop,
# so the window pumps its own events instead of running pyglet.app.

import numpy as np
import pyglet
from pyglet.media.codecs.base import AudioData, AudioFormat
from pyglet.window import key

from .config import HEIGHT, SAMPLE_RATE, SCALE, WIDTH
from .log import log, toggle_logs
from .squarewave import SquareWave

#map binding keys
KEYMAP = {
    key._1: 0x1, key._2: 0x2, key._3: 0x3, key._4: 0xC,
    key.Q: 0x4, key.W: 0x5, key.E: 0x6, key.R: 0xD,
    key.A: 0x7, key.S: 0x8, key.D: 0x9, key.F: 0xE,
    key.Z: 0xA, key.X: 0x0, key.C: 0xB, key.V: 0xF,
}

WHITE = (255, 255, 255, 255)


class Chip8Window(pyglet.window.Window):
    """Display and input collaborator for the scheduler."""

    def __init__(self, keypad, scale=SCALE, caption="CHIP-8 Emulator"):
        super().__init__(
            width=WIDTH * scale,
            height=HEIGHT * scale,
            caption=caption,
            vsync=False
        )
        self.keypad = keypad
        self.scale = scale
        self.exit_requested = False

        # Pre-allocated small framebuffer (64x32 RGBA). Upscaled with numpy.repeat
        self._small_framebuf = np.zeros((HEIGHT, WIDTH, 4), dtype=np.uint8)
        self._small_framebuf[..., 3] = 255
        self.image = pyglet.image.ImageData(
            self.width,
            self.height,
            'RGBA',
            np.repeat(np.repeat(self._small_framebuf, scale, axis=0), scale, axis=1).tobytes()
        )

        self.fps_label = self._label("FPS: 0", self.height - 15)
        self.cps_label = self._label("Cycles/s: 0", self.height - 30)

    def _label(self, text, y):
        return pyglet.text.Label(
            text,
            font_size=12,
            x=5,
            y=y,
            anchor_x='left',
            anchor_y='center',
            color=WHITE
        )

    # ---- Input ----
    def poll(self):
        pyglet.clock.tick()
        self.dispatch_events()

    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.exit_requested = True
        elif symbol == key.F1:
            toggle_logs()
        elif symbol in KEYMAP:
            self.keypad.press(KEYMAP[symbol])

    def on_key_release(self, symbol, modifiers):
        if symbol in KEYMAP:
            self.keypad.release(KEYMAP[symbol])

    def on_close(self):
        self.exit_requested = True

    # ---- Drawing ----
    def present(self, frame):
        # pyglet's origin is bottom-left, framebuffer row 0 is the top
        self._small_framebuf[..., :3] = np.flipud(frame)[..., None] * 255
        if self.scale != 1:
            scaled = np.repeat(np.repeat(self._small_framebuf, self.scale, axis=0), self.scale, axis=1)
        else:
            scaled = self._small_framebuf

        self.switch_to()
        self.clear()
        #updates existing image without creating new object
        self.image.set_data('RGBA', self.width * 4, scaled.tobytes())
        self.image.blit(0, 0)
        self.fps_label.draw()
        self.cps_label.draw()
        self.flip()

    def show_stats(self, cycles_per_second, frames_per_second):
        self.fps_label.text = f"FPS: {frames_per_second}"
        self.cps_label.text = f"Cycles/s: {cycles_per_second}"
        log("Cycles/s:", cycles_per_second, "FPS:", frames_per_second)


# ---- Sound ----
class SquareWaveSource(pyglet.media.StreamingSource):
    """Endless mono 16-bit stream of SquareWave samples."""

    def __init__(self, wave):
        super().__init__()
        self.wave = wave
        self.audio_format = AudioFormat(channels=1, sample_size=16, sample_rate=wave.sample_rate)
        self.video_format = None
        self._duration = None
        self._timestamp = 0.0

    def get_audio_data(self, num_bytes, compensation_time=0.0):
        data = self.wave.block(num_bytes)
        count = len(data) // 2
        duration = count / self.wave.sample_rate
        timestamp = self._timestamp
        self._timestamp += duration
        return AudioData(data, len(data), timestamp, duration, [])

    def seek(self, timestamp):
        self._timestamp = timestamp


class Buzzer:
    """Audio collaborator: plays the sound-timer square wave while running."""

    def __init__(self, timers, sample_rate=SAMPLE_RATE):
        self.wave = SquareWave(timers.get_sound, sample_rate=sample_rate)
        self.player = None

    def start(self):
        if self.player is not None:
            return
        self.player = pyglet.media.Player()
        self.player.queue(SquareWaveSource(self.wave))
        self.player.play()

    def stop(self):
        if self.player is None:
            return
        self.player.pause()
        self.player.delete()
        self.player = None
