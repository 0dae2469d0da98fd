import numpy as np

from .config import BEEP_FREQUENCY, BEEP_VOLUME, SAMPLE_RATE, TIMER_HZ


class SquareWave:
    """Buzzer samples driven by the sound timer.

    While the timer is nonzero the output alternates between +volume and
    -volume at `frequency`; while it is zero the output rests at -volume so
    starting and stopping the tone doesn't click.
    """

    def __init__(self, timer_reader, frequency=BEEP_FREQUENCY,
                 volume=BEEP_VOLUME, sample_rate=SAMPLE_RATE):
        self.timer_reader = timer_reader
        self.volume = volume
        self.sample_rate = sample_rate
        self.phase_inc = frequency / sample_rate
        self.phase = 0.0
        self.max_block = sample_rate // TIMER_HZ

    def samples(self, count):
        """Return `count` float32 samples in [-volume, volume]."""
        phases = (self.phase + self.phase_inc * np.arange(count)) % 1.0
        self.phase = (self.phase + self.phase_inc * count) % 1.0
        # the sound timer is read once per sample
        sounding = np.fromiter((self.timer_reader() != 0 for _ in range(count)),
                               dtype=bool, count=count)
        high = sounding & (phases <= 0.5)
        return np.where(high, self.volume, -self.volume).astype(np.float32)

    def pcm16(self, count):
        return (self.samples(count) * 32767).astype(np.int16).tobytes()

    def block(self, num_bytes):
        """16-bit mono PCM for a player request, at most one timer tick long."""
        count = max(1, min(num_bytes // 2, self.max_block))
        return self.pcm16(count)
