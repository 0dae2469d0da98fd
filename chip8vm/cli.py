import sys

from .config import CPU_HZ
from .emulator import Emulator
from .errors import Chip8Error, ConfigError
from .log import configure, logger
from .memory import load_rom

USAGE = "Usage: chip8vm <rom-file> [instructions-per-second]"


def parse_frequency(text):
    try:
        hz = float(text)
    except ValueError:
        raise ConfigError("Invalid frequency: %r (expected a number of Hz)" % text) from None
    if not hz > 0 or hz == float("inf"):
        raise ConfigError("Invalid frequency: %r (must be a positive number)" % text)
    return hz


def parse_args(argv):
    if len(argv) < 1 or len(argv) > 2:
        raise ConfigError(USAGE)
    rom_path = argv[0]
    frequency = parse_frequency(argv[1]) if len(argv) == 2 else CPU_HZ
    return rom_path, frequency


def run(rom_path, frequency):
    print("Loading ROM:", rom_path)
    emulator = Emulator(load_rom(rom_path), frequency)

    # pyglet is only needed once there is a window to open
    from .frontend import Buzzer, Chip8Window

    window = Chip8Window(emulator.keypad)
    try:
        emulator.attach(window, window, audio=Buzzer(emulator.timers))
        emulator.run()
    finally:
        window.close()


def main(argv=None):
    if argv is None:
        argv = sys.argv[1:]
    configure()
    try:
        rom_path, frequency = parse_args(argv)
        run(rom_path, frequency)
    except Chip8Error as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
