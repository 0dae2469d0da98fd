from pathlib import Path

from .config import FONT_START, FONTSET, MEMORY_SIZE, PROGRAM_START
from .errors import MemoryAccessError, RomLoadError, RomTooLargeError
from .log import log


def load_rom(path):
    try:
        return Path(path).read_bytes()
    except OSError as e:
        raise RomLoadError(path, e.strerror or e) from e


class Memory:
    """Flat 4KB address space: font glyphs at 0x050, program from 0x200."""

    def __init__(self, size=MEMORY_SIZE):
        self.data = bytearray(size)
        self.data[FONT_START:FONT_START + len(FONTSET)] = bytes(FONTSET)

    def __len__(self):
        return len(self.data)

    def _check(self, address, length=1):
        if address < 0 or address + length > len(self.data):
            raise MemoryAccessError(address if address < 0 else max(address, len(self.data)))

    def read_byte(self, address):
        self._check(address)
        return self.data[address]

    def write_byte(self, address, value):
        self._check(address)
        self.data[address] = value & 0xFF

    def read_word(self, address):
        self._check(address, 2)
        return (self.data[address] << 8) | self.data[address + 1]

    def read_block(self, address, length):
        self._check(address, length)
        return bytes(self.data[address:address + length])

    def write_block(self, address, values):
        self._check(address, len(values))
        self.data[address:address + len(values)] = bytes(v & 0xFF for v in values)

    def load_program(self, rom, start=PROGRAM_START):
        capacity = len(self.data) - start
        if len(rom) > capacity:
            raise RomTooLargeError(len(rom), capacity)
        self.data[start:start + len(rom)] = rom
        log("Loaded", len(rom), "bytes at", hex(start))
