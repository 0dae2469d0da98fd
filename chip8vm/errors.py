class Chip8Error(Exception):
    """Base class for every fatal emulation error."""


class UnknownOpcodeError(Chip8Error):
    def __init__(self, word, address):
        super().__init__("Unknown opcode: %04X at 0x%03X" % (word, address))
        self.word = word
        self.address = address


class StackUnderflowError(Chip8Error):
    def __init__(self, address):
        super().__init__("Stack underflow on 00EE at 0x%03X" % address)
        self.address = address


class MemoryAccessError(Chip8Error):
    def __init__(self, address):
        super().__init__("Memory access out of bounds: 0x%X" % address)
        self.address = address


class RomLoadError(Chip8Error):
    def __init__(self, path, reason):
        super().__init__("Could not load ROM %s: %s" % (path, reason))
        self.path = path


class RomTooLargeError(Chip8Error):
    def __init__(self, size, capacity):
        super().__init__(
            "ROM is %d bytes but only %d bytes fit above 0x200" % (size, capacity))
        self.size = size
        self.capacity = capacity


class ConfigError(Chip8Error):
    pass
