from collections import namedtuple
from enum import Enum


class Op(Enum):
    CLEAR_SCREEN = "00E0"
    RETURN = "00EE"
    JUMP = "1nnn"
    CALL = "2nnn"
    SKIP_IF_VX_IS_KK = "3xkk"
    SKIP_IF_VX_IS_NOT_KK = "4xkk"
    SKIP_IF_VX_IS_VY = "5xy0"
    SET_VX_TO_KK = "6xkk"
    ADD_KK_TO_VX = "7xkk"
    SET_VX_TO_VY = "8xy0"
    OR_VY_INTO_VX = "8xy1"
    AND_VY_INTO_VX = "8xy2"
    XOR_VY_INTO_VX = "8xy3"
    ADD_VY_TO_VX = "8xy4"
    SUBTRACT_VY_FROM_VX = "8xy5"
    SHIFT_RIGHT_VX = "8xy6"
    SET_VX_TO_VY_MINUS_VX = "8xy7"
    SHIFT_LEFT_VX = "8xyE"
    SKIP_IF_VX_IS_NOT_VY = "9xy0"
    SET_I = "Annn"
    JUMP_WITH_OFFSET = "Bnnn"
    RANDOM = "Cxkk"
    DRAW_SPRITE = "Dxyn"
    SKIP_IF_KEY_PRESSED = "Ex9E"
    SKIP_IF_KEY_NOT_PRESSED = "ExA1"
    SET_VX_TO_DELAY = "Fx07"
    AWAIT_KEY_PRESS = "Fx0A"
    SET_DELAY_TO_VX = "Fx15"
    SET_SOUND_TO_VX = "Fx18"
    ADD_VX_TO_I = "Fx1E"
    SET_I_TO_GLYPH = "Fx29"
    STORE_BCD = "Fx33"
    DUMP_REGISTERS = "Fx55"
    LOAD_REGISTERS = "Fx65"
    UNKNOWN = "????"


class Instruction(namedtuple("Instruction", "op word x y n kk nnn")):
    __slots__ = ()

    def __str__(self):
        return "%04X %s" % (self.word, self.op.name)


# (mask, pattern, op), checked top to bottom
OPCODES = [
    (0xFFFF, 0x00E0, Op.CLEAR_SCREEN),
    (0xFFFF, 0x00EE, Op.RETURN),

    (0xF000, 0x1000, Op.JUMP),
    (0xF000, 0x2000, Op.CALL),
    (0xF000, 0x3000, Op.SKIP_IF_VX_IS_KK),
    (0xF000, 0x4000, Op.SKIP_IF_VX_IS_NOT_KK),
    (0xF00F, 0x5000, Op.SKIP_IF_VX_IS_VY),
    (0xF000, 0x6000, Op.SET_VX_TO_KK),
    (0xF000, 0x7000, Op.ADD_KK_TO_VX),

    (0xF00F, 0x8000, Op.SET_VX_TO_VY),
    (0xF00F, 0x8001, Op.OR_VY_INTO_VX),
    (0xF00F, 0x8002, Op.AND_VY_INTO_VX),
    (0xF00F, 0x8003, Op.XOR_VY_INTO_VX),
    (0xF00F, 0x8004, Op.ADD_VY_TO_VX),
    (0xF00F, 0x8005, Op.SUBTRACT_VY_FROM_VX),
    (0xF00F, 0x8006, Op.SHIFT_RIGHT_VX),
    (0xF00F, 0x8007, Op.SET_VX_TO_VY_MINUS_VX),
    (0xF00F, 0x800E, Op.SHIFT_LEFT_VX),

    (0xF00F, 0x9000, Op.SKIP_IF_VX_IS_NOT_VY),
    (0xF000, 0xA000, Op.SET_I),
    (0xF000, 0xB000, Op.JUMP_WITH_OFFSET),
    (0xF000, 0xC000, Op.RANDOM),
    (0xF000, 0xD000, Op.DRAW_SPRITE),

    (0xF0FF, 0xE09E, Op.SKIP_IF_KEY_PRESSED),
    (0xF0FF, 0xE0A1, Op.SKIP_IF_KEY_NOT_PRESSED),

    (0xF0FF, 0xF007, Op.SET_VX_TO_DELAY),
    (0xF0FF, 0xF00A, Op.AWAIT_KEY_PRESS),
    (0xF0FF, 0xF015, Op.SET_DELAY_TO_VX),
    (0xF0FF, 0xF018, Op.SET_SOUND_TO_VX),
    (0xF0FF, 0xF01E, Op.ADD_VX_TO_I),
    (0xF0FF, 0xF029, Op.SET_I_TO_GLYPH),
    (0xF0FF, 0xF033, Op.STORE_BCD),
    (0xF0FF, 0xF055, Op.DUMP_REGISTERS),
    (0xF0FF, 0xF065, Op.LOAD_REGISTERS),
]


def decode(word):
    """Split a 16-bit instruction word into its operation and operands.

    Operand fields are filled in for every instruction; each op only reads
    the ones it needs. Words matching no row decode to Op.UNKNOWN.
    """
    word &= 0xFFFF
    op = Op.UNKNOWN
    for mask, pattern, candidate in OPCODES:
        if (word & mask) == pattern:
            op = candidate
            break
    return Instruction(
        op=op,
        word=word,
        x=(word & 0x0F00) >> 8,
        y=(word & 0x00F0) >> 4,
        n=word & 0x000F,
        kk=word & 0x00FF,
        nnn=word & 0x0FFF,
    )
