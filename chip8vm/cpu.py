# CPU - Cowgods CHIP8 Technical reference http://devernay.free.fr/hacks/chip8/C8TECH10.HTM#0.0
# Registers V0..VF, index register I, program counter and an unbounded call
# stack. VF doubles as the carry / borrow / collision flag.

import random

from .config import FONT_START, GLYPH_SIZE, PROGRAM_START
from .decoder import Op, decode
from .errors import StackUnderflowError, UnknownOpcodeError
from .log import log


class CPU:

    def __init__(self, memory, framebuffer, keypad, timers, rng=None):
        self.memory = memory
        self.framebuffer = framebuffer
        self.keypad = keypad
        self.timers = timers
        self.rng = rng or random.Random()

        # set by the scheduler so Fx0A can keep pumping input while it blocks
        self.key_poll = None
        self.exit_requested = None

        self.reset()
        self.setup_funcmap()

    def reset(self):
        self.V = [0] * 16
        self.I = 0
        self.pc = PROGRAM_START
        self.stack = []
        self.cycles = 0

    # ---- Cycle ----
    def fetch(self):
        word = self.memory.read_word(self.pc)
        self.pc = (self.pc + 2) & 0xFFFF
        return word

    def step(self):
        """Fetch, decode and execute one instruction."""
        self.keypad.next_cycle()
        address = self.pc
        instruction = decode(self.fetch())
        handler = self.funcmap.get(instruction.op)
        if handler is None:
            raise UnknownOpcodeError(instruction.word, address)
        handler(instruction)
        self.cycles += 1
        return instruction

    def skip(self):
        self.pc = (self.pc + 2) & 0xFFFF

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Op.CLEAR_SCREEN: self.op_CLS,
            Op.RETURN: self.op_RET,
            Op.JUMP: self.op_JP,
            Op.CALL: self.op_CALL,
            Op.SKIP_IF_VX_IS_KK: self.op_SE_Vx_kk,
            Op.SKIP_IF_VX_IS_NOT_KK: self.op_SNE_Vx_kk,
            Op.SKIP_IF_VX_IS_VY: self.op_SE_Vx_Vy,
            Op.SET_VX_TO_KK: self.op_LD_Vx_kk,
            Op.ADD_KK_TO_VX: self.op_ADD_Vx_kk,
            Op.SET_VX_TO_VY: self.op_LD_Vx_Vy,
            Op.OR_VY_INTO_VX: self.op_OR,
            Op.AND_VY_INTO_VX: self.op_AND,
            Op.XOR_VY_INTO_VX: self.op_XOR,
            Op.ADD_VY_TO_VX: self.op_ADD,
            Op.SUBTRACT_VY_FROM_VX: self.op_SUB,
            Op.SHIFT_RIGHT_VX: self.op_SHR,
            Op.SET_VX_TO_VY_MINUS_VX: self.op_SUBN,
            Op.SHIFT_LEFT_VX: self.op_SHL,
            Op.SKIP_IF_VX_IS_NOT_VY: self.op_SNE_Vx_Vy,
            Op.SET_I: self.op_LD_I,
            Op.JUMP_WITH_OFFSET: self.op_JP_V0,
            Op.RANDOM: self.op_RND,
            Op.DRAW_SPRITE: self.op_DRW,
            Op.SKIP_IF_KEY_PRESSED: self.op_SKP,
            Op.SKIP_IF_KEY_NOT_PRESSED: self.op_SKNP,
            Op.SET_VX_TO_DELAY: self.op_LD_Vx_DT,
            Op.AWAIT_KEY_PRESS: self.op_WAITKEY,
            Op.SET_DELAY_TO_VX: self.op_LD_DT_Vx,
            Op.SET_SOUND_TO_VX: self.op_LD_ST_Vx,
            Op.ADD_VX_TO_I: self.op_ADD_I_Vx,
            Op.SET_I_TO_GLYPH: self.op_FONT,
            Op.STORE_BCD: self.op_BCD,
            Op.DUMP_REGISTERS: self.op_STORE,
            Op.LOAD_REGISTERS: self.op_LOAD,
        }

    # ---- Opcode Handlers ----

    # 00E0 - CLS
    def op_CLS(self, ins):
        self.framebuffer.clear()
        log("Clear the display")

    # 00EE - RET
    def op_RET(self, ins):
        if not self.stack:
            raise StackUnderflowError((self.pc - 2) & 0xFFFF)
        self.pc = self.stack.pop()
        log("Return to", hex(self.pc))

    # 1nnn - JP addr
    def op_JP(self, ins):
        self.pc = ins.nnn
        log("Jump to address", hex(ins.nnn))

    # 2nnn - CALL addr; pc already points past the call
    def op_CALL(self, ins):
        self.stack.append(self.pc)
        self.pc = ins.nnn
        log("Call subroutine at", hex(ins.nnn))

    # 3xkk - SE Vx, byte
    def op_SE_Vx_kk(self, ins):
        if self.V[ins.x] == ins.kk:
            self.skip()

    # 4xkk - SNE Vx, byte
    def op_SNE_Vx_kk(self, ins):
        if self.V[ins.x] != ins.kk:
            self.skip()

    # 5xy0 - SE Vx, Vy
    def op_SE_Vx_Vy(self, ins):
        if self.V[ins.x] == self.V[ins.y]:
            self.skip()

    # 6xkk - LD Vx, byte
    def op_LD_Vx_kk(self, ins):
        self.V[ins.x] = ins.kk
        log(f"Set V{ins.x:X} = {ins.kk}")

    # 7xkk - ADD Vx, byte (no carry flag)
    def op_ADD_Vx_kk(self, ins):
        self.V[ins.x] = (self.V[ins.x] + ins.kk) & 0xFF

    # 8xy0..8xyE
    def op_LD_Vx_Vy(self, ins):
        self.V[ins.x] = self.V[ins.y]

    def op_OR(self, ins):
        self.V[ins.x] |= self.V[ins.y]

    def op_AND(self, ins):
        self.V[ins.x] &= self.V[ins.y]

    def op_XOR(self, ins):
        self.V[ins.x] ^= self.V[ins.y]

    def op_ADD(self, ins):
        total = self.V[ins.x] + self.V[ins.y]
        self.V[ins.x] = total & 0xFF
        self.V[0xF] = 1 if total > 0xFF else 0
        log(f"Add V{ins.y:X} to V{ins.x:X}: result {self.V[ins.x]}, carry={self.V[0xF]}")

    # VF is NOT borrow
    def op_SUB(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vx - vy) & 0xFF
        self.V[0xF] = 1 if vx >= vy else 0

    def op_SUBN(self, ins):
        vx, vy = self.V[ins.x], self.V[ins.y]
        self.V[ins.x] = (vy - vx) & 0xFF
        self.V[0xF] = 1 if vy >= vx else 0

    # shifts work on Vx only, Vy is ignored
    def op_SHR(self, ins):
        vx = self.V[ins.x]
        self.V[ins.x] = vx >> 1
        self.V[0xF] = vx & 1

    def op_SHL(self, ins):
        vx = self.V[ins.x]
        self.V[ins.x] = (vx << 1) & 0xFF
        self.V[0xF] = (vx >> 7) & 1

    # 9xy0 - SNE Vx, Vy
    def op_SNE_Vx_Vy(self, ins):
        if self.V[ins.x] != self.V[ins.y]:
            self.skip()

    # Annn - LD I, addr
    def op_LD_I(self, ins):
        self.I = ins.nnn
        log(f"Set I = {self.I:03X}")

    # Bnnn - JP V0, addr
    def op_JP_V0(self, ins):
        self.pc = ins.nnn + self.V[0]
        log(f"Jump to address V0 + {ins.nnn:03X} = {self.pc:03X}")

    # Cxkk - RND Vx, byte
    def op_RND(self, ins):
        self.V[ins.x] = self.rng.getrandbits(8) & ins.kk

    # Dxyn - DRW Vx, Vy, nibble
    def op_DRW(self, ins):
        collision = self.framebuffer.blend_sprite(
            self.V[ins.x], self.V[ins.y], ins.n, self.I, self.memory)
        self.V[0xF] = 1 if collision else 0
        log(f"Drew sprite, collision={self.V[0xF]}")

    # Ex9E / ExA1 - SKP / SKNP
    def op_SKP(self, ins):
        if self.keypad.is_pressed(self.V[ins.x]):
            self.skip()

    def op_SKNP(self, ins):
        if not self.keypad.is_pressed(self.V[ins.x]):
            self.skip()

    # Fx07..Fx65 - timers, memory, I, and key input
    def op_LD_Vx_DT(self, ins):
        self.V[ins.x] = self.timers.get_delay()

    def op_WAITKEY(self, ins):
        key = self.keypad.wait_for_next_key_down(self.key_poll, self.exit_requested)
        if key is None:
            # exit requested while waiting: leave state untouched, re-run on resume
            self.pc = (self.pc - 2) & 0xFFFF
            return
        self.V[ins.x] = key
        log(f"Key {key:X} pressed, stored in V{ins.x:X}")

    def op_LD_DT_Vx(self, ins):
        self.timers.set_delay(self.V[ins.x])

    def op_LD_ST_Vx(self, ins):
        self.timers.set_sound(self.V[ins.x])

    def op_ADD_I_Vx(self, ins):
        total = self.I + self.V[ins.x]
        if total >= 0x1000:
            self.I = total & 0x0FFF
            self.V[0xF] = 1
        else:
            self.I = total
            self.V[0xF] = 0

    # not clamped: Vx > 0xF points past the glyph table
    def op_FONT(self, ins):
        self.I = FONT_START + self.V[ins.x] * GLYPH_SIZE

    def op_BCD(self, ins):
        v = self.V[ins.x]
        self.memory.write_block(self.I, [v // 100, (v // 10) % 10, v % 10])

    # Fx55 / Fx65 leave I unchanged
    def op_STORE(self, ins):
        self.memory.write_block(self.I, self.V[:ins.x + 1])

    def op_LOAD(self, ins):
        self.V[:ins.x + 1] = list(self.memory.read_block(self.I, ins.x + 1))
