# CPU - fetch, decode and execute one opcode per step().
# Every handler moves pc itself, there is no default increment.
# Timers tick once per step, so the caller's step rate is the timer rate.

import random

from .constants import ADDRESS_MASK, FONT_BYTES_PER_GLYPH, STACK_SIZE
from .errors import StackOverflow, StackUnderflow
from .framebuffer import Framebuffer
from .instructions import Op, decode
from .keypad import Keypad
from . import log as logswitch
from .log import log
from .machine import MachineState


class Interpreter:

    def __init__(self, state=None, framebuffer=None, keypad=None,
                 on_beep=None, rng=None):
        self.state = state if state is not None else MachineState()
        self.framebuffer = framebuffer if framebuffer is not None else Framebuffer()
        self.keypad = keypad if keypad is not None else Keypad()
        self.on_beep = on_beep
        self.rng = rng if rng is not None else random
        self.cycle_count = 0

        # Prepare opcode function map
        self.setup_funcmap()

    # ---- Cycle ----
    def step(self):
        """Execute exactly one instruction and tick the timers.

        Returns the decoded Instruction. Raises UnknownOpcode, StackOverflow
        or StackUnderflow, after which the machine should not be stepped again.
        """
        s = self.state
        address = s.pc
        ins = decode(s.fetch(), address)
        if logswitch.logs_on:
            log("%03X" % address, "%04X" % ins.opcode, ins)

        self.funcmap[ins.op](ins)
        self.cycle_count += 1

        # timers
        if s.delay_timer > 0:
            s.delay_timer -= 1
        if s.sound_timer > 0:
            if s.sound_timer == 1 and self.on_beep is not None:
                self.on_beep()
            s.sound_timer -= 1
        return ins

    def run(self, steps):
        for _ in range(steps):
            self.step()

    # ---- Opcode function map ----
    def setup_funcmap(self):
        self.funcmap = {
            Op.CLS: self._00E0,        # Clear the display
            Op.RET: self._00EE,        # Return from a subroutine
            Op.JP: self._1nnn,         # Jump to address nnn
            Op.CALL: self._2nnn,       # Call subroutine at nnn
            Op.SE_VX_NN: self._3xnn,   # Skip if Vx == nn
            Op.SNE_VX_NN: self._4xnn,  # Skip if Vx != nn
            Op.SE_VX_VY: self._5xy0,   # Skip if Vx == Vy
            Op.LD_VX_NN: self._6xnn,   # Vx = nn
            Op.ADD_VX_NN: self._7xnn,  # Vx += nn, no carry
            Op.LD_VX_VY: self._8xy0,   # Vx = Vy
            Op.OR: self._8xy1,
            Op.AND: self._8xy2,
            Op.XOR: self._8xy3,
            Op.ADD: self._8xy4,        # VF = carry
            Op.SUB: self._8xy5,        # VF = NOT borrow
            Op.SHR: self._8xy6,        # VF = old bit 0
            Op.SUBN: self._8xy7,       # VF = NOT borrow
            Op.SHL: self._8xyE,        # VF = old bit 7
            Op.SNE_VX_VY: self._9xy0,  # Skip if Vx != Vy
            Op.LD_I: self._Annn,       # I = nnn
            Op.JP_V0: self._Bnnn,      # Jump to nnn + V0
            Op.RND: self._Cxnn,        # Vx = random byte AND nn
            Op.DRW: self._Dxyn,        # Draw sprite, VF = collision
            Op.SKP: self._Ex9E,        # Skip if key Vx is down
            Op.SKNP: self._ExA1,       # Skip if key Vx is up
            Op.LD_VX_DT: self._Fx07,   # Vx = delay timer
            Op.LD_VX_K: self._Fx0A,    # Wait for a key press
            Op.LD_DT_VX: self._Fx15,   # delay timer = Vx
            Op.LD_ST_VX: self._Fx18,   # sound timer = Vx
            Op.ADD_I_VX: self._Fx1E,   # I += Vx, VF = overflow
            Op.LD_F_VX: self._Fx29,    # I = font glyph of Vx
            Op.LD_B_VX: self._Fx33,    # BCD of Vx at I..I+2
            Op.STORE: self._Fx55,      # V0..Vx -> memory[I..]
            Op.LOAD: self._Fx65,       # memory[I..] -> V0..Vx
        }

    def _next(self, skip=False):
        self.state.pc = (self.state.pc + (4 if skip else 2)) & ADDRESS_MASK

    # ---- Opcode Handlers ----

    # 00E0 / 00EE
    def _00E0(self, ins):
        self.framebuffer.clear()
        self._next()

    def _00EE(self, ins):
        s = self.state
        if s.sp == 0:
            raise StackUnderflow(s.pc)
        s.sp -= 1
        # the stack holds the CALL's own address, resume after it
        s.pc = (int(s.stack[s.sp]) + 2) & ADDRESS_MASK

    # 1nnn / 2nnn
    def _1nnn(self, ins):
        self.state.pc = ins.nnn

    def _2nnn(self, ins):
        s = self.state
        if s.sp >= STACK_SIZE:
            raise StackOverflow(s.pc)
        s.stack[s.sp] = s.pc
        s.sp += 1
        s.pc = ins.nnn

    # 3xnn / 4xnn / 5xy0
    def _3xnn(self, ins):
        self._next(self.state.V[ins.x] == ins.nn)

    def _4xnn(self, ins):
        self._next(self.state.V[ins.x] != ins.nn)

    def _5xy0(self, ins):
        V = self.state.V
        self._next(V[ins.x] == V[ins.y])

    # 6xnn / 7xnn
    def _6xnn(self, ins):
        self.state.V[ins.x] = ins.nn
        self._next()

    def _7xnn(self, ins):
        V = self.state.V
        V[ins.x] = (V[ins.x] + ins.nn) & 0xFF
        self._next()

    # 8xy0..8xyE - results wrap at 8 bits, VF is written after the result
    def _8xy0(self, ins):
        V = self.state.V
        V[ins.x] = V[ins.y]
        self._next()

    def _8xy1(self, ins):
        V = self.state.V
        V[ins.x] |= V[ins.y]
        self._next()

    def _8xy2(self, ins):
        V = self.state.V
        V[ins.x] &= V[ins.y]
        self._next()

    def _8xy3(self, ins):
        V = self.state.V
        V[ins.x] ^= V[ins.y]
        self._next()

    def _8xy4(self, ins):
        V = self.state.V
        total = V[ins.x] + V[ins.y]
        V[ins.x] = total & 0xFF
        V[0xF] = 1 if total > 0xFF else 0
        self._next()

    def _8xy5(self, ins):
        V = self.state.V
        vx, vy = V[ins.x], V[ins.y]
        V[ins.x] = (vx - vy) & 0xFF
        V[0xF] = 0 if vy > vx else 1
        self._next()

    def _8xy6(self, ins):
        V = self.state.V
        vx = V[ins.x]
        V[ins.x] = vx >> 1
        V[0xF] = vx & 1
        self._next()

    def _8xy7(self, ins):
        V = self.state.V
        vx, vy = V[ins.x], V[ins.y]
        V[ins.x] = (vy - vx) & 0xFF
        V[0xF] = 0 if vx > vy else 1
        self._next()

    def _8xyE(self, ins):
        V = self.state.V
        vx = V[ins.x]
        V[ins.x] = (vx << 1) & 0xFF
        V[0xF] = (vx >> 7) & 1
        self._next()

    # 9xy0
    def _9xy0(self, ins):
        V = self.state.V
        self._next(V[ins.x] != V[ins.y])

    # Annn / Bnnn / Cxnn
    def _Annn(self, ins):
        self.state.I = ins.nnn
        self._next()

    def _Bnnn(self, ins):
        self.state.pc = (ins.nnn + self.state.V[0]) & ADDRESS_MASK

    def _Cxnn(self, ins):
        self.state.V[ins.x] = self.rng.getrandbits(8) & ins.nn
        self._next()

    # Dxyn
    def _Dxyn(self, ins):
        s = self.state
        px, py = s.V[ins.x], s.V[ins.y]
        rows = [s.read(s.I + row) for row in range(ins.n)]
        s.V[0xF] = 0
        if self.framebuffer.draw_sprite(px, py, rows):
            s.V[0xF] = 1
        self._next()

    # Ex9E / ExA1
    def _Ex9E(self, ins):
        self._next(self.keypad.is_pressed(self.state.V[ins.x]))

    def _ExA1(self, ins):
        self._next(not self.keypad.is_pressed(self.state.V[ins.x]))

    # Fx07..Fx65 - timers, memory, I, and key input
    def _Fx07(self, ins):
        self.state.V[ins.x] = self.state.delay_timer
        self._next()

    def _Fx0A(self, ins):
        # stall: pc stays put and the instruction runs again next step
        key = self.keypad.first_pressed()
        if key is None:
            return
        self.state.V[ins.x] = key
        self._next()

    def _Fx15(self, ins):
        self.state.delay_timer = self.state.V[ins.x]
        self._next()

    def _Fx18(self, ins):
        self.state.sound_timer = self.state.V[ins.x]
        self._next()

    def _Fx1E(self, ins):
        s = self.state
        total = s.I + s.V[ins.x]
        s.I = total & ADDRESS_MASK
        s.V[0xF] = 1 if total > ADDRESS_MASK else 0
        self._next()

    def _Fx29(self, ins):
        self.state.I = (self.state.V[ins.x] & 0xF) * FONT_BYTES_PER_GLYPH
        self._next()

    def _Fx33(self, ins):
        s = self.state
        val = s.V[ins.x]
        s.write(s.I, val // 100)
        s.write(s.I + 1, (val // 10) % 10)
        s.write(s.I + 2, val % 10)
        self._next()

    def _Fx55(self, ins):
        s = self.state
        for i in range(ins.x + 1):
            s.write(s.I + i, s.V[i])
        s.I = (s.I + ins.x + 1) & ADDRESS_MASK
        self._next()

    def _Fx65(self, ins):
        s = self.state
        for i in range(ins.x + 1):
            s.V[i] = s.read(s.I + i)
        s.I = (s.I + ins.x + 1) & ADDRESS_MASK
        self._next()
