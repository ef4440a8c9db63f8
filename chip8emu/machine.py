# Memory, registers, stack and timers. Pure state, the interpreter mutates it.
# Memory - 4096 bytes: the 80-byte font at 0x000, the ROM from 0x200.

import numpy as np

from .constants import (
    MEMORY_SIZE, PROGRAM_START, MAX_PROGRAM_SIZE,
    NUM_REGISTERS, STACK_SIZE, fontset,
)
from .errors import InvalidImageSize
from .log import log


class MachineState:

    def __init__(self):
        self.reset()

    def reset(self):
        """Power-on state: font loaded, pc at 0x200, everything else zeroed."""
        self.memory = bytearray(MEMORY_SIZE)
        self.V = [0] * NUM_REGISTERS      # V0..VF, VF doubles as the flag register
        self.I = 0
        self.pc = PROGRAM_START

        self.stack = np.zeros(STACK_SIZE, dtype=np.uint16)
        self.sp = 0

        self.delay_timer = 0
        self.sound_timer = 0

        # Load fontset into memory
        self.memory[:len(fontset)] = bytes(fontset)

    def load_program(self, data):
        data = bytes(data)
        if len(data) > MAX_PROGRAM_SIZE:
            raise InvalidImageSize(len(data), MAX_PROGRAM_SIZE)
        self.memory[PROGRAM_START:PROGRAM_START + len(data)] = data
        log("Loaded %d bytes at 0x%03X" % (len(data), PROGRAM_START))

    def read(self, address):
        return self.memory[address % MEMORY_SIZE]

    def write(self, address, value):
        self.memory[address % MEMORY_SIZE] = value & 0xFF

    def fetch(self):
        """Big-endian opcode at pc."""
        return (self.read(self.pc) << 8) | self.read(self.pc + 1)


def load_rom(state, path):
    """Copy a ROM file into memory at 0x200."""
    log("Loading ROM:", path)
    with open(path, "rb") as f:
        data = f.read()
    state.load_program(data)
    return len(data)
