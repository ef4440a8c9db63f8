"""CHIP-8 interpreter core with a pyglet front end."""

from .cpu import Interpreter
from .errors import (
    Chip8Error, InvalidImageSize, StackOverflow, StackUnderflow, UnknownOpcode,
)
from .framebuffer import Framebuffer
from .instructions import Instruction, Op, decode
from .keypad import Keypad
from .machine import MachineState, load_rom

__all__ = [
    "Interpreter", "MachineState", "Framebuffer", "Keypad",
    "Instruction", "Op", "decode", "load_rom",
    "Chip8Error", "UnknownOpcode", "InvalidImageSize",
    "StackOverflow", "StackUnderflow",
]
