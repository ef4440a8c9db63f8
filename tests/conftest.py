"""Shared fixtures for the interpreter tests."""

from __future__ import annotations

import random

import pytest

from chip8emu import Interpreter
from chip8emu.constants import PROGRAM_START


class BeepCounter:
    def __init__(self) -> None:
        self.count = 0

    def __call__(self) -> None:
        self.count += 1


def write_words(chip8: Interpreter, *words: int, at: int = PROGRAM_START) -> None:
    for offset, word in enumerate(words):
        chip8.state.memory[at + 2 * offset] = word >> 8
        chip8.state.memory[at + 2 * offset + 1] = word & 0xFF


@pytest.fixture
def beeps() -> BeepCounter:
    return BeepCounter()


@pytest.fixture
def chip8(beeps: BeepCounter) -> Interpreter:
    return Interpreter(on_beep=beeps, rng=random.Random(1234))


@pytest.fixture
def program(chip8: Interpreter):
    """Write opcode words at 0x200 and return the interpreter."""

    def _load(*words: int) -> Interpreter:
        write_words(chip8, *words)
        return chip8

    return _load
