# ---- Configuration ----
# Host-side settings only: the interpreter core takes no configuration.

import argparse
from dataclasses import dataclass, field

from .constants import CPU_HZ

# map binding keys (pyglet.window.key names -> CHIP-8 keypad)
DEFAULT_KEYMAP = {
    "_1": 0x1, "_2": 0x2, "_3": 0x3, "_4": 0xC,
    "Q": 0x4, "W": 0x5, "E": 0x6, "R": 0xD,
    "A": 0x7, "S": 0x8, "D": 0x9, "F": 0xE,
    "Z": 0xA, "X": 0x0, "C": 0xB, "V": 0xF,
}


@dataclass
class EmulatorConfig:
    rom: str = ""
    scale: int = 10
    cpu_hz: int = CPU_HZ
    caption: str = "CHIP-8 Emulator"
    beep_frequency: float = 660.0
    beep_duration: float = 0.125
    show_hud: bool = False
    verbose: bool = False
    keymap: dict = field(default_factory=lambda: dict(DEFAULT_KEYMAP))


def positive_int(text):
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError("must be a positive integer, got %s" % text)
    return value


def build_parser():
    parser = argparse.ArgumentParser(
        prog="chip8emu", description="Run a CHIP-8 ROM in a pyglet window.")
    parser.add_argument("rom", help="path to the ROM image")
    parser.add_argument("--scale", type=positive_int, default=10,
                        help="screen pixels per CHIP-8 pixel (default: 10)")
    parser.add_argument("--hz", type=positive_int, default=CPU_HZ, dest="cpu_hz",
                        help="instructions per second; the delay and sound timers tick once per "
                             "instruction, so 60 gives real-time timers (default: %d)" % CPU_HZ)
    parser.add_argument("--hud", action="store_true", dest="show_hud",
                        help="show frames/s and steps/s")
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="log every executed instruction")
    return parser


def parse_args(argv=None):
    args = build_parser().parse_args(argv)
    return EmulatorConfig(
        rom=args.rom,
        scale=args.scale,
        cpu_hz=args.cpu_hz,
        show_hud=args.show_hud,
        verbose=args.verbose,
    )
