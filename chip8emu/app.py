# pyglet front end: renderer, keyboard input, beeper and the driving loop.
# We're subclassing pyglet.window.Window and overriding the event handlers we need.
# The loop: step the interpreter, redraw when the framebuffer is dirty,
# and let pyglet deliver key events into the keypad between steps.

import logging
import sys

import pyglet
from pyglet.window import key

from .config import parse_args
from .constants import width, height
from .cpu import Interpreter
from .errors import Chip8Error
from .log import enable_logs, log, logger
from .machine import load_rom
from .pacing import StepBudget
from .sound import Beeper


def resolve_keymap(names):
    """Turn {'Q': 0x4, ...} into {pyglet symbol: keypad index}."""
    return {getattr(key, name): index for name, index in names.items()}


class Chip8Window(pyglet.window.Window):

    def __init__(self, interpreter, config):
        self.scale = config.scale
        window_width, window_height = width * self.scale, height * self.scale
        super().__init__(window_width, window_height, caption=config.caption,
                         resizable=False, vsync=False)

        self.chip8 = interpreter
        self.keymap = resolve_keymap(config.keymap)
        self.show_hud = config.show_hud
        self.error = None

        # creating ImageData once, refreshed only when the framebuffer is dirty
        self.image = pyglet.image.ImageData(
            window_width, window_height, 'RGBA',
            self.chip8.framebuffer.to_rgba(self.scale))

        # ---- Performance Counters ----
        self.step_budget = StepBudget(config.cpu_hz)
        self._fps_counter = 0
        self._cps_counter = 0
        self.fps_label = pyglet.text.Label(
            "FPS: 0", font_size=12, x=5, y=window_height - 15,
            anchor_x='left', anchor_y='center', color=(255, 64, 64, 255))
        self.cps_label = pyglet.text.Label(
            "Cycles/s: 0", font_size=12, x=5, y=window_height - 30,
            anchor_x='left', anchor_y='center', color=(255, 64, 64, 255))
        pyglet.clock.schedule_interval(self._update_bench, 1.0)

        # Schedule CPU ticks at display rate, each tick runs the steps owed
        pyglet.clock.schedule_interval(self._cpu_tick, 1.0 / 60)

    # ---- CPU cycle ----
    def _cpu_tick(self, dt):
        if self.error is not None:
            return
        steps = self.step_budget.take(dt)
        try:
            self.chip8.run(steps)
        except Chip8Error as e:
            logger.error("Emulation error: %s", e)
            self.error = e
            self.close()
            return
        self._cps_counter += steps

    def _update_bench(self, dt):
        self.fps_label.text = "FPS: %.1f" % (self._fps_counter / dt)
        self.cps_label.text = "Cycles/s: %d" % (self._cps_counter / dt)
        self._fps_counter = 0
        self._cps_counter = 0

    # ---- Drawing ----
    def on_draw(self):
        fb = self.chip8.framebuffer
        if fb.should_draw:
            self.image.set_data('RGBA', self.width * 4,
                                fb.to_rgba(self.scale))
            fb.acknowledge()
        self.clear()
        self.image.blit(0, 0)
        if self.show_hud:
            self.fps_label.draw()
            self.cps_label.draw()
        self._fps_counter += 1

    # ---- Input ----
    def on_key_press(self, symbol, modifiers):
        if symbol == key.ESCAPE:
            self.close()
        elif symbol == key.F1:
            log("logsOn:", enable_logs())
        elif symbol == key.F2:
            self.show_hud = not self.show_hud
        elif symbol in self.keymap:
            self.chip8.keypad.press(self.keymap[symbol])

    def on_key_release(self, symbol, modifiers):
        if symbol in self.keymap:
            self.chip8.keypad.release(self.keymap[symbol])

    def close(self):
        pyglet.clock.unschedule(self._cpu_tick)
        pyglet.clock.unschedule(self._update_bench)
        super().close()


# ---- Entry point ----
def main(argv=None):
    config = parse_args(argv)
    if config.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(message)s")
        enable_logs(True)
    else:
        logging.basicConfig(level=logging.INFO, format="%(message)s")

    chip8 = Interpreter(on_beep=Beeper(config.beep_frequency, config.beep_duration))
    try:
        load_rom(chip8.state, config.rom)
    except (OSError, Chip8Error) as e:
        print("Cannot load ROM %s: %s" % (config.rom, e), file=sys.stderr)
        return 1

    window = Chip8Window(chip8, config)
    pyglet.app.run()
    if window.error is not None:
        print(window.error, file=sys.stderr)
        return 1
    return 0
