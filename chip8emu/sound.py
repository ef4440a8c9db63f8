# Sound buzzer: a short sine tone played whenever the sound timer runs out.

import pyglet
from pyglet.media import synthesis


def generate_beep(duration=0.125, frequency=660, sample_rate=44100):
    # Use a Sine waveform from pyglet.media.synthesis
    wave = synthesis.Sine(duration=duration, frequency=frequency, sample_rate=sample_rate)
    return pyglet.media.StaticSource(wave)


class Beeper:

    def __init__(self, frequency=660, duration=0.125):
        self.beep_sound = generate_beep(duration=duration, frequency=frequency)

    def __call__(self):
        # fire and forget, StaticSource can be played any number of times
        self.beep_sound.play()
