# Turns clock ticks into a number of interpreter steps at cpu_hz.
# A single tick never owes more than max_steps, time lost beyond that
# (window drag, long GC pause) is dropped instead of replayed in a burst.


class StepBudget:

    def __init__(self, cpu_hz, max_steps=None):
        self.cpu_hz = cpu_hz
        self.max_steps = max_steps if max_steps is not None else max(1, cpu_hz // 10)
        self.budget = 0.0

    def take(self, dt):
        """Steps owed for dt seconds of wall time."""
        self.budget += dt * self.cpu_hz
        steps = int(self.budget)
        if steps > self.max_steps:
            steps = self.max_steps
            self.budget = 0.0
        else:
            self.budget -= steps
        return steps
