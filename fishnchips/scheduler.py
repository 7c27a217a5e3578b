# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Clock scheduler.

Three things happen at three rates: instructions at the configured clock
rate, timer ticks at a fixed 60Hz, and frames at the configured frame rate.
Each stream has its own deadline, the nth event of a stream falling due at
n / rate seconds after start. Deadlines are kept as integer nanoseconds so
the counts never drift no matter how time is handed in: one big jump or a
thousand small ones give the same number of steps, ticks and frames.

When the host falls behind, every missed step and tick is still run, in
order, and each frame boundary passed gets exactly one frame signal.
"""

import logging
import time
from collections import namedtuple
from enum import Enum
from fractions import Fraction

from .errors import MachineFault
from .timers import TIMER_HZ

log = logging.getLogger(__name__)

NS_PER_SEC = 1000000000
# Upper bound on a single sleep in run(), so polling stays responsive
MAX_SLEEP_NS = 2000000


class State(Enum):
    RUNNING = "running"
    WAITING_FOR_KEY = "waiting for key"
    HALTED = "halted"


class Frame(namedtuple("Frame", "number pixels changed delay sound beep_frequency")):
    """What the renderer and audio get to see at a frame boundary"""
    __slots__ = ()

    @property
    def beeping(self):
        return self.sound > 0


class SchedulerStats:
    def __init__(self):
        self.steps = 0
        self.ticks = 0
        self.frames = 0
        self.idle = 0

    def __repr__(self):
        return (f"SchedulerStats(steps={self.steps}, ticks={self.ticks}, "
            f"frames={self.frames}, idle={self.idle})")


def deadline(n, rate):
    """Time in ns of the nth event of a stream running at rate Hz"""
    return -(-n * NS_PER_SEC // rate)


class Scheduler:
    """Drives one Machine.

    renderer needs a render(frame) method. audio needs beep(frequency) and
    pause(). Either may be None."""

    def __init__(self, machine, config, renderer=None, audio=None):
        self.machine = machine
        self.config = config
        self.renderer = renderer
        self.audio = audio
        self.state = State.RUNNING
        self.fault = None
        self.stats = SchedulerStats()
        # Simulated time since start, ns
        self.now = 0
        # Exact seconds handed in so far; only whole ns of it reach self.now
        self._elapsed = Fraction(0)
        self._steps_due = 0
        self._ticks_due = 0
        self._frames_due = 0
        self._running = False

    @property
    def halted(self):
        return self.state is State.HALTED

    def next_deadline_ns(self):
        return min(
            deadline(self._steps_due + 1, self.config.instruction_rate_hz),
            deadline(self._ticks_due + 1, TIMER_HZ),
            deadline(self._frames_due + 1, self.config.frame_rate_hz),
        )

    def advance(self, seconds):
        seconds = Fraction(seconds)
        if seconds < 0:
            raise ValueError("time only moves forward")
        self._elapsed += seconds
        return self.advance_to(round(self._elapsed * NS_PER_SEC))

    def advance_ns(self, ns):
        return self.advance(Fraction(ns, NS_PER_SEC))

    def advance_to(self, t):
        """Run everything that falls due up to and including time t.

        Equal deadlines go instruction, then timer, then frame. A fault
        halts the scheduler and is raised to the caller."""
        while not self.halted:
            next_step = deadline(self._steps_due + 1, self.config.instruction_rate_hz)
            next_tick = deadline(self._ticks_due + 1, TIMER_HZ)
            next_frame = deadline(self._frames_due + 1, self.config.frame_rate_hz)
            soonest = min(next_step, next_tick, next_frame)
            if soonest > t:
                break
            self.now = soonest
            if next_step == soonest:
                self._instruction_slot()
            elif next_tick == soonest:
                self._tick()
            else:
                self._frame()
        if not self.halted:
            self.now = max(self.now, t)
        self._elapsed = max(self._elapsed, Fraction(t, NS_PER_SEC))
        return self.state

    def _instruction_slot(self):
        self._steps_due += 1
        if self.state is State.WAITING_FOR_KEY:
            self.stats.idle += 1
            key = self.machine.keypad.wait_for_any_press()
            if key is not None:
                self.machine.cpu.deliver_key(key)
                self.state = State.RUNNING
                log.debug(f"Key {key:1x} pressed, resuming")
            return
        try:
            self.machine.cpu.step()
        except MachineFault as fault:
            self._halt(fault)
            raise
        self.stats.steps += 1
        if self.machine.cpu.waiting:
            self.state = State.WAITING_FOR_KEY
            log.debug("Waiting for a key press")

    def _tick(self):
        self._ticks_due += 1
        self.machine.timers.tick()
        self.stats.ticks += 1

    def _frame(self):
        self._frames_due += 1
        self.stats.frames += 1
        timers = self.machine.timers
        display = self.machine.display
        frame = Frame(self.stats.frames, display.rows(), display.dirty,
            timers.delay, timers.sound, self.config.beep_frequency_hz)
        display.dirty = False
        if self.renderer is not None:
            self.renderer.render(frame)
        if self.audio is not None:
            if frame.beeping:
                self.audio.beep(frame.beep_frequency)
            else:
                self.audio.pause()

    def _halt(self, fault):
        self.state = State.HALTED
        self.fault = fault
        log.error(f"Emulation halted. {fault}")
        if self.audio is not None:
            self.audio.pause()

    def stop(self):
        self._running = False

    def run(self, poll=None, clock=time.perf_counter_ns, sleep=time.sleep):
        """Run in real time until stop() is called or the machine halts.

        poll is called once per pass, which is where input events get read."""
        self._running = True
        start = clock() - self.now
        log.info("Emulation starting")
        try:
            while self._running and not self.halted:
                if poll is not None:
                    poll()
                self.advance_to(clock() - start)
                wait = self.next_deadline_ns() - (clock() - start)
                if wait > 0:
                    sleep(min(wait, MAX_SLEEP_NS) / NS_PER_SEC)
        finally:
            self._running = False
            log.info(f"Emulation stopped after {self.now / NS_PER_SEC:.2f}s, {self.stats}")
        return self.state
