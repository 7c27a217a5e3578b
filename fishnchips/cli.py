# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""Command line entry point."""

import argparse
import logging
import random
import sys

import pygame

from . import __version__
from .config import (DEFAULT_BEEP_FREQUENCY, DEFAULT_FRAME_RATE,
    DEFAULT_INSTRUCTION_RATE, DEFAULT_SCALE, EngineConfig)
from .errors import MachineFault
from .frontend import SAMPLE_RATE, Beeper, KeyboardInput, Screen
from .machine import Machine
from .scheduler import Scheduler

aparser = argparse.ArgumentParser(prog="fishnchips", description="Simple Chip-8 emulator")
aparser.add_argument('program',
    help="A compiled Chip-8 program to load")
aparser.add_argument('-c', '--clock-rate',
    help="Clock rate of the cpu in Hz",
    type=int,
    default=DEFAULT_INSTRUCTION_RATE)
aparser.add_argument('-f', '--framerate',
    help="Framerate in frames per second",
    type=int,
    default=DEFAULT_FRAME_RATE)
aparser.add_argument('-v', '--frequency',
    help="Frequency of the beep in Hz",
    type=float,
    default=DEFAULT_BEEP_FREQUENCY)
aparser.add_argument('-g', '--gradient-colors',
    help="Enable gradient coloring of pixels",
    action="store_true")
aparser.add_argument('-s', '--scale',
    help="Window pixels per Chip-8 pixel",
    type=int,
    default=DEFAULT_SCALE)
aparser.add_argument('--show-registers',
    help="Show registers and the next instruction under the display",
    action="store_true")
aparser.add_argument('--seed',
    help="Seed for the RND instruction",
    type=int)
aparser.add_argument('--debug',
    help="Enable verbose debug logging, including an instruction trace",
    action="store_true")
aparser.add_argument('--version', action='version', version=f"%(prog)s {__version__}")


def main(argv=None):
    logging.basicConfig(level=logging.INFO)
    args = aparser.parse_args(argv)
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        config = EngineConfig.from_args(args)
    except ValueError as e:
        aparser.error(str(e))

    logging.info("Fish n chips - a Chip-8 interpreter")
    logging.debug(f"{config}")

    rng = random.Random(args.seed) if args.seed is not None else None
    machine = Machine(rng=rng)
    try:
        machine.load_file(args.program)
    except OSError as e:
        logging.error(f"Cannot load ROM file {args.program}: {e}")
        return 1
    except MachineFault as fault:
        logging.error(f"Cannot load ROM file {args.program}: {fault}")
        return 1

    logging.info("Initialise display engine")
    pygame.mixer.pre_init(SAMPLE_RATE, -16, 1, 1024)
    pygame.init()
    try:
        screen = Screen(config, machine)
        beeper = Beeper(config.beep_frequency_hz)
        scheduler = Scheduler(machine, config, renderer=screen, audio=beeper)
        keyboard = KeyboardInput(machine.keypad, on_quit=scheduler.stop)
        try:
            scheduler.run(poll=keyboard.poll)
        except MachineFault:
            # Already logged by the scheduler
            return 1
    finally:
        pygame.quit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
