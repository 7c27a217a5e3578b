# Fish'n'Chips, a Chip-8 execution engine.

# To the extent possible under law, the person who associated CC0 with
# Fish'n'Chips has waived all copyright and related or neighboring rights
# to Fish'n'Chips.

# You should have received a copy of the CC0 legalcode along with this
# work.  If not, see <http://creativecommons.org/publicdomain/zero/1.0/>.

"""pygame window, keyboard and beeper.

These only read engine state (and write the keypad); none of it is needed to
run a machine headless."""

import colorsys
import logging
from array import array

import pygame

from .display import VIDEO_X, VIDEO_Y

log = logging.getLogger(__name__)

WINDOW_TITLE = "fish n chips"

# Pixel colors for display
PIXEL_ON = (255, 205, 230)
PIXEL_OFF = (74, 74, 74)
GRADIENT_SATURATION = 0.2
GRADIENT_VALUE = 1.0

# Register panel under the video area
REG_FONT_RES = 18
REG_FONT_PAD = 10
REG_LINES = 5

SAMPLE_RATE = 44100
BEEP_VOLUME = 0.1

# The Chip-8 keypad is laid out
#
# 1 2 3 C
# 4 5 6 D
# 7 8 9 E
# A 0 B F
#
# and sits on the left hand block of a qwerty keyboard:

# +-----+-----+-----+-----+
# | 1/1 | 2/2 | 3/3 | C/4 |
# +-----+-----+-----+-----+
# | 4/Q | 5/W | 6/E | D/R |
# +-----+-----+-----+-----+
# | 7/A | 8/S | 9/D | E/F |
# +-----+-----+-----+-----+
# | A/Z | 0/X | B/C | F/V |
# +-----+-----+-----+-----+

KEY_MAP = [
    pygame.K_x, pygame.K_1, pygame.K_2, pygame.K_3,
    pygame.K_q, pygame.K_w, pygame.K_e, pygame.K_a,
    pygame.K_s, pygame.K_d, pygame.K_z, pygame.K_c,
    pygame.K_4, pygame.K_r, pygame.K_f, pygame.K_v
]


def gradient_color(hue):
    """RGB for a hue in degrees at the gradient's saturation and value"""
    r, g, b = colorsys.hsv_to_rgb((hue % 360) / 360.0, GRADIENT_SATURATION, GRADIENT_VALUE)
    return (int(r * 255), int(g * 255), int(b * 255))


def square_wave(frequency, sample_rate=SAMPLE_RATE, bits=16):
    """One period of a signed square wave, as mono samples"""
    period = max(2, int(round(sample_rate / frequency)))
    amplitude = 2 ** (abs(bits) - 1) - 1
    samples = array("h", [0] * period)
    for t in range(period):
        samples[t] = amplitude if t < period / 2 else -amplitude
    return samples


class Screen:
    """Draws frames into a pygame window"""

    def __init__(self, config, machine=None):
        self.scale = config.scale
        self.gradient = config.gradient_coloring
        self.hue = 0
        self.machine = machine if config.show_registers else None

        self.video_w = VIDEO_X * self.scale
        self.video_h = VIDEO_Y * self.scale
        screen_y = self.video_h
        self.font = None
        if self.machine is not None:
            pygame.font.init()
            self.font = pygame.font.SysFont('Consolas', REG_FONT_RES)
            screen_y += REG_LINES * REG_FONT_RES + REG_FONT_PAD

        pygame.display.set_caption(WINDOW_TITLE)
        log.info(f"Display mode {self.video_w} x {screen_y}")
        self.surface = pygame.display.set_mode([self.video_w, screen_y])

    def pixel_color(self):
        if not self.gradient:
            return PIXEL_ON
        self.hue = (self.hue + 1) % 360
        return gradient_color(self.hue)

    def render(self, frame):
        # Nothing moves on screen unless the framebuffer, the hue or the
        # registers could have changed
        if not (frame.changed or self.gradient or self.font is not None):
            return
        color = self.pixel_color()
        self.surface.fill(PIXEL_OFF, (0, 0, self.video_w, self.video_h))
        for y, row in enumerate(frame.pixels):
            for x, px in enumerate(row):
                if px:
                    pygame.draw.rect(self.surface, color,
                        (x * self.scale, y * self.scale, self.scale, self.scale))
        if self.font is not None:
            self.display_regs()
        pygame.display.flip()

    def display_regs(self):
        regs = self.machine.registers
        timers = self.machine.timers
        line_off = self.font.size("V")[1]
        # This just blanks the register display.
        self.surface.fill((255, 255, 255), (0, self.video_h, self.video_w,
            REG_LINES * REG_FONT_RES + REG_FONT_PAD))
        lines = []
        for x in range(0, 16, 4):
            lines.append(" ".join(f"V{r:1X}: 0x{regs.v[r]:02x}" for r in range(x, x + 4)))
        lines.append(f"PC: 0x{regs.pc:04x} I: 0x{regs.i:04x} DT: {timers.delay:3d} "
            f"ST: {timers.sound:3d} {self.machine.cpu.next_mnemonic()}")
        for n, text in enumerate(lines):
            ts = self.font.render(text, False, (0, 0, 0))
            self.surface.blit(ts, (0, self.video_h + line_off * n))


class Beeper:
    """Loops a square wave while the sound timer runs.

    A beep at a new frequency rebuilds the wave before it plays."""

    def __init__(self, frequency, mixer=pygame.mixer):
        self.mixer = mixer
        self.frequency = None
        self.sound = None
        self.playing = False
        self.enabled = False
        try:
            self.mixer.init()
        except pygame.error as e:
            log.warning(f"No audio device, running silent: {e}")
            return
        self.enabled = True
        self.tune(frequency)

    def tune(self, frequency):
        if not self.enabled or frequency == self.frequency:
            return
        was_playing = self.playing
        self.pause()
        rate, bits, _ = self.mixer.get_init()
        self.sound = self.mixer.Sound(buffer=square_wave(frequency, rate, bits))
        self.sound.set_volume(BEEP_VOLUME)
        self.frequency = frequency
        log.debug(f"Beep tuned to {frequency}Hz")
        if was_playing:
            self.beep(frequency)

    def beep(self, frequency):
        if not self.enabled:
            return
        self.tune(frequency)
        if self.playing:
            return
        self.sound.play(loops=-1)
        self.playing = True

    def pause(self):
        if self.sound is None or not self.playing:
            return
        self.sound.stop()
        self.playing = False


class KeyboardInput:
    """Feeds pygame key events into a Keypad"""

    def __init__(self, keypad, on_quit):
        self.keypad = keypad
        self.on_quit = on_quit

    def handle(self, event):
        if event.type == pygame.QUIT:
            self.on_quit()
        elif event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.on_quit()
            elif event.key in KEY_MAP:
                self.keypad.set_pressed(KEY_MAP.index(event.key))
        elif event.type == pygame.KEYUP:
            if event.key in KEY_MAP:
                self.keypad.set_released(KEY_MAP.index(event.key))

    def poll(self):
        for event in pygame.event.get():
            self.handle(event)
