"""ANSI color utilities for terminal output."""

import colorsys
import sys

RED = '\033[31m'
GREEN = '\033[32m'
YELLOW = '\033[1;33m'
BLUE = '\033[34m'
CYAN = '\033[36m'
BOLD = '\033[1m'
RESET = '\033[0m'


class Colors:
    """ANSI color codes for log and banner output.

    Class attributes are blanked by disable(); the module-level codes are
    not, so per-instance color switches (see ProgressReporter) stay
    independent of this global toggle.
    """
    RED = RED
    GREEN = GREEN
    YELLOW = YELLOW
    BLUE = BLUE
    CYAN = CYAN
    BOLD = BOLD
    NC = RESET  # No Color

    @classmethod
    def disable(cls):
        """Disable colors for non-TTY output."""
        cls.RED = ''
        cls.GREEN = ''
        cls.YELLOW = ''
        cls.BLUE = ''
        cls.CYAN = ''
        cls.BOLD = ''
        cls.NC = ''

    @classmethod
    def auto(cls, stream=None):
        """Disable colors if the stream (stdout by default) is not a TTY."""
        if not is_tty(stream if stream is not None else sys.stdout):
            cls.disable()


def is_tty(stream):
    """Return True if stream is an interactive terminal."""
    isatty = getattr(stream, 'isatty', None)
    return bool(isatty and isatty())


def hsv_to_rgb(h, s, v):
    """Convert HSV (each 0..1) to integer RGB channels in 0..255.

    Channels are truncated, not rounded. A saturation of ~0 gives a grey
    scaled by value.
    """
    if s < 1e-6:
        grey = int(v * 255.0)
        return grey, grey, grey
    r, g, b = colorsys.hsv_to_rgb(h % 1.0, s, v)
    return int(r * 255.0), int(g * 255.0), int(b * 255.0)


def truecolor(r, g, b):
    """24-bit foreground escape sequence."""
    return f'\033[38;2;{r};{g};{b}m'


def progress_color(pct, saturation=0.65, value=1.0):
    """Escape sequence sweeping red (0%) to green (100%)."""
    pct = min(max(pct, 0.0), 100.0)
    return truecolor(*hsv_to_rgb(pct / 300.0, saturation, value))
