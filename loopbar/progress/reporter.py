"""Low-overhead progress line for tight loops.

Call progress(i, total) on every iteration. Most calls cost one modulo
check: the reporter learns a sampling period from the observed loop speed
and only measures and redraws on calls where current % period == 0,
aiming at about TARGET_HZ redraws per second.

Usage:
    bar = ProgressReporter()
    for i in range(n):
        bar.progress(i, n)
    bar.finish()

Not thread-safe. The reporter assumes it owns its stream between the first
progress() call and finish().
"""

import logging
import sys
import time

from loopbar.progress import rate
from loopbar.progress.themes import Theme, glyphs_for
from loopbar.shared.colors import BLUE, BOLD, GREEN, RED, RESET, progress_color

logger = logging.getLogger(__name__)

WARMUP_TICKS = 10
TARGET_HZ = 25
SMOOTHING_SECONDS = 3
MAX_PERIOD = 500000
DEFAULT_SMOOTHING = 50


def _check_positive_int(name, value):
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")


def scale_rate(value):
    """Split items/second into a display value and unit suffix."""
    if value > 1e6:
        return value / 1e6, 'MHz'
    if value > 1e3:
        return value / 1e3, 'kHz'
    return value, 'Hz'


def render_bar(fraction, glyphs, width):
    """Bar graphic for fraction in [0, 1], exactly width glyphs long."""
    fills = min(max(fraction, 0.0), 1.0) * width
    ifills = int(fills)
    bar = glyphs.full * ifills
    if ifills < width:
        bar += glyphs.bars[int(8.0 * (fills - ifills))]
        bar += glyphs.empty * (width - ifills - 1)
    return bar


def format_line(current, total, items_per_sec, elapsed, eta, glyphs,
                width=40, label="", use_colors=True, color_transition=True):
    """Build one status line, starting with a carriage return.

    eta of None means unknown and is shown as '?'.
    """
    fraction = current / total if total > 0 else 0.0
    pct = min(max(fraction * 100.0, 0.0), 100.0)

    parts = ["\r "]
    if use_colors:
        parts.append(progress_color(pct) if color_transition else GREEN)
        parts.append(" ")
    parts.append(render_bar(fraction, glyphs, width))
    parts.append(glyphs.right_pad + " ")
    if use_colors:
        parts.append(BOLD + RED)
    parts.append(f"{pct:4.1f}% ")
    if use_colors:
        parts.append(BLUE)

    shown, unit = scale_rate(items_per_sec)
    eta_text = "?" if eta is None else f"{eta:.0f}"
    parts.append(f"[{current:4d}/{total:4d} | {shown:3.1f} {unit} | {elapsed:.0f}s<{eta_text}s] ")
    parts.append(f"{label} ")
    if use_colors:
        parts.append(RESET)
    return "".join(parts)


class ProgressReporter:
    """Single-line progress reporter with adaptive refresh throttling."""

    def __init__(self, stream=None, width=40, theme=Theme.BLOCKS, use_colors=True,
                 color_transition=True, label="", smoothing=DEFAULT_SMOOTHING,
                 estimator='ema', alpha=rate.DEFAULT_ALPHA, extended_glyphs=True,
                 clock=time.perf_counter):
        _check_positive_int("width", width)
        _check_positive_int("smoothing", smoothing)
        if not 0 < alpha <= 1:
            raise ValueError(f"alpha must be in (0, 1], got {alpha}")
        if estimator not in ('ema', 'sma'):
            raise ValueError(f"Unknown rate estimator '{estimator}' (expected 'ema' or 'sma')")

        self.stream = stream
        self.width = width
        self.use_colors = use_colors
        self.color_transition = color_transition and use_colors
        self.label = label
        self.estimator = estimator
        self.alpha = alpha
        self._extended_glyphs = extended_glyphs
        self._clock = clock
        self._initial_smoothing = smoothing
        self.window = rate.SampleWindow(smoothing)
        self.last_line = ""
        self.set_theme(theme)
        self.reset()

    @classmethod
    def from_settings(cls, settings, stream=None, clock=time.perf_counter):
        """Build a reporter from a ReporterSettings (see loopbar.shared.config)."""
        return cls(
            stream=stream,
            width=settings.width,
            theme=settings.theme,
            use_colors=settings.colors,
            color_transition=settings.color_transition,
            label=settings.label,
            smoothing=settings.smoothing,
            estimator=settings.estimator,
            alpha=settings.alpha,
            extended_glyphs=settings.extended_glyphs,
            clock=clock,
        )

    def reset(self):
        """Start a new measurement session; render settings are kept."""
        now = self._clock()
        self.t_first = now
        self.t_old = now
        self.n_old = 0
        self.nupdates = 0
        self.period = 1
        self.total = 0
        self.window.clear()
        self.window.resize(self._initial_smoothing)
        self._invalid_total_logged = False
        logger.debug("Progress session reset")

    @property
    def smoothing(self):
        return self.window.capacity

    # -- themes and display settings --------------------------------------

    @property
    def extended_glyphs(self):
        return self._extended_glyphs

    @extended_glyphs.setter
    def extended_glyphs(self, value):
        """Switch between extended and ASCII-only glyphs for the current theme."""
        self._extended_glyphs = value
        self.glyphs = glyphs_for(self.theme, value)

    def set_theme(self, theme):
        self.theme = Theme.parse(theme)
        self.glyphs = glyphs_for(self.theme, self._extended_glyphs)

    def set_theme_blocks(self):
        self.set_theme(Theme.BLOCKS)

    def set_theme_basic(self):
        self.set_theme(Theme.BASIC)

    def set_theme_line(self):
        self.set_theme(Theme.LINE)

    def set_theme_circle(self):
        self.set_theme(Theme.CIRCLE)

    def set_theme_braille(self):
        self.set_theme(Theme.BRAILLE)

    def set_theme_braille_spin(self):
        self.set_theme(Theme.BRAILLE_SPIN)

    def set_theme_vertical(self):
        self.set_theme(Theme.VERTICAL)

    def set_label(self, label):
        self.label = label

    def disable_colors(self):
        self.use_colors = False
        self.color_transition = False

    # -- reporting ---------------------------------------------------------

    def progress(self, current, total):
        """Report current position out of total."""
        if current % self.period == 0:
            self._tick(current, total)

    def finish(self):
        """Draw the final 100% line and end it with a newline."""
        if self.total > 0:
            self._tick(self.total, self.total)
            logger.debug(
                "Progress finished: %d items in %.3fs over %d sample ticks",
                self.total, self.t_old - self.t_first, self.nupdates,
            )
        out = self._out()
        out.write("\n")
        out.flush()

    def _tick(self, current, total):
        if total <= 0:
            if not self._invalid_total_logged:
                logger.debug("Ignoring progress with non-positive total %r", total)
                self._invalid_total_logged = True
            return

        self.total = total
        self.nupdates += 1
        now = self._clock()
        elapsed = now - self.t_first
        self.window.append(now - self.t_old, current - self.n_old)
        self.n_old = current
        self.t_old = now

        items_per_sec = rate.estimate(self.window, self.estimator, self.alpha)

        if self.nupdates > WARMUP_TICKS:
            self._adapt(current, elapsed)

        eta = (total - current) / items_per_sec if items_per_sec > 0 else None

        completing = total - current <= self.period
        if completing:
            # too few samples left to trust the window
            if elapsed > 0:
                items_per_sec = total / elapsed
            current = total
            eta = 0.0

        self.last_line = format_line(
            current, total, items_per_sec, elapsed, eta, self.glyphs,
            width=self.width, label=self.label,
            use_colors=self.use_colors, color_transition=self.color_transition,
        )
        out = self._out()
        out.write(self.last_line)
        if not completing:
            out.flush()

    def _adapt(self, current, elapsed):
        steady = TARGET_HZ * SMOOTHING_SECONDS
        if self.window.capacity != steady:
            self.window.resize(steady)
            logger.debug("Warm-up done after %d ticks; smoothing window now %d",
                         self.nupdates - 1, steady)
        if elapsed > 0:
            period = int(round(current / elapsed / TARGET_HZ))
            self.period = min(max(period, 1), MAX_PERIOD)

    def _out(self):
        return self.stream if self.stream is not None else sys.stdout
