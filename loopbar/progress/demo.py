#!/usr/bin/env python3
"""Run a progress bar through every theme to eyeball rendering and overhead."""

import argparse
import logging
import sys
import time
from dataclasses import replace
from pathlib import Path

# Ensure project root is on sys.path
_PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
if str(_PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(_PROJECT_ROOT))

from loopbar.progress.reporter import ProgressReporter
from loopbar.progress.themes import Theme
from loopbar.shared.colors import is_tty
from loopbar.shared.config import ESTIMATORS, load_config, settings_from_config
from loopbar.shared.logging_config import setup_logging

logger = logging.getLogger(__name__)


def run_loop(bar, count, delay=0.0):
    """Drive bar from 0 to count, then finish. Returns wall time in seconds."""
    start = time.perf_counter()
    for i in range(count):
        bar.progress(i, count)
        if delay:
            time.sleep(delay)
    bar.finish()
    return time.perf_counter() - start


def build_parser():
    parser = argparse.ArgumentParser(description='Demo the loopbar progress reporter.')
    parser.add_argument('--count', '-n', type=int, default=2000,
                        help='Iterations per theme (default: 2000)')
    parser.add_argument('--delay', type=float, default=0.0,
                        help='Seconds to sleep per iteration (default: 0)')
    parser.add_argument('--theme', choices=[t.value for t in Theme],
                        help='Show only this theme (default: all)')
    parser.add_argument('--width', type=int,
                        help='Bar width in characters')
    parser.add_argument('--label', help='Text shown after the stats')
    parser.add_argument('--estimator', choices=ESTIMATORS,
                        help='Rate estimator (default from config, else ema)')
    parser.add_argument('--no-color', action='store_true',
                        help='Disable ANSI colors')
    parser.add_argument('--ascii', action='store_true',
                        help='Use ASCII-only glyphs')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Show debug output')
    parser.add_argument('--quiet', '-q', action='store_true',
                        help='Show only warnings and errors')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    config = load_config(fallback={})
    setup_logging('loopbar', verbose=args.verbose, quiet=args.quiet, config=config)

    if args.count < 1:
        logger.error("--count must be positive, got %d", args.count)
        return 1
    if args.width is not None and args.width < 1:
        logger.error("--width must be positive, got %d", args.width)
        return 1

    settings = settings_from_config(config)
    overrides = {}
    if args.width is not None:
        overrides['width'] = args.width
    if args.label is not None:
        overrides['label'] = args.label
    if args.estimator:
        overrides['estimator'] = args.estimator
    if args.ascii:
        overrides['extended_glyphs'] = False
    settings = replace(settings, **overrides)

    bar = ProgressReporter.from_settings(settings)
    if args.no_color or not is_tty(sys.stdout):
        bar.disable_colors()

    themes = [Theme.parse(args.theme)] if args.theme else list(Theme)
    for theme in themes:
        print(f"{theme.value}:")
        bar.reset()
        bar.set_theme(theme)
        seconds = run_loop(bar, args.count, args.delay)
        logger.info("%s: %d iterations in %.4fs (%d redraws)",
                    theme.value, args.count, seconds, bar.nupdates)

    return 0


if __name__ == '__main__':
    sys.exit(main())
