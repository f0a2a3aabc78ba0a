"""Configuration loading and reporter settings for loopbar."""

import logging
import sys
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from loopbar.progress.themes import Theme

CONFIG_PATH = Path.home() / ".loopbar" / "config.yaml"

ESTIMATORS = ('ema', 'sma')

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReporterSettings:
    """Render and estimator defaults for a ProgressReporter."""
    theme: Theme = Theme.BLOCKS
    width: int = 40
    colors: bool = True
    color_transition: bool = True
    label: str = ""
    smoothing: int = 50
    estimator: str = 'ema'
    alpha: float = 0.1
    extended_glyphs: bool = True


def load_config(
    required: bool = False,
    fallback: Optional[Dict[str, Any]] = None
) -> Optional[Dict[str, Any]]:
    """Load ~/.loopbar/config.yaml.

    Args:
        required: If True, exit with error when config is missing.
        fallback: Default dict to return when config is missing and not required.

    Returns:
        Parsed config dict, fallback dict, or None if missing/invalid.
    """
    if not CONFIG_PATH.exists():
        if required:
            logger.error("Config file not found at %s", CONFIG_PATH)
            sys.exit(1)
        return fallback

    try:
        with open(CONFIG_PATH, encoding='utf-8') as f:
            config = yaml.safe_load(f) or {}
    except (yaml.YAMLError, OSError) as e:
        logger.error("Error reading config: %s", e)
        if required:
            sys.exit(1)
        return fallback

    if not isinstance(config, dict):
        logger.warning("Ignoring %s: expected a mapping at the top level, got %s",
                       CONFIG_PATH, type(config).__name__)
        return fallback
    return config


def _check_positive_int(value):
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def _check_bool(value):
    return isinstance(value, bool)


def _check_alpha(value):
    return (isinstance(value, (int, float)) and not isinstance(value, bool)
            and 0 < value <= 1)


_VALIDATORS = {
    'width': (_check_positive_int, "must be a positive integer"),
    'colors': (_check_bool, "must be true or false"),
    'color_transition': (_check_bool, "must be true or false"),
    'label': (lambda v: isinstance(v, str), "must be a string"),
    'smoothing': (_check_positive_int, "must be a positive integer"),
    'estimator': (lambda v: v in ESTIMATORS, f"must be one of {', '.join(ESTIMATORS)}"),
    'alpha': (_check_alpha, "must be a number in (0, 1]"),
    'extended_glyphs': (_check_bool, "must be true or false"),
}


def settings_from_config(config: Optional[Dict[str, Any]]) -> ReporterSettings:
    """Build ReporterSettings from the 'progress' section of a config dict.

    Invalid or unknown keys are logged as warnings and fall back to the
    defaults; this never raises.
    """
    if config is not None and not isinstance(config, dict):
        logger.warning("Ignoring config: expected a mapping, got %s", type(config).__name__)
        return ReporterSettings()

    section = (config or {}).get('progress') or {}
    if not isinstance(section, dict):
        logger.warning("Ignoring 'progress' config section: expected a mapping")
        return ReporterSettings()

    known = {f.name for f in fields(ReporterSettings)}
    values: Dict[str, Any] = {}

    for key, value in section.items():
        if key not in known:
            logger.warning("Unknown progress setting '%s' ignored", key)
            continue

        if key == 'theme':
            try:
                values['theme'] = Theme.parse(value)
            except ValueError as e:
                logger.warning("Invalid progress.theme: %s", e)
            continue

        check, message = _VALIDATORS[key]
        if not check(value):
            logger.warning("Invalid progress.%s=%r: %s", key, value, message)
            continue
        values[key] = float(value) if key == 'alpha' else value

    return ReporterSettings(**values)
