"""Logging setup for loopbar.

Log records go to stderr so they never interleave with the progress line,
which owns stdout. An optional rotating debug file is driven by the
``logging:`` section of ~/.loopbar/config.yaml.
"""

import logging
import os
import sys
from dataclasses import dataclass
from logging.handlers import RotatingFileHandler
from pathlib import Path

from loopbar.shared.colors import Colors, is_tty

# Sentinel to track whether file logging has already been configured
_file_logging_configured = False

LEVELS = ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL')

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LogFileSettings:
    """Rotating debug-log settings from the config's 'logging' section."""
    file: str = "~/.loopbar/logs/debug.log"
    level: str = 'DEBUG'
    max_size_mb: float = 5
    backup_count: int = 3

    @property
    def path(self):
        return os.path.expanduser(self.file)

    @property
    def max_bytes(self):
        return int(self.max_size_mb * 1024 * 1024)


class ColorFormatter(logging.Formatter):
    """'[LEVEL] message' lines, colored through the Colors toggle."""

    LEVEL_COLORS = {
        logging.DEBUG: ('CYAN', '[DEBUG]'),
        logging.INFO: ('GREEN', '[INFO]'),
        logging.WARNING: ('YELLOW', '[WARN]'),
        logging.ERROR: ('RED', '[ERROR]'),
        logging.CRITICAL: ('RED', '[CRITICAL]'),
    }

    def format(self, record):
        color_name, prefix = self.LEVEL_COLORS.get(record.levelno, ('NC', '[LOG]'))
        return f"{getattr(Colors, color_name, '')}{prefix}{Colors.NC} {record.getMessage()}"


def setup_logging(name, verbose=False, quiet=False, config=None, stream=None):
    """Attach a colored stderr handler to the named logger.

    Colors are switched off when the stream is not a terminal. Calling
    again only adjusts the level.

    Args:
        name: Logger name, usually 'loopbar'
        verbose: If True, show DEBUG messages
        quiet: If True, show only WARNING and above
        config: Optional config dict passed on to configure_file_logging()
        stream: Handler stream, stderr by default

    Returns:
        Configured logger
    """
    stream = stream if stream is not None else sys.stderr
    log = logging.getLogger(name)

    if not log.handlers:
        if not is_tty(stream):
            Colors.disable()
        handler = logging.StreamHandler(stream)
        handler.setFormatter(ColorFormatter())
        log.addHandler(handler)

    if verbose:
        log.setLevel(logging.DEBUG)
    elif quiet:
        log.setLevel(logging.WARNING)
    else:
        log.setLevel(logging.INFO)

    if config is not None:
        configure_file_logging(config)

    return log


def _is_number(value):
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def file_settings_from_config(config):
    """Read the 'logging' section; None when file logging is off.

    Malformed values are logged as warnings and replaced by defaults; this
    never raises.
    """
    if not isinstance(config, dict):
        return None
    section = config.get('logging')
    if section is None:
        return None
    if not isinstance(section, dict):
        logger.warning("Ignoring 'logging' config section: expected a mapping")
        return None

    enabled = section.get('enabled', False)
    if not isinstance(enabled, bool):
        logger.warning("Invalid logging.enabled=%r: must be true or false", enabled)
        return None
    if not enabled:
        return None

    defaults = LogFileSettings()
    values = {}

    file = section.get('file', defaults.file)
    if isinstance(file, str) and file.strip():
        values['file'] = file
    else:
        logger.warning("Invalid logging.file=%r: must be a path", file)

    level = section.get('level', defaults.level)
    if isinstance(level, str) and level.upper() in LEVELS:
        values['level'] = level.upper()
    else:
        logger.warning("Invalid logging.level=%r: must be one of %s", level, ', '.join(LEVELS))

    size = section.get('max_size_mb', defaults.max_size_mb)
    if _is_number(size) and size > 0:
        values['max_size_mb'] = size
    else:
        logger.warning("Invalid logging.max_size_mb=%r: must be a positive number", size)

    backups = section.get('backup_count', defaults.backup_count)
    if isinstance(backups, int) and not isinstance(backups, bool) and backups >= 0:
        values['backup_count'] = backups
    else:
        logger.warning("Invalid logging.backup_count=%r: must be a non-negative integer", backups)

    return LogFileSettings(**values)


def configure_file_logging(config):
    """Attach a plain-text RotatingFileHandler to the root logger.

    Does nothing unless the config enables file logging, and only once per
    process.

    Returns:
        The file handler if one was added, None otherwise.
    """
    global _file_logging_configured

    settings = file_settings_from_config(config)
    if settings is None or _file_logging_configured:
        return None

    level = getattr(logging, settings.level)
    Path(settings.path).parent.mkdir(parents=True, exist_ok=True)

    handler = RotatingFileHandler(
        settings.path,
        maxBytes=settings.max_bytes,
        backupCount=settings.backup_count,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))

    root = logging.getLogger()
    root.addHandler(handler)
    if root.level == logging.NOTSET or root.level > level:
        root.setLevel(level)

    _file_logging_configured = True
    logger.debug("File logging enabled: %s (level=%s)", settings.path, settings.level)
    return handler
