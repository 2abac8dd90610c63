"""
Logging setup for applications embedding the analytics engine.

The engine modules only ever call ``logging.getLogger(__name__)``; handlers
are attached here, once, by whoever owns the process.
"""

import logging
from pathlib import Path
from typing import Optional

from config.constants import DEFAULT_LOG_FORMAT, DEFAULT_LOG_LEVEL
from config.settings import Settings, get_settings

ROOT_LOGGERS = ('config', 'financial', 'data', 'performance', 'utils')


def setup_logging(settings: Optional[Settings] = None, force: bool = False) -> logging.Logger:
    """Attach console (and optionally file) handlers from the logging settings.

    Args:
        settings: Settings to read ``logging.level``, ``logging.file`` and
            ``logging.format`` from; the global settings are used when omitted
        force: Replace handlers installed by an earlier call

    Returns:
        The root logger
    """
    settings = settings or get_settings()
    log_config = settings.get_logging_config()

    level_name = str(log_config.get('level') or DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO

    formatter = logging.Formatter(log_config.get('format') or DEFAULT_LOG_FORMAT)
    root = logging.getLogger()

    existing = [h for h in root.handlers if getattr(h, '_analytics_handler', False)]
    if existing and not force:
        root.setLevel(level)
        return root
    for handler in existing:
        root.removeHandler(handler)
        handler.close()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console._analytics_handler = True
    root.addHandler(console)

    log_file = log_config.get('file')
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8')
        file_handler.setFormatter(formatter)
        file_handler._analytics_handler = True
        root.addHandler(file_handler)

    root.setLevel(level)
    for name in ROOT_LOGGERS:
        logging.getLogger(name).setLevel(level)

    root.debug(f"Logging configured at {level_name}" + (f", writing to {log_file}" if log_file else ""))
    return root
