"""Logging bootstrap for callsync entry points.

Scripts call `setup_logging` once at startup. Host applications that embed the
sync core can skip it and let the `callsync.*` records propagate to their own
handlers.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from callsync.config import LoggingSettings, Settings

# logger name -> handlers installed by setup_logging
_installed: dict[str, list[logging.Handler]] = {}


def _level(name: str | None, default: int) -> int:
    value = logging.getLevelName(str(name or "").strip().upper())
    return value if isinstance(value, int) else default


def _log_file(cfg: LoggingSettings, log_dir: str) -> Path | None:
    if not cfg.file:
        return None
    path = Path(str(cfg.file))
    if not path.is_absolute():
        path = Path(log_dir) / path
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def _build_handlers(cfg: LoggingSettings, log_dir: str, level: int) -> list[logging.Handler]:
    formatter = logging.Formatter(fmt=str(cfg.format), datefmt=str(cfg.datefmt))
    handlers: list[logging.Handler] = []

    if cfg.console:
        console = logging.StreamHandler()
        console.setLevel(level)
        handlers.append(console)

    path = _log_file(cfg, log_dir)
    if path is not None:
        rotating = RotatingFileHandler(
            path,
            maxBytes=int(cfg.max_bytes),
            backupCount=int(cfg.backup_count),
            encoding="utf-8",
        )
        rotating.setLevel(_level(cfg.file_level, level))
        handlers.append(rotating)

    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def reset_logging(name: str | None = None) -> None:
    """Close handlers installed by `setup_logging` (all loggers when name is None)."""
    names = [name] if name is not None else list(_installed)
    for logger_name in names:
        handlers = _installed.pop(logger_name, None)
        if handlers is None:
            continue
        logger = logging.getLogger(logger_name)
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True


def setup_logging(settings: Settings, *, force: bool = False) -> logging.Logger:
    """Attach console/rotating-file handlers to the configured callsync logger.

    Repeated calls are no-ops unless `force` is set, in which case the previous
    handlers are closed and rebuilt from `settings`.
    """
    cfg = settings.logging
    name = str(cfg.logger_name or "callsync")
    logger = logging.getLogger(name)
    if name in _installed and not force:
        return logger
    reset_logging(name)

    level = _level(cfg.level, logging.INFO)
    handlers = _build_handlers(cfg, settings.log_dir, level)
    for handler in handlers:
        logger.addHandler(handler)
    # the logger must pass records a more verbose file handler asks for
    logger.setLevel(min([level] + [h.level for h in handlers]))
    logger.propagate = bool(cfg.propagate)
    _installed[name] = handlers
    return logger
