# === FILE: site_mapper/logger.py ===
"""Logging setup for **SiteMapper**.

All crawler modules log through children of the ``SiteMapper`` logger
(``SiteMapper.crawler``, ``SiteMapper.extractor``...), obtained with
:func:`get_logger`. Handlers live only on the parent: records go to stdout
and, when the CLI passes ``--log-file``, to a size-rotated file as well.

    from site_mapper.logger import get_logger
    log = get_logger("crawler")
    log.info("Старт обхода")
"""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Final, List, Optional, Union

DEFAULT_FORMAT: Final[str] = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOGGER_NAME: Final[str] = "SiteMapper"

#: ротация файла журнала: 5 МБ, три архивные копии
LOG_FILE_MAX_BYTES: Final[int] = 5 * 1024 * 1024
LOG_FILE_BACKUPS: Final[int] = 3

Level = Union[int, str]
PathLike = Union[str, Path]


def _make_handlers(log_file: Optional[PathLike], fmt: str) -> List[logging.Handler]:
    handlers: List[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        handlers.append(
            RotatingFileHandler(
                str(log_file),
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            )
        )
    formatter = logging.Formatter(fmt)
    for handler in handlers:
        handler.setFormatter(formatter)
    return handlers


def _drop_handlers(target: logging.Logger) -> None:
    for handler in list(target.handlers):
        target.removeHandler(handler)
        handler.close()


def configure(
    *,
    level: Level = "INFO",
    log_file: Optional[PathLike] = None,
    log_format: str = DEFAULT_FORMAT,
    replace_handlers: bool = True,
) -> logging.Logger:
    """
    Настраивает логгер ``SiteMapper`` и возвращает его.

    Parameters
    ----------
    level
        Уровень логирования, числом или строкой (``"DEBUG"``).
    log_file
        Файл журнала с ротацией; None -> только stdout.
    log_format
        Строка формата для :class:`logging.Formatter`.
    replace_handlers
        Закрыть и снять прежние обработчики перед установкой новых.
    """
    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    if replace_handlers:
        _drop_handlers(root)
    for handler in _make_handlers(log_file, log_format):
        root.addHandler(handler)
    # записи не дублируются в корневой логгер приложения
    root.propagate = False
    return root


def init_logging(
    level: Level = "INFO",
    log_file: Optional[PathLike] = None,
    log_format: str = DEFAULT_FORMAT,
) -> logging.Logger:
    """Точка входа CLI: полная переустановка обработчиков."""
    return configure(level=level, log_file=log_file, log_format=log_format)


def get_logger(suffix: Optional[str] = None) -> logging.Logger:
    """``SiteMapper`` or its child ``SiteMapper.<suffix>``."""
    if not suffix:
        return logging.getLogger(LOGGER_NAME)
    return logging.getLogger(f"{LOGGER_NAME}.{suffix}")


logger: logging.Logger = init_logging()

__all__ = ["logger", "configure", "init_logging", "get_logger", "LOGGER_NAME", "DEFAULT_FORMAT"]
