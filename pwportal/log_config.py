"""Настройка логирования приложения.

Файлы логов хранятся в директории `data/logs/` (относительно CWD, можно
переопределить через LOG_DIR), ротация по дате через TimedRotatingFileHandler.

- Ротация: ежедневно (midnight, UTC).
- Хранение: log_retention_days (по умолчанию 30).
- Уровень: log_level (по умолчанию INFO).
"""
from __future__ import annotations

import glob
import logging
import os
import time
from logging.handlers import TimedRotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LOG_FILE = "app.log"

# Отслеживаем установленные handlers, чтобы при повторном вызове удалять старые.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def _normalize_level(level: str) -> str:
    level_str = (level or "INFO").strip().upper()
    if level_str not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        level_str = "INFO"
    return level_str


def setup_logging(
    level: str = "INFO",
    log_dir: str = "data/logs",
    retention_days: int = 30,
) -> None:
    """Настраивает корневой логгер приложения.

    - Файловый handler: ротация по дате.
    - Консольный handler: для docker logs / stdout.
    """
    global _file_handler, _console_handler

    level_str = _normalize_level(level)
    log_level = getattr(logging, level_str, logging.INFO)
    retention_days = max(1, min(365, int(retention_days or 30)))

    root = logging.getLogger()

    if _file_handler and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    if _console_handler and _console_handler in root.handlers:
        root.removeHandler(_console_handler)

    log_dir = os.path.join(os.getcwd(), log_dir) if not os.path.isabs(log_dir) else log_dir
    os.makedirs(log_dir, exist_ok=True)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    fh = TimedRotatingFileHandler(
        os.path.join(log_dir, _LOG_FILE),
        when="midnight",
        interval=1,
        backupCount=retention_days,
        encoding="utf-8",
        utc=True,
    )
    fh.suffix = "%Y-%m-%d"
    fh.setLevel(log_level)
    fh.setFormatter(formatter)
    _file_handler = fh

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch

    root.setLevel(log_level)
    root.addHandler(fh)
    root.addHandler(ch)

    _cleanup_old_logs(log_dir, retention_days)

    # Подавляем слишком шумные логгеры
    for name in ("uvicorn.access", "httpcore", "httpx", "ldap3"):
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    logging.getLogger("pwportal").info(
        "Logging configured: level=%s, dir=%s, retention=%d days",
        level_str, log_dir, retention_days,
    )


def _cleanup_old_logs(log_dir: str, retention_days: int) -> None:
    """Удаляет ротированные файлы логов старше retention_days."""
    cutoff = time.time() - (retention_days * 86400)
    for f in glob.glob(os.path.join(log_dir, f"{_LOG_FILE}.*")):
        try:
            if os.path.getmtime(f) < cutoff:
                os.remove(f)
        except OSError:
            continue
