"""
Logging Configuration

Логгеры пакета живут в пространстве имён "matching_oracle". Библиотека
не ставит handlers сама: успешный прогон oracle ничего не выводит, пока
вызывающий код не вызовет setup_logging().
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

ROOT_LOGGER_NAME = "matching_oracle"


class OracleFormatter(logging.Formatter):
    """Formatter: [TIME] LEVEL [logger] message, с цветом уровня на TTY."""

    COLORS = {
        "DEBUG": "\033[36m",      # Cyan
        "INFO": "\033[32m",       # Green
        "WARNING": "\033[33m",    # Yellow
        "ERROR": "\033[31m",      # Red
        "CRITICAL": "\033[35m",   # Magenta
    }
    RESET = "\033[0m"

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        timestamp = datetime.fromtimestamp(record.created).strftime("%H:%M:%S.%f")[:-3]
        level = record.levelname

        if self.use_colors:
            color = self.COLORS.get(level, "")
            level = f"{color}{level}{self.RESET}"

        parts = [
            f"[{timestamp}]",
            f"{level:8}",
            f"[{record.name}]",
            record.getMessage(),
        ]

        if record.exc_info:
            parts.append(self.formatException(record.exc_info))

        return " ".join(parts)


def setup_logging(
    level: str = "INFO",
    log_file: Optional[str] = None,
    use_colors: bool = True,
) -> logging.Logger:
    """
    Настройка логирования для oracle.

    Args:
        level: Уровень (DEBUG, INFO, WARNING, ERROR)
        log_file: Опциональный путь к файлу лога
        use_colors: Цветной вывод в консоль

    Returns:
        Корневой логгер пакета
    """
    root_logger = logging.getLogger(ROOT_LOGGER_NAME)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(OracleFormatter(use_colors=use_colors))
    root_logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setFormatter(OracleFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    root_logger.debug("Logging configured")
    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Логгер внутри пространства имён пакета."""
    if name == ROOT_LOGGER_NAME or name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
