import json
import logging
import sys
from typing import Literal

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

# Болтливые библиотеки: их INFO/DEBUG содержит тела запросов к внешним API.
QUIET_LOGGERS = ("httpx", "httpcore", "openai")


class JsonFormatter(logging.Formatter):
    """Одна запись лога = одна JSON-строка (для продакшена)."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)


def setup_logging(level: LogLevel = "INFO", json_format: bool = False) -> None:
    """
    Настройка логирования для приложения.

    Args:
        level: Уровень логирования
        json_format: Использовать JSON формат (для продакшена)
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))

    # Удаляем только свои хендлеры: чужие (например, caplog в тестах) остаются.
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_fitness_coach", False):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(getattr(logging, level))
    handler._fitness_coach = True

    if json_format:
        handler.setFormatter(JsonFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        ))

    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Получить логгер с указанным именем."""
    return logging.getLogger(name)
