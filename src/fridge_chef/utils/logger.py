"""Logging for the fridge-chef pipelines.

Every service logs through the module-level ``logger`` and tags records with
the pipeline (and, for Gemini requests, the model) via ``log_context()``:

    logger.info("Generated recipes", extra=log_context(PIPELINE, model))

Configured via environment variables:
- LOG_LEVEL: DEBUG, INFO, WARNING, ERROR (default: INFO)
- LOG_TYPE: text, json (default: text)
"""

import json
import logging
import os
import sys
from typing import Any, Optional


# Record attributes set through log_context(), in output order
PIPELINE_FIELDS = ("pipeline", "model")

# Third-party loggers that log every HTTP request at INFO
NOISY_LOGGERS = ("google.genai", "httpx")


def log_context(pipeline: str, model: Optional[str] = None) -> dict[str, str]:
    """Build the ``extra`` mapping that tags a record with its pipeline and model."""
    context = {"pipeline": pipeline}
    if model:
        context["model"] = model
    return context


def _pipeline_fields(record: logging.LogRecord) -> dict[str, Any]:
    return {field: getattr(record, field) for field in PIPELINE_FIELDS if hasattr(record, field)}


class JSONFormatter(logging.Formatter):
    """One JSON object per line, with pipeline and model when present."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: dict[str, Any] = {
            "timestamp": self.formatTime(record, "%Y-%m-%dT%H:%M:%S"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **_pipeline_fields(record),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class RichTextFormatter(logging.Formatter):
    """Colored single-line output prefixed with ``[pipeline]`` or ``[pipeline/model]``."""

    RESET = "\033[0m"

    # level -> (ANSI color, icon)
    LEVEL_STYLES = {
        "DEBUG": ("\033[36m", "🔍"),
        "INFO": ("\033[32m", "ℹ️"),
        "WARNING": ("\033[33m", "⚠️"),
        "ERROR": ("\033[31m", "❌"),
    }

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        color, icon = self.LEVEL_STYLES.get(level, (self.RESET, ""))
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")

        fields = _pipeline_fields(record)
        prefix = f"[{'/'.join(str(value) for value in fields.values())}] " if fields else ""

        message = f"{color}{icon} {timestamp} {level:<8} {record.name:<20} {prefix}{record.getMessage()}{self.RESET}"
        if record.exc_info:
            message += f"\n{self.formatException(record.exc_info)}"
        return message


FORMATTERS = {"json": JSONFormatter, "text": RichTextFormatter}


def get_logger(name: str) -> logging.Logger:
    """Return the named logger, attaching a stdout handler on first use.

    Level comes from LOG_LEVEL (unknown values fall back to INFO) and the
    format from LOG_TYPE (unknown values fall back to text).
    """
    logger_instance = logging.getLogger(name)
    if logger_instance.handlers:
        return logger_instance

    log_level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    formatter_class = FORMATTERS.get(os.getenv("LOG_TYPE", "text").lower(), RichTextFormatter)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(log_level)
    handler.setFormatter(formatter_class())

    logger_instance.setLevel(log_level)
    logger_instance.addHandler(handler)
    return logger_instance


logger = get_logger("fridge_chef")

for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)
