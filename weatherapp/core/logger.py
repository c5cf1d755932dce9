import json
import logging
from datetime import datetime

# Extra fields handlers attach via `extra={...}` that should reach the output.
CONTEXT_FIELDS = ("location", "operation", "observation_id")


class JsonFormatter(logging.Formatter):
    """
    Render log records as one JSON object per line.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_record = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        for field in CONTEXT_FIELDS:
            value = getattr(record, field, None)
            if value is not None:
                log_record[field] = value

        if record.levelno >= logging.ERROR:
            log_record["source"] = f"{record.pathname}:{record.lineno}"
            if record.exc_info:
                log_record["stack_trace"] = self.formatException(record.exc_info)
        return json.dumps(log_record, ensure_ascii=False)


def setup_logging(level: str = "INFO") -> None:
    """
    Configure the root logger with a single JSON console handler.

    Calling this more than once replaces the previously installed handler
    instead of stacking duplicates.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    for handler in list(root_logger.handlers):
        if isinstance(handler.formatter, JsonFormatter):
            root_logger.removeHandler(handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(JsonFormatter())
    root_logger.addHandler(console_handler)
