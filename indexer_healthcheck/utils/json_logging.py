import logging
import json
import datetime


class JsonFormatter(logging.Formatter):
    """
    Custom logging formatter to output logs in JSON format.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.
        """
        created = datetime.datetime.fromtimestamp(record.created, datetime.timezone.utc)
        log_entry = {
            "timestamp": created.isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry)


def init_logging(level: int = logging.WARNING):
    """
    Initialize logging with JSON formatting on stderr.
    Stdout is reserved for the check verdict.
    """
    handler = logging.StreamHandler()
    handler.setFormatter(JsonFormatter())

    logger = logging.getLogger()
    logger.handlers.clear()
    logger.addHandler(handler)
    logger.setLevel(level)
