# utils/logging.py
import json
import logging
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler

import config


class JsonFormatter(logging.Formatter):
     """JSON log formatter with support for extra fields."""

     # Fields to extract from log record's extra dict
     EXTRA_FIELDS = (
          "payment_id", "site_id", "url_hash", "amount", "error_code",
          "kid", "path", "method", "status_code",
     )

     def format(self, record: logging.LogRecord) -> str:
          payload = {
               "ts": datetime.now(timezone.utc).isoformat(),
               "level": record.levelname,
               "logger": record.name,
               "message": record.getMessage(),
          }

          for field in self.EXTRA_FIELDS:
               value = getattr(record, field, None)
               if value is not None:
                    payload[field] = value

          if record.exc_info:
               payload["exception"] = self.formatException(record.exc_info)

          return json.dumps(payload, ensure_ascii=False)


def configure_logging() -> None:
     formatter = JsonFormatter()
     handler = logging.StreamHandler()
     handler.setFormatter(formatter)
     root = logging.getLogger()
     root.setLevel(config.LOG_LEVEL)
     handlers = [handler]
     if config.LOG_FILE:
          file_handler = RotatingFileHandler(
               config.LOG_FILE,
               maxBytes=config.LOG_MAX_BYTES,
               backupCount=config.LOG_BACKUP_COUNT,
          )
          file_handler.setFormatter(formatter)
          handlers.append(file_handler)
     root.handlers = handlers
