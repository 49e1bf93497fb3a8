import json
import logging
import time
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOGGER_NAME = "jwtgen"


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "ts": time.strftime('%Y-%m-%dT%H:%M:%S', time.gmtime(record.created)),
            "lvl": record.levelname.lower(),
            "msg": record.getMessage(),
            "logger": record.name,
        }
        extra = getattr(record, "extra", None)
        if isinstance(extra, dict):
            base.update(extra)
        return json.dumps(base, ensure_ascii=False)


def configure_logging(level: str = "WARNING", log_file: Optional[str] = None) -> logging.Logger:
    """Attach JSON handlers to the ``jwtgen`` logger once each.

    Records go to stderr, and to a rotating file when ``log_file`` is set.
    Raises ``OSError`` if the log file cannot be opened.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if not any(type(h) is logging.StreamHandler for h in logger.handlers):
        h = logging.StreamHandler(); h.setFormatter(JSONFormatter()); logger.addHandler(h)
    if log_file and not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        path = Path(log_file).expanduser()
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = RotatingFileHandler(path, maxBytes=5_000_000, backupCount=3)
        fh.setFormatter(JSONFormatter()); logger.addHandler(fh)
    logger.setLevel(logging.getLevelNamesMapping().get((level or "").upper(), logging.INFO))
    return logger
