import logging, json, sys, time, os


class JsonFormatter(logging.Formatter):
    """One JSON object per line, UTC timestamps."""

    converter = time.gmtime

    def __init__(self):
        super().__init__(datefmt="%Y-%m-%dT%H:%M:%SZ")

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "ts": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "name": record.name,
            "msg": record.getMessage(),
        }
        if record.exc_info:
            entry["exc"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def get_logger(name="authstore", level=None, to_file=None):
    """Structured logger shared by all authstore components.

    Level defaults to AUTHSTORE_LOG_LEVEL (INFO when unset). The stdout
    handler lives on the top-level logger only; children propagate to it.
    """
    logger = logging.getLogger(name)
    if level is None:
        level = os.getenv("AUTHSTORE_LOG_LEVEL", "INFO").upper()
    logger.setLevel(level)

    formatter = JsonFormatter()
    top = logging.getLogger(name.split(".")[0])
    if not top.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        top.addHandler(handler)

    if to_file and not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        os.makedirs(os.path.dirname(to_file) or ".", exist_ok=True)
        file_handler = logging.FileHandler(to_file)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
