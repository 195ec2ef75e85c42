# ------------
# Logging for the prompt pipeline: one structured console handler
# ------------

import logging
import time

_INIT_DONE = False

LEVEL_MAP = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
    "NOTSET": logging.NOTSET,
}

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] stage=%(stage)s op=%(op)s %(message)s"


def _read_level():
    from ytdlp_prompt.utils.config_utils import load_key

    level_str = str(load_key("debug.log_level", "WARNING")).strip().upper()
    return LEVEL_MAP.get(level_str, logging.WARNING)


class _FieldDefaults(logging.Filter):
    # records from third-party loggers lack our extra fields
    def filter(self, record):
        for name in ("stage", "op"):
            if not hasattr(record, name):
                setattr(record, name, "-")
        return True


def init_logging():
    # idempotent init
    global _INIT_DONE
    if _INIT_DONE:
        return

    logger = logging.getLogger()
    logger.setLevel(_read_level())

    # avoid duplicate handlers
    if not logger.handlers:
        console = logging.StreamHandler()
        console.addFilter(_FieldDefaults())
        console.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
        logger.addHandler(console)

    _INIT_DONE = True


def _default_fields(extra):
    return {
        "stage": extra.get("stage") or "-",
        "op": extra.get("op") or "-",
    }


def log_event(level, message, **extra):
    init_logging()

    fields = _default_fields(extra)
    logger = logging.getLogger(extra.get("logger") or __name__)

    level = str(level).lower()
    if level == "debug":
        logger.debug(message, extra=fields)
    elif level in ["warn", "warning"]:
        logger.warning(message, extra=fields)
    elif level == "error":
        logger.error(message, extra=fields)
    else:
        logger.info(message, extra=fields)


class time_block:
    # simple context manager for timing
    def __init__(self, label, **extra):
        self.label = label
        self.extra = extra
        self.start = None

    def __enter__(self):
        self.start = time.time()
        log_event("debug", f"start: {self.label}", **self.extra)
        return self

    def __exit__(self, exc_type, exc, tb):
        dur_ms = int((time.time() - self.start) * 1000) if self.start else -1
        if exc:
            log_event("error", f"fail: {self.label} ({dur_ms}ms): {str(exc)[:200]}", **self.extra)
        else:
            log_event("info", f"end: {self.label} ({dur_ms}ms)", **self.extra)
        return False
