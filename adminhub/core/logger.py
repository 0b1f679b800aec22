from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler


def setup_logging(log_dir: str = "logs", *, level: int = logging.INFO) -> logging.Logger:
    """
    Configure the `adminhub` logger: rotating `adminhub.log` under `log_dir`
    plus a plain stream handler.

    Safe to call repeatedly. A file handler pointing at another directory is
    closed and replaced, so the log always follows the latest `log_dir`.
    """
    os.makedirs(log_dir, exist_ok=True)
    text_path = os.path.abspath(os.path.join(log_dir, "adminhub.log"))

    logger = logging.getLogger("adminhub")
    logger.setLevel(level)
    logger.propagate = False

    file_handlers = [h for h in logger.handlers if isinstance(h, RotatingFileHandler)]
    for h in file_handlers:
        if h.baseFilename != text_path:
            logger.removeHandler(h)
            h.close()
    if not any(isinstance(h, RotatingFileHandler) for h in logger.handlers):
        fh = RotatingFileHandler(text_path, maxBytes=1_000_000, backupCount=5, encoding="utf-8")
        fh.setFormatter(logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s"))
        logger.addHandler(fh)

    if not any(isinstance(h, logging.StreamHandler) and not isinstance(h, RotatingFileHandler) for h in logger.handlers):
        sh = logging.StreamHandler()
        sh.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(sh)

    return logger
