from __future__ import annotations
import logging, sys
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional

LOG_DIR = Path("logs")
LOG_FILE_NAME = "framefit.log"

BANNER = "=" * 75
FORMAT = "%(asctime)s | %(levelname)s | %(message)s"

def build_logger(
    name: str = "framefit-pipeline",
    level: int = logging.INFO,
    log_dir: Optional[Path] = LOG_DIR,
) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level)
    logger.handlers.clear()

    fmt = logging.Formatter(FORMAT)

    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(exist_ok=True, parents=True)
        fh = RotatingFileHandler(log_dir / LOG_FILE_NAME, maxBytes=5_000_000, backupCount=3, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(level)
        logger.addHandler(fh)

    sh = logging.StreamHandler(sys.stdout)
    sh.setFormatter(fmt)
    sh.setLevel(level)
    logger.addHandler(sh)
    return logger

class log_section:
    def __init__(self, title: str, logger: logging.Logger):
        self.title = title
        self.logger = logger

    def __enter__(self):
        self.logger.info("\n%s\n%s\n%s", BANNER, self.title, BANNER)

    def __exit__(self, exc_type, exc, tb):
        return False
