import logging
import os
from pathlib import Path


def setup_logger(name, log_file=None, level=None):
    """Setup a logger that writes to the console and, optionally, *log_file*.
    If *log_file* is not provided but FFNET_LOG_DIR is set, logs also go to
    $FFNET_LOG_DIR/<name>.log. The level defaults to FFNET_LOG_LEVEL or INFO.
    """
    if level is None:
        level = os.environ.get("FFNET_LOG_LEVEL", "INFO").upper()

    log_dir = os.environ.get("FFNET_LOG_DIR")
    if log_file is None and log_dir:
        logs_dir = Path(log_dir)
        logs_dir.mkdir(parents=True, exist_ok=True)
        log_file = logs_dir / f"{name}.log"

    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Avoid adding multiple handlers in interactive / multi-import environments
    if not logger.handlers:
        formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

        # Console handler
        ch = logging.StreamHandler()
        ch.setLevel(level)
        ch.setFormatter(formatter)
        logger.addHandler(ch)

        # File handler
        if log_file is not None:
            fh = logging.FileHandler(Path(log_file))
            fh.setLevel(level)
            fh.setFormatter(formatter)
            logger.addHandler(fh)

    return logger

# Shared training logger that other modules can import
train_logger = setup_logger('ffnet.train')
