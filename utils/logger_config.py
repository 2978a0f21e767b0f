import logging
import sys


def setup_logger(name: str = None, level: int = logging.WARNING) -> logging.Logger:
    """Log to stderr, stdout carries the plugin output line"""
    logger = logging.getLogger(name)
    logger.setLevel(level)

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stderr)
        formatter = logging.Formatter('%(asctime)s [%(levelname)s] %(message)s')
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # paramiko logs its whole handshake at DEBUG
    logging.getLogger("paramiko").setLevel(logging.WARNING)

    return logger
