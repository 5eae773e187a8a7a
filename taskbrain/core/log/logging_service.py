import logging
from logging.handlers import RotatingFileHandler
import os

# Define default log file path
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "logs/taskbrain.log")

# Ensure the logs directory exists
os.makedirs(os.path.dirname(LOG_FILE_PATH) or ".", exist_ok=True)

def get_logger(name: str) -> logging.Logger:
    """
    Creates and configures a logger with a rotating file handler.

    Args:
        name (str): Name of the logger (usually the module name).

    Returns:
        logging.Logger: Configured logger instance.
    """
    logger = logging.getLogger(name)
    if not logger.handlers:
        logger.setLevel(logging.DEBUG)

        file_handler = RotatingFileHandler(
            LOG_FILE_PATH, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        file_handler.setLevel(logging.DEBUG)

        console_handler = logging.StreamHandler()
        console_handler.setLevel(logging.INFO)

        # File and line number help when chasing scheduler runs
        formatter = logging.Formatter(
            "%(asctime)s - %(levelname)s - %(name)s - %(filename)s:%(lineno)d - %(message)s"
        )
        file_handler.setFormatter(formatter)
        console_handler.setFormatter(formatter)

        logger.addHandler(file_handler)
        logger.addHandler(console_handler)

    return logger
