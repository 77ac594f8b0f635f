import os
import logging
from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(level: str = None) -> logging.Logger:
    """Configure console logging for the whole process"""
    level = (level or os.getenv("LOG_LEVEL", "INFO")).upper()

    # clear any existing handlers to avoid duplicates on reload
    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root_logger.setLevel(getattr(logging, level, logging.INFO))
    root_logger.addHandler(console_handler)

    return logging.getLogger("app")
