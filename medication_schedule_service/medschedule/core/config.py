import logging
import os

from medschedule.core.env import load_env

load_env()

UPCOMING_DEFAULT_COUNT = int(os.getenv("UPCOMING_DEFAULT_COUNT", "5"))
UPCOMING_MAX_COUNT = int(os.getenv("UPCOMING_MAX_COUNT", "50"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

def setup_logging() -> None:
    logging.basicConfig(level=getattr(logging, LOG_LEVEL, logging.INFO), format=LOG_FORMAT)
