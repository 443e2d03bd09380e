import logging
import os
from typing import Optional

CHALLENGE_TAG = "starRegistry"
CHALLENGE_TTL = int(os.getenv("STARLEDGER_CHALLENGE_TTL", "300"))
GENESIS_PREV = ""

_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_log_level(override: Optional[str] = None) -> str:
    level = (override or os.getenv("STARLEDGER_LOG_LEVEL", "WARNING")).strip().upper()
    if level not in _LEVELS:
        return "WARNING"
    return level


def configure_logging(override: Optional[str] = None) -> str:
    level = get_log_level(override)
    logging.basicConfig(level=getattr(logging, level), format=LOG_FORMAT)
    return level
