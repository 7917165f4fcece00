"""
Central configuration. Loads environment variables from the .env file
and exposes them as typed constants.
"""
import os
import sys

from dotenv import load_dotenv
from loguru import logger

load_dotenv()


def _get_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


# Database
DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./webstore.db")
DB_ECHO: bool = _get_bool("DB_ECHO")

# Logging
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
LOG_DIR: str = os.getenv("LOG_DIR", "")

# Reports
REPORT_CATEGORY: str = os.getenv("REPORT_CATEGORY", "Electronics")
RECENT_ORDER_DAYS: int = int(os.getenv("RECENT_ORDER_DAYS", "30"))
TOP_CUSTOMERS_LIMIT: int = int(os.getenv("TOP_CUSTOMERS_LIMIT", "3"))
CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "€")
PENDING_STATUS: str = os.getenv("PENDING_STATUS", "Pending")


def setup_logging(name: str = "webstore") -> None:
    """
    Replace loguru's default sink with one at LOG_LEVEL and, when LOG_DIR
    is set, add a rotating file sink under LOG_DIR/<name>/.
    """
    logger.remove()
    logger.add(sys.stderr, level=LOG_LEVEL)
    if LOG_DIR:
        logger.add(
            os.path.join(LOG_DIR, name, "{time:YYYY-MM-DD_HH-mm-ss}.log"),
            level=LOG_LEVEL,
            mode="a",
            format="{time} | {level} | {message}",
            rotation="5 MB",
            retention="7 days",
        )
