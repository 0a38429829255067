import logging
import os
from typing import Literal, get_args

# ----------------------------------------------------------------------------
# Settings
# ----------------------------------------------------------------------------
SECRET_KEY = os.getenv("SECRET_KEY", "super-secret-key-change-me")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", 60 * 24 * 7))  # 7 days

# Prefer PostgreSQL if provided, otherwise fall back to SQLite (so server always boots)
_env_db = os.getenv("DATABASE_URL", "").strip()
if _env_db:
    DATABASE_URL = _env_db
else:
    DATABASE_URL = "sqlite+aiosqlite:///./app.db"

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
PORT = int(os.getenv("PORT", 8000))

# ----------------------------------------------------------------------------
# Domain constants
# ----------------------------------------------------------------------------
CategoryType = Literal["spending", "savings", "debt_repayment"]
Frequency = Literal["monthly", "bi-weekly", "weekly", "one-time"]
CATEGORY_TYPES = get_args(CategoryType)
INCOME_FREQUENCIES = get_args(Frequency)

# Largest value a decimal(10,2) money column holds
MAX_AMOUNT = 99_999_999.99

# Every new account starts with these; also used by the admin CLI.
DEFAULT_CATEGORIES = (
    {"name": "Housing", "type": "spending"},
    {"name": "Groceries", "type": "spending"},
    {"name": "Transportation", "type": "spending"},
    {"name": "Emergency Fund", "type": "savings"},
    {"name": "Future Savings", "type": "savings"},
)


def configure_logging(level: str = LOG_LEVEL) -> None:
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )
