import logging
import os

from dotenv import load_dotenv


load_dotenv()


def _get_list(value: str | None, default: list[str]) -> list[str]:
    if value is None:
        return default
    items = [item.strip() for item in value.split(",") if item.strip()]
    return items or default

APP_ENV = os.getenv("APP_ENV", "development")
APP_VERSION = os.getenv("APP_VERSION", "1.0")

API_USERS_PREFIX = os.getenv("API_USERS_PREFIX", "/api/users")

DEFAULT_USER_IMAGE = os.getenv("DEFAULT_USER_IMAGE", "default.jpg")
DEFAULT_USER_ROLE = os.getenv("DEFAULT_USER_ROLE", "user")

CORS_ALLOW_ORIGINS = _get_list(os.getenv("CORS_ALLOW_ORIGINS"), default=["*"])
CORS_ALLOW_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
CORS_ALLOW_HEADERS = ["Origin", "X-Requested-With", "Content-Type", "Accept"]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()

def validate_runtime_config() -> None:
    if not API_USERS_PREFIX.startswith("/") or API_USERS_PREFIX.endswith("/"):
        raise RuntimeError("API_USERS_PREFIX must start with '/' and must not end with '/'.")
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        raise RuntimeError(f"LOG_LEVEL {LOG_LEVEL!r} is not a valid logging level.")
