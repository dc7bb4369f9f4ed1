"""
config.py
---------
Loads settings from the environment (and a local .env file) into the keys the
Flask app reads from `app.config`. Missing database or secret settings fail at
startup with ConfigError instead of on the first request.
"""

import os

from dotenv import load_dotenv
from sqlalchemy.engine import URL

load_dotenv()


class ConfigError(RuntimeError):
    """Raised when a required setting is missing or malformed."""


def _int(env, key: str, default: int) -> int:
    raw = env.get(key)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{key} must be an integer, got {raw!r}") from None


def database_url(env) -> str:
    """
    Resolve the database URL.

    DATABASE_URL wins when set. Otherwise the URL is assembled from
    DB_DRIVER, DB_HOST, DB_PORT, DB_USER, DB_PASS and DB_NAME, with
    DB_SSLMODE passed through as the driver's sslmode option.
    """
    url = env.get("DATABASE_URL")
    if url:
        return url

    host = env.get("DB_HOST")
    if not host:
        raise ConfigError("Set DATABASE_URL or DB_HOST/DB_USER/DB_PASS/DB_NAME")

    missing = [key for key in ("DB_USER", "DB_PASS", "DB_NAME") if not env.get(key)]
    if missing:
        raise ConfigError(f"Missing database settings: {', '.join(missing)}")

    query = {}
    if env.get("DB_SSLMODE"):
        query["sslmode"] = env["DB_SSLMODE"]

    return URL.create(
        env.get("DB_DRIVER", "postgresql+psycopg2"),
        username=env["DB_USER"],
        password=env["DB_PASS"],
        host=host,
        port=_int(env, "DB_PORT", 5432),
        database=env["DB_NAME"],
        query=query,
    ).render_as_string(hide_password=False)


def load_config(environ=None) -> dict:
    env = os.environ if environ is None else environ

    secret = env.get("JWT_SECRET")
    if not secret:
        raise ConfigError("JWT_SECRET is required")

    return {
        "SECRET_KEY": secret,
        "DATABASE_URL": database_url(env),
        "JWT_EXPIRES_MINUTES": _int(env, "JWT_EXPIRES_MINUTES", 60),
        "DB_CONNECT_TIMEOUT": _int(env, "DB_CONNECT_TIMEOUT", 30),
        "PORT": _int(env, "PORT", 3000),
        "LOG_LEVEL": env.get("LOG_LEVEL", "INFO"),
    }
