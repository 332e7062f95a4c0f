"""
Application settings loaded from environment variables.

Built once at startup (see ``main.create_app``) and handed to the app via
``app.state.settings``.  The object is frozen.
"""

from typing import Any, Dict, Optional

from pydantic import Field
from pydantic_settings import BaseSettings
from sqlalchemy.engine import URL

DEFAULT_JWT_SECRET = "devsecret_devsecret_devsecret!"


class Settings(BaseSettings):
    # ── Database ─────────────────────────────────────────────────────────
    connection_str: Optional[str] = None   # SQLAlchemy URL or Host=..;Port=.. form, overrides the parts below
    db_host: str = "db"
    db_port: int = 5432
    postgres_db: str = "securesign"
    postgres_user: str = "securesign"
    postgres_password: str = "changeme"

    # ── Security Secrets ──────────────────────────────────────────────────
    jwt_secret: str = DEFAULT_JWT_SECRET   # HMAC secret for auth tokens
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)

    # ── Seeding ──────────────────────────────────────────────────────────
    platform_admin_email: str = "admin@example.com"
    platform_admin_pwd: str = "Admin123!"

    # ── Server ───────────────────────────────────────────────────────────
    port: int = 8000
    host: str = "0.0.0.0"
    debug: bool = False
    cors_origins: list = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def database_url(self) -> str:
        """
        Async SQLAlchemy URL for the application database.

        ``CONNECTION_STR`` may be a SQLAlchemy URL or the keyword form
        ``Host=db;Port=5432;Database=x;Username=u;Password=p``; keys missing
        from the keyword form fall back to the individual settings.
        """
        if self.connection_str and "://" in self.connection_str:
            return self.connection_str
        parts = {
            "host": self.db_host,
            "port": self.db_port,
            "database": self.postgres_db,
            "username": self.postgres_user,
            "password": self.postgres_password,
        }
        if self.connection_str:
            parts.update(parse_keyword_dsn(self.connection_str))
        url = URL.create("postgresql+asyncpg", **parts)
        return url.render_as_string(hide_password=False)

    @property
    def uses_default_secret(self) -> bool:
        return self.jwt_secret == DEFAULT_JWT_SECRET


_DSN_KEYS = {
    "host": "host",
    "server": "host",
    "port": "port",
    "database": "database",
    "db": "database",
    "username": "username",
    "user": "username",
    "user id": "username",
    "userid": "username",
    "password": "password",
    "pwd": "password",
}


def parse_keyword_dsn(dsn: str) -> Dict[str, Any]:
    """Parse a ``Key=Value;Key=Value`` connection string into URL parts."""
    parts: Dict[str, Any] = {}
    for item in dsn.split(";"):
        if not item.strip():
            continue
        key, sep, value = item.partition("=")
        if not sep:
            raise ValueError(f"CONNECTION_STR entry without '=': {item.strip()!r}")
        name = _DSN_KEYS.get(key.strip().lower())
        if name is None:
            continue
        value = value.strip()
        if name == "port":
            try:
                parts[name] = int(value)
            except ValueError:
                raise ValueError(f"CONNECTION_STR port is not a number: {value!r}") from None
        else:
            parts[name] = value
    return parts
