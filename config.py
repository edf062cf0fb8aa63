"""
config.py
---------
Central configuration. Loads environment variables (and a local .env file)
and exposes them as a typed Settings model.
"""

import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


def _split_origins(raw: str) -> List[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()] or ["*"]


class Settings(BaseModel):
    # ── Database ──────────────────────────────────────────
    database_url: str = "sqlite:///./portfolio.db"

    # ── Auth ──────────────────────────────────────────────
    jwt_secret: str = "super-secret-key-change"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    admin_username: Optional[str] = "admin"
    admin_email: Optional[str] = "admin@portfolio.dev"
    admin_password: Optional[str] = None
    admin_password_hash: Optional[str] = None

    # ── HTTP ──────────────────────────────────────────────
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    port: int = 5000

    # ── Email notifications ───────────────────────────────
    email_api_key: Optional[str] = None
    email_api_url: str = "https://api.brevo.com/v3/smtp/email"
    email_sender: str = "no-reply@portfolio.dev"
    email_sender_name: str = "Portfolio Contact"
    email_recipient: Optional[str] = None
    email_timeout_seconds: float = 10.0

    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from the process environment."""
        return cls(
            database_url=os.getenv("DATABASE_URL", "sqlite:///./portfolio.db"),
            jwt_secret=os.getenv("JWT_SECRET", "super-secret-key-change"),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            access_token_expire_minutes=int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", str(60 * 24))),
            admin_username=os.getenv("ADMIN_USERNAME", "admin"),
            admin_email=os.getenv("ADMIN_EMAIL", "admin@portfolio.dev"),
            admin_password=os.getenv("ADMIN_PASSWORD"),
            admin_password_hash=os.getenv("ADMIN_PASSWORD_HASH"),
            cors_origins=_split_origins(os.getenv("FRONTEND_URL", "*")),
            port=int(os.getenv("PORT", "5000")),
            email_api_key=os.getenv("EMAIL_API_KEY"),
            email_api_url=os.getenv("EMAIL_API_URL", "https://api.brevo.com/v3/smtp/email"),
            email_sender=os.getenv("EMAIL_SENDER", "no-reply@portfolio.dev"),
            email_sender_name=os.getenv("EMAIL_SENDER_NAME", "Portfolio Contact"),
            email_recipient=os.getenv("EMAIL_RECIPIENT"),
            email_timeout_seconds=float(os.getenv("EMAIL_TIMEOUT_SECONDS", "10")),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
        )

    @property
    def email_configured(self) -> bool:
        return bool(self.email_api_key and self.email_recipient)
