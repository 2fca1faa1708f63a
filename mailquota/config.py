"""mailquota configuration: Pydantic BaseSettings loaded from .env."""

from __future__ import annotations

from functools import lru_cache

from pydantic import BaseModel, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Mailbox formats that keep a whole mailbox in one file
SINGLE_FILE_FORMATS = frozenset({"mbox"})


class NamespaceConfig(BaseModel):
    """One mail namespace; ``{user}`` in paths is replaced per account."""

    prefix: str = ""
    root_dir: str | None = None
    inbox_path: str | None = None
    mailbox_format: str = "maildir"

    @field_validator("mailbox_format")
    @classmethod
    def _normalize_format(cls, value: str) -> str:
        return value.strip().lower()

    @property
    def mailbox_file(self) -> bool:
        return self.mailbox_format in SINGLE_FILE_FORMATS


class Settings(BaseSettings):
    """Application settings."""

    app_name: str = "mailquota"
    debug: bool = False
    log_level: str = "INFO"

    # Network
    host: str = "127.0.0.1"
    port: int = 8000
    api_prefix: str = "/api"

    # Quota root argument string handed to the dirsize backend
    quota_args: str = ""

    # Mail storage layout
    namespaces: list[NamespaceConfig] = [
        NamespaceConfig(root_dir="/var/mail/{user}/Maildir", mailbox_format="maildir"),
    ]

    model_config = SettingsConfigDict(
        env_file=(".env",),
        env_file_encoding="utf-8",
        env_prefix="MAILQUOTA_",
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
