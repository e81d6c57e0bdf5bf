"""Application configuration settings."""

from __future__ import annotations

import ipaddress
from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./hns.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    dns_servers: list[str] = Field(
        default_factory=lambda: ["8.8.8.8", "8.8.4.4"],
        description="Resolver addresses queried in order when probing a hostname",
    )
    dns_port: int = Field(default=53, gt=0, lt=65536)
    dns_timeout: float = Field(
        default=5.0, gt=0, description="Per-query timeout in seconds"
    )
    dns_domain_suffix: str | None = Field(
        default=None,
        description="Domain appended to unqualified hostnames before probing",
    )
    scan_max_concurrency: int = Field(
        default=10, gt=0, description="Default number of in-flight DNS probes"
    )
    discovery_window: int = Field(
        default=10,
        ge=0,
        description="Sequence numbers probed after the template start before striding",
    )
    discovery_stride: int = Field(default=100, gt=0)
    discovery_search_limit: int = Field(
        default=1000,
        gt=0,
        description="Upper bound of sequence numbers walked while discovering a range",
    )
    discovery_miss_threshold: int = Field(
        default=10,
        gt=0,
        description="Consecutive misses accepted as the end of an in-use range",
    )
    log_level: str = Field(default="INFO")

    @model_validator(mode="after")
    def _validate_dns_servers(self) -> "Settings":
        servers = [server.strip() for server in self.dns_servers if server.strip()]
        if not servers:
            raise ValueError("DNS_SERVERS must list at least one resolver address")
        for server in servers:
            try:
                ipaddress.ip_address(server)
            except ValueError as exc:
                raise ValueError(
                    f"DNS_SERVERS entries must be IP addresses, got {server!r}"
                ) from exc
        self.dns_servers = servers
        if self.dns_domain_suffix is not None:
            self.dns_domain_suffix = self.dns_domain_suffix.strip().strip(".") or None
        return self


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
