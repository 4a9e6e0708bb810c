# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    validate_by_name=True,
    extra="ignore",
)


def _parse_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///messagely.db", alias="DATABASE_URL")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")
    echo: bool = Field(False, alias="DATABASE_ECHO")

    model_config = _SETTINGS_CONFIG

    @field_validator("echo", mode="before")
    @classmethod
    def _parse_echo(cls, value: str | bool) -> bool:
        return _parse_bool(value)


class SecurityConfig(BaseSettings):
    # PBKDF2 iteration count
    password_work_factor: int = Field(600_000, ge=1, alias="PASSWORD_WORK_FACTOR")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")

    model_config = _SETTINGS_CONFIG


class TwilioConfig(BaseSettings):
    account_sid: str | None = Field(None, alias="TWILIO_ACCOUNT_SID")
    auth_token: str | None = Field(None, alias="TWILIO_AUTH_TOKEN")
    from_phone: str | None = Field(None, alias="TWILIO_FROM_PHONE")
    to_phone: str | None = Field(None, alias="TWILIO_TO_PHONE")
    timeout: float = Field(10.0, ge=0.1, alias="TWILIO_TIMEOUT")
    api_base: str = Field("https://api.twilio.com/2010-04-01", alias="TWILIO_API_BASE")

    model_config = _SETTINGS_CONFIG

    @property
    def enabled(self) -> bool:
        return all((self.account_sid, self.auth_token, self.from_phone, self.to_phone))


class ResilienceConfig(BaseSettings):
    default_timeout: float = Field(15.0, ge=0.1, alias="RESILIENCE_TIMEOUT")
    max_retries: int = Field(3, ge=0, alias="RESILIENCE_RETRIES")
    backoff_base: float = Field(0.5, ge=0.0, alias="RESILIENCE_BACKOFF_BASE")
    backoff_cap: float = Field(8.0, ge=0.0, alias="RESILIENCE_BACKOFF_CAP")
    circuit_fail_threshold: int = Field(5, ge=1, alias="RESILIENCE_CIRCUIT_THRESHOLD")
    circuit_reset_timeout: float = Field(60.0, ge=1.0, alias="RESILIENCE_CIRCUIT_RESET")

    model_config = _SETTINGS_CONFIG


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


def _twilio_config_factory() -> TwilioConfig:
    return TwilioConfig()  # type: ignore[call-arg]


def _resilience_config_factory() -> ResilienceConfig:
    return ResilienceConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("secret", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_file: Path | None = Field(None, alias="LOG_FILE")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)
    twilio: TwilioConfig = Field(default_factory=_twilio_config_factory)
    resilience: ResilienceConfig = Field(default_factory=_resilience_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        validate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _parse_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        if self.secret_key in ("secret", "dev", "development", "test", ""):
            print(
                "\n❌ CRITICAL SECURITY ERROR: Insecure SECRET_KEY detected in production!\n"
                "   SECRET_KEY signs every session token and must be a strong random value.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if not self.twilio.enabled:
            print(
                "\n⚠️  TWILIO credentials are not configured: message notifications are disabled.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "DatabaseConfig",
    "ResilienceConfig",
    "SecurityConfig",
    "TwilioConfig",
    "load_config",
]
