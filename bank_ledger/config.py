"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal

from .currency import Currency


# Largest balance a signed 64-bit minor-unit counter can hold
DEFAULT_MAX_BALANCE = 2 ** 63 - 1


class LedgerConfig(BaseSettings):
    """Bank ledger configuration"""

    model_config = SettingsConfigDict(
        env_prefix="BANK_LEDGER_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging configuration
    log_level: str = "INFO"
    log_format: Literal["json", "text"] = "json"

    # Money
    default_currency: str = "USD"
    max_balance: int = Field(default=DEFAULT_MAX_BALANCE, gt=0)

    # Account identifiers: "caller" requires an id, "sequential" forbids one,
    # "any" generates one only when omitted
    id_policy: Literal["any", "caller", "sequential"] = "any"
    sequential_id_start: int = Field(default=1, ge=0)

    # Lifecycle
    allow_account_closure: bool = True

    @property
    def currency(self) -> Currency:
        return Currency.from_code(self.default_currency)


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
