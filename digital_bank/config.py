"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import List


class BankConfig(BaseSettings):
    """Digital bank service configuration"""

    # Business rules configuration
    default_credit_limit: str = "500.00"  # Overdraft allowed for new customers
    max_name_length: int = 100

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 5151
    cors_origins: List[str] = ["http://127.0.0.1:5500"]  # Browser front end

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    class Config:
        env_prefix = "BANK_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = BankConfig()


def get_config() -> BankConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> BankConfig:
    """Reload configuration from environment"""
    global config
    config = BankConfig()
    return config
