"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class LedgerviewConfig(BaseSettings):
    """Ledgerview dashboard configuration"""
    
    # Ledger API configuration
    api_base_url: str = "http://localhost:7500"
    api_timeout: float = 10.0
    api_token: str = ""  # Sent as Bearer token when set
    demo_mode: bool = False  # Serve seeded data instead of calling the API
    
    # Dashboard server configuration
    dashboard_host: str = "127.0.0.1"
    dashboard_port: int = 8893
    
    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    
    # Display configuration
    currency_symbol: str = "₹"
    currency_precision: int = 2
    chart_width: int = 1000  # px, used to thin crowded axis labels
    chart_height: int = 400
    max_bar_width: int = 40
    bar_height: int = 20
    income_tooltip_entries: int = 20
    expense_tooltip_entries: int = 15
    
    # Fixed "today" (YYYY-MM-DD) for demos and reproducible charts
    now: Optional[str] = None
    
    class Config:
        env_prefix = "LEDGERVIEW_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = LedgerviewConfig()


def get_config() -> LedgerviewConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerviewConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerviewConfig()
    return config
