"""
ERP Core Config — Public API
============================
Environment-driven runtime configuration.
"""

from core.config.environment import (
    DatabaseEndpoint,
    database_settings_from_env,
    env_flag,
    env_int,
    env_list,
    parse_database_url,
)

__all__ = [
    "DatabaseEndpoint",
    "database_settings_from_env",
    "env_flag",
    "env_int",
    "env_list",
    "parse_database_url",
]
