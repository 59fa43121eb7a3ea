from .loader import DEFAULT_CONFIG_PATH, ConfigError, DatabaseConfig, ReportConfig, load_config, parse_config

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "DatabaseConfig",
    "ReportConfig",
    "load_config",
    "parse_config",
]
