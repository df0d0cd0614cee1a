from .loader import load_config, get_config, reload_config, ConfigError
from .schema import EngineConfig, IndicatorsConfig, DataSourceConfig

__all__ = [
    "load_config",
    "get_config",
    "reload_config",
    "ConfigError",
    "EngineConfig",
    "IndicatorsConfig",
    "DataSourceConfig",
]
