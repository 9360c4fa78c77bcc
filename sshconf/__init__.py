"""
Lossless parser for OpenSSH client configuration files.
"""

from .const import APP_VERSION
from .config import Config, ConfigError, ConfigLoader, ParseError, parse_config, parse_config_file

__version__ = APP_VERSION

__all__ = [
    "Config",
    "ConfigError",
    "ConfigLoader",
    "ParseError",
    "parse_config",
    "parse_config_file",
    "__version__",
]
