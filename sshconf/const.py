"""
Application constants and metadata.
"""

# Application info
APP_NAME = "sshconf"
APP_VERSION = "0.1.0"

# Default locations
DEFAULT_CONFIG_PATH = "~/.ssh/config"
DEFAULT_SYSTEM_CONFIG_PATH = "/etc/ssh/ssh_config"
