"""
Logging configuration for sshconf.

Library modules only emit records under the "sshconf" logger; the
command-line entry point decides where they go: stderr, optionally colored,
and an optional rotating log file.
"""

import logging
import logging.handlers
import sys
from dataclasses import dataclass
from pathlib import Path


class Colors:
    """ANSI color codes."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"


LEVEL_COLORS = {
    logging.DEBUG: Colors.DIM,
    logging.INFO: Colors.GREEN,
    logging.WARNING: Colors.YELLOW,
    logging.ERROR: Colors.RED,
    logging.CRITICAL: Colors.BOLD + Colors.RED,
}

# Keyed by the last part of the logger name
COMPONENT_COLORS = {
    "parser": Colors.MAGENTA,
    "loader": Colors.CYAN,
    "main": Colors.GREEN,
}


def _paint(text: str, color: str) -> str:
    return f"{color}{text}{Colors.RESET}" if color else text


class ColoredFormatter(logging.Formatter):
    """
    Formatter that colors the level, the component and warning messages.

    The record is copied before it is decorated, so other handlers still
    see the plain values.
    """

    def __init__(
        self,
        fmt: str | None = None,
        datefmt: str | None = None,
        use_colors: bool = True,
    ):
        super().__init__(fmt, datefmt)
        self.use_colors = use_colors

    def format(self, record: logging.LogRecord) -> str:
        if not self.use_colors:
            return super().format(record)

        colored = logging.makeLogRecord(record.__dict__)
        colored.levelname = _paint(f"{record.levelname:8}", LEVEL_COLORS.get(record.levelno, ""))
        component = record.name.rsplit(".", 1)[-1]
        colored.name = _paint(record.name, COMPONENT_COLORS.get(component, ""))
        if record.levelno >= logging.WARNING:
            color = Colors.RED if record.levelno >= logging.ERROR else Colors.YELLOW
            colored.msg = _paint(str(record.msg), color)
        return super().format(colored)


class PlainFormatter(logging.Formatter):
    """Formatter for log files: fixed-width level names, no colors."""

    def format(self, record: logging.LogRecord) -> str:
        padded = logging.makeLogRecord(record.__dict__)
        padded.levelname = f"{record.levelname:8}"
        return super().format(padded)


@dataclass
class LogConfig:
    """Logging configuration."""

    # Console settings (stderr, so --dump output stays clean)
    console_level: str = "WARNING"
    console_colors: bool = True

    # File settings
    file_enabled: bool = False
    file_path: str = "sshconf.log"
    file_level: str = "DEBUG"
    file_max_bytes: int = 1024 * 1024  # 1 MB
    file_backup_count: int = 3

    # Format
    format: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    date_format: str = "%Y-%m-%d %H:%M:%S"

    # Per-module levels (module_name -> level)
    module_levels: dict[str, str] | None = None


def get_log_level(level_str: str) -> int:
    """Convert string log level to logging constant."""
    levels = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "warn": logging.WARNING,
        "error": logging.ERROR,
        "critical": logging.CRITICAL,
    }
    return levels.get(level_str.lower(), logging.INFO)


def _console_handler(config: LogConfig) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(get_log_level(config.console_level))
    # Colors only when stderr is a terminal
    use_colors = config.console_colors and getattr(sys.stderr, "isatty", lambda: False)()
    handler.setFormatter(ColoredFormatter(config.format, config.date_format, use_colors))
    return handler


def _file_handler(config: LogConfig) -> logging.Handler:
    log_path = Path(config.file_path)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=config.file_max_bytes,
        backupCount=config.file_backup_count,
    )
    handler.setLevel(get_log_level(config.file_level))
    handler.setFormatter(PlainFormatter(config.format, config.date_format))
    return handler


def setup_logging(config: LogConfig | None = None) -> None:
    """
    Install handlers on the "sshconf" logger, replacing any installed before.

    Args:
        config: Logging configuration (uses defaults if None)
    """
    config = config or LogConfig()

    package_logger = logging.getLogger("sshconf")
    package_logger.setLevel(logging.DEBUG)  # handlers filter
    package_logger.handlers.clear()

    package_logger.addHandler(_console_handler(config))
    if config.file_enabled:
        package_logger.addHandler(_file_handler(config))

    for module_name, level_str in (config.module_levels or {}).items():
        get_logger(module_name).setLevel(get_log_level(level_str))


def setup_logging_from_args(
    verbose: bool = False,
    debug: bool = False,
    quiet: bool = False,
    log_file: str | None = None,
    colors: bool = True,
) -> LogConfig:
    """
    Setup logging from command-line arguments.

    Args:
        verbose: Enable INFO level logging
        debug: Enable DEBUG level logging
        quiet: Only report errors
        log_file: Optional log file path
        colors: Allow colored console output

    Returns:
        The LogConfig that was applied
    """
    config = LogConfig(console_colors=colors)

    if debug:
        config.console_level = "DEBUG"
    elif verbose:
        config.console_level = "INFO"
    elif quiet:
        config.console_level = "ERROR"
    else:
        config.console_level = "WARNING"

    if log_file:
        config.file_enabled = True
        config.file_path = log_file

    setup_logging(config)
    return config


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a component.

    Args:
        name: Component name (will be prefixed with sshconf)

    Returns:
        Logger instance
    """
    if name.startswith("sshconf"):
        return logging.getLogger(name)
    return logging.getLogger(f"sshconf.{name}")


class Loggers:
    """Loggers for the sshconf components."""

    @staticmethod
    def parser() -> logging.Logger:
        return get_logger("config.parser")

    @staticmethod
    def loader() -> logging.Logger:
        return get_logger("config.loader")

    @staticmethod
    def main() -> logging.Logger:
        return get_logger("main")
