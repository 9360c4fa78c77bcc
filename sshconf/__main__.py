"""
Entry point for sshconf.

Usage:
    python -m sshconf ~/.ssh/config --validate
    python -m sshconf ~/.ssh/config --dump
    python -m sshconf ~/.ssh/config --lookup myhost --key HostName
    python -m sshconf --help
"""

import argparse
import sys

from . import __version__
from .config.loader import ConfigError, ConfigLoader
from .config.nodes import Config, KeyValue
from .const import APP_NAME, DEFAULT_CONFIG_PATH, DEFAULT_SYSTEM_CONFIG_PATH
from .logging import Loggers, setup_logging_from_args


logger = Loggers.main()


def validate_config(loader: ConfigLoader, config: Config) -> int:
    """Print warnings and a summary of a parsed configuration."""
    warnings = loader.validate(config)

    if warnings:
        print(f"Configuration warnings ({len(warnings)}):")
        for warning in warnings:
            print(f"  - {warning}")

    directives = sum(len(host.nodes) for host in config.hosts)
    print(f"\nConfiguration summary:")
    print(f"  File: {config.filename}")
    print(f"  Host blocks: {len(config.hosts)}")
    print(f"  Lines in blocks: {directives}")

    print("\nConfiguration is valid!")
    return 0


def list_hosts(config: Config) -> int:
    """Print the patterns of every Host block, one block per line."""
    for host in config.hosts:
        print(" ".join(str(p) for p in host.patterns))
    return 0


def lookup(config: Config, alias: str, key: str | None) -> int:
    """Print the effective values for alias, or a single key."""
    if key:
        values = config.get_all(alias, key)
        if not values:
            logger.warning(f"No value for {key} applies to {alias}")
            return 1
        print(values[0])
        return 0

    seen: set[str] = set()
    for host in config.hosts:
        if not host.matches(alias):
            continue
        for name in (node.key for node in host.nodes if isinstance(node, KeyValue)):
            if name.lower() in seen:
                continue
            seen.add(name.lower())
            print(f"{name} {config.get(alias, name)}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Inspect and re-serialize OpenSSH client configuration files",
    )

    parser.add_argument(
        "config",
        nargs="?",
        help=f"Path to ssh_config file (default: {DEFAULT_CONFIG_PATH})",
    )

    parser.add_argument(
        "--system",
        action="store_true",
        help=f"Read the system-wide file ({DEFAULT_SYSTEM_CONFIG_PATH}) instead",
    )

    action = parser.add_mutually_exclusive_group()
    action.add_argument(
        "--validate",
        action="store_true",
        help="Validate configuration and print warnings (default)",
    )
    action.add_argument(
        "--dump",
        action="store_true",
        help="Print the configuration as rebuilt from the parsed tree",
    )
    action.add_argument(
        "--hosts",
        action="store_true",
        help="List Host patterns",
    )
    action.add_argument(
        "--lookup",
        metavar="HOST",
        help="Show the settings that apply to HOST",
    )

    parser.add_argument(
        "--key",
        metavar="KEY",
        help="With --lookup, print only the value of KEY",
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose logging (INFO level)",
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Enable debug logging (DEBUG level)",
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only errors)",
    )

    parser.add_argument(
        "--log-file",
        metavar="PATH",
        help="Write logs to file",
    )

    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable colored output",
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    args = parser.parse_args(argv)

    if args.key and not args.lookup:
        parser.error("--key requires --lookup")
    if args.system and args.config:
        parser.error("--system cannot be combined with a config path")

    setup_logging_from_args(
        verbose=args.verbose,
        debug=args.debug,
        quiet=args.quiet,
        log_file=args.log_file,
        colors=not args.no_color,
    )

    loader = ConfigLoader()
    try:
        if args.system:
            config = loader.load_system()
        else:
            config = loader.load_file(args.config or DEFAULT_CONFIG_PATH)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        return 1

    if args.dump:
        sys.stdout.write(str(config))
        return 0
    if args.hosts:
        return list_hosts(config)
    if args.lookup:
        return lookup(config, args.lookup, args.key)
    return validate_config(loader, config)


if __name__ == "__main__":
    sys.exit(main())
