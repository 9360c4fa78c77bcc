"""
Configuration loader with file reading and validation.
"""

from pathlib import Path

from ..const import DEFAULT_CONFIG_PATH, DEFAULT_SYSTEM_CONFIG_PATH
from ..logging import Loggers
from .nodes import Config, KeyValue
from .parser import ParseError, parse_config


logger = Loggers.loader()


class ConfigError(Exception):
    """Exception raised for configuration errors."""

    pass


class ConfigLoader:
    """
    Loads and validates ssh_config documents from files or strings.

    Usage:
        loader = ConfigLoader()
        config = loader.load_file("~/.ssh/config")
        # or
        config = loader.load_string(config_text)
    """

    def __init__(self):
        self.last_config: Config | None = None

    def load_file(self, path: str | Path) -> Config:
        """
        Load configuration from a file.

        Args:
            path: Path to the configuration file ('~' is expanded)

        Returns:
            Parsed Config object

        Raises:
            ConfigError: If file cannot be read or parsed
        """
        path = Path(path).expanduser()

        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        if not path.is_file():
            raise ConfigError(f"Not a file: {path}")

        try:
            source = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigError(f"Failed to read configuration: {e}") from e

        logger.debug(f"Read {len(source)} characters from {path}")
        return self.load_string(source, str(path))

    def load_string(self, source: str, filename: str = "<string>") -> Config:
        """
        Load configuration from a string.

        Args:
            source: Configuration source text
            filename: Filename for error messages

        Returns:
            Parsed Config object

        Raises:
            ConfigError: If configuration cannot be parsed
        """
        try:
            config = parse_config(source, filename)
        except ParseError as e:
            raise ConfigError(f"Failed to parse {filename}: {e}") from e

        self.last_config = config
        logger.info(f"Loaded {len(config.hosts)} Host blocks from {filename}")
        return config

    def load_default(self) -> Config:
        """Load the current user's ~/.ssh/config."""
        return self.load_file(DEFAULT_CONFIG_PATH)

    def load_system(self) -> Config:
        """Load the system-wide client configuration."""
        return self.load_file(DEFAULT_SYSTEM_CONFIG_PATH)

    # ssh_config(5) keywords, lowercased
    KNOWN_KEYWORDS = {
        "addkeystoagent",
        "addressfamily",
        "batchmode",
        "bindaddress",
        "bindinterface",
        "canonicaldomains",
        "canonicalizefallbacklocal",
        "canonicalizehostname",
        "canonicalizemaxdots",
        "canonicalizepermittedcnames",
        "casignaturealgorithms",
        "certificatefile",
        "channeltimeout",
        "checkhostip",
        "ciphers",
        "clearallforwardings",
        "compression",
        "connectionattempts",
        "connecttimeout",
        "controlmaster",
        "controlpath",
        "controlpersist",
        "dynamicforward",
        "enableescapecommandline",
        "enablesshkeysign",
        "escapechar",
        "exitonforwardfailure",
        "fingerprinthash",
        "forkafterauthentication",
        "forwardagent",
        "forwardx11",
        "forwardx11timeout",
        "forwardx11trusted",
        "gatewayports",
        "globalknownhostsfile",
        "gssapiauthentication",
        "gssapidelegatecredentials",
        "hashknownhosts",
        "hostbasedacceptedalgorithms",
        "hostbasedauthentication",
        "hostkeyalgorithms",
        "hostkeyalias",
        "hostname",
        "identitiesonly",
        "identityagent",
        "identityfile",
        "ignoreunknown",
        "ipqos",
        "kbdinteractiveauthentication",
        "kbdinteractivedevices",
        "kexalgorithms",
        "knownhostscommand",
        "localcommand",
        "localforward",
        "loglevel",
        "logverbose",
        "macs",
        "nohostauthenticationforlocalhost",
        "numberofpasswordprompts",
        "obscurekeystroketiming",
        "passwordauthentication",
        "permitlocalcommand",
        "permitremoteopen",
        "pkcs11provider",
        "port",
        "preferredauthentications",
        "proxycommand",
        "proxyjump",
        "proxyusefdpass",
        "pubkeyacceptedalgorithms",
        "pubkeyacceptedkeytypes",
        "pubkeyauthentication",
        "rekeylimit",
        "remotecommand",
        "remoteforward",
        "requesttty",
        "requiredrsasize",
        "revokedhostkeys",
        "securitykeyprovider",
        "sendenv",
        "serveralivecountmax",
        "serveraliveinterval",
        "sessiontype",
        "setenv",
        "stdinnull",
        "streamlocalbindmask",
        "streamlocalbindunlink",
        "stricthostkeychecking",
        "syslogfacility",
        "tag",
        "tcpkeepalive",
        "tunnel",
        "tunneldevice",
        "updatehostkeys",
        "user",
        "userknownhostsfile",
        "verifyhostkeydns",
        "visualhostkey",
        "xauthlocation",
    }

    # Keywords that may legitimately repeat within one Host block
    MULTI_VALUE_KEYWORDS = {
        "certificatefile",
        "dynamicforward",
        "identityfile",
        "localforward",
        "remoteforward",
        "sendenv",
        "setenv",
    }

    def validate(self, config: Config) -> list[str]:
        """
        Check a parsed configuration and return a list of warnings.

        Only structure is checked: unknown keywords, empty Host blocks and
        keys repeated inside one block (later ones never take effect).
        Directive values are not interpreted.

        Args:
            config: Configuration to validate

        Returns:
            List of warning messages (empty if no issues)
        """
        warnings = []

        for host in config.hosts:
            label = " ".join(str(p) for p in host.patterns)
            directives = [node for node in host.nodes if isinstance(node, KeyValue)]

            if not directives:
                warnings.append(f"Host '{label}' has no directives (line {host.position.line})")

            seen: set[str] = set()
            for node in directives:
                name = node.key.lower()
                if name not in self.KNOWN_KEYWORDS:
                    warnings.append(
                        f"Unknown keyword '{node.key}' in Host '{label}' (line {node.position.line})"
                    )
                if name in seen and name not in self.MULTI_VALUE_KEYWORDS:
                    warnings.append(
                        f"Duplicate '{node.key}' in Host '{label}' is ignored (line {node.position.line})"
                    )
                seen.add(name)

        return warnings


def load_config(path: str | Path) -> Config:
    """
    Convenience function to load configuration from a file.

    Args:
        path: Path to the configuration file

    Returns:
        Parsed Config object
    """
    loader = ConfigLoader()
    return loader.load_file(path)
