"""
Tree model for parsed ssh_config documents.

A Config owns Host blocks in file order; each Host owns the lines that
follow it. Every node can rebuild its own source line, so an unmodified
document reconstructs to its original formatting.

Node positions are excluded from equality: they describe where a node came
from, not what it is.
"""

from dataclasses import dataclass, field

from .lexer import Position
from .pattern import Pattern


NO_POSITION = Position(0, 0)


@dataclass
class Empty:
    """
    A blank or comment-only line.

    Examples:
        ""               -> Empty(comment="")
        "    # backups"  -> Empty(comment=" backups", leading_space=4)
    """

    comment: str = ""
    leading_space: int = field(default=0, compare=False)
    position: Position = field(default=NO_POSITION, compare=False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Empty):
            return NotImplemented
        if self.comment != other.comment:
            return False
        # A line without comment text renders as "" whatever its indentation
        return not self.comment or self.leading_space == other.leading_space

    def reconstruct(self) -> str:
        if not self.comment:
            return ""
        return f"{' ' * self.leading_space}#{self.comment}"


@dataclass
class KeyValue:
    """
    A directive line.

    Examples:
        "  User bob"        -> KeyValue(key="User", value="bob", leading_space=2)
        "Port=22 # ssh"     -> KeyValue(key="Port", value="22", comment=" ssh", has_equals=True)
    """

    key: str
    value: str
    comment: str = ""
    has_equals: bool = False
    leading_space: int = 0
    position: Position = field(default=NO_POSITION, compare=False)

    def reconstruct(self) -> str:
        if not self.key:
            return ""

        separator = " = " if self.has_equals else " "
        line = f"{' ' * self.leading_space}{self.key}{separator}{self.value}"
        if self.comment:
            line += f" #{self.comment}"
        return line


@dataclass
class Include:
    """
    An Include directive.

    Only the structure is modelled; included files are never loaded, so
    files stays empty and reconstruct() yields nothing.
    """

    comment: str = ""
    directives: list[str] = field(default_factory=list)
    position: Position = field(default=NO_POSITION, compare=False)
    matches: list[str] = field(default_factory=list)
    files: dict[str, "Config"] = field(default_factory=dict)
    leading_space: int = 0
    depth: int = 0
    has_equals: bool = False

    def reconstruct(self) -> str:
        return ""


Node = Empty | KeyValue | Include


@dataclass
class Host:
    """
    A Host block: its patterns plus every line up to the next Host.

    Examples:
        "Host web-* !web-legacy"  -> Host(patterns=[web-*, !web-legacy])
    """

    patterns: list[Pattern] = field(default_factory=list)
    nodes: list[Node] = field(default_factory=list)
    eol_comment: str = ""
    has_equals: bool = False
    leading_space: int = 0
    key: str = "Host"
    position: Position = field(default=NO_POSITION, compare=False)

    def matches(self, hostname: str) -> bool:
        """
        Check whether this block applies to hostname.

        A matching negated pattern excludes the host outright; otherwise
        at least one positive pattern has to match.
        """
        matched = False
        for pattern in self.patterns:
            if not pattern.matches_glob(hostname):
                continue
            if pattern.negated:
                return False
            matched = True
        return matched

    def get_value(self, key: str, default: str = "") -> str:
        """Get the first value of key in this block (case-insensitive)."""
        values = self.get_all_values(key)
        return values[0] if values else default

    def get_all_values(self, key: str) -> list[str]:
        """Get all values of key in this block, in order."""
        wanted = key.lower()
        return [
            node.value
            for node in self.nodes
            if isinstance(node, KeyValue) and node.key.lower() == wanted
        ]

    def reconstruct(self) -> str:
        """Rebuild the Host directive line itself."""
        separator = " = " if self.has_equals else " "
        patterns = " ".join(str(p) for p in self.patterns)
        line = f"{' ' * self.leading_space}{self.key}{separator}{patterns}"
        if self.eol_comment:
            line += f" #{self.eol_comment}"
        return line

    def __str__(self) -> str:
        lines = [self.reconstruct()]
        lines.extend(node.reconstruct() for node in self.nodes)
        return "".join(f"{line}\n" for line in lines)


@dataclass
class Config:
    """
    Root document: Host blocks in the order they appear in the file.

    Order matters, since OpenSSH takes the first value it finds for a key.
    """

    hosts: list[Host] = field(default_factory=list)
    filename: str = field(default="<string>", compare=False)

    def get(self, alias: str, key: str) -> str:
        """
        Get the effective value of key for alias, first match wins.

        Returns an empty string if no matching Host sets the key.
        """
        for host in self.hosts:
            if not host.matches(alias):
                continue
            value = host.get_value(key)
            if value:
                return value
        return ""

    def get_all(self, alias: str, key: str) -> list[str]:
        """Get every value of key for alias across all matching Hosts."""
        values = []
        for host in self.hosts:
            if host.matches(alias):
                values.extend(host.get_all_values(key))
        return values

    def __str__(self) -> str:
        return "".join(str(host) for host in self.hosts)
