"""
Tests for the tree model: reconstruction, Host matching and lookups.
"""

from sshconf.config.lexer import Position
from sshconf.config.nodes import Config, Empty, Host, Include, KeyValue
from sshconf.config.parser import parse_config
from sshconf.config.pattern import compile_pattern


LOOKUP_CONFIG = """\
Host web
  User alice
  IdentityFile ~/.ssh/web
Host *.internal !secret.internal
  ProxyJump bastion
Host *
  User nobody
  Port 2222
  IdentityFile ~/.ssh/default
"""


def make_host(*texts: str, **kwargs) -> Host:
    return Host(patterns=[compile_pattern(t) for t in texts], **kwargs)


class TestReconstruct:
    """Per-node source line reconstruction."""

    def test_empty(self) -> None:
        """Blank lines render as nothing, comments with their indentation."""
        assert Empty().reconstruct() == ""
        assert Empty(comment="", leading_space=-1).reconstruct() == ""
        assert Empty(comment=" hi", leading_space=4).reconstruct() == "    # hi"

    def test_key_value(self) -> None:
        """Separator spelling and trailing comment are reproduced."""
        assert KeyValue(key="Port", value="22").reconstruct() == "Port 22"
        assert KeyValue(key="Port", value="22", has_equals=True).reconstruct() == "Port = 22"
        assert (
            KeyValue(key="User", value="bob", comment=" me", leading_space=2).reconstruct()
            == "  User bob # me"
        )

    def test_key_value_without_key(self) -> None:
        """A KeyValue with no key renders as nothing."""
        assert KeyValue(key="", value="orphan").reconstruct() == ""

    def test_include_stub(self) -> None:
        """Include is representable but never renders or resolves files."""
        include = Include(directives=["~/.ssh/config.d/*"], leading_space=2)

        assert include.reconstruct() == ""
        assert include.files == {}
        assert include.depth == 0

    def test_host_line(self) -> None:
        """The Host line carries patterns, spelling and comment."""
        assert make_host("a").reconstruct() == "Host a"
        assert (
            make_host("a", "!b", eol_comment=" c", has_equals=True).reconstruct()
            == "Host = a !b # c"
        )
        assert make_host("*", key="host", leading_space=1).reconstruct() == " host *"

    def test_host_block_renders_children_after_host_line(self) -> None:
        """str(host) is the Host line followed by each child line."""
        host = make_host("a")
        host.nodes = [
            KeyValue(key="User", value="bob", leading_space=2),
            Empty(),
            Empty(comment=" end", leading_space=0),
        ]

        assert str(host) == "Host a\n  User bob\n\n# end\n"

    def test_config_concatenates_hosts(self) -> None:
        """str(config) renders every Host in order."""
        config = Config(hosts=[make_host("a"), make_host("b")])

        assert str(config) == "Host a\nHost b\n"
        assert str(Config()) == ""


class TestEquality:
    """Nodes compare by content, not by source position."""

    def test_position_is_ignored(self) -> None:
        """Same content at different positions is equal."""
        assert KeyValue(key="User", value="x", position=Position(1, 1)) == KeyValue(
            key="User", value="x", position=Position(9, 3)
        )
        assert Empty(comment=" a", position=Position(2, 4)) == Empty(comment=" a")

    def test_bare_comment_indentation_is_ignored(self) -> None:
        """Lines without comment text are equal whatever their indentation."""
        assert Empty(comment="", leading_space=4) == Empty(comment="", leading_space=-1)
        assert Empty(comment=" a", leading_space=4) != Empty(comment=" a", leading_space=0)
        assert Empty(comment="") != KeyValue(key="", value="")

    def test_spelling_is_not_ignored(self) -> None:
        """Separator spelling is part of a node's identity."""
        assert KeyValue(key="Port", value="22") != KeyValue(
            key="Port", value="22", has_equals=True
        )


class TestHostMatching:
    """Host.matches combines a block's patterns the way OpenSSH does."""

    def test_positive_patterns(self) -> None:
        """Any positive pattern is enough."""
        host = make_host("web", "db-*")

        assert host.matches("web")
        assert host.matches("DB-1")
        assert not host.matches("mail")

    def test_negation_excludes(self) -> None:
        """A matching negated pattern wins over positive ones."""
        host = make_host("*.example.com", "!secret.example.com")

        assert host.matches("www.example.com")
        assert not host.matches("secret.example.com")
        assert not host.matches("example.org")

    def test_only_negated_patterns_match_nothing(self) -> None:
        """Without a positive pattern nothing matches."""
        host = make_host("!a")

        assert not host.matches("b")
        assert not host.matches("a")


class TestLookup:
    """First-match-wins lookups across Host blocks."""

    def test_get_first_match_wins(self) -> None:
        """The earliest matching block supplies the value."""
        config = parse_config(LOOKUP_CONFIG)

        assert config.get("web", "User") == "alice"
        assert config.get("web", "port") == "2222"
        assert config.get("db", "User") == "nobody"
        assert config.get("db.internal", "ProxyJump") == "bastion"
        assert config.get("secret.internal", "ProxyJump") == ""
        assert config.get("web", "HostName") == ""

    def test_get_all(self) -> None:
        """get_all collects every value from every matching block."""
        config = parse_config(LOOKUP_CONFIG)

        assert config.get_all("web", "IdentityFile") == ["~/.ssh/web", "~/.ssh/default"]
        assert config.get_all("db", "identityfile") == ["~/.ssh/default"]
        assert config.get_all("db", "LocalForward") == []

    def test_host_values(self) -> None:
        """Host-level accessors ignore key case."""
        host = parse_config(LOOKUP_CONFIG).hosts[2]

        assert host.get_value("USER") == "nobody"
        assert host.get_value("HostName", "fallback") == "fallback"
        assert host.get_all_values("identityfile") == ["~/.ssh/default"]


def test_edit_value_in_place() -> None:
    """Editing a value changes only that line of the output."""
    config = parse_config("Host a # keep\n  User bob # me\n  Port=22\n")

    config.hosts[0].nodes[0].value = "carol"

    assert str(config) == "Host a # keep\n  User carol # me\n  Port = 22\n"
