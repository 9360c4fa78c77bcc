"""
State-machine parser for ssh_config syntax.

Pulls tokens from the lexer and builds a Config tree. The parser walks
an explicit set of states with at most one token of lookahead:

    START                  -> PARSE_COMMENT_OR_BLANK | PARSE_DIRECTIVE | DONE
    PARSE_COMMENT_OR_BLANK -> START
    PARSE_DIRECTIVE        -> START

Lines before the first Host have no owner and are dropped. Include is
recognized but not expanded, and Match aborts the parse.
"""

from enum import Enum, auto
from pathlib import Path

from ..logging import Loggers
from .lexer import Lexer, Token, TokenType
from .nodes import Config, Empty, Host, KeyValue, Node
from .pattern import InvalidPatternError, Pattern


logger = Loggers.parser()


class ParseError(Exception):
    """Exception raised for parser errors."""

    def __init__(self, message: str, token: Token | None = None):
        self.token = token
        if token:
            super().__init__(f"Line {token.line}, column {token.column}: {message}")
        else:
            super().__init__(message)


class UnexpectedTokenError(ParseError):
    """A line starts with a token that cannot begin a line."""


class ExpectedTokenError(ParseError):
    """A directive is missing its key or value."""


class InvalidHostPatternError(ParseError):
    """A Host directive carries a pattern that does not compile."""


class MatchUnsupportedError(ParseError):
    """Match blocks are not supported."""


class ParserState(Enum):
    """States of the parser loop."""

    START = auto()
    PARSE_DIRECTIVE = auto()
    PARSE_COMMENT_OR_BLANK = auto()
    DONE = auto()


class ConfigParser:
    """
    Parser for ssh_config documents.

    Grammar (one directive per line):
        document  := line*
        line      := EMPTY_LINE | COMMENT | directive
        directive := KEY [EQUALS] STRING [COMMENT]
    """

    def __init__(self, source: str, filename: str = "<string>"):
        self.lexer = Lexer(source, filename)
        self.filename = filename
        self.config = Config(filename=filename)

        self._buffer: list[Token] = []
        self._cursor = 0
        self._exhausted = False

    def _fill(self) -> bool:
        """Make sure a token is available at the cursor."""
        if self._cursor < len(self._buffer):
            return True
        if self._exhausted:
            return False

        token = self.lexer.next_token()
        if token.type is TokenType.EOF:
            self._exhausted = True
        self._buffer.append(token)
        return True

    def _peek(self) -> Token | None:
        """Return the next token without consuming it."""
        if not self._fill():
            return None
        return self._buffer[self._cursor]

    def _next(self) -> Token | None:
        """Consume and return the next token."""
        token = self._peek()
        if token is not None:
            self._cursor += 1
        return token

    def _current_host(self) -> Host | None:
        return self.config.hosts[-1] if self.config.hosts else None

    def _attach(self, node: Node) -> None:
        """Add node to the most recent Host, dropping it if there is none."""
        host = self._current_host()
        if host is None:
            logger.debug(f"Dropping line {node.position.line} before first Host")
            return
        host.nodes.append(node)

    def parse(self) -> Config:
        """Parse the entire document."""
        handlers = {
            ParserState.START: self._parse_start,
            ParserState.PARSE_DIRECTIVE: self._parse_directive,
            ParserState.PARSE_COMMENT_OR_BLANK: self._parse_comment_or_blank,
        }

        state = ParserState.START
        while state is not ParserState.DONE:
            state = handlers[state]()

        logger.debug(f"Parsed {len(self.config.hosts)} Host blocks from {self.filename}")
        return self.config

    def _parse_start(self) -> ParserState:
        token = self._peek()
        if token is None:
            return ParserState.DONE

        if token.type in (TokenType.COMMENT, TokenType.EMPTY_LINE):
            return ParserState.PARSE_COMMENT_OR_BLANK
        if token.type is TokenType.KEY:
            return ParserState.PARSE_DIRECTIVE
        if token.type is TokenType.EOF:
            return ParserState.DONE

        raise UnexpectedTokenError(
            f"Unexpected {token.type.name} token: {str(token)!r}", token
        )

    def _parse_comment_or_blank(self) -> ParserState:
        token = self._next()
        if token is None:
            raise ExpectedTokenError("Expected comment or blank line")

        self._attach(
            Empty(
                comment=token.value,
                leading_space=token.column - 2,
                position=token.position,
            )
        )
        return ParserState.START

    def _parse_directive(self) -> ParserState:
        key = self._next()
        if key is None or key.type is not TokenType.KEY:
            raise ExpectedTokenError("Expected directive name", key)

        name = key.value.lower()
        if name == "match":
            raise MatchUnsupportedError("Match directives are not supported", key)

        has_equals = False
        value = self._next()
        if value is not None and value.type is TokenType.EQUALS:
            has_equals = True
            value = self._next()

        if value is None or value.type is not TokenType.STRING:
            raise ExpectedTokenError(f"Expected value for '{key.value}'", value or key)

        comment = ""
        following = self._peek()
        if (
            following is not None
            and following.type is TokenType.COMMENT
            and following.line == value.line
        ):
            self._next()
            comment = following.value

        if name == "host":
            self._parse_host(key, value, comment, has_equals)
            return ParserState.START

        if name == "include":
            logger.debug(f"Include at line {key.line} is not expanded: {value.value}")
            return ParserState.START

        self._attach(
            KeyValue(
                key=key.value,
                value=value.value,
                comment=comment,
                has_equals=has_equals,
                leading_space=key.column - 1,
                position=key.position,
            )
        )
        return ParserState.START

    def _parse_host(self, key: Token, value: Token, comment: str, has_equals: bool) -> None:
        """Open a new Host block from a Host directive."""
        patterns = []
        for text in value.value.split():
            try:
                patterns.append(Pattern.compile(text))
            except InvalidPatternError as e:
                raise InvalidHostPatternError(str(e), value) from e

        self.config.hosts.append(
            Host(
                patterns=patterns,
                eol_comment=comment,
                has_equals=has_equals,
                leading_space=key.column - 1,
                key=key.value,
                position=key.position,
            )
        )


def parse_config(source: str, filename: str = "<string>") -> Config:
    """
    Convenience function to parse a configuration string.

    Args:
        source: Configuration source text
        filename: Filename for error messages

    Returns:
        Parsed Config
    """
    parser = ConfigParser(source, filename)
    return parser.parse()


def parse_config_file(path: str | Path) -> Config:
    """
    Parse a configuration file.

    Args:
        path: Path to the configuration file

    Returns:
        Parsed Config
    """
    path = Path(path)
    source = path.read_text(encoding="utf-8")
    return parse_config(source, str(path))
