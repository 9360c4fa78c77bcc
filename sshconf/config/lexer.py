"""
Lexer (tokenizer) for OpenSSH client configuration syntax.

Produces a position-tagged token stream, one physical line at a time:
- Comment lines (# to end of line)
- Blank or whitespace-only lines
- Directive lines: key, optional '=', value, optional trailing comment
- Malformed lines as ERROR tokens

Every token carries its exact source position so the parser can rebuild
leading whitespace and tell same-line comments from the next line's.
"""

from collections import deque
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterator


class TokenType(Enum):
    """Token types for ssh_config syntax."""

    ERROR = auto()         # malformed input
    EOF = auto()           # end of file
    EMPTY_LINE = auto()    # blank or whitespace-only line
    COMMENT = auto()       # text after '#'
    KEY = auto()           # directive name
    EQUALS = auto()        # '=' between key and value
    STRING = auto()        # directive value


@dataclass(frozen=True)
class Position:
    """1-indexed line and column in the source text."""

    line: int
    column: int

    def invalid(self) -> bool:
        return self.line <= 0 or self.column <= 0

    def __str__(self) -> str:
        return f"{self.line}, {self.column}"


@dataclass(frozen=True)
class Token:
    """A single token from the lexer."""

    type: TokenType
    value: str
    position: Position

    @property
    def line(self) -> int:
        return self.position.line

    @property
    def column(self) -> int:
        return self.position.column

    def __str__(self) -> str:
        if self.type is TokenType.EOF:
            return "EOF"
        return self.value

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, {self.line}:{self.column})"


class Lexer:
    """
    Tokenizer for ssh_config syntax.

    Example config:
        Host example
            HostName example.com  # production box
            Port=2222

    Tokens are produced lazily, a line at a time; iterating the lexer
    yields the same sequence as repeated next_token() calls.
    """

    BLANKS = " \t"

    def __init__(self, source: str, filename: str = "<string>"):
        self.source = source
        self.filename = filename
        self.pos = 0
        self.line = 1
        self.column = 1
        self._pending: deque[Token] = deque()
        self._eof: Token | None = None

    def _current(self) -> str:
        """Get current character or empty string if at end."""
        if self.pos >= len(self.source):
            return ""
        return self.source[self.pos]

    def _peek(self, offset: int = 1) -> str:
        """Peek at character at offset from current position."""
        pos = self.pos + offset
        if pos >= len(self.source):
            return ""
        return self.source[pos]

    def _advance(self) -> str:
        """Advance position and return current character."""
        if self.pos >= len(self.source):
            return ""

        char = self.source[self.pos]
        self.pos += 1

        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1

        return char

    def _position(self) -> Position:
        return Position(self.line, self.column)

    def _at_eol(self) -> bool:
        """True at a newline, a CRLF pair, or end of input."""
        char = self._current()
        return char in ("", "\n") or (char == "\r" and self._peek() == "\n")

    def _skip_blanks(self) -> None:
        """Skip spaces and tabs, never newlines."""
        while self._current() and self._current() in self.BLANKS:
            self._advance()

    def _skip_newline(self) -> None:
        if self._current() == "\r" and self._peek() == "\n":
            self._advance()
        if self._current() == "\n":
            self._advance()

    def _read_until(self, stops: str) -> str:
        """Read up to end of line or any character in stops."""
        start = self.pos
        while not self._at_eol() and self._current() not in stops:
            self._advance()
        return self.source[start:self.pos]

    def _read_comment(self) -> Token:
        """Read a comment; the current character must be '#'."""
        self._advance()  # skip #
        # Position is just past the '#', so leading space is column - 2
        start = self._position()
        text = self._read_until("")
        return Token(TokenType.COMMENT, text, start)

    def _scan_line(self) -> None:
        """Tokenize one physical line into the pending queue."""
        if self.pos >= len(self.source):
            self._pending.append(Token(TokenType.EOF, "", self._position()))
            return

        line_start = self._position()
        self._skip_blanks()

        if self._at_eol():
            self._pending.append(Token(TokenType.EMPTY_LINE, "", line_start))
            self._skip_newline()
            return

        if self._current() == "#":
            self._pending.append(self._read_comment())
            self._skip_newline()
            return

        if self._current() == "=":
            start = self._position()
            self._read_until("")
            self._pending.append(
                Token(TokenType.ERROR, "Expected directive name before '='", start)
            )
            self._skip_newline()
            return

        self._scan_directive()
        self._skip_newline()

    def _scan_directive(self) -> None:
        """Read key, optional '=', value and trailing comment."""
        start = self._position()
        key = self._read_until(self.BLANKS + "=")
        self._pending.append(Token(TokenType.KEY, key, start))

        self._skip_blanks()
        if self._current() == "=":
            self._pending.append(Token(TokenType.EQUALS, "=", self._position()))
            self._advance()
            self._skip_blanks()

        start = self._position()
        value = self._read_until("#").rstrip(self.BLANKS)
        if value:
            self._pending.append(Token(TokenType.STRING, value, start))

        if self._current() == "#":
            self._pending.append(self._read_comment())

    def next_token(self) -> Token:
        """Get the next token from the source."""
        if self._eof is not None:
            return self._eof

        if not self._pending:
            self._scan_line()

        token = self._pending.popleft()
        if token.type is TokenType.EOF:
            self._eof = token
        return token

    def tokenize(self) -> Iterator[Token]:
        """Generate all remaining tokens, ending with EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.type is TokenType.EOF:
                break

    def __iter__(self) -> Iterator[Token]:
        """Allow iteration over tokens."""
        return self.tokenize()


def tokenize(source: str, filename: str = "<string>") -> list[Token]:
    """Convenience function to tokenize a source string."""
    return list(Lexer(source, filename))
