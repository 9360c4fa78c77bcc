"""
Host pattern matching for ``Host`` directives.

Supports the OpenSSH glob syntax:
- ``*`` matches zero or more characters
- ``?`` matches exactly one character
- a leading ``!`` negates the pattern

Every other character matches literally. Matching is case-insensitive.
"""

from dataclasses import dataclass, field
import re


class InvalidPatternError(ValueError):
    """Exception raised when a host pattern cannot be compiled."""


class EmptyPatternError(InvalidPatternError):
    """Exception raised for an empty host pattern."""


def _glob_to_regex(glob: str) -> re.Pattern[str]:
    """Translate a host glob into an anchored, case-insensitive regex."""
    parts = []
    for char in glob:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.IGNORECASE | re.DOTALL)


@dataclass(frozen=True)
class Pattern:
    """
    A compiled host pattern.

    Examples:
        Pattern.compile("*.example.com")   -> matches "db.EXAMPLE.com"
        Pattern.compile("!bastion")        -> matches anything but "bastion"
    """

    glob: str
    negated: bool = False
    regex: re.Pattern[str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.glob:
            raise EmptyPatternError("Host pattern must not be empty")
        object.__setattr__(self, "regex", _glob_to_regex(self.glob))

    @classmethod
    def compile(cls, text: str) -> "Pattern":
        """Compile a pattern string, raising InvalidPatternError if malformed."""
        if not text:
            raise EmptyPatternError("Host pattern must not be empty")

        negated = text.startswith("!")
        glob = text[1:] if negated else text
        if not glob:
            raise InvalidPatternError(f"Negated pattern {text!r} has nothing to match")

        return cls(glob=glob, negated=negated)

    def matches_glob(self, hostname: str) -> bool:
        """Apply the glob alone, ignoring negation."""
        return self.regex.fullmatch(hostname) is not None

    def match(self, hostname: str) -> bool:
        """Check hostname against the pattern, honouring negation."""
        matched = self.matches_glob(hostname)
        return not matched if self.negated else matched

    def __str__(self) -> str:
        return f"!{self.glob}" if self.negated else self.glob


def compile_pattern(text: str) -> Pattern:
    """Convenience function to compile a host pattern."""
    return Pattern.compile(text)
