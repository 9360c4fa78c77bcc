"""
ssh_config parsing with lossless round-trip support.
"""

from .lexer import Lexer, Position, Token, TokenType, tokenize
from .loader import ConfigError, ConfigLoader, load_config
from .nodes import Config, Empty, Host, Include, KeyValue, Node
from .parser import (
    ConfigParser,
    ExpectedTokenError,
    InvalidHostPatternError,
    MatchUnsupportedError,
    ParseError,
    UnexpectedTokenError,
    parse_config,
    parse_config_file,
)
from .pattern import EmptyPatternError, InvalidPatternError, Pattern, compile_pattern

__all__ = [
    "Lexer",
    "Position",
    "Token",
    "TokenType",
    "tokenize",
    "Pattern",
    "compile_pattern",
    "InvalidPatternError",
    "EmptyPatternError",
    "Config",
    "Host",
    "Empty",
    "KeyValue",
    "Include",
    "Node",
    "ConfigParser",
    "ParseError",
    "UnexpectedTokenError",
    "ExpectedTokenError",
    "InvalidHostPatternError",
    "MatchUnsupportedError",
    "parse_config",
    "parse_config_file",
    "ConfigLoader",
    "ConfigError",
    "load_config",
]
