"""
simple_cli - A small command-line argument definition and parsing engine.

This package lets a host program declare positional arguments, short/long
flags and short/long value-bearing options, then classifies each token of the
argument vector into the matching declaration. Results are read back by
logical name; failures are reported as values rather than exceptions.
Declarations can also be loaded from YAML or JSON files.
"""

from .errors import CliError, DuplicateParameterError, ErrorKind
from .parameters import Parameter, ParameterKind
from .parser import CLI, Match, ParseResult, parse_int_prefix

__version__ = "1.0.0"
__all__ = [
    "CLI",
    "CliError",
    "DuplicateParameterError",
    "ErrorKind",
    "Match",
    "Parameter",
    "ParameterKind",
    "ParseResult",
    "parse_int_prefix",
]
