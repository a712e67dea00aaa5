"""
Parameter declarations for the simple_cli registry.

A `Parameter` is an immutable description of one expected argument. Parse
state lives elsewhere (see `simple_cli.parser.Match`), so a declaration can be
shared by any number of parse passes.
"""

import enum
from dataclasses import dataclass


class ParameterKind(enum.Enum):
    """The five kinds of parameter a host program can declare."""

    POSITIONAL = "positional"
    FLAG = "flag"
    LONG_FLAG = "long_flag"
    OPTION = "option"
    LONG_OPTION = "long_option"

    @property
    def takes_value(self) -> bool:
        """True for kinds that consume an inline or following value."""
        return self in (ParameterKind.OPTION, ParameterKind.LONG_OPTION)

    @property
    def has_value(self) -> bool:
        """True for kinds whose value can be read back after parsing."""
        return self is ParameterKind.POSITIONAL or self.takes_value

    @property
    def is_long(self) -> bool:
        return self in (ParameterKind.LONG_FLAG, ParameterKind.LONG_OPTION)


def strip_pattern(pattern: str) -> str:
    """Remove every leading '-' from `pattern`."""
    return pattern.lstrip("-")


def split_at_equal(token: str) -> tuple[str, str]:
    """
    Split a token at its first '=' into (pattern, inline value).

    The inline value is empty when the token has no '='.
    """
    pattern, _, value = token.partition("=")
    return pattern, value


@dataclass(frozen=True)
class Parameter:
    """
    One declared argument definition.

    Attributes:
        kind (ParameterKind): What sort of argument this is.
        name (str): Logical identifier used to query results.
        pattern (str): Matching token with leading dashes stripped; empty for positionals.
        description (str): Help text, unused by matching.
    """

    kind: ParameterKind
    name: str
    pattern: str = ""
    description: str = ""

    @classmethod
    def make(
        cls, kind: ParameterKind, name: str, pattern: str = "", description: str = ""
    ) -> "Parameter":
        """Build a parameter, normalizing its pattern."""
        if kind is ParameterKind.POSITIONAL:
            pattern = ""
        else:
            pattern = strip_pattern(pattern)
            if not pattern:
                raise ValueError(
                    f"Parameter '{name}' of kind {kind.value} needs a non-empty pattern"
                )
        return cls(kind=kind, name=name, pattern=pattern, description=description)

    @property
    def flag_string(self) -> str:
        """The pattern as a user would type it, e.g. '-d' or '--verbose'."""
        if self.kind is ParameterKind.POSITIONAL:
            return self.name
        dashes = "--" if self.kind.is_long else "-"
        return f"{dashes}{self.pattern}"
