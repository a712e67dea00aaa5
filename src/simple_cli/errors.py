"""Error values reported by parsing and querying, and declaration-time exceptions."""

import enum
from dataclasses import dataclass


class ErrorKind(enum.Enum):
    # parse time
    UNRECOGNIZED_PARAMETER = "unrecognized_parameter"
    MISSING_VALUE = "missing_value"
    UNEXPECTED_VALUE = "unexpected_value"
    # query time
    UNDECLARED_NAME = "undeclared_name"
    WRONG_KIND = "wrong_kind"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class CliError:
    """
    A single parse or query failure.

    Attributes:
        kind (ErrorKind): Which condition failed.
        subject (str): The token or parameter name involved.
        message (str): Human-readable explanation.
    """

    kind: ErrorKind
    subject: str
    message: str

    def __str__(self) -> str:
        return self.message


class DuplicateParameterError(ValueError):
    """Raised when a declaration reuses a name or pattern already registered."""
