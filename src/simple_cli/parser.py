"""
simple_cli - declare command-line parameters, then classify an argument vector.

This module holds the `CLI` registry. A host program declares positionals,
flags and options on it, hands it the process argument vector, and reads the
outcome back by logical name. Parsing and querying never raise: failures are
recorded as `CliError` values, collected on the registry and surfaced through
the sticky `error()` check or the `Result`-returning `safe_*` methods.
Declarations can also be loaded from a YAML or JSON file.
"""

import json
import logging
import os
import re
import sys
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Mapping, Optional, Sequence

from result import Err, Ok, Result

try:
    import yaml

    HAS_YAML = True
except ImportError:
    HAS_YAML = False

from .errors import CliError, DuplicateParameterError, ErrorKind
from .parameters import Parameter, ParameterKind, split_at_equal, strip_pattern

logger = logging.getLogger(__name__)

_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")

_KINDS_BY_NAME = {kind.value: kind for kind in ParameterKind}


def parse_int_prefix(text: str) -> int:
    """
    Parse the leading base-10 integer of `text`.

    Leading whitespace and a single sign are accepted; anything after the
    digits is ignored. Returns 0 when there is no numeric prefix.
    """
    match = _INT_PREFIX.match(text)
    if match is None:
        return 0
    return int(match.group(1))


@dataclass(frozen=True)
class Match:
    """Outcome of one parse pass for one parameter."""

    found: bool = False
    value: str = ""


_UNMATCHED = Match()


@dataclass(frozen=True)
class ParseResult:
    """
    Immutable result of a single parse pass.

    Attributes:
        matches (Mapping[str, Match]): Logical name to match outcome, one entry per declared parameter.
        errors (tuple[CliError, ...]): Failures recorded during this pass, in token order.
    """

    matches: Mapping[str, Match]
    errors: tuple[CliError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors

    def __getitem__(self, name: str) -> Match:
        return self.matches[name]

    def __contains__(self, name: object) -> bool:
        return name in self.matches


def _load_declarations(config_path: str) -> dict[str, Any]:
    """
    Read a YAML or JSON declaration file into its top-level mapping.

    Args:
        config_path (str): Path to a .yaml, .yml or .json file.

    Returns:
        dict[str, Any]: The decoded document.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ValueError: If the format is unsupported, the content is malformed,
            or the document is not a mapping.
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    file_ext = os.path.splitext(config_path)[1].lower()
    if file_ext not in (".yaml", ".yml", ".json"):
        raise ValueError(
            f"Unsupported file format: {file_ext}. "
            "Supported formats are: .yaml, .yml, .json"
        )
    if file_ext != ".json" and not HAS_YAML:
        raise ValueError(
            "YAML support not available. Please install PyYAML: pip install PyYAML"
        )

    with open(config_path, "r") as f:
        text = f.read()

    if file_ext == ".json":
        try:
            document = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON file: {e}")
    else:
        try:
            document = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML file: {e}")

    if not isinstance(document, dict):
        raise ValueError(
            f"Configuration file must contain a mapping, got {type(document).__name__}"
        )
    return document


def _text_field(section: dict[str, Any], key: str, where: str) -> str:
    """Read an optional scalar text field; a missing or null value is ""."""
    value = section.get(key)
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        raise ValueError(f"{where} '{key}' must be text, got {type(value).__name__}")
    return str(value)


class CLI:
    """
    A registry of declared command-line parameters and the parser over it.

    Example:
        cli = (
            CLI("demo", "demo", "A demo program")
            .add_positional("file", "Input file")
            .add_long_option("verbosity", "--verbose", "Verbosity level")
            .add_flag("debug", "-d", "Enable debugging")
        )
        cli.parse(["demo", "input.txt", "--verbose=3", "-d"])
        if cli.error():
            print(cli.gen_help())
        level = cli.as_int("verbosity")
    """

    def __init__(
        self, program_name: str = "", program_command: str = "", program_desc: str = ""
    ) -> None:
        self._program_name = program_name
        self._program_command = program_command
        self._program_desc = program_desc

        self.positionals: list[Parameter] = []
        self.params_by_name: dict[str, Parameter] = {}
        self.params_by_pattern: dict[str, Parameter] = {}

        self.was_parsed: bool = False
        self._error_occurred: bool = False
        self._errors: list[CliError] = []
        self._result = ParseResult(MappingProxyType({}))

    @property
    def program_name(self) -> str:
        return self._program_name

    @property
    def program_command(self) -> str:
        return self._program_command

    @property
    def program_desc(self) -> str:
        return self._program_desc

    @property
    def result(self) -> ParseResult:
        """The result of the most recent parse pass."""
        return self._result

    @property
    def errors(self) -> tuple[CliError, ...]:
        """Every failure recorded over the registry's lifetime, oldest first."""
        return tuple(self._errors)

    # Declaration

    def _declare(
        self, kind: ParameterKind, name: str, pattern: str = "", description: str = ""
    ) -> "CLI":
        """
        Register a new parameter of the given kind.

        Raises:
            DuplicateParameterError: If the name or stripped pattern is already registered.
            ValueError: If a non-positional pattern is empty once dashes are stripped.
        """
        param = Parameter.make(kind, name, pattern, description)

        if name in self.params_by_name:
            raise DuplicateParameterError(f"Parameter name conflict: {name}")
        if param.pattern and param.pattern in self.params_by_pattern:
            existing = self.params_by_pattern[param.pattern]
            raise DuplicateParameterError(
                f"Parameter pattern conflict: '{param.pattern}' is already used by '{existing.name}'"
            )

        self.params_by_name[name] = param
        if kind is ParameterKind.POSITIONAL:
            self.positionals.append(param)
        else:
            self.params_by_pattern[param.pattern] = param

        logger.debug(f"Declared {kind.value} '{name}' (pattern '{param.pattern}')")
        return self

    def add_positional(self, name: str, description: str = "") -> "CLI":
        """
        Declare the next positional argument.

        Raises:
            DuplicateParameterError: If `name` is already declared.
        """
        return self._declare(ParameterKind.POSITIONAL, name, "", description)

    def add_flag(self, name: str, pattern: str, description: str = "") -> "CLI":
        """
        Declare a short flag such as `-d`.

        Raises:
            DuplicateParameterError: If `name` or the stripped pattern is already declared.
            ValueError: If `pattern` is empty or only dashes; such a flag is
                rejected rather than matching bare `-`/`--` tokens.
        """
        return self._declare(ParameterKind.FLAG, name, pattern, description)

    def add_long_flag(self, name: str, pattern: str, description: str = "") -> "CLI":
        """Declare a long flag such as `--force`. Raises as `add_flag` does."""
        return self._declare(ParameterKind.LONG_FLAG, name, pattern, description)

    def add_option(self, name: str, pattern: str, description: str = "") -> "CLI":
        """Declare a short option taking a value, e.g. `-o out.txt`. Raises as `add_flag` does."""
        return self._declare(ParameterKind.OPTION, name, pattern, description)

    def add_long_option(
        self, name: str, pattern: str, description: str = ""
    ) -> "CLI":
        """Declare a long option taking a value, e.g. `--out=out.txt`. Raises as `add_flag` does."""
        return self._declare(ParameterKind.LONG_OPTION, name, pattern, description)

    @classmethod
    def from_config(cls, config_path: str) -> "CLI":
        """
        Build a registry from a YAML or JSON declaration file.

        The document is a mapping with an optional `program` section
        (`name`, `command`, `description`) and a `parameters` list whose
        entries carry `kind`, `name`, `pattern` (not for positionals) and an
        optional `description`.

        Args:
            config_path (str): Path to a .yaml, .yml or .json file.

        Returns:
            CLI: A registry holding the declared parameters in file order.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the file is malformed or an entry is invalid.
            DuplicateParameterError: If two entries share a name or pattern.
        """
        config_data = _load_declarations(config_path)

        program = config_data.get("program") or {}
        if not isinstance(program, dict):
            raise ValueError("'program' section must be a mapping")

        cli = cls(
            _text_field(program, "name", "Program"),
            _text_field(program, "command", "Program"),
            _text_field(program, "description", "Program"),
        )

        parameters = config_data.get("parameters") or []
        if not isinstance(parameters, list):
            raise ValueError("'parameters' section must be a list")
        for index, entry in enumerate(parameters):
            cli._declare_from_config(entry, index)

        logger.debug(
            f"Loaded {len(cli.params_by_name)} parameters from {config_path}"
        )
        return cli

    def _declare_from_config(self, entry: Any, index: int) -> None:
        if not isinstance(entry, dict):
            raise ValueError(f"Parameter entry {index} must be a mapping")

        kind_name = entry.get("kind")
        if not isinstance(kind_name, str) or kind_name not in _KINDS_BY_NAME:
            raise ValueError(
                f"Parameter entry {index} has invalid kind {kind_name!r}. "
                f"Must be one of: {', '.join(_KINDS_BY_NAME)}"
            )
        kind = _KINDS_BY_NAME[kind_name]

        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise ValueError(f"Parameter entry {index} is missing a 'name'")

        pattern = entry.get("pattern", "")
        if kind is not ParameterKind.POSITIONAL and not isinstance(pattern, str):
            raise ValueError(f"Parameter '{name}' needs a string 'pattern'")

        description = _text_field(entry, "description", f"Parameter '{name}'")
        self._declare(kind, name, pattern or "", description)

    # Parsing

    def _record(self, error: CliError) -> None:
        self._error_occurred = True
        self._errors.append(error)
        logger.warning(error.message)

    def parse(self, args: Optional[Sequence[str]] = None) -> ParseResult:
        """
        Classify an argument vector against the declared parameters.

        Token 0 is the invocation and is always skipped. The first tokens fill
        the positionals in declaration order; every later token must name a
        flag or option, with option values given inline (`--opt=value`) or as
        the following token (`--opt value`).

        Args:
            args (Optional[Sequence[str]]): Argument vector. If None, uses sys.argv.

        Returns:
            ParseResult: A fresh result; earlier passes do not leak into it.
        """
        if args is None:
            args = sys.argv
        self.was_parsed = True

        matches: dict[str, Match] = {name: _UNMATCHED for name in self.params_by_name}
        errors: list[CliError] = []

        index = 1
        while index < len(args):
            token = args[index]
            if index - 1 < len(self.positionals):
                matches[self.positionals[index - 1].name] = Match(True, token)
            else:
                index = self._consume_named(args, index, matches, errors)
            index += 1

        for error in errors:
            self._record(error)

        self._result = ParseResult(MappingProxyType(matches), tuple(errors))
        logger.debug(
            f"Parsed {max(len(args) - 1, 0)} tokens: "
            f"{sum(m.found for m in matches.values())} matched, {len(errors)} errors"
        )
        return self._result

    def _consume_named(
        self,
        args: Sequence[str],
        index: int,
        matches: dict[str, Match],
        errors: list[CliError],
    ) -> int:
        """
        Match the flag or option token at `index`.

        Returns:
            int: Index of the last token consumed.
        """
        token = args[index]
        pattern, inline_value = split_at_equal(token)
        pattern = strip_pattern(pattern)

        param = self.params_by_pattern.get(pattern)
        if param is None:
            errors.append(
                CliError(
                    ErrorKind.UNRECOGNIZED_PARAMETER,
                    token,
                    f"Unrecognized parameter: {token}",
                )
            )
            return index

        if not param.kind.takes_value:
            matches[param.name] = Match(True, "")
            if inline_value:
                errors.append(
                    CliError(
                        ErrorKind.UNEXPECTED_VALUE,
                        token,
                        f"Flag {param.flag_string} does not take a value, got '{inline_value}'",
                    )
                )
            return index

        if inline_value:
            matches[param.name] = Match(True, inline_value)
        elif index + 1 < len(args):
            index += 1
            matches[param.name] = Match(True, args[index])
        else:
            # keep any value from an earlier occurrence in this pass
            matches[param.name] = Match(True, matches[param.name].value)
            errors.append(
                CliError(
                    ErrorKind.MISSING_VALUE,
                    token,
                    f"Option {param.flag_string} requires a value",
                )
            )
        return index

    def safe_parse(
        self, args: Optional[Sequence[str]] = None
    ) -> Result[ParseResult, list[CliError]]:
        """
        Parse like `parse`, reporting this pass's failures as a Result.

        Returns:
            Result[ParseResult, list[CliError]]:
                - Ok[ParseResult] when every token was accepted,
                - Err with the failures recorded during this pass otherwise.
        """
        parse_result = self.parse(args)
        if parse_result.errors:
            return Err(list(parse_result.errors))
        return Ok(parse_result)

    # Accessors

    def _fail(self, kind: ErrorKind, subject: str, message: str) -> Err[CliError]:
        error = CliError(kind, subject, message)
        self._record(error)
        return Err(error)

    def _undeclared(self, name: str) -> Err[CliError]:
        return self._fail(
            ErrorKind.UNDECLARED_NAME, name, f"No parameter named '{name}' was declared"
        )

    def _match_for(self, name: str) -> Match:
        # parameters declared after the last parse have no entry yet
        return self._result.matches.get(name, _UNMATCHED)

    def safe_is(self, name: str) -> Result[bool, CliError]:
        if name not in self.params_by_name:
            return self._undeclared(name)
        return Ok(self._match_for(name).found)

    def safe_value(self, name: str) -> Result[str, CliError]:
        """
        Read the value of a positional or option.

        Returns:
            Result[str, CliError]: Err if the name is undeclared, names a flag,
            or was not found during the last parse.
        """
        param = self.params_by_name.get(name)
        if param is None:
            return self._undeclared(name)
        if not param.kind.has_value:
            return self._fail(
                ErrorKind.WRONG_KIND,
                name,
                f"Parameter '{name}' is a {param.kind.value} and carries no value",
            )
        match = self._match_for(name)
        if not match.found:
            return self._fail(
                ErrorKind.NOT_FOUND,
                name,
                f"Parameter '{name}' was not found on the command line",
            )
        return Ok(match.value)

    def safe_as_int(self, name: str) -> Result[int, CliError]:
        return self.safe_value(name).map(parse_int_prefix)

    def is_(self, name: str) -> bool:
        """Whether `name` was found; False (and an error) if undeclared."""
        return self.safe_is(name).unwrap_or(False)

    def value(self, name: str) -> str:
        """The value of `name`, or "" on failure."""
        return self.safe_value(name).unwrap_or("")

    def __getitem__(self, name: str) -> str:
        return self.value(name)

    def as_int(self, name: str) -> int:
        """The integer prefix of `name`'s value, or -1 on failure."""
        return self.safe_as_int(name).unwrap_or(-1)

    def error(self) -> bool:
        """True once any parse or query has failed. Never reset."""
        return self._error_occurred

    # Help

    def gen_help(self, include_options: bool = True) -> str:
        """
        Build the usage text.

        Args:
            include_options (bool): Also list every declared flag and option with its description.

        Returns:
            str: Title line, usage line and, optionally, an options block.
        """
        help_str = f"{self.program_name} - {self.program_desc}\n"

        help_str += f"\t USAGE: ${self.program_command} "
        for param in self.positionals:
            help_str += f"[{param.name}] "
        help_str += "<options>\n"

        if not include_options:
            return help_str

        named = [
            param
            for param in self.params_by_name.values()
            if param.kind is not ParameterKind.POSITIONAL
        ]
        if named:
            help_str += "\n\t OPTIONS:\n"
            for param in named:
                usage = param.flag_string
                if param.kind.takes_value:
                    usage += " <value>"
                line = f"\t\t{usage}"
                if param.description:
                    line += f"\t{param.description}"
                help_str += line + "\n"
        return help_str
