#!/usr/bin/env python3
"""
Tests for loading parameter declarations from config files.

This module tests JSON and YAML declaration files, and the errors raised for
malformed or conflicting files.
"""

import json
import os
import tempfile
import textwrap

import pytest

from simple_cli import CLI, DuplicateParameterError, ParameterKind


def write_config(content: str, suffix: str) -> str:
    with tempfile.NamedTemporaryFile(mode="w", suffix=suffix, delete=False) as f:
        f.write(content)
        return f.name


class TestConfigFiles:
    """Test suite for CLI.from_config."""

    def test_json_config(self):
        """Test loading declarations from a JSON file."""
        config_data = {
            "program": {"name": "Demo", "command": "demo", "description": "A demo"},
            "parameters": [
                {"kind": "positional", "name": "file", "description": "Input"},
                {"kind": "long_option", "name": "verbosity", "pattern": "--verbose"},
                {"kind": "flag", "name": "debug", "pattern": "-d"},
            ],
        }
        config_path = write_config(json.dumps(config_data), ".json")

        try:
            cli = CLI.from_config(config_path)
            assert cli.program_name == "Demo"
            assert cli.program_command == "demo"
            assert cli.program_desc == "A demo"
            assert [p.name for p in cli.positionals] == ["file"]
            assert cli.params_by_pattern["verbose"].name == "verbosity"
            assert cli.params_by_name["file"].description == "Input"

            cli.parse(["prog", "input.txt", "--verbose=3", "-d"])
            assert cli.value("file") == "input.txt"
            assert cli.as_int("verbosity") == 3
            assert cli.is_("debug")
            assert not cli.error()
        finally:
            os.unlink(config_path)

    def test_yaml_config(self):
        """Test loading declarations from a YAML file."""
        yaml_content = textwrap.dedent(
            """
            program:
              name: Copier
              command: copy
            parameters:
              - kind: positional
                name: src
              - kind: long_flag
                name: force
                pattern: --force
                description: Overwrite
              - kind: option
                name: mode
                pattern: -m
            """
        )
        config_path = write_config(yaml_content, ".yaml")

        try:
            cli = CLI.from_config(config_path)
            assert cli.program_desc == ""
            assert cli.params_by_name["force"].kind is ParameterKind.LONG_FLAG
            assert cli.params_by_name["mode"].kind is ParameterKind.OPTION

            cli.parse(["copy", "a", "--force", "-m", "fast"])
            assert cli.is_("force")
            assert cli.value("mode") == "fast"
        finally:
            os.unlink(config_path)

    def test_yml_extension(self):
        config_path = write_config("parameters:\n  - {kind: flag, name: q, pattern: q}\n", ".yml")
        try:
            assert "q" in CLI.from_config(config_path).params_by_pattern
        finally:
            os.unlink(config_path)

    def test_empty_parameters(self):
        config_path = write_config(json.dumps({"program": {"name": "x"}}), ".json")
        try:
            cli = CLI.from_config(config_path)
            assert cli.params_by_name == {}
        finally:
            os.unlink(config_path)

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError):
            CLI.from_config("/nonexistent/config.json")

    def test_unsupported_extension(self):
        config_path = write_config("program = 1", ".toml")
        try:
            with pytest.raises(ValueError) as exc:
                CLI.from_config(config_path)
            assert "Unsupported file format" in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_invalid_json(self):
        config_path = write_config("{not json", ".json")
        try:
            with pytest.raises(ValueError) as exc:
                CLI.from_config(config_path)
            assert "Invalid JSON file" in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_invalid_yaml(self):
        config_path = write_config("parameters: [unclosed", ".yaml")
        try:
            with pytest.raises(ValueError) as exc:
                CLI.from_config(config_path)
            assert "Invalid YAML file" in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_document_must_be_mapping(self):
        config_path = write_config(json.dumps([1, 2]), ".json")
        try:
            with pytest.raises(ValueError) as exc:
                CLI.from_config(config_path)
            assert "must contain a mapping" in str(exc.value)
        finally:
            os.unlink(config_path)

    @pytest.mark.parametrize(
        "entry, message",
        [
            ({"kind": "switch", "name": "x", "pattern": "x"}, "invalid kind"),
            ({"kind": ["flag"], "name": "x", "pattern": "x"}, "invalid kind"),
            ({"kind": {"flag": 1}, "name": "x", "pattern": "x"}, "invalid kind"),
            ({"kind": "flag", "name": "x", "pattern": "x", "description": ["a"]}, "must be text"),
            ({"kind": "flag", "pattern": "x"}, "missing a 'name'"),
            ({"kind": "flag", "name": "x"}, "non-empty pattern"),
            ("flag", "must be a mapping"),
        ],
    )
    def test_invalid_entries(self, entry, message):
        config_path = write_config(json.dumps({"parameters": [entry]}), ".json")
        try:
            with pytest.raises(ValueError) as exc:
                CLI.from_config(config_path)
            assert message in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_duplicate_entries(self):
        config_data = {
            "parameters": [
                {"kind": "flag", "name": "a", "pattern": "-x"},
                {"kind": "long_flag", "name": "b", "pattern": "--x"},
            ]
        }
        config_path = write_config(json.dumps(config_data), ".json")
        try:
            with pytest.raises(DuplicateParameterError):
                CLI.from_config(config_path)
        finally:
            os.unlink(config_path)

    def test_yaml_kind_given_as_list(self):
        """A structured `kind` value is reported as an invalid kind."""
        config_path = write_config(
            "parameters:\n  - {kind: [flag], name: d, pattern: -d}\n", ".yaml"
        )
        try:
            with pytest.raises(ValueError) as exc:
                CLI.from_config(config_path)
            assert "invalid kind" in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_yaml_null_values_read_as_empty(self):
        """Keys left empty in YAML give empty text, not 'None'."""
        yaml_content = textwrap.dedent(
            """
            program:
              name: App
              command:
              description:
            parameters:
              - kind: flag
                name: debug
                pattern: -d
                description:
            """
        )
        config_path = write_config(yaml_content, ".yaml")

        try:
            cli = CLI.from_config(config_path)
            assert cli.program_command == ""
            assert cli.program_desc == ""
            assert cli.params_by_name["debug"].description == ""
            help_output = cli.gen_help()
            assert "None" not in help_output
            assert help_output == (
                "App - \n\t USAGE: $ <options>\n\n\t OPTIONS:\n\t\t-d\n"
            )
        finally:
            os.unlink(config_path)

    def test_empty_yaml_document(self):
        config_path = write_config("", ".yaml")
        try:
            with pytest.raises(ValueError) as exc:
                CLI.from_config(config_path)
            assert "must contain a mapping" in str(exc.value)
        finally:
            os.unlink(config_path)

    def test_scalar_program_fields_become_text(self):
        config_path = write_config("program:\n  name: 42\n", ".yaml")
        try:
            assert CLI.from_config(config_path).program_name == "42"
        finally:
            os.unlink(config_path)
