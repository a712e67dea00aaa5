#!/usr/bin/env python3
"""
Example demonstrating parameter declarations loaded from a config file.

Usage:
    python config_example.py example_cli.yaml input.txt --verbose 2
"""

import sys

from simple_cli import CLI

if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("usage: config_example.py CONFIG [ARGS...]")
        sys.exit(1)

    cli = CLI.from_config(sys.argv[1])
    parse_result = cli.parse(sys.argv[1:])

    print(cli.gen_help())
    print("Results:")
    print("-" * 20)
    for name, match in parse_result.matches.items():
        print(f"{name}: found={match.found} value={match.value!r}")

    for error in parse_result.errors:
        print(f"error ({error.kind.value}): {error}")
    sys.exit(1 if cli.error() else 0)
