#!/usr/bin/env python3
"""
Example script demonstrating the usage of simple_cli.

Try:
    python basic_example.py input.txt --verbose=3 -d
    python basic_example.py input.txt --verbose
"""

import logging
import sys

from simple_cli import CLI


def main() -> int:
    """Main function demonstrating the parser."""
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s: %(message)s")

    cli = (
        CLI("Example", "basic_example.py", "Demonstrates simple_cli")
        .add_positional("file", "File to process")
        .add_long_option("verbosity", "--verbose", "Verbosity level")
        .add_option("count", "-n", "Number of lines to show")
        .add_flag("debug", "-d", "Enable debugging")
    )

    result = cli.safe_parse(sys.argv)
    if result.is_err() or not cli.is_("file"):
        print(cli.gen_help())
        return 1

    print("Parsed Arguments:")
    print("-" * 30)
    print(f"File: {cli['file']}")
    if cli.is_("verbosity"):
        print(f"Verbosity: {cli.as_int('verbosity')}")
    if cli.is_("count"):
        print(f"Count: {cli.as_int('count')}")
    print(f"Debug: {cli.is_('debug')}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
