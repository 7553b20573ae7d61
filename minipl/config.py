"""Command line configuration and logging setup.

Options come from the command line, with the ``MINIPLDEBUG`` environment
variable as an alternative switch for verbose output.


File: config.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import argparse
import logging
import os
import sys
from dataclasses import dataclass

DEBUG_ENV_VAR = "MINIPLDEBUG"
LOG_FORMAT = "[%(levelname)s] %(name)s: %(message)s"


@dataclass
class Options:
    """Settings for one invocation of the interpreter."""

    input_file: str | None = None
    verbose: bool = False
    dump_tokens: bool = False
    dump_ast: bool = False


def build_arg_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser for the ``mpl`` command.
    """
    parser = argparse.ArgumentParser(
        prog="mpl",
        description="Mini-PL interpreter.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "script",
        nargs="?",
        default=None,
        help="Path to a Mini-PL source file",
    )
    parser.add_argument(
        "-f", "--file",
        dest="input_file",
        default=None,
        help="Path to a Mini-PL source file (alternative to the positional argument)",
    )
    parser.add_argument(
        "-v", "--verbose", "--debug",
        dest="verbose",
        action="store_true",
        help=f"Log pipeline progress to stderr (also enabled by {DEBUG_ENV_VAR}=1)",
    )
    parser.add_argument(
        "--tokens",
        dest="dump_tokens",
        action="store_true",
        help="Print the token list before running",
    )
    parser.add_argument(
        "--ast",
        dest="dump_ast",
        action="store_true",
        help="Print the AST before running",
    )
    return parser


def parse_command_line_args(argv: list[str], environ=None) -> Options:
    """
    Parse command line arguments (without the program name) into Options.

    Exits with status 2 on invalid arguments or when no script is given.
    """
    environ = os.environ if environ is None else environ
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.script and args.input_file:
        parser.error("give the script either positionally or with --file, not both")
    input_file = args.script or args.input_file
    if input_file is None:
        parser.error("a script to run is required")
    return Options(
        input_file=input_file,
        verbose=args.verbose or bool(environ.get(DEBUG_ENV_VAR)),
        dump_tokens=args.dump_tokens,
        dump_ast=args.dump_ast,
    )


def configure_logging(verbose: bool, stream=None) -> None:
    """
    Send log records to stderr: everything when verbose, warnings otherwise.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=stream if stream is not None else sys.stderr,
        force=True,
    )
