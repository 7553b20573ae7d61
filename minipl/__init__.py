"""Mini-PL: lexer, parser, type checker and tree-walk interpreter.


File: __init__.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from minipl.pipeline import (
    LexFailure,
    Outcome,
    ParseFailure,
    RuntimeFailure,
    Success,
    TypeFailure,
    analyze,
    run_source,
)

__version__ = "0.1.0"

__all__ = [
    "LexFailure",
    "Outcome",
    "ParseFailure",
    "RuntimeFailure",
    "Success",
    "TypeFailure",
    "analyze",
    "run_source",
]
