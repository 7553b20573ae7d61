"""Diagnostics rendering.

Errors raised by the pipeline carry a line and column. This module turns
them into a human readable report with a quote of the offending source
line, for example::

    hello.mpl:3:7: TypeError: Undeclared variable 'y' on line 3, column 7 in hello.mpl
    [   3]  print y;
                  ^


File: diagnostics.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from minipl.exceptions import MiniPLError

GUTTER_WIDTH = 4


class SourceContext:
    """Line index over a source text, used to quote source in diagnostics."""

    def __init__(self, source: str, file: str | None = None):
        self.file = file
        self.lines = [line.rstrip('\r') for line in source.split('\n')]

    def get_line(self, row: int) -> str | None:
        """
        Return the content of 1-based ``row``, or ``None`` when out of range.
        """
        if 1 <= row <= len(self.lines):
            return self.lines[row - 1]
        return None

    def quote(self, row: int, column: int | None = None) -> str:
        """
        Quote a source line with its row number and an optional caret under
        ``column``.
        """
        content = self.get_line(row)
        if content is None:
            return ""
        prefix = f"[{row:{GUTTER_WIDTH}}]  "
        text = prefix + content + "\n"
        if column is not None:
            text += " " * (len(prefix) + column - 1) + "^\n"
        return text

    def render(self, error: MiniPLError) -> str:
        """
        Render ``error`` as a diagnostic message with a source quote.
        """
        location = error.file or self.file or "<stdin>"
        if error.line is not None:
            location += f":{error.line}"
            if error.column is not None:
                location += f":{error.column}"
        text = f"{location}: {error.kind}: {error}\n"
        if error.line is not None:
            text += self.quote(error.line, error.column)
        return text
