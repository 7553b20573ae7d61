"""Scope stack shared by the type checker and the interpreter.

Mini-PL has exactly two kinds of scope: the global scope and the body of a
for loop. Both stages model them as an explicit stack of dictionaries that is
pushed when a loop body is entered and popped when it is left. The checker
stores :class:`Symbol` entries and the interpreter stores :class:`Variable`
entries; the stack itself does not care.


File: scope.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass

from minipl.operations import Type

logger = logging.getLogger(__name__)


@dataclass
class Symbol:
    """Static information about a declared name."""

    type: Type
    mutable: bool = True


@dataclass
class Variable:
    """Runtime binding of a declared name."""

    type: Type
    value: int | str | bool


class ScopeStack:
    """An ordered stack of name-to-entry mappings, innermost last."""

    def __init__(self):
        self.scopes: list[dict] = [{}]

    @property
    def depth(self) -> int:
        """Number of scopes on the stack, 1 for the global scope alone."""
        return len(self.scopes)

    def push(self) -> None:
        self.scopes.append({})
        logger.debug("Entered scope %d", self.depth)

    def pop(self) -> None:
        if len(self.scopes) == 1:
            raise RuntimeError("Cannot pop the global scope")
        self.scopes.pop()
        logger.debug("Left scope %d", self.depth + 1)

    @contextmanager
    def scope(self):
        """Push a scope for the duration of a ``with`` block."""
        self.push()
        try:
            yield self.scopes[-1]
        finally:
            self.pop()

    def declare(self, name: str, entry) -> None:
        """Bind ``name`` in the innermost scope."""
        self.scopes[-1][name] = entry

    def is_declared_locally(self, name: str) -> bool:
        return name in self.scopes[-1]

    def lookup(self, name: str):
        """Return the innermost entry for ``name``, or ``None``."""
        for scope in reversed(self.scopes):
            if name in scope:
                return scope[name]
        return None

    def __contains__(self, name: str) -> bool:
        return self.lookup(name) is not None
