"""
Mini-PL Language Server entry point.

This server provides basic language features for Mini-PL source files using
`pygls`. It reuses the lexer, parser and type checker to publish diagnostics
and to build a symbol index supporting definition lookup, hover information,
and document symbols.


File: server.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from lsprotocol.types import (
    TEXT_DOCUMENT_DEFINITION,
    TEXT_DOCUMENT_DID_CHANGE,
    TEXT_DOCUMENT_DID_OPEN,
    TEXT_DOCUMENT_DOCUMENT_SYMBOL,
    TEXT_DOCUMENT_HOVER,
    DefinitionParams,
    Diagnostic,
    DiagnosticSeverity,
    DidChangeTextDocumentParams,
    DidOpenTextDocumentParams,
    DocumentSymbol,
    DocumentSymbolParams,
    Hover,
    HoverParams,
    Location,
    MarkupContent,
    MarkupKind,
    Position,
    Range,
    SymbolKind,
)
from pygls.server import LanguageServer

from minipl.checker import TypeChecker
from minipl.exceptions import MiniPLError, TypeCheckError
from minipl.lexer import tokenize
from minipl.operations import Type
from minipl.parser import Parser

logger = logging.getLogger(__name__)


@dataclass
class MiniPLSymbol:
    """Represents a declared variable in a Mini-PL file."""

    name: str
    kind: SymbolKind
    uri: str
    line: int
    column: int
    detail: str

    @property
    def range(self) -> Range:
        return Range(
            Position(self.line, self.column),
            Position(self.line, self.column + len(self.name)),
        )


def to_diagnostic(error: MiniPLError) -> Diagnostic:
    """Convert a pipeline error into an LSP diagnostic."""
    line = (error.line or 1) - 1
    column = (error.column or 1) - 1
    return Diagnostic(
        range=Range(Position(line, column), Position(line, column + 1)),
        message=error.message,
        severity=DiagnosticSeverity.Error,
        source=error.kind,
    )


def collect_symbols(uri: str, statements: list) -> List[MiniPLSymbol]:
    """Collect variable declarations and loop variables, nested loops included."""
    symbols: List[MiniPLSymbol] = []
    for stmt in statements:
        tag = stmt[0]
        if tag == "decl":
            _, name, var_type, _, pos = stmt
            symbols.append(
                MiniPLSymbol(
                    name, SymbolKind.Variable, uri, pos.line - 1, pos.column - 1,
                    f"var {name} : {var_type}",
                )
            )
        elif tag == "for":
            _, name, _, _, body, pos = stmt
            symbols.append(
                MiniPLSymbol(
                    name, SymbolKind.Variable, uri, pos.line - 1, pos.column - 1,
                    f"for {name} : {Type.INT}",
                )
            )
            symbols.extend(collect_symbols(uri, body))
    return symbols


class MiniPLLanguageServer(LanguageServer):
    """Language server for Mini-PL source files."""

    def __init__(self) -> None:
        super().__init__("minipl-ls", "v0.1")
        self.symbols_by_uri: Dict[str, List[MiniPLSymbol]] = {}

    def update_index(self, uri: str, text: str) -> List[Diagnostic]:
        """Analyze ``text``, refresh the symbol index for ``uri`` and return
        its diagnostics.

        When the text does not parse, the previous symbols are kept so that
        hover keeps working while a statement is half typed.
        """
        try:
            tokens, token_map = tokenize(text, uri)
            program = Parser(tokens, token_map, uri).parse()
        except MiniPLError as e:
            logger.debug("Could not parse %s: %s", uri, e)
            return [to_diagnostic(e)]

        self.symbols_by_uri[uri] = collect_symbols(uri, program)
        try:
            TypeChecker(uri).check(program)
        except TypeCheckError as e:
            return [to_diagnostic(e)]
        return []

    def find_symbol(self, uri: str, word: str) -> Optional[MiniPLSymbol]:
        """Return the first declaration of ``word`` in ``uri``."""
        for sym in self.symbols_by_uri.get(uri, []):
            if sym.name == word:
                return sym
        return None


lang_server = MiniPLLanguageServer()


def _refresh(ls: MiniPLLanguageServer, uri: str, text: str) -> None:
    ls.publish_diagnostics(uri, ls.update_index(uri, text))


@lang_server.feature(TEXT_DOCUMENT_DID_OPEN)
def did_open(ls: MiniPLLanguageServer, params: DidOpenTextDocumentParams) -> None:
    """Index a document when it is opened."""
    _refresh(ls, params.text_document.uri, params.text_document.text)


@lang_server.feature(TEXT_DOCUMENT_DID_CHANGE)
def did_change(ls: MiniPLLanguageServer, params: DidChangeTextDocumentParams) -> None:
    """Re-index a document when it changes."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    _refresh(ls, doc.uri, doc.source)


@lang_server.feature(TEXT_DOCUMENT_DEFINITION)
def definition(ls: MiniPLLanguageServer, params: DefinitionParams):
    """Return the declaration location for the variable under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.find_symbol(doc.uri, word)
    if sym is None:
        return None
    return Location(uri=sym.uri, range=sym.range)


@lang_server.feature(TEXT_DOCUMENT_HOVER)
def hover(ls: MiniPLLanguageServer, params: HoverParams) -> Optional[Hover]:
    """Return the declared type of the variable under the cursor."""
    doc = ls.workspace.get_text_document(params.text_document.uri)
    word = doc.word_at_position(params.position)
    if not word:
        return None
    sym = ls.find_symbol(doc.uri, word)
    if sym is None:
        return None
    contents = MarkupContent(kind=MarkupKind.PlainText, value=sym.detail)
    return Hover(contents=contents)


@lang_server.feature(TEXT_DOCUMENT_DOCUMENT_SYMBOL)
def document_symbols(ls: MiniPLLanguageServer, params: DocumentSymbolParams):
    """Return the declared variables of the given document."""
    result: List[DocumentSymbol] = []
    for sym in ls.symbols_by_uri.get(params.text_document.uri, []):
        result.append(
            DocumentSymbol(
                name=sym.name,
                kind=sym.kind,
                range=sym.range,
                selection_range=sym.range,
                detail=sym.detail,
            )
        )
    return result


def main() -> None:
    """Start the language server."""
    lang_server.start_io()


if __name__ == "__main__":
    main()
