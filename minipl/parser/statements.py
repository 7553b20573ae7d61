"""Statement parsing utilities for Mini-PL.

These functions operate on a `minipl.parser.parser.Parser` instance and
handle the statement forms of the language: output, input, declarations,
assertions, for loops and assignments. Every statement ends with ``;``.


File: statements.py
Author: Chris Rowles <christopher.rowles@outlook.com>
Copyright: © 2025 Chris Rowles. All rights reserved.
Version: 0.1.0
License: MIT
"""

from typing import TYPE_CHECKING

from minipl.operations import Type

if TYPE_CHECKING:
    from minipl.parser import Parser


TYPE_NAMES = {t.value: t for t in Type}


def parse_statement_list(parser: 'Parser', terminator: str) -> list:
    """
    Parse statements until the current token has type ``terminator``.

    Syntax:
        <statement>*

    Args:
        parser: The parser instance.
        terminator: ``'EOF'`` for a program, ``'END'`` for a loop body.

    Returns:
        list: the parsed statements.
    """
    statements = []
    while parser.curr_token.type != terminator:
        if parser.curr_token.type == 'EOF':
            raise parser.error(parser.describe_type(terminator))
        statements.append(parser.statement())
    return statements


def parse_statement(parser: 'Parser') -> tuple:
    """
    Parse a single statement.

    Syntax:
        <statement>

    Args:
        parser: The parser instance.

    Returns:
        tuple: representing the AST node.
    """
    tok = parser.curr_token
    if tok.type == 'PRINT':
        return parser.parse_print()
    elif tok.type == 'READ':
        return parser.parse_read()
    elif tok.type == 'VAR':
        return parser.parse_declaration()
    elif tok.type == 'ASSERT':
        return parser.parse_assert()
    elif tok.type == 'FOR':
        return parser.parse_for()
    elif tok.type == 'ID':
        return parser.parse_assignment()
    else:
        raise parser.error('a statement')


def parse_print(parser: 'Parser') -> tuple:
    """
    Parse a 'print' statement.

    Syntax:
        print <expression> ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('print', expression_node, position)
    """
    tok = parser.eat('PRINT')
    expr_node = parser.expr()
    parser.eat('SEMICOLON')
    return ('print', expr_node, tok.pos)


def parse_read(parser: 'Parser') -> tuple:
    """
    Parse a 'read' statement.

    Syntax:
        read <identifier> ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('read', name, position)
    """
    tok = parser.eat('READ')
    id_tok = parser.eat('ID')
    parser.eat('SEMICOLON')
    return ('read', id_tok.value, tok.pos)


def parse_declaration(parser: 'Parser') -> tuple:
    """
    Parse a `var` variable declaration.

    Syntax:
        var <identifier> : <type> [:= <expression>] ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('decl', name, type, expr_or_None, position_of_name)
    """
    parser.eat('VAR')
    id_tok = parser.eat('ID')
    parser.eat('COLON')

    type_tok = parser.curr_token
    if type_tok.type != 'ID' or type_tok.value not in TYPE_NAMES:
        raise parser.error("a type name ('int', 'string' or 'bool')")
    parser.eat('ID')

    expr_node = None
    if parser.curr_token.type == 'ASSIGN':
        parser.eat('ASSIGN')
        expr_node = parser.expr()
    parser.eat('SEMICOLON')
    return ('decl', id_tok.value, TYPE_NAMES[type_tok.value], expr_node, id_tok.pos)


def parse_assert(parser: 'Parser') -> tuple:
    """
    Parse an 'assert' statement.

    Syntax:
        assert ( <expression> ) ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('assert', expression_node, position)
    """
    tok = parser.eat('ASSERT')
    parser.eat('LPAREN')
    expr_node = parser.expr()
    parser.eat('RPAREN')
    parser.eat('SEMICOLON')
    return ('assert', expr_node, tok.pos)


def parse_for(parser: 'Parser') -> tuple:
    """
    Parse a 'for' loop over an inclusive integer range.

    Syntax:
        for <identifier> in <expression> .. <expression> do
            <statement>*
        end for ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('for', name, start_expr, end_expr, body, position_of_name)
    """
    parser.eat('FOR')
    id_tok = parser.eat('ID')
    parser.eat('IN')
    start_expr = parser.expr()
    parser.eat('RANGE')
    end_expr = parser.expr()
    with parser.nested("a loop nested less deeply"):
        parser.eat('DO')
        body = parser.statement_list('END')
    parser.eat('END')
    parser.eat('FOR')
    parser.eat('SEMICOLON')
    return ('for', id_tok.value, start_expr, end_expr, body, id_tok.pos)


def parse_assignment(parser: 'Parser') -> tuple:
    """
    Parse reassignment of an existing variable.

    Syntax:
        <identifier> := <expression> ;

    Args:
        parser: The parser instance.

    Returns:
        tuple: ('assign', name, expression_node, position)
    """
    id_tok = parser.eat('ID')
    parser.eat('ASSIGN')
    expr_node = parser.expr()
    parser.eat('SEMICOLON')
    return ('assign', id_tok.value, expr_node, id_tok.pos)
