"""
Tests for the Mini-PL lexer.
"""
import pytest

from minipl.exceptions import LexError
from minipl.lexer import Token, render_tokens, tokenize


def types(source: str) -> list[str]:
    """
    Tokenize source and return the token types.
    """
    tokens, _ = tokenize(source)
    return [tok.type for tok in tokens]


def test_basic_expression():
    assert types("1 + 2 + x") == ['NUMBER', 'PLUS', 'NUMBER', 'PLUS', 'ID', 'EOF']


def test_basic_expression_without_space():
    assert types("1+2+x") == types("1 + 2 + x")


def test_longest_match_for_colon_and_assign():
    assert types(": = :=") == ['COLON', 'EQ', 'ASSIGN', 'EOF']
    assert types("x:=1") == ['ID', 'ASSIGN', 'NUMBER', 'EOF']


def test_range_operator():
    assert types("1..5") == ['NUMBER', 'RANGE', 'NUMBER', 'EOF']


def test_single_dot_is_rejected():
    with pytest.raises(LexError):
        tokenize("1.5")


def test_keywords_and_identifiers():
    source = "var variable for fortune end endfor in int do print read assert"
    assert types(source) == [
        'VAR', 'ID', 'FOR', 'ID', 'END', 'ID', 'IN', 'ID', 'DO',
        'PRINT', 'READ', 'ASSERT', 'EOF',
    ]


def test_keyword_directly_after_number():
    tokens, _ = tokenize("for i in 1..10do print i; end for;")
    assert tokens[5] == Token('NUMBER', 10, 1)
    assert tokens[6] == Token('DO', 'do', 1)
    assert tokens[6].column == 15


def test_keyword_prefix_inside_identifier():
    assert types("do1 print_x endfor") == ['ID', 'ID', 'ID', 'EOF']


def test_identifier_must_start_with_letter():
    tokens, _ = tokenize("x_1 y2")
    assert [t.value for t in tokens[:-1]] == ['x_1', 'y2']
    with pytest.raises(LexError):
        tokenize("_x")


def test_all_operators_and_punctuation():
    assert types("= < + - & * / ! ; ( ) :") == [
        'EQ', 'LT', 'PLUS', 'MINUS', 'AMP', 'MUL', 'DIV', 'BANG',
        'SEMICOLON', 'LPAREN', 'RPAREN', 'COLON', 'EOF',
    ]


def test_integer_literal_value():
    tokens, _ = tokenize("42 007")
    assert tokens[0] == Token('NUMBER', 42, 1)
    assert tokens[1].value == 7
    assert tokens[1].text == "007"


def test_integer_literal_range():
    tokens, _ = tokenize("2147483647")
    assert tokens[0].value == 2147483647
    with pytest.raises(LexError) as exc:
        tokenize("2147483648")
    assert "Invalid number literal" in str(exc.value)


def test_string_escape_codes():
    tokens, _ = tokenize(r'"\r\n\\\"\t"')
    assert tokens[0].type == 'STRING'
    assert tokens[0].value == "\r\n\\\"\t"


def test_unknown_escape_code():
    with pytest.raises(LexError) as exc:
        tokenize(r'"a\qb"')
    assert exc.value.column == 3


def test_malformed_string():
    with pytest.raises(LexError) as exc:
        tokenize('"Hello, world!; stuff')
    assert "Unterminated string" in exc.value.message
    assert (exc.value.line, exc.value.column) == (1, 1)


def test_string_ending_in_escaped_quote_is_unterminated():
    with pytest.raises(LexError):
        tokenize(r'print "abc\";')


def test_unexpected_character_position():
    with pytest.raises(LexError) as exc:
        tokenize("var x : int;\nprint $;")
    assert (exc.value.line, exc.value.column) == (2, 7)
    assert "'$'" in exc.value.message


def test_comments_are_skipped():
    source = (
        "// leading comment\n"
        "print 1; /* block\n"
        "comment */ print 2; // trailing\n"
    )
    tokens, _ = tokenize(source)
    prints = [tok for tok in tokens if tok.type == 'PRINT']
    assert [(t.line, t.column) for t in prints] == [(2, 1), (3, 12)]
    assert types(source) == [
        'PRINT', 'NUMBER', 'SEMICOLON', 'PRINT', 'NUMBER', 'SEMICOLON', 'EOF',
    ]


def test_division_is_not_a_comment():
    assert types("4 / 2") == ['NUMBER', 'DIV', 'NUMBER', 'EOF']


def test_unterminated_block_comment():
    with pytest.raises(LexError) as exc:
        tokenize("print 1; /* never closed")
    assert "Unterminated block comment" in exc.value.message


def test_single_eof_token():
    tokens, _ = tokenize("")
    assert len(tokens) == 1
    assert tokens[0].type == 'EOF'
    assert tokens[0].category == 'end-of-input'


def test_token_categories():
    tokens, _ = tokenize('var x := "s" + 1;')
    assert [t.category for t in tokens] == [
        'keyword', 'identifier', 'punctuation', 'string-literal',
        'operator', 'integer-literal', 'punctuation', 'end-of-input',
    ]


def test_token_map_literals():
    _, token_map = tokenize("")
    assert token_map[';'] == 'SEMICOLON'
    assert token_map[':='] == 'ASSIGN'
    assert token_map['..'] == 'RANGE'
    assert token_map['var'] == 'VAR'
    assert token_map['('] == 'LPAREN'


def test_render_round_trip():
    source = (
        'var s : string := "a\\tb \\"q\\"";\n'
        "for i in 1..10 do print i * (2 + 3); end for;\n"
        "assert(!(x < 3));\n"
    )
    tokens, _ = tokenize(source)
    rendered, _ = tokenize(render_tokens(tokens))
    assert [(t.type, t.value) for t in rendered] == [(t.type, t.value) for t in tokens]
