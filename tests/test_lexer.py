import pytest

from errors import BasicSyntaxError
from lexer import Lexer, TokenType


def values(text, **options):
    return [(t.type, t.value) for t in Lexer(text, **options).tokenize()]


def test_tokenize_statement():
    assert values("LET X1 = (A+12)*3") == [
        (TokenType.WORD, "LET"),
        (TokenType.WORD, "X1"),
        (TokenType.OPERATOR, "="),
        (TokenType.OPERATOR, "("),
        (TokenType.WORD, "A"),
        (TokenType.OPERATOR, "+"),
        (TokenType.NUMBER, "12"),
        (TokenType.OPERATOR, ")"),
        (TokenType.OPERATOR, "*"),
        (TokenType.NUMBER, "3"),
        (TokenType.EOF, ""),
    ]


def test_number_followed_by_word_splits():
    assert values("12AB") == [
        (TokenType.NUMBER, "12"),
        (TokenType.WORD, "AB"),
        (TokenType.EOF, ""),
    ]


def test_scan_numbers_disabled_keeps_digits_in_words():
    assert values("12AB", scan_numbers=False)[0] == (TokenType.WORD, "12AB")


def test_whitespace_tokens_when_not_ignored():
    assert values("A  B", ignore_whitespace=False) == [
        (TokenType.WORD, "A"),
        (TokenType.WHITESPACE, "  "),
        (TokenType.WORD, "B"),
        (TokenType.EOF, ""),
    ]


def test_invalid_character_raises_when_reached():
    lexer = Lexer("PRINT 1 ; 2")
    assert lexer.next_token().value == "PRINT"
    assert lexer.next_token().value == "1"
    with pytest.raises(BasicSyntaxError) as info:
        lexer.next_token()
    assert info.value.column == 9
    assert info.value.message == "SYNTAX ERROR"


def test_peek_does_not_consume():
    lexer = Lexer("A = 1")
    assert lexer.peek_token().value == "A"
    assert lexer.next_token().value == "A"
    assert lexer.peek_token().value == "="
    assert lexer.has_more_tokens()


def test_rest_skips_scanning():
    lexer = Lexer("REM hello, world!")
    assert lexer.next_token().value == "REM"
    assert lexer.rest() == "hello, world!"
    assert not lexer.has_more_tokens()


def test_token_type_classification():
    assert Lexer.token_type("123") == TokenType.NUMBER
    assert Lexer.token_type("ABC") == TokenType.WORD
    assert Lexer.token_type("+") == TokenType.OPERATOR
    assert Lexer.token_type("") == TokenType.EOF
