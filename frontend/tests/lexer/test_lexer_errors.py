#  SPDX-License-Identifier: MIT OR Apache-2.0
#  Copyright (c) 2026 gwz

import pytest

from adead_lexer import Lexer, LexerError, TokenKind


def lex_error(src: str) -> LexerError:
    with pytest.raises(LexerError) as excinfo:
        Lexer.from_source(src, "t.ad").tokenize()
    return excinfo.value


def test_unterminated_string_reports_opening_quote():
    err = lex_error('let x = "unterminated')

    assert err.code == "LEX-0010"
    assert (err.line, err.column, err.offset) == (1, 9, 8)
    assert err.filename == "t.ad"


def test_unterminated_string_spanning_lines_reports_opening_quote():
    err = lex_error('let a = 1\nlet s = "abc\ndef')

    assert err.code == "LEX-0010"
    assert (err.line, err.column, err.offset) == (2, 9, 18)


def test_trailing_backslash_is_unterminated():
    err = lex_error('"abc\\')
    assert err.code == "LEX-0010"
    assert (err.line, err.column) == (1, 1)


def test_unknown_escape_reports_backslash():
    err = lex_error('print "a\\qb"')

    assert err.code == "LEX-0059"
    assert (err.line, err.column) == (1, 9)
    assert "\\q" in err.message


@pytest.mark.parametrize("src", ['"\\u12"', '"\\u12G4"', '"\\u"', '"\\uZZZZ"'])
def test_malformed_unicode_escape(src):
    err = lex_error(src)
    assert err.code == "LEX-0051"
    assert (err.line, err.column) == (1, 2)


def test_valid_unicode_escape_is_accepted():
    tokens = Lexer.from_source('"\\u00e9\\u0041"').tokenize()
    assert tokens[0].kind is TokenKind.STRING


@pytest.mark.parametrize("src, column", [("let x = @", 9), ("a & b", 3), ("a | b", 3), ("#", 1), ("x = é", 5), ("x = \ud800", 5)])
def test_unexpected_character(src, column):
    err = lex_error(src)
    assert err.code == "LEX-0040"
    assert err.column == column


def test_integer_out_of_range():
    err = lex_error("let big = 9223372036854775808")

    assert err.code == "LEX-0060"
    assert (err.line, err.column) == (1, 11)


def test_letters_directly_after_a_number():
    err = lex_error("12abc")
    assert err.code == "LEX-0061"
    assert err.column == 3

    assert lex_error("1.5_x").code == "LEX-0061"


@pytest.mark.parametrize("src", ["1.5e", "1.5e+", "1.5e-x"])
def test_exponent_without_digits(src):
    assert lex_error(src).code == "LEX-0062"


@pytest.mark.parametrize("src", ["1.2.3", "1..2", ".5.5"])
def test_second_dot_after_float(src):
    assert lex_error(src).code == "LEX-0063"


def test_float_overflow():
    err = lex_error("print 1.0e400")
    assert err.code == "LEX-0064"
    assert err.column == 7


def test_lexer_error_str_includes_position():
    err = lex_error("\n  @")
    assert str(err).startswith("2:3: [LEX-0040]")


@pytest.mark.parametrize("src, column", [('print "a\ud800b"', 9), ('print "a\\\udfff"', 10)])
def test_lone_surrogate_in_string_is_rejected(src, column):
    err = lex_error(src)

    assert err.code == "LEX-0040"
    assert (err.line, err.column) == (1, column)
