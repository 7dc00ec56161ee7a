import io

import pytest
from hypothesis import given
from hypothesis import strategies as st

from kaleido.kaleido_errors import FrontendError, LexicalError
from kaleido.kaleido_lexer import CharacterStream, Lexer, Token, tokenize

identifiers = st.from_regex(r"[A-Za-z][A-Za-z0-9]{0,15}", fullmatch=True).filter(
    lambda s: s not in ("def", "extern")
)


def types_of(source: str) -> list[str]:
    return [tok.type for tok in tokenize(source)]


def test_single_char_tokens() -> None:
    assert types_of("( ) , ; + - * <") == [
        "LPAREN",
        "RPAREN",
        "COMMA",
        "SEMI",
        "PLUS",
        "SUB",
        "MULT",
        "LT",
    ]


def test_adjacent_tokens_without_whitespace() -> None:
    assert types_of("foo(a,b);") == [
        "IDENT",
        "LPAREN",
        "IDENT",
        "COMMA",
        "IDENT",
        "RPAREN",
        "SEMI",
    ]


def test_keywords() -> None:
    toks = tokenize("foo def bar extern")
    assert toks == [
        Token("IDENT", "foo"),
        Token("DEF", "def"),
        Token("IDENT", "bar"),
        Token("EXTERN", "extern"),
    ]


def test_keyword_prefix_is_identifier() -> None:
    assert tokenize("define externs Def") == [
        Token("IDENT", "define"),
        Token("IDENT", "externs"),
        Token("IDENT", "Def"),
    ]


def test_identifier_with_digits() -> None:
    assert tokenize("x1y2") == [Token("IDENT", "x1y2")]


def test_number_token() -> None:
    tok = tokenize("3.14")[0]
    assert tok.type == "NUMBER"
    assert tok.value == 3.14
    assert isinstance(tok.value, float)


def test_integer_literal_is_float() -> None:
    assert tokenize("42") == [Token("NUMBER", 42.0)]


def test_trailing_dot_number() -> None:
    assert tokenize("1.") == [Token("NUMBER", 1.0)]


def test_number_then_identifier() -> None:
    assert tokenize("2x") == [Token("NUMBER", 2.0), Token("IDENT", "x")]


def test_malformed_number_raises() -> None:
    with pytest.raises(LexicalError, match="Malformed number literal '1.2.3'") as excinfo:
        tokenize("1.2.3")
    assert excinfo.value.text == "1.2.3"
    assert excinfo.value.line == 1
    assert excinfo.value.col == 1


def test_unknown_character_raises() -> None:
    with pytest.raises(LexicalError, match="Unrecognized character '\\$'") as excinfo:
        tokenize("a $ b")
    assert excinfo.value.col == 3
    assert isinstance(excinfo.value, SyntaxError)


@pytest.mark.parametrize("char", ["_", "/", "=", ">", "{", "!", "é"])
def test_unknown_characters_are_lexical_errors(char: str) -> None:
    with pytest.raises(LexicalError):
        tokenize(char)


def test_unknown_character_is_consumed() -> None:
    lexer = Lexer(CharacterStream("@1"))
    with pytest.raises(LexicalError):
        lexer.next_token()
    assert lexer.next_token() == Token("NUMBER", 1.0)


def test_comment_skipped() -> None:
    toks = tokenize("def foo  # this is a comment \n 42")
    assert toks == [Token("DEF", "def"), Token("IDENT", "foo"), Token("NUMBER", 42.0)]


def test_comment_at_end_without_newline() -> None:
    assert tokenize("1 # trailing") == [Token("NUMBER", 1.0)]
    assert tokenize("# only a comment") == []


def test_comment_hides_unknown_characters() -> None:
    assert tokenize("# $$$ ~~~\nx") == [Token("IDENT", "x")]


def test_whitespace_variants() -> None:
    assert tokenize(" \t\r\n\f x \n") == [Token("IDENT", "x")]


def test_line_and_column_tracking() -> None:
    lexer = Lexer(CharacterStream("x + 1\n  foo"))
    toks = [lexer.next_token() for _ in range(4)]
    assert (toks[2].line, toks[2].col) == (1, 5)
    assert (toks[3].line, toks[3].col) == (2, 3)


def test_token_eof() -> None:
    lexer = Lexer(CharacterStream(""))
    tok = lexer.next_token()
    assert tok.type == "EOF"
    assert tok.value == ""


def test_eof_is_idempotent() -> None:
    lexer = Lexer(CharacterStream("x"))
    assert lexer.next_token() == Token("IDENT", "x")
    for _ in range(5):
        assert lexer.peek_first().type == "EOF"
        assert lexer.peek_second().type == "EOF"
        assert lexer.next_token().type == "EOF"


def test_two_token_lookahead() -> None:
    lexer = Lexer(CharacterStream("foo ( 1"))
    assert lexer.peek_first() == Token("IDENT", "foo")
    assert lexer.peek_second() == Token("LPAREN", "(")
    # Peeking does not consume.
    assert lexer.peek_first() == Token("IDENT", "foo")
    assert lexer.next_token() == Token("IDENT", "foo")
    assert lexer.peek_first() == Token("LPAREN", "(")
    assert lexer.peek_second() == Token("NUMBER", 1.0)
    assert lexer.next_token() == Token("LPAREN", "(")
    assert lexer.next_token() == Token("NUMBER", 1.0)
    assert lexer.peek_second().type == "EOF"


def test_lookahead_is_lazy() -> None:
    lexer = Lexer(CharacterStream("x $"))
    assert lexer.peek_first() == Token("IDENT", "x")
    with pytest.raises(LexicalError):
        lexer.peek_second()
    # The already-scanned token is still pending.
    assert lexer.next_token() == Token("IDENT", "x")
    assert lexer.next_token().type == "EOF"


def test_lexer_iteration_stops_at_eof() -> None:
    assert list(Lexer(CharacterStream("a b"))) == [
        Token("IDENT", "a"),
        Token("IDENT", "b"),
    ]


def test_from_source_accepts_bytes_and_readers() -> None:
    expected = [Token("IDENT", "x"), Token("PLUS", "+"), Token("NUMBER", 1.0)]
    assert tokenize(b"x + 1") == expected
    assert tokenize(io.BytesIO(b"x + 1")) == expected
    assert tokenize(io.StringIO("x + 1")) == expected


def test_non_ascii_byte_is_lexical_error() -> None:
    with pytest.raises(LexicalError) as excinfo:
        tokenize(io.BytesIO(b"x \xff"))
    assert excinfo.value.text == "\xff"


def test_character_stream_methods() -> None:
    stream = CharacterStream("abc")
    assert stream.peek() == "a"
    assert stream.next() == "a"
    assert stream.current() == "b"
    assert not stream.end_of_file()
    stream.next()
    stream.next()
    assert stream.end_of_file()
    assert stream.current() is None
    assert stream.peek(5) == ""


def test_character_stream_next_past_eof_raises() -> None:
    stream = CharacterStream("")
    with pytest.raises(EOFError, match="Attempted to read past end of source"):
        stream.next()


def test_token_repr_and_eq() -> None:
    t1 = Token("NUMBER", 42.0, 1, 2)
    t2 = Token("NUMBER", 42.0, 3, 4)
    t3 = Token("IDENT", "x")

    assert repr(t1) == "Token(NUMBER, 42.0)"
    assert t1 == t2  # position is not part of identity
    assert t1 != t3
    assert t1 != "NUMBER"
    assert len({t1, t2, t3}) == 2


def test_token_is_immutable() -> None:
    tok = Token("IDENT", "x")
    with pytest.raises(AttributeError):
        tok.value = "y"  # type: ignore[misc]
    with pytest.raises(AttributeError):
        del tok.type


def test_token_describe() -> None:
    assert Token("IDENT", "foo").describe() == "identifier 'foo'"
    assert Token("NUMBER", 1.5).describe() == "number 1.5"
    assert Token("RPAREN", ")").describe() == "')'"
    assert Token("EOF", "").describe() == "end of input"


@given(st.from_regex(r"[0-9]{1,10}(\.[0-9]{1,10})?", fullmatch=True))  # type: ignore[misc]
def test_numeric_literal_value(text: str) -> None:
    assert tokenize(text) == [Token("NUMBER", float(text))]


@given(identifiers)  # type: ignore[misc]
def test_identifier_carries_exact_text(name: str) -> None:
    assert tokenize(name) == [Token("IDENT", name)]


@given(st.text(max_size=100))  # type: ignore[misc]
def test_lexer_only_raises_lexical_errors(text: str) -> None:
    try:
        tokenize(text)
    except LexicalError:
        pass
    except FrontendError as e:  # pragma: no cover
        raise AssertionError(f"Unexpected error type for {text!r}: {e!r}") from e
