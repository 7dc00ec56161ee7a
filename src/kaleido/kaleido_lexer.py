"""
Lexical analyzer for the Kaleido expression language.

This module provides core components for converting raw source text into token streams:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Represents a single immutable token with type, value, and source location.
    Lexer: Converts a CharacterStream into tokens and exposes a two-token lookahead window.

Features:
    - Skips whitespace and single-line comments (`#` to end of line)
    - Recognizes:
        * Identifiers and the reserved words `def` and `extern`
        * Numbers (maximal run of digits and dots, read as a float)
        * Parentheses, comma, semicolon and the operators `+ - * <`
    - End of input yields a persistent `EOF` token

Raises:
    LexicalError: If an unknown character or an unparsable number literal is encountered.

Example:
    >>> lexer = Lexer(CharacterStream("def foo(x) x + 1"))
    >>> lexer.peek_first(), lexer.peek_second()
    (Token(DEF, 'def'), Token(IDENT, 'foo'))
    >>> lexer.next_token()
    Token(DEF, 'def')

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
    - token_hashmap
"""

from collections.abc import Iterator
from typing import IO, Any

from kaleido.kaleido_constants import (
    EOF,
    IDENT,
    NUMBER,
    keyword_tokens,
    symbol_tokens,
    token_descriptions,
    token_hashmap,
)
from kaleido.kaleido_errors import LexicalError

WHITESPACE = " \t\n\r\f"


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    @classmethod
    def from_reader(cls, reader: IO[Any]) -> "CharacterStream":
        """
        Builds a stream from any readable object.

        Binary readers are decoded one byte per character, so a non-ASCII byte
        reaches the lexer intact and is rejected there.

        Args:
            reader: A text or binary file-like object.

        Returns:
            CharacterStream: A stream positioned at the start of the data.
        """
        data = reader.read()
        if isinstance(data, (bytes, bytearray)):
            data = bytes(data).decode("latin-1")
        return cls(data)

    @classmethod
    def from_source(cls, source: "str | bytes | IO[Any]") -> "CharacterStream":
        """Builds a stream from a string, a bytes buffer, or a readable object."""
        if isinstance(source, str):
            return cls(source)
        if isinstance(source, (bytes, bytearray)):
            return cls(bytes(source).decode("latin-1"))
        return cls.from_reader(source)

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def current(self) -> str | None:
        return self.source[self.position] if self.position < len(self.source) else None

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Kaleido language.

    Tokens are immutable. Two tokens are equal when their type and value match;
    the source position is diagnostic metadata and does not take part in equality.

    Attributes:
        type (str): The canonical token type (e.g. 'IDENT', 'NUMBER', 'EOF').
        value (str | float): The identifier name, the number value, or the lexeme.
        line (int): The 1-based line number where the token starts.
        col (int): The 1-based column number where the token starts.
    """

    __slots__ = ("type", "value", "line", "col")

    type: str
    value: Any
    line: int
    col: int

    def __init__(self, type_: str, value: Any = "", line: int = 0, col: int = 0):
        object.__setattr__(self, "type", type_)
        object.__setattr__(self, "value", value)
        object.__setattr__(self, "line", line)
        object.__setattr__(self, "col", col)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"Token is immutable; cannot set {name!r}")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"Token is immutable; cannot delete {name!r}")

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.value!r})"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.value == other.value
        )

    def __hash__(self) -> int:
        return hash((self.type, self.value))

    def describe(self) -> str:
        """Returns a short human-readable description used in error messages."""
        if self.type == IDENT:
            return f"identifier {self.value!r}"
        if self.type == NUMBER:
            return f"number {self.value!r}"
        return token_descriptions.get(self.type, self.type)


class Lexer:
    """Lexical analyzer for the Kaleido language.

    The Lexer scans a CharacterStream on demand and keeps a window of at most two
    pending tokens. `peek_first` and `peek_second` inspect the window without
    consuming; `next_token` returns the first pending token and shifts the window.
    Tokens are scanned lazily, so a lexical fault is raised by the call that first
    needs the faulty token.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream
        self._window: list[Token] = []

    @classmethod
    def from_source(cls, source: "str | bytes | IO[Any]") -> "Lexer":
        return cls(CharacterStream.from_source(source))

    # Lookahead window

    def _fill(self, size: int) -> None:
        while len(self._window) < size:
            self._window.append(self.scan_token())

    def peek_first(self) -> Token:
        """Returns the next pending token without consuming it."""
        self._fill(1)
        return self._window[0]

    def peek_second(self) -> Token:
        """Returns the token after the next pending one without consuming anything."""
        self._fill(2)
        return self._window[1]

    def next_token(self) -> Token:
        """Consumes and returns the next pending token.

        At end of input this keeps returning `EOF`.
        """
        self._fill(1)
        return self._window.pop(0)

    def __iter__(self) -> Iterator[Token]:
        """Yields consumed tokens up to, but not including, `EOF`."""
        while True:
            tok = self.next_token()
            if tok.type == EOF:
                return
            yield tok

    # Scanning

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        """Skips all whitespace and comments in the stream."""
        while not self.stream.end_of_file():
            if self.peek() in WHITESPACE:
                self.advance()
            elif self.peek() == "#":
                self.skip_comment()
            else:
                break

    def skip_comment(self) -> None:
        """Advances past the end of a comment line, newline included."""
        while not self.stream.end_of_file() and self.peek() != "\n":
            self.advance()
        if not self.stream.end_of_file():
            self.advance()

    def scan_token(self) -> Token:
        """Scans and returns the next raw token from the stream.

        Raises:
            LexicalError: If an unknown character or a malformed number is encountered.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, "", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if ch.isascii() and ch.isalpha():
            ident = ""
            while self.peek().isascii() and self.peek().isalnum():
                ident += self.advance()
            if ident in keyword_tokens:
                return Token(keyword_tokens[ident], ident, line, col)
            return Token(IDENT, ident, line, col)

        # 2. Number
        if ch.isascii() and ch.isdigit():
            num = ""
            while self.peek().isascii() and (self.peek().isdigit() or self.peek() == "."):
                num += self.advance()
            try:
                return Token(NUMBER, float(num), line, col)
            except ValueError:
                raise LexicalError(
                    f"Malformed number literal {num!r}", num, line, col
                ) from None

        # 3. Single-character symbol
        if ch in symbol_tokens:
            self.advance()
            return Token(symbol_tokens[ch], ch, line, col)

        # 4. Unknown character; consumed so a resynchronizing caller makes progress
        self.advance()
        raise LexicalError(f"Unrecognized character {ch!r}", ch, line, col)


def tokenize(source: "str | bytes | IO[Any]") -> list[Token]:
    """Returns every token of `source`, excluding the trailing `EOF`."""
    return list(Lexer.from_source(source))


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize", "token_hashmap"]
