"""
Error types raised by the Kaleido front-end.

Every malformed-input condition is reported by raising one of these exceptions.
They all derive from the built-in `SyntaxError`, so callers that only care about
"the source is bad" can keep catching `SyntaxError`, while drivers that want to
distinguish lexical faults from grammar violations can catch the narrower types.

Hierarchy:
    FrontendError(SyntaxError)
    ├── LexicalError            unrecognized character, malformed number literal
    └── ParseError              grammar violation
        └── ExpectedTokenError  a required token is missing
            └── UnexpectedEndOfStream

Errors never carry partial ASTs. Whether a session stops at the first error or
skips to the next top-level unit is decided by the driver (see `kaleido_cli`).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:  # pragma: no cover
    from kaleido.kaleido_lexer import Token


class FrontendError(SyntaxError):
    """Base class for all lexer and parser failures.

    Attributes:
        message (str): The bare diagnostic, without location.
        line (int): 1-based line of the offending input, 0 if unknown.
        col (int): 1-based column of the offending input, 0 if unknown.
    """

    def __init__(self, message: str, line: int = 0, col: int = 0):
        self.message = message
        self.line = line
        self.col = col
        if line:
            message = f"{message} at line {line}, col {col}"
        super().__init__(message)

    def __str__(self) -> str:
        return str(self.args[0])


class LexicalError(FrontendError):
    """Raised when the input contains text that cannot start or form a token.

    Attributes:
        text (str): The offending character or literal text.
    """

    def __init__(self, message: str, text: str, line: int = 0, col: int = 0):
        super().__init__(message, line, col)
        self.text = text


class ParseError(FrontendError):
    """Raised when the token sequence does not match the grammar."""


class ExpectedTokenError(ParseError):
    """Raised when a production requires a token that is not pending.

    Attributes:
        expected (str): Description of what the production needed.
        found (Token): The token that was pending instead.
    """

    def __init__(self, expected: str, found: Token):
        self.expected = expected
        self.found = found
        super().__init__(
            f"Expected {expected}, got {found.describe()}", found.line, found.col
        )


class UnexpectedEndOfStream(ExpectedTokenError):
    """Raised when a production requires a token but the input is exhausted."""


__all__ = [
    "ExpectedTokenError",
    "FrontendError",
    "LexicalError",
    "ParseError",
    "UnexpectedEndOfStream",
]
