"""
Kaleido Language Parser

Parses Kaleido tokens into abstract syntax trees (ASTs).

The parser pulls tokens from a `Lexer` through its two-token lookahead window and
builds immutable `kaleido_ast` nodes by recursive descent. Binary expressions are
parsed by precedence climbing.

Grammar
-------
    unit        := extern_decl | func_def | ';' | expr
    extern_decl := 'extern' prototype
    func_def    := 'def' prototype expr
    prototype   := IDENT '(' IDENT* ')'
    expr        := primary (binop primary)*
    primary     := NUMBER | '(' expr ')' | call | IDENT
    call        := IDENT '(' (expr (',' expr)*)? ')'
    binop       := '+' | '-' | '*' | '<'

Prototype parameters are separated by whitespace only, while call arguments are
separated by commas.

Precedence
----------
    '<' → 10, '+' → 20, '-' → 20, '*' → 40

Equal-precedence operators group to the left; `*` binds tighter than `+`/`-`,
which bind tighter than `<`.

Entry Points
------------
- `parse()`: Parse every top-level unit of the input.
- `parse_unit()`: Parse the next top-level unit, or return None at end of input.
- `parse_expression()`: Parse a single expression.
- `parse_source()`: Module-level shortcut from source text to units.

Raises
------
LexicalError
    Propagated from the lexer on unknown characters or malformed numbers.
ParseError
    Raised when the token sequence does not match the grammar. The parser never
    recovers by itself; `synchronize()` is offered to drivers that want to skip to
    the next unit after reporting an error.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import IO, Any

from kaleido.kaleido_ast import (
    BinaryOp,
    Call,
    Expression,
    Function,
    NumberLiteral,
    Prototype,
    TopLevelUnit,
    VariableRef,
)
from kaleido.kaleido_constants import (
    BINOP_PRECEDENCE,
    COMMA,
    DEF,
    EOF,
    EXTERN,
    IDENT,
    LPAREN,
    NOT_AN_OPERATOR,
    NUMBER,
    RPAREN,
    SEMI,
    operator_symbols,
)
from kaleido.kaleido_errors import (
    ExpectedTokenError,
    LexicalError,
    UnexpectedEndOfStream,
)
from kaleido.kaleido_lexer import Lexer, Token


def get_precedence(token: Token) -> int:
    """Returns the binding power of a binary operator token, or -1 for anything else."""
    return BINOP_PRECEDENCE.get(token.type, NOT_AN_OPERATOR)


class Parser:
    """
    Kaleido Parser Class

    Consumes tokens from a single `Lexer` and produces top-level units: `Function`
    definitions, `Prototype` declarations (from `extern`), and anonymous `Function`
    wrappers around bare expressions.

    Attributes
    ----------
    lexer : Lexer
        The token source, owned by this parser for the duration of the session.

    Raises
    ------
    LexicalError, ParseError
        On the first malformed construct. No partial AST is returned.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer

    def current(self) -> Token:
        return self.lexer.peek_first()

    def peek(self) -> Token:
        return self.lexer.peek_second()

    def advance(self) -> Token:
        return self.lexer.next_token()

    def expected(self, what: str) -> ExpectedTokenError:
        """Builds the error for a missing `what` at the pending token."""
        tok = self.current()
        if tok.type == EOF:
            return UnexpectedEndOfStream(what, tok)
        return ExpectedTokenError(what, tok)

    def match(self, tok_type: str, what: str) -> Token:
        """Consumes the pending token if it has type `tok_type`, else raises."""
        if self.current().type != tok_type:
            raise self.expected(what)
        return self.advance()

    # Top level

    def parse(self) -> list[TopLevelUnit]:
        """Parse the whole input and return its top-level units (fail-fast)."""
        return list(self)

    def __iter__(self) -> Iterator[TopLevelUnit]:
        while True:
            unit = self.parse_unit()
            if unit is None:
                return
            yield unit

    def parse_unit(self) -> TopLevelUnit | None:
        """Parse the next top-level unit, skipping `;` separators.

        Returns None once the input is exhausted.
        """
        while True:
            tok = self.current()
            if tok.type == EOF:
                return None
            if tok.type == SEMI:
                self.advance()
                continue
            if tok.type == DEF:
                return self.parse_definition()
            if tok.type == EXTERN:
                return self.parse_extern()
            return self.parse_top_level_expr()

    def parse_definition(self) -> Function:
        """Parse `def prototype expr`."""
        self.match(DEF, "'def'")
        proto = self.parse_prototype()
        body = self.parse_expression()
        return Function(proto, body)

    def parse_extern(self) -> Prototype:
        """Parse `extern prototype`."""
        self.match(EXTERN, "'extern'")
        return self.parse_prototype()

    def parse_top_level_expr(self) -> Function:
        """Parse a bare expression and wrap it in an anonymous function."""
        return Function.anonymous(self.parse_expression())

    def parse_prototype(self) -> Prototype:
        """Parse `IDENT '(' IDENT* ')'`."""
        name = self.match(IDENT, "function name in prototype").value
        self.match(LPAREN, "'(' in prototype")
        params: list[str] = []
        while self.current().type == IDENT:
            params.append(self.advance().value)
        self.match(RPAREN, "identifier or ')' in parameter list")
        return Prototype(name, tuple(params))

    # Expressions

    def parse_expression(self) -> Expression:
        """Parse a primary expression followed by any binary operator chain."""
        lhs = self.parse_primary()
        return self.parse_bin_op_rhs(0, lhs)

    def parse_bin_op_rhs(self, min_precedence: int, lhs: Expression) -> Expression:
        """Extend `lhs` with every pending operator binding at least `min_precedence`."""
        while True:
            tok_prec = get_precedence(self.current())
            if tok_prec < min_precedence:
                return lhs

            op = operator_symbols[self.advance().type]
            rhs = self.parse_primary()

            # A tighter operator after rhs takes rhs as its own left operand.
            if tok_prec < get_precedence(self.current()):
                rhs = self.parse_bin_op_rhs(tok_prec + 1, rhs)

            lhs = BinaryOp(lhs, op, rhs)

    def parse_primary(self) -> Expression:
        tok = self.current()
        if tok.type == NUMBER:
            self.advance()
            return NumberLiteral(tok.value)
        if tok.type == LPAREN:
            return self.parse_paren_expr()
        if tok.type == IDENT:
            return self.parse_identifier_expr()
        raise self.expected("expression")

    def parse_paren_expr(self) -> Expression:
        """Parse `'(' expr ')'`; the parentheses leave no node behind."""
        self.match(LPAREN, "'('")
        expr = self.parse_expression()
        self.match(RPAREN, "')'")
        return expr

    def parse_identifier_expr(self) -> Expression:
        """Parse a variable reference, or a call when `(` follows the name."""
        if self.peek().type == LPAREN:
            return self.parse_call()
        return VariableRef(self.match(IDENT, "identifier").value)

    def parse_call(self) -> Call:
        """Parse `IDENT '(' (expr (',' expr)*)? ')'`."""
        callee = self.match(IDENT, "function name").value
        self.match(LPAREN, "'('")
        args: list[Expression] = []
        if self.current().type == RPAREN:
            self.advance()
            return Call(callee, ())
        while True:
            args.append(self.parse_expression())
            if self.current().type == RPAREN:
                self.advance()
                return Call(callee, tuple(args))
            if self.current().type != COMMA:
                raise self.expected("',' or ')' in argument list")
            self.advance()

    # Driver support

    def synchronize(self) -> None:
        """Discard input up to the next top-level unit boundary.

        Consumes a `;` if one ends the skipped region; leaves `def`, `extern` and
        end of input pending. Lexical errors met on the way are skipped as well.
        """
        while True:
            try:
                tok = self.current()
            except LexicalError:
                continue
            if tok.type in (EOF, DEF, EXTERN):
                return
            self.advance()
            if tok.type == SEMI:
                return


def parse_source(source: "str | bytes | IO[Any]") -> list[TopLevelUnit]:
    """Parse `source` (text, bytes or a readable object) into top-level units."""
    return Parser(Lexer.from_source(source)).parse()


__all__ = ["Parser", "get_precedence", "parse_source"]
