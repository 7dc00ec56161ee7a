"""
Token vocabulary shared by the Kaleido lexer, parser and emitters.

Exports:
    - token_hashmap: lexeme → canonical token type for keywords and symbols
    - keyword_tokens: reserved words
    - operator_tokens: binary operator token types, in canonical order
    - operator_symbols: operator token type → operator character
    - BINOP_PRECEDENCE: binding power of each binary operator
    - NOT_AN_OPERATOR: precedence reported for any non-operator token
"""

EOF = "EOF"
DEF = "DEF"
EXTERN = "EXTERN"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
COMMA = "COMMA"
SEMI = "SEMI"
PLUS = "PLUS"
SUB = "SUB"
MULT = "MULT"
LT = "LT"
IDENT = "IDENT"
NUMBER = "NUMBER"

keyword_tokens: dict[str, str] = {
    "def": DEF,
    "extern": EXTERN,
}

symbol_tokens: dict[str, str] = {
    "(": LPAREN,
    ")": RPAREN,
    ",": COMMA,
    ";": SEMI,
    "+": PLUS,
    "-": SUB,
    "*": MULT,
    "<": LT,
}

token_hashmap: dict[str, str] = {**keyword_tokens, **symbol_tokens}

operator_tokens: list[str] = [PLUS, SUB, MULT, LT]

operator_symbols: dict[str, str] = {
    tok_type: lexeme
    for lexeme, tok_type in symbol_tokens.items()
    if tok_type in operator_tokens
}

BINOP_PRECEDENCE: dict[str, int] = {
    LT: 10,
    PLUS: 20,
    SUB: 20,
    MULT: 40,
}

NOT_AN_OPERATOR = -1

# Human-readable names used in diagnostics.
token_descriptions: dict[str, str] = {
    EOF: "end of input",
    DEF: "'def'",
    EXTERN: "'extern'",
    IDENT: "identifier",
    NUMBER: "number",
    **{tok_type: repr(lexeme) for lexeme, tok_type in symbol_tokens.items()},
}

__all__ = [
    "BINOP_PRECEDENCE",
    "NOT_AN_OPERATOR",
    "keyword_tokens",
    "operator_symbols",
    "operator_tokens",
    "symbol_tokens",
    "token_descriptions",
    "token_hashmap",
]
