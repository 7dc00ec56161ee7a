"""
Renders Kaleido AST nodes back into Kaleido source text.

This module defines the `SourceEmitter` class, the pretty-printer used by the CLI's
`source` output format. Its output is meant to be fed back to the parser:

Behavior:
    - Binary operands that are themselves binary operations are parenthesized, so
      the grouping chosen by the parser survives a reparse unchanged.
    - Numbers are written in positional notation (never with an exponent), which is
      the only form the lexer reads.
    - Anonymous functions (wrapped top-level expressions) render as their bare body.
    - Every top-level unit is terminated by `;`.

Raises:
    - `NotImplementedError`: If a node kind has no corresponding `emit_*` method.
"""

import math
from decimal import Decimal

from kaleido.kaleido_ast import (
    ASTNode,
    BinaryOp,
    Call,
    Function,
    NumberLiteral,
    Prototype,
    VariableRef,
)

OVERFLOW_LITERAL = "1" + "0" * 309


class SourceEmitter:
    """Emits Kaleido source code from AST nodes.

    Attributes:
        lines (list[str]): One rendered top-level unit per entry.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def render(self, units: list[ASTNode]) -> str:
        """Renders every unit and returns the accumulated source text."""
        for unit in units:
            self.emit_unit(unit)
        return self.get_output()

    def emit(self, node: ASTNode) -> str:
        """Dispatches `node` to the `emit_<kind>` method for its kind."""
        method = getattr(self, f"emit_{node.kind}", None)
        if method is None:
            raise NotImplementedError(f"No emitter for AST kind: {node.kind!r}")
        return str(method(node))

    def emit_number(self, node: NumberLiteral) -> str:
        if math.isinf(node.value):
            # Overflowing literal; reads back as inf.
            return OVERFLOW_LITERAL
        text = repr(float(node.value))
        if "e" in text or "E" in text:
            text = format(Decimal(text), "f")
        return text

    def emit_variable(self, node: VariableRef) -> str:
        return node.name

    def emit_operand(self, node: ASTNode) -> str:
        text = self.emit(node)
        if isinstance(node, BinaryOp):
            return f"({text})"
        return text

    def emit_binary(self, node: BinaryOp) -> str:
        return f"{self.emit_operand(node.lhs)} {node.op} {self.emit_operand(node.rhs)}"

    def emit_call(self, node: Call) -> str:
        args = ", ".join(self.emit(arg) for arg in node.args)
        return f"{node.callee}({args})"

    def emit_prototype(self, node: Prototype) -> str:
        return f"{node.name}({' '.join(node.params)})"

    def emit_extern(self, node: Prototype) -> str:
        return f"extern {self.emit_prototype(node)}"

    def emit_function(self, node: Function) -> str:
        if node.is_anonymous:
            return self.emit(node.body)
        return f"def {self.emit_prototype(node.proto)} {self.emit(node.body)}"

    def emit_unit(self, node: ASTNode) -> str:
        """Renders one `;`-terminated top-level unit; a bare prototype is an `extern`."""
        if isinstance(node, Prototype):
            text = f"{self.emit_extern(node)};"
        else:
            text = f"{self.emit(node)};"
        self.lines.append(text)
        return text


__all__ = ["SourceEmitter"]
