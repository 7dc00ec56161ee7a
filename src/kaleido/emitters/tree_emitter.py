"""
Renders Kaleido AST nodes as an indented outline, one node per line.

Example output for `def foo(a b) a+b*2`:

    Function foo(a b)
      BinaryOp '+'
        VariableRef a
        BinaryOp '*'
          VariableRef b
          NumberLiteral 2.0
"""

from kaleido.kaleido_ast import (
    ASTNode,
    BinaryOp,
    Call,
    Function,
    NumberLiteral,
    Prototype,
    VariableRef,
)


class TreeEmitter:
    """Emits an indented outline of each top-level unit.

    Attributes:
        lines (list[str]): Accumulated output lines.
        indent (int): Current nesting depth.
    """

    def __init__(self) -> None:
        self.lines: list[str] = []
        self.indent = 0

    def indent_str(self) -> str:
        return "  " * self.indent

    def get_output(self) -> str:
        return "\n".join(self.lines)

    def render(self, units: list[ASTNode]) -> str:
        for unit in units:
            self.emit_unit(unit)
        return self.get_output()

    def emit_unit(self, node: ASTNode) -> str:
        start = len(self.lines)
        self._visit(node)
        return "\n".join(self.lines[start:])

    def _line(self, text: str) -> None:
        self.lines.append(f"{self.indent_str()}{text}")

    def _visit(self, node: ASTNode) -> None:
        method = getattr(self, f"emit_{node.kind}", None)
        if method is None:
            raise NotImplementedError(f"No emitter for AST kind: {node.kind!r}")
        method(node)

    def _children(self, *nodes: ASTNode) -> None:
        self.indent += 1
        try:
            for child in nodes:
                self._visit(child)
        finally:
            self.indent -= 1

    def emit_number(self, node: NumberLiteral) -> None:
        self._line(f"NumberLiteral {node.value!r}")

    def emit_variable(self, node: VariableRef) -> None:
        self._line(f"VariableRef {node.name}")

    def emit_binary(self, node: BinaryOp) -> None:
        self._line(f"BinaryOp {node.op!r}")
        self._children(node.lhs, node.rhs)

    def emit_call(self, node: Call) -> None:
        self._line(f"Call {node.callee}/{len(node.args)}")
        self._children(*node.args)

    def emit_prototype(self, node: Prototype) -> None:
        self._line(f"Prototype {node.name}({' '.join(node.params)})")

    def emit_function(self, node: Function) -> None:
        if node.is_anonymous:
            self._line("Function <anonymous>")
        else:
            self._line(f"Function {node.proto.name}({' '.join(node.proto.params)})")
        self._children(node.body)


__all__ = ["TreeEmitter"]
