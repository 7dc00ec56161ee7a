"""
Serializes Kaleido AST nodes to JSON.

Each top-level unit is converted with `ASTNode.to_dict()`; the emitted document is a
JSON array with one object per unit, in source order. `extern` declarations appear
as objects of kind "prototype", bare expressions as anonymous "function" objects.
Literals that overflowed to infinity are written as the string "inf", so the output
stays strict JSON.
"""

import json

from kaleido.kaleido_ast import ASTDict, ASTNode


class JsonEmitter:
    """Emits a JSON array of serialized top-level units.

    Attributes:
        units (list[ASTDict]): Serialized units accumulated so far.
        indent (int | None): Indentation passed to `json.dumps`.
    """

    def __init__(self, indent: int | None = 2) -> None:
        self.units: list[ASTDict] = []
        self.indent = indent

    def get_output(self) -> str:
        return json.dumps(self.units, indent=self.indent, allow_nan=False)

    def emit_unit(self, node: ASTNode) -> str:
        data = node.to_dict()
        self.units.append(data)
        return json.dumps(data, indent=self.indent, allow_nan=False)

    def render(self, units: list[ASTNode]) -> str:
        for unit in units:
            self.emit_unit(unit)
        return self.get_output()


__all__ = ["JsonEmitter"]
