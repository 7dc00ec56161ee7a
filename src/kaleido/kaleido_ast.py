"""
Defines the abstract syntax tree (AST) node structure for the Kaleido language.

Classes:
    ASTNode:
        Common base of every node. Carries the `kind` tag and the dictionary
        conversion used for JSON output and debugging.

    NumberLiteral, VariableRef, BinaryOp, Call:
        Expression nodes.

    Prototype, Function:
        Top-level nodes. `extern` declarations are bare prototypes; bare top-level
        expressions are wrapped in an anonymous `Function` (empty name, no params).

    ASTDict:
        TypedDict representation for serializing nodes to plain Python dictionaries.

All nodes are frozen dataclasses. Child sequences are tuples, so a tree cannot be
modified once the parser has built it, and every subtree belongs to exactly one parent.

Example:
    node = BinaryOp(NumberLiteral(1.0), "+", VariableRef("x"))
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, ClassVar, TypedDict, Union

BINARY_OPERATORS = frozenset("+-*<")


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The type of AST node (e.g., "number", "call", "function").
        value (float | str): Literal value, for "number"; "inf" when it overflowed.
        name (str): Variable, callee or prototype name.
        op (str): Operator character, for "binary".
        lhs (ASTDict): Left operand, for "binary".
        rhs (ASTDict): Right operand, for "binary".
        args (list[ASTDict]): Call arguments, in order.
        params (list[str]): Prototype parameter names, in order.
        proto (ASTDict): Function prototype.
        body (ASTDict): Function body expression.
    """

    kind: str
    value: float | str
    name: str
    op: str
    lhs: "ASTDict"
    rhs: "ASTDict"
    args: list["ASTDict"]
    params: list[str]
    proto: "ASTDict"
    body: "ASTDict"


class ASTNode:
    """Base class for every Kaleido AST node."""

    kind: ClassVar[str] = ""
    _registry: ClassVar[dict[str, type["ASTNode"]]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.kind:
            ASTNode._registry[cls.kind] = cls

    def to_dict(self) -> ASTDict:
        raise NotImplementedError(f"{type(self).__name__} cannot be serialized")

    @staticmethod
    def from_dict(data: ASTDict) -> "ASTNode":
        """Rebuilds a node (and its descendants) from its `to_dict()` form.

        Raises:
            ValueError: If the dictionary names an unknown node kind.
        """
        kind = data.get("kind")
        node_cls = ASTNode._registry.get(str(kind))
        if node_cls is None:
            raise ValueError(f"Unknown AST node kind: {kind!r}")
        return node_cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: ASTDict) -> "ASTNode":
        raise NotImplementedError  # pragma: no cover


@dataclass(frozen=True)
class NumberLiteral(ASTNode):
    value: float

    kind: ClassVar[str] = "number"

    def to_dict(self) -> ASTDict:
        if math.isinf(self.value):
            return {"kind": self.kind, "value": "inf"}
        return {"kind": self.kind, "value": self.value}

    @classmethod
    def _from_dict(cls, data: ASTDict) -> "NumberLiteral":
        return cls(float(data["value"]))


@dataclass(frozen=True)
class VariableRef(ASTNode):
    name: str

    kind: ClassVar[str] = "variable"

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "name": self.name}

    @classmethod
    def _from_dict(cls, data: ASTDict) -> "VariableRef":
        return cls(data["name"])


@dataclass(frozen=True)
class BinaryOp(ASTNode):
    """A binary operation; `op` is one of `+ - * <`."""

    lhs: "Expression"
    op: str
    rhs: "Expression"

    kind: ClassVar[str] = "binary"

    def __post_init__(self) -> None:
        if self.op not in BINARY_OPERATORS:
            raise ValueError(f"Unknown binary operator: {self.op!r}")

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "op": self.op,
            "lhs": self.lhs.to_dict(),
            "rhs": self.rhs.to_dict(),
        }

    @classmethod
    def _from_dict(cls, data: ASTDict) -> "BinaryOp":
        return cls(
            ASTNode.from_dict(data["lhs"]),  # type: ignore[arg-type]
            data["op"],
            ASTNode.from_dict(data["rhs"]),  # type: ignore[arg-type]
        )


@dataclass(frozen=True)
class Call(ASTNode):
    """A call expression. Arity is simply `len(args)`; nothing checks it."""

    callee: str
    args: tuple["Expression", ...] = ()

    kind: ClassVar[str] = "call"

    def __post_init__(self) -> None:
        object.__setattr__(self, "args", tuple(self.args))

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "name": self.callee,
            "args": [arg.to_dict() for arg in self.args],
        }

    @classmethod
    def _from_dict(cls, data: ASTDict) -> "Call":
        return cls(
            data["name"],
            tuple(ASTNode.from_dict(arg) for arg in data.get("args", [])),  # type: ignore[misc]
        )


@dataclass(frozen=True)
class Prototype(ASTNode):
    """A function signature. Duplicate parameter names are kept as written."""

    name: str
    params: tuple[str, ...] = ()

    kind: ClassVar[str] = "prototype"

    def __post_init__(self) -> None:
        object.__setattr__(self, "params", tuple(self.params))

    @property
    def arity(self) -> int:
        return len(self.params)

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "name": self.name, "params": list(self.params)}

    @classmethod
    def _from_dict(cls, data: ASTDict) -> "Prototype":
        return cls(data["name"], tuple(data.get("params", [])))


@dataclass(frozen=True)
class Function(ASTNode):
    """A function definition with a single-expression body."""

    proto: Prototype
    body: "Expression"

    kind: ClassVar[str] = "function"

    @classmethod
    def anonymous(cls, body: "Expression") -> "Function":
        """Wraps a top-level expression in a nameless, parameterless function."""
        return cls(Prototype(""), body)

    @property
    def is_anonymous(self) -> bool:
        return self.proto.name == "" and not self.proto.params

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "proto": self.proto.to_dict(),
            "body": self.body.to_dict(),
        }

    @classmethod
    def _from_dict(cls, data: ASTDict) -> "Function":
        proto = ASTNode.from_dict(data["proto"])
        if not isinstance(proto, Prototype):
            raise ValueError("Function proto must be a prototype")
        return cls(proto, ASTNode.from_dict(data["body"]))  # type: ignore[arg-type]


Expression = Union[NumberLiteral, VariableRef, BinaryOp, Call]
TopLevelUnit = Union[Function, Prototype]

__all__ = [
    "ASTDict",
    "ASTNode",
    "BinaryOp",
    "Call",
    "Expression",
    "Function",
    "NumberLiteral",
    "Prototype",
    "TopLevelUnit",
    "VariableRef",
]
