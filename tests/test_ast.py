import dataclasses
import json
import math

import pytest

from kaleido.kaleido_ast import (
    ASTNode,
    BinaryOp,
    Call,
    Function,
    NumberLiteral,
    Prototype,
    VariableRef,
)


def sample_function() -> Function:
    return Function(
        Prototype("foo", ("a", "b")),
        BinaryOp(
            VariableRef("a"),
            "+",
            Call("bar", (NumberLiteral(2.0), VariableRef("b"))),
        ),
    )


def test_node_kinds() -> None:
    assert NumberLiteral(1.0).kind == "number"
    assert VariableRef("x").kind == "variable"
    assert BinaryOp(NumberLiteral(1.0), "+", NumberLiteral(2.0)).kind == "binary"
    assert Call("f").kind == "call"
    assert Prototype("f").kind == "prototype"
    assert Function.anonymous(NumberLiteral(1.0)).kind == "function"


def test_structural_equality() -> None:
    assert sample_function() == sample_function()
    assert NumberLiteral(2.0) == NumberLiteral(2)
    assert VariableRef("x") != VariableRef("y")
    assert VariableRef("x") != "x"
    assert Call("f", (NumberLiteral(1.0),)) != Call("f", ())


def test_nodes_are_immutable() -> None:
    node = sample_function()
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.body = NumberLiteral(1.0)  # type: ignore[misc]
    with pytest.raises(dataclasses.FrozenInstanceError):
        node.proto.name = "other"  # type: ignore[misc]


def test_sequences_are_stored_as_tuples() -> None:
    call = Call("f", [NumberLiteral(1.0)])  # type: ignore[arg-type]
    proto = Prototype("f", ["a", "b"])  # type: ignore[arg-type]
    assert call.args == (NumberLiteral(1.0),)
    assert proto.params == ("a", "b")
    assert proto.arity == 2


def test_nodes_are_hashable() -> None:
    assert len({sample_function(), sample_function()}) == 1


def test_binary_op_rejects_unknown_operator() -> None:
    with pytest.raises(ValueError, match="Unknown binary operator"):
        BinaryOp(NumberLiteral(1.0), "/", NumberLiteral(2.0))


def test_anonymous_function() -> None:
    fn = Function.anonymous(VariableRef("x"))
    assert fn.is_anonymous
    assert fn.proto == Prototype("", ())
    assert not sample_function().is_anonymous
    assert not Function(Prototype("", ("a",)), VariableRef("a")).is_anonymous


def test_to_dict() -> None:
    d = sample_function().to_dict()
    assert d == {
        "kind": "function",
        "proto": {"kind": "prototype", "name": "foo", "params": ["a", "b"]},
        "body": {
            "kind": "binary",
            "op": "+",
            "lhs": {"kind": "variable", "name": "a"},
            "rhs": {
                "kind": "call",
                "name": "bar",
                "args": [
                    {"kind": "number", "value": 2.0},
                    {"kind": "variable", "name": "b"},
                ],
            },
        },
    }


def test_to_dict_is_json_serializable() -> None:
    text = json.dumps(sample_function().to_dict())
    assert ASTNode.from_dict(json.loads(text)) == sample_function()


def test_from_dict_round_trip() -> None:
    for node in [
        NumberLiteral(0.5),
        VariableRef("v"),
        Call("f", ()),
        Prototype("p", ("x", "x")),
        sample_function(),
    ]:
        assert ASTNode.from_dict(node.to_dict()) == node


def test_infinite_literal_serializes_as_string() -> None:
    node = NumberLiteral(math.inf)
    assert node.to_dict() == {"kind": "number", "value": "inf"}
    assert ASTNode.from_dict(json.loads(json.dumps(node.to_dict(), allow_nan=False))) == node


def test_from_dict_unknown_kind() -> None:
    with pytest.raises(ValueError, match="Unknown AST node kind"):
        ASTNode.from_dict({"kind": "loop"})


def test_from_dict_function_requires_prototype() -> None:
    with pytest.raises(ValueError, match="proto must be a prototype"):
        ASTNode.from_dict(
            {
                "kind": "function",
                "proto": {"kind": "number", "value": 1.0},
                "body": {"kind": "number", "value": 1.0},
            }
        )


def test_base_node_cannot_serialize() -> None:
    with pytest.raises(NotImplementedError):
        ASTNode().to_dict()
