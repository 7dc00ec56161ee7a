"""
Provides the `Renderer` class and emitter interface for presenting Kaleido ASTs.

Classes and Features:
    - Emitter (Protocol): Interface for all output emitters. Requires `render`,
      `emit_unit` and `get_output`.
    - Renderer: Picks an emitter for the requested output format ("tree", "json",
      "source") and feeds it top-level units.

Usage:
    >>> renderer = Renderer("source")
    >>> text = renderer.render(units)

Raises:
    ValueError: If the output format is not supported.
    TypeError: If the unit list contains something other than AST nodes.
    NotImplementedError: If an emitter lacks an `emit_*` method for a node kind.
"""

from typing import Protocol

from kaleido.emitters.json_emitter import JsonEmitter
from kaleido.emitters.source_emitter import SourceEmitter
from kaleido.emitters.tree_emitter import TreeEmitter
from kaleido.kaleido_ast import ASTNode


class Emitter(Protocol):  # pragma: no cover
    """Protocol for all Kaleido output emitters."""

    def render(self, units: list[ASTNode]) -> str: ...

    def emit_unit(self, node: ASTNode) -> str: ...

    def get_output(self) -> str: ...


EMITTERS: dict[str, type[Emitter]] = {
    "tree": TreeEmitter,
    "json": JsonEmitter,
    "source": SourceEmitter,
}

OUTPUT_FORMATS = tuple(EMITTERS)


class Renderer:
    """Dispatches Kaleido AST units to the emitter for an output format.

    Attributes:
        fmt (str): The selected output format.
        emitter (Emitter): The emitter instance accumulating output.
    """

    def __init__(self, fmt: str = "tree") -> None:
        fmt = fmt.lower()
        if fmt not in EMITTERS:
            raise ValueError(f"Unknown output format: {fmt!r}")
        self.fmt = fmt
        self.emitter: Emitter = EMITTERS[fmt]()

    def render(self, units: list[ASTNode]) -> str:
        """Renders every unit and returns the emitter's complete output."""
        if not all(isinstance(node, ASTNode) for node in units):
            raise TypeError("All items must be ASTNode instances.")
        return self.emitter.render(units)

    def render_unit(self, node: ASTNode) -> str:
        """Renders a single unit, returning only that unit's text."""
        if not isinstance(node, ASTNode):
            raise TypeError("Expected an ASTNode instance.")
        return self.emitter.emit_unit(node)


__all__ = ["EMITTERS", "OUTPUT_FORMATS", "Emitter", "Renderer"]
