"""Stylesheet domain models."""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field
from tree_sitter import Node, Tree


class SelectorNode(BaseModel):
    """A selector (or a whole selector list) in the stylesheet arena.

    Nodes are identified by ``index``, their position in
    ``ParsedStylesheet.nodes``; the rendered ``text`` is the only view of
    the selector the profile stage uses.
    """

    model_config = {"frozen": True}

    index: int = Field(ge=0, description="Stable arena index, unique within one stylesheet")
    kind: Literal["selector", "selector_list"] = Field(description="Single selector or whole list")
    text: str = Field(description="Rendered selector text")
    line: int = Field(default=1, ge=1, description="1-based source line")


class CssRule(BaseModel):
    """A style rule (or keyframe block) with its selectors and declarations."""

    at_rule: str | None = Field(
        default=None, description="Name of the innermost enclosing at-rule, without '@'"
    )
    selector_list: SelectorNode | None = Field(
        default=None, description="Selector list container, None when malformed"
    )
    selectors: list[SelectorNode] = Field(default_factory=list, description="Selectors in source order")
    properties: list[str] = Field(
        default_factory=list, description="Property names declared directly in the rule's block"
    )
    line: int = Field(default=1, ge=1, description="1-based source line")

    @property
    def is_well_formed(self) -> bool:
        """True if the rule has a proper selector list."""
        return self.selector_list is not None

    def declares(self, property_name: str) -> bool:
        """Check if the rule's own block declares the given property."""
        return property_name in self.properties


class ParsedStylesheet(BaseModel):
    """Represents a successfully parsed stylesheet."""

    model_config = {"arbitrary_types_allowed": True}

    path: Path | None = Field(default=None, description="Path to the stylesheet, if read from disk")
    source: bytes = Field(description="Original stylesheet bytes")
    tree: Tree = Field(description="Tree-sitter AST")
    rules: list[CssRule] = Field(default_factory=list, description="Rules in document order")
    nodes: list[SelectorNode] = Field(default_factory=list, description="Selector arena")

    @property
    def root_node(self) -> Node:
        """Get the root node of the AST."""
        return self.tree.root_node

    @property
    def has_errors(self) -> bool:
        """True if tree-sitter had to recover from syntax errors."""
        return self.root_node.has_error

    @property
    def selector_count(self) -> int:
        """Number of individual selectors in the arena."""
        return sum(1 for node in self.nodes if node.kind == "selector")

    def node(self, index: int) -> SelectorNode:
        """Look up an arena node by index."""
        return self.nodes[index]
