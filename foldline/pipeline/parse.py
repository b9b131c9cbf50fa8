"""Parse stage: turn CSS text into a stylesheet arena."""

import logging
from pathlib import Path

from tree_sitter import Node
from tree_sitter_language_pack import get_parser

from foldline.models.stylesheet import CssRule, ParsedStylesheet, SelectorNode

logger = logging.getLogger(__name__)

LANGUAGE_NAME = "css"

# Node types that carry no selector or declaration information
IGNORED_NODE_TYPES = frozenset({"comment", "import_statement", "charset_statement", "namespace_statement"})


def render(text: str) -> str:
    """Render selector source text: collapse whitespace runs and trim."""
    return " ".join(text.split())


def _node_text(node: Node, source: bytes) -> str:
    return source[node.start_byte : node.end_byte].decode("utf-8", errors="replace")


def _comment_ranges(node: Node) -> list[tuple[int, int]]:
    """Byte ranges of comments anywhere below a node."""
    if node.type == "comment":
        return [(node.start_byte, node.end_byte)]
    ranges = []
    for child in node.children:
        ranges.extend(_comment_ranges(child))
    return ranges


def _selector_text(node: Node, source: bytes) -> str:
    """Rendered selector text with comments removed."""
    parts = []
    position = node.start_byte
    for start, end in _comment_ranges(node):
        parts.append(source[position:start])
        position = end
    parts.append(source[position : node.end_byte])
    return render(b"".join(parts).decode("utf-8", errors="replace"))


def _has_malformed_prelude(node: Node) -> bool:
    """True if anything before a rule_set's block failed to parse."""
    return any(
        child.type == "ERROR" or child.is_missing or child.has_error
        for child in node.children
        if child.type != "block"
    )


def _line(node: Node) -> int:
    return node.start_point[0] + 1


def _at_rule_name(node: Node, source: bytes) -> str | None:
    """Get the at-rule name ('media', '-webkit-keyframes', ...) for a statement node."""
    if node.type != "at_rule" and not node.type.endswith("_statement"):
        return None
    if not node.children:
        return None
    keyword = _node_text(node.children[0], source)
    if not keyword.startswith("@"):
        return None
    return keyword[1:]


def _child_of_type(node: Node, node_type: str) -> Node | None:
    for child in node.children:
        if child.type == node_type:
            return child
    return None


def _declared_properties(block: Node | None, source: bytes) -> list[str]:
    """Property names declared directly inside a block."""
    if block is None:
        return []
    properties = []
    for child in block.named_children:
        if child.type != "declaration":
            continue
        name = _child_of_type(child, "property_name")
        if name is not None:
            properties.append(_node_text(name, source))
    return properties


class _ArenaBuilder:
    """Walks a tree-sitter CSS tree, assigning arena indices to selectors."""

    def __init__(self, source: bytes):
        self.source = source
        self.nodes: list[SelectorNode] = []
        self.rules: list[CssRule] = []

    def _add_node(self, kind: str, text: str, line: int) -> SelectorNode:
        node = SelectorNode(index=len(self.nodes), kind=kind, text=text, line=line)  # type: ignore[arg-type]
        self.nodes.append(node)
        return node

    def _add_rule_set(self, node: Node, at_rule: str | None) -> None:
        block = _child_of_type(node, "block")
        properties = _declared_properties(block, self.source)
        selectors_node = _child_of_type(node, "selectors")

        if selectors_node is None or _has_malformed_prelude(node):
            logger.debug(f"Malformed selector list at line {_line(node)}")
            self.rules.append(CssRule(at_rule=at_rule, properties=properties, line=_line(node)))
            return

        selector_list = self._add_node(
            "selector_list", _selector_text(selectors_node, self.source), _line(selectors_node)
        )
        selectors = [
            self._add_node("selector", _selector_text(child, self.source), _line(child))
            for child in selectors_node.named_children
            if child.type != "comment"
        ]
        self.rules.append(
            CssRule(
                at_rule=at_rule,
                selector_list=selector_list,
                selectors=selectors,
                properties=properties,
                line=_line(node),
            )
        )

    def _add_keyframe_block(self, node: Node, at_rule: str | None) -> None:
        block = _child_of_type(node, "block")
        selector_children = [
            child for child in node.named_children if child.type not in ("block", "comment")
        ]
        texts = [_selector_text(child, self.source) for child in selector_children]
        selector_list = self._add_node("selector_list", ", ".join(texts), _line(node))
        selectors = [
            self._add_node("selector", text, _line(child))
            for child, text in zip(selector_children, texts)
        ]
        self.rules.append(
            CssRule(
                at_rule=at_rule,
                selector_list=selector_list,
                selectors=selectors,
                properties=_declared_properties(block, self.source),
                line=_line(node),
            )
        )

    def walk(self, node: Node, at_rule: str | None = None) -> None:
        """Collect rules below ``node``; ``at_rule`` is the enclosing at-rule name."""
        if node.type in IGNORED_NODE_TYPES:
            return

        if node.type == "rule_set":
            self._add_rule_set(node, at_rule)
            block = _child_of_type(node, "block")
            if block is not None:
                self.walk(block, at_rule)
            return

        if node.type == "keyframe_block":
            self._add_keyframe_block(node, at_rule)
            return

        at_rule = _at_rule_name(node, self.source) or at_rule
        for child in node.named_children:
            self.walk(child, at_rule)


def parse_stylesheet(source: bytes | str, path: Path | None = None) -> ParsedStylesheet:
    """
    Parse CSS source with tree-sitter and build the selector arena.

    Args:
        source: Stylesheet text
        path: Optional path, used for reporting only

    Returns:
        ParsedStylesheet with rules in document order

    Raises:
        RuntimeError: If the parser cannot be loaded or parsing fails
    """
    if isinstance(source, str):
        source = source.encode("utf-8")

    try:
        parser = get_parser(LANGUAGE_NAME)
    except Exception as e:
        raise RuntimeError(f"Failed to get parser for {LANGUAGE_NAME}: {e}") from e

    try:
        tree = parser.parse(source)
    except Exception as e:
        raise RuntimeError(f"Failed to parse {path or 'stylesheet'}: {e}") from e

    if tree.root_node.has_error:
        logger.warning(f"Parse tree contains errors for {path or 'stylesheet'}")

    builder = _ArenaBuilder(source)
    builder.walk(tree.root_node)
    logger.debug(f"Collected {len(builder.rules)} rule(s), {len(builder.nodes)} selector node(s)")

    return ParsedStylesheet(path=path, source=source, tree=tree, rules=builder.rules, nodes=builder.nodes)


def read_stylesheet(file_path: Path) -> bytes:
    """Read stylesheet bytes from file."""
    try:
        return file_path.read_bytes()
    except Exception as e:
        raise ValueError(f"Failed to read file {file_path}: {e}") from e


def parse_file(file_path: Path) -> ParsedStylesheet:
    """
    Parse a single stylesheet file.

    Raises:
        ValueError: If the file cannot be read
        RuntimeError: If parsing fails
    """
    logger.debug(f"Parsing file: {file_path}")
    parsed = parse_stylesheet(read_stylesheet(file_path), file_path)
    logger.debug(f"Successfully parsed {file_path}")
    return parsed
