"""JSON formatter for selector profiles."""

import json
from typing import Any

from foldline.models.profile import ProfileResult, SelectorProfile, disposition
from foldline.models.stylesheet import CssRule, SelectorNode


def _node_to_dict(node: SelectorNode, profile: SelectorProfile) -> dict[str, Any]:
    """Convert a profiled selector node to a dictionary."""
    classification = profile.classification_for(node)
    assert classification is not None
    return {
        "index": node.index,
        "selector": node.text,
        "disposition": disposition(classification),
        "test": classification if isinstance(classification, str) else None,
    }


def _profiled_nodes(rule: CssRule, profile: SelectorProfile) -> list[SelectorNode]:
    """Nodes of a rule that received a classification."""
    if rule.selector_list is not None and profile.classification_for(rule.selector_list) is not None:
        return [rule.selector_list]
    return [node for node in rule.selectors if profile.classification_for(node) is not None]


def _rule_to_dict(rule: CssRule, nodes: list[SelectorNode], profile: SelectorProfile) -> dict[str, Any]:
    """Convert a CssRule to a dictionary."""
    return {
        "line": rule.line,
        "at_rule": rule.at_rule,
        "selectors": [_node_to_dict(node, profile) for node in nodes],
    }


def profile_to_dict(result: ProfileResult) -> dict[str, Any]:
    """Build the JSON document for a profile result."""
    profile = result.profile
    rules = []
    selector_count = 0
    for rule in result.stylesheet.rules:
        nodes = _profiled_nodes(rule, profile)
        if nodes:
            rules.append(_rule_to_dict(rule, nodes, profile))
            selector_count += len(nodes)

    return {
        "path": str(result.stylesheet.path) if result.stylesheet.path else None,
        "testable_selectors": sorted(profile.selectors),
        "rules": rules,
        "summary": {
            "selectors": selector_count,
            "testable": profile.testable_count,
            "force_kept": len(profile.force_kept),
            "force_dropped": len(profile.force_dropped),
            "skipped_rules": profile.skipped_rules,
        },
    }


def format_as_json(result: ProfileResult, *, pretty: bool = True) -> str:
    """Format a selector profile as JSON.

    Args:
        result: The profile result to format
        pretty: If True, format with indentation for readability

    Returns:
        JSON-formatted string
    """
    data = profile_to_dict(result)

    if pretty:
        return json.dumps(data, indent=2)
    return json.dumps(data)
