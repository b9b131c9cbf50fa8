"""Selector profile stage.

Walks every rule of a parsed stylesheet and records how each selector
should be treated when extracting critical CSS.
"""

import logging

from foldline.models.profile import SelectorProfile
from foldline.models.stylesheet import CssRule, ParsedStylesheet
from foldline.pipeline.keywords import is_keyframes
from foldline.pipeline.normalize import normalize_selector
from foldline.pipeline.patterns import Pattern

logger = logging.getLogger(__name__)

# rules declaring this property are tested as a whole selector list
GRID_AREA_PROPERTY = "grid-area"


def _should_skip_rule(rule: CssRule) -> bool:
    """Keyframe selectors and broken selector lists are left alone."""
    if is_keyframes(rule.at_rule):
        return True
    if not rule.is_well_formed:
        logger.debug(f"Skipping rule with bad selector at line {rule.line}")
        return True
    return False


def _profile_rule(
    rule: CssRule,
    profile: SelectorProfile,
    force_include: list[Pattern] | None,
    force_exclude: list[Pattern] | None,
) -> None:
    """Record the classification of every selector of one rule."""
    assert rule.selector_list is not None

    if rule.declares(GRID_AREA_PROPERTY):
        logger.debug(f"rule contains grid-area, keeping: {rule.selector_list.text}")
        profile.record(rule.selector_list, rule.selector_list.text)
        return

    for selector_node in rule.selectors:
        profile.record(
            selector_node,
            normalize_selector(selector_node, force_include, force_exclude),
        )


def build_selector_profile(
    stylesheet: ParsedStylesheet,
    force_include: list[Pattern] | None = None,
    force_exclude: list[Pattern] | None = None,
) -> SelectorProfile:
    """
    Classify every selector of a stylesheet.

    Args:
        stylesheet: Parsed stylesheet
        force_include: Selectors matching any of these are always kept
        force_exclude: Selectors matching any of these are always removed

    Returns:
        SelectorProfile with the distinct selectors to test on the page and
        the classification of every selector node, keyed by arena index
    """
    logger.debug(f"Building selector profile for {len(stylesheet.rules)} rule(s)")
    profile = SelectorProfile()

    for rule in stylesheet.rules:
        if _should_skip_rule(rule):
            profile.skipped_rules += 1
            continue
        _profile_rule(rule, profile, force_include, force_exclude)

    logger.debug(
        "Selector profile complete: %d node(s), %d selector(s) to test",
        len(profile.classifications),
        profile.testable_count,
    )
    return profile
