"""Selector normalization.

Decides, for one selector, whether it is always kept, always removed, or
which simplified selector should be looked for in the critical viewport.
Many selectors can't be matched against the page as written (pseudo
elements, vendor pseudo classes), so a slightly modified selector is tested
instead.
"""

import logging
import re

from foldline.models.profile import Classification
from foldline.models.stylesheet import SelectorNode
from foldline.pipeline.patterns import Pattern, matches_any

logger = logging.getLogger(__name__)

# Pseudo selectors bound to an element that can be tested on the page.
# :hover, :focus and :active would be treated the same way if we wanted
# them in the critical path css, but we don't.
PSEUDO_SELECTORS_TO_KEEP = [
    ":before",
    ":after",
    ":visited",
    ":first-letter",
    ":first-line",
]

# one or two colons are accepted for every entry; all occurrences are removed
PSEUDO_SELECTOR_RE = re.compile("|".join(":?" + s for s in PSEUDO_SELECTORS_TO_KEEP))

SELECTION_RE = re.compile(r":?:(-moz-)?selection")

ANY_PSEUDO_RE = re.compile(r":[:]?([a-zA-Z0-9\-_])*")

# button::-moz-focus-inner, input[type=number]::-webkit-inner-spin-button
VENDOR_PSEUDO_RE = re.compile(r"(?<!\\):?:-[a-z-]*")


def _strip_pseudo_selectors(selector: str) -> Classification:
    """Handle a selector containing ':'."""
    if SELECTION_RE.search(selector):
        logger.debug(f"Dropping selection selector: {selector}")
        return False

    stripped = PSEUDO_SELECTOR_RE.sub("", selector)

    # purely pseudo (e.g. ::-moz-placeholder): nothing on the page to look
    # for, but it can still affect above the fold styles
    if not ANY_PSEUDO_RE.sub("", stripped).strip():
        logger.debug(f"Keeping pure pseudo selector: {selector}")
        return True

    return VENDOR_PSEUDO_RE.sub("", stripped)


def normalize_selector_text(
    selector: str,
    force_include: list[Pattern] | None = None,
    force_exclude: list[Pattern] | None = None,
) -> Classification:
    """
    Classify a rendered selector.

    Args:
        selector: Rendered selector text
        force_include: Selectors matching any of these are kept
        force_exclude: Selectors matching any of these are removed

    Returns:
        True to always keep the selector, False to always remove it,
        otherwise the selector string to look for in the critical viewport
    """
    candidate = selector.strip()

    if force_include and matches_any(candidate, force_include):
        logger.debug(f"forceInclude {candidate}")
        return True

    if force_exclude and matches_any(candidate, force_exclude):
        logger.debug(f"forceExclude {candidate}")
        return False

    if ":" not in candidate:
        return candidate

    return _strip_pseudo_selectors(candidate)


def normalize_selector(
    node: SelectorNode,
    force_include: list[Pattern] | None = None,
    force_exclude: list[Pattern] | None = None,
) -> Classification:
    """Classify a selector node; see normalize_selector_text."""
    return normalize_selector_text(node.text, force_include, force_exclude)
