"""Selector profiling for critical CSS extraction."""

from foldline.models.profile import Classification, ProfileResult, SelectorProfile
from foldline.models.stylesheet import CssRule, ParsedStylesheet, SelectorNode
from foldline.pipeline.normalize import normalize_selector, normalize_selector_text
from foldline.pipeline.parse import parse_file, parse_stylesheet
from foldline.pipeline.patterns import (
    LiteralPattern,
    Pattern,
    PatternParseError,
    RegexpPattern,
    parse_pattern,
)
from foldline.pipeline.pipeline import run_pipeline
from foldline.pipeline.profile import build_selector_profile

__all__ = [
    "Classification",
    "CssRule",
    "LiteralPattern",
    "ParsedStylesheet",
    "Pattern",
    "PatternParseError",
    "ProfileResult",
    "RegexpPattern",
    "SelectorNode",
    "SelectorProfile",
    "build_selector_profile",
    "normalize_selector",
    "normalize_selector_text",
    "parse_file",
    "parse_pattern",
    "parse_stylesheet",
    "run_pipeline",
]
