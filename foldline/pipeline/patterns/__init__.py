"""Force-include / force-exclude selector patterns."""

from .models import LiteralPattern, Pattern, RegexpPattern, matches_any
from .parser import (
    PatternParseError,
    parse_pattern,
    parse_pattern_string,
    parse_patterns,
    parse_patterns_file,
)

__all__ = [
    "LiteralPattern",
    "Pattern",
    "PatternParseError",
    "RegexpPattern",
    "matches_any",
    "parse_pattern",
    "parse_pattern_string",
    "parse_patterns",
    "parse_patterns_file",
]
