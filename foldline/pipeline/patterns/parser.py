"""Parser for force-include / force-exclude pattern entries."""

from pathlib import Path
from typing import Any

import yaml  # type: ignore[import-untyped]
from pydantic import TypeAdapter, ValidationError

from .models import LiteralPattern, Pattern, RegexpPattern

_PATTERN_ADAPTER: TypeAdapter[Pattern] = TypeAdapter(Pattern)

PATTERN_LIST_KEYS = ("force_include", "force_exclude")


class PatternParseError(Exception):
    """Raised when a pattern entry cannot be parsed."""

    pass


def _split_regexp_literal(pattern_string: str) -> tuple[str, str] | None:
    """Split '/source/flags' into its parts, or None if it is not in that form."""
    if len(pattern_string) < 2 or not pattern_string.startswith("/"):
        return None
    closing = pattern_string.rfind("/")
    if closing == 0:
        return None
    return pattern_string[1:closing], pattern_string[closing + 1 :]


def parse_pattern_string(pattern_string: str) -> Pattern:
    """
    Parse a pattern from its string form.

    Format: ``/source/flags`` for a regular expression, anything else is
    matched literally.

    Examples:
        .header
        /^\\.nav-/
        /modal/i

    Raises:
        PatternParseError: If the string is empty or the regexp is invalid
    """
    pattern_string = pattern_string.strip()
    if not pattern_string:
        raise PatternParseError("Empty pattern string")

    parts = _split_regexp_literal(pattern_string)
    if parts is None:
        return LiteralPattern(value=pattern_string)

    source, flags = parts
    try:
        return RegexpPattern(source=source, flags=flags)
    except ValidationError as e:
        raise PatternParseError(f"Invalid pattern '{pattern_string}': {e}") from e


def _parse_pattern_mapping(entry: dict[str, Any]) -> Pattern:
    """Parse a mapping entry (kind/value/source/flags)."""
    if "kind" not in entry:
        raise PatternParseError(f"Pattern {entry!r} missing required 'kind' field")
    try:
        return _PATTERN_ADAPTER.validate_python(entry)
    except ValidationError as e:
        raise PatternParseError(f"Invalid pattern {entry!r}: {e}") from e


def parse_pattern(entry: Any) -> Pattern:
    """Parse a single pattern from a string or a mapping."""
    if isinstance(entry, (LiteralPattern, RegexpPattern)):
        return entry
    if isinstance(entry, str):
        return parse_pattern_string(entry)
    if isinstance(entry, dict):
        return _parse_pattern_mapping(entry)
    raise PatternParseError(f"Unsupported pattern entry {entry!r}: expected a string or mapping")


def parse_patterns(entries: list[Any]) -> list[Pattern]:
    """Parse a list of pattern entries, preserving order."""
    return [parse_pattern(entry) for entry in entries]


def _load_yaml_file(file_path: Path) -> Any:
    """Load YAML file contents."""
    if not file_path.exists():
        raise FileNotFoundError(f"Patterns file not found: {file_path}")

    with open(file_path, "r") as f:
        try:
            return yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PatternParseError(f"Invalid YAML: {e}")


def _validate_patterns_structure(data: Any) -> dict[str, list[Any]]:
    """Validate the top level of a patterns file."""
    if data is None:
        return {}

    if not isinstance(data, dict):
        raise PatternParseError("YAML file must contain a dictionary")

    unknown = [key for key in data if key not in PATTERN_LIST_KEYS]
    if unknown:
        raise PatternParseError(
            f"Unknown key(s) {', '.join(map(str, unknown))}. Expected: {', '.join(PATTERN_LIST_KEYS)}"
        )

    for key, entries in data.items():
        if entries is not None and not isinstance(entries, list):
            raise PatternParseError(f"'{key}' must be a list")

    return {key: entries or [] for key, entries in data.items()}


def parse_patterns_file(file_path: Path) -> dict[str, list[Pattern]]:
    """
    Parse force_include / force_exclude lists from a YAML file.

    Args:
        file_path: Path to the YAML patterns file

    Returns:
        Dictionary with both ``force_include`` and ``force_exclude`` keys

    Raises:
        PatternParseError: If the YAML is invalid or an entry is malformed
        FileNotFoundError: If the file doesn't exist
    """
    data = _validate_patterns_structure(_load_yaml_file(file_path))

    result: dict[str, list[Pattern]] = {key: [] for key in PATTERN_LIST_KEYS}
    for key, entries in data.items():
        for position, entry in enumerate(entries, 1):
            try:
                result[key].append(parse_pattern(entry))
            except PatternParseError as e:
                raise PatternParseError(f"Error in '{key}' entry {position}: {e}") from e
    return result
