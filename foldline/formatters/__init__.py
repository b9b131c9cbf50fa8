"""Output formatters for selector profiles."""

from foldline.formatters.json import format_as_json, profile_to_dict

__all__ = ["format_as_json", "profile_to_dict"]
