"""Data models for force-include / force-exclude patterns."""

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

# JavaScript regexp flag letters mapped to python re flags.
# "g" and "u" have no effect on a single membership test.
_FLAG_MAP: dict[str, int] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "g": 0,
    "u": 0,
    "y": 0,
}


class LiteralPattern(BaseModel):
    """Matches a selector whose rendered text is exactly ``value``."""

    model_config = {"frozen": True}

    kind: Literal["literal"] = "literal"
    value: str = Field(description="Exact selector text to match")

    def matches(self, selector: str) -> bool:
        return self.value == selector

    def __str__(self) -> str:
        return self.value


class RegexpPattern(BaseModel):
    """Matches a selector when ``source`` is found anywhere in its rendered text.

    Flags use the JavaScript letters so pattern lists can be shared with
    browser-side tooling. The expression is compiled on every call; nothing
    is retained between matches.
    """

    model_config = {"frozen": True}

    kind: Literal["regexp"] = "regexp"
    source: str = Field(description="Regular expression source")
    flags: str = Field(default="", description="JavaScript style flag letters (i, m, s, g, u, y)")

    @field_validator("flags")
    @classmethod
    def _check_flags(cls, flags: str) -> str:
        unknown = [f for f in flags if f not in _FLAG_MAP]
        if unknown:
            raise ValueError(f"Invalid regexp flags '{flags}': unsupported {', '.join(unknown)}")
        if len(set(flags)) != len(flags):
            raise ValueError(f"Invalid regexp flags '{flags}': repeated flag")
        return flags

    @model_validator(mode="after")
    def _check_source(self) -> "RegexpPattern":
        try:
            re.compile(self.source, self.re_flags)
        except re.error as e:
            raise ValueError(f"Invalid regexp /{self.source}/{self.flags}: {e}") from e
        return self

    @property
    def re_flags(self) -> int:
        result = 0
        for flag in self.flags:
            result |= _FLAG_MAP[flag]
        return result

    @property
    def sticky(self) -> bool:
        return "y" in self.flags

    def matches(self, selector: str) -> bool:
        regexp = re.compile(self.source, self.re_flags)
        if self.sticky:
            return regexp.match(selector) is not None
        return regexp.search(selector) is not None

    def __str__(self) -> str:
        return f"/{self.source}/{self.flags}"


Pattern = Annotated[Union[LiteralPattern, RegexpPattern], Field(discriminator="kind")]


def matches_any(selector: str, patterns: list[Pattern]) -> bool:
    """Check if a rendered selector matches any entry of a pattern list."""
    return any(pattern.matches(selector) for pattern in patterns)
