"""Normalization of CSS keywords such as at-rule names."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Keyword:
    """A keyword split into its vendor prefix and base name."""

    name: str
    vendor: str
    basename: str


def keyword(name: str) -> Keyword:
    """Split a keyword into vendor prefix and basename.

    Case is folded and a leading '@' is dropped, so '@-WebKit-Keyframes'
    gives vendor '-webkit-' and basename 'keyframes'. Custom identifiers
    starting with '--' have no vendor.
    """
    name = name.lstrip("@").lower()
    vendor = ""
    if name.startswith("-") and not name.startswith("--"):
        dash = name.find("-", 2)
        if dash != -1:
            vendor = name[: dash + 1]
    return Keyword(name=name, vendor=vendor, basename=name[len(vendor) :])


def is_keyframes(at_rule: str | None) -> bool:
    """Check if an at-rule name is any flavour of @keyframes."""
    return at_rule is not None and keyword(at_rule).basename == "keyframes"
