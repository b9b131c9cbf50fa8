"""Models for the selector profile stage."""

from pydantic import BaseModel, Field

from foldline.models.stylesheet import ParsedStylesheet, SelectorNode

# True: always keep, False: always remove, str: selector to look for on the page
Classification = bool | str


def disposition(classification: Classification) -> str:
    """Short label for a classification: keep, drop or test."""
    if classification is True:
        return "keep"
    if classification is False:
        return "drop"
    return "test"


class SelectorProfile(BaseModel):
    """Classification of every selector of one stylesheet."""

    selectors: set[str] = Field(
        default_factory=set, description="Distinct selector strings to test against the page"
    )
    classifications: dict[int, Classification] = Field(
        default_factory=dict, description="Arena index -> classification"
    )
    skipped_rules: int = Field(default=0, ge=0, description="Rules ignored (keyframes or malformed)")

    def record(self, node: SelectorNode, classification: Classification) -> None:
        """Record the classification of a node."""
        self.classifications[node.index] = classification
        if isinstance(classification, str):
            self.selectors.add(classification)

    def classification_for(self, node: SelectorNode | int) -> Classification | None:
        """Get the classification of a node, or None if it was never profiled."""
        index = node if isinstance(node, int) else node.index
        return self.classifications.get(index)

    def is_kept(self, node: SelectorNode | int, present: set[str]) -> bool | None:
        """Resolve a node once the page has been checked.

        Args:
            node: Arena node or index
            present: Testable selectors that matched a visible element

        Returns:
            Whether the selector belongs in the critical CSS, None if the
            node was never profiled
        """
        classification = self.classification_for(node)
        if classification is None or isinstance(classification, bool):
            return classification
        return classification in present

    @property
    def testable_count(self) -> int:
        """Number of distinct selectors to test."""
        return len(self.selectors)

    @property
    def force_kept(self) -> list[int]:
        """Arena indices that are always kept."""
        return [index for index, value in self.classifications.items() if value is True]

    @property
    def force_dropped(self) -> list[int]:
        """Arena indices that are always removed."""
        return [index for index, value in self.classifications.items() if value is False]


class ProfileResult(BaseModel):
    """A stylesheet together with its selector profile."""

    model_config = {"arbitrary_types_allowed": True}

    stylesheet: ParsedStylesheet = Field(description="Parsed stylesheet")
    profile: SelectorProfile = Field(description="Selector profile")
