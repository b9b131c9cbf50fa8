from pathlib import Path

import pytest

from foldline.config import PipelineSettings, get_settings, set_settings
from foldline.models.stylesheet import ParsedStylesheet
from foldline.pipeline.parse import parse_stylesheet

fixtures_path = Path(__file__).parent / "fixtures"
css_fixtures = fixtures_path / "css"
fixture_critical = css_fixtures / "critical.css"
fixture_patterns = fixtures_path / "patterns.yml"


def load_fixture(path: Path) -> bytes:
    """Load a fixture file as bytes."""
    with open(path, "rb") as f:
        return f.read()


def parse_fixture(path: Path) -> ParsedStylesheet:
    """Parse a stylesheet fixture."""
    return parse_stylesheet(load_fixture(path), path)


def parse_css(css: str) -> ParsedStylesheet:
    """Parse stylesheet text."""
    return parse_stylesheet(css)


def selector_texts(stylesheet: ParsedStylesheet) -> list[list[str]]:
    """Selector texts of every rule, in document order."""
    return [[node.text for node in rule.selectors] for rule in stylesheet.rules]


@pytest.fixture(autouse=True)
def default_settings():
    """Run every test against fresh default settings."""
    original_settings = get_settings()
    set_settings(PipelineSettings())

    yield

    set_settings(original_settings)
