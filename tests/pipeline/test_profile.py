"""Tests for the selector profile stage."""

import pytest

from foldline.models.stylesheet import CssRule
from foldline.pipeline.patterns import LiteralPattern, RegexpPattern
from foldline.pipeline.profile import build_selector_profile
from tests.conftest import fixture_critical, parse_css, parse_fixture


def _string_values(profile) -> set[str]:
    return {value for value in profile.classifications.values() if isinstance(value, str)}


class TestBuildSelectorProfile:
    """Tests for build_selector_profile."""

    def test_deduplicates_across_rules(self):
        stylesheet = parse_css("a:before{color:red}\na:after{color:red}\n")
        profile = build_selector_profile(stylesheet)

        assert profile.selectors == {"a"}
        assert len(profile.classifications) == 2

    def test_every_selector_recorded_once(self):
        stylesheet = parse_css(".a, .b:hover, ::selection { color: red; }")
        profile = build_selector_profile(stylesheet)

        rule = stylesheet.rules[0]
        assert [profile.classification_for(node) for node in rule.selectors] == [
            ".a",
            ".b:hover",
            False,
        ]
        assert profile.classification_for(rule.selector_list) is None

    def test_keyframes_ignored(self):
        stylesheet = parse_css(
            "@keyframes spin { 0% { transform: rotate(0deg); } 100% { transform: rotate(360deg); } }"
        )
        profile = build_selector_profile(stylesheet)

        assert profile.classifications == {}
        assert profile.selectors == set()
        assert profile.skipped_rules == 2

    def test_vendor_keyframes_ignored(self):
        stylesheet = parse_css("@-webkit-keyframes fade { 0% { opacity: 0; } 100% { opacity: 1; } }")
        profile = build_selector_profile(stylesheet)

        assert profile.classifications == {}

    def test_grid_area_kept_whole(self):
        stylesheet = parse_css(".x, .y { grid-area: header; }")
        profile = build_selector_profile(stylesheet)

        rule = stylesheet.rules[0]
        assert profile.selectors == {".x, .y"}
        assert profile.classifications == {rule.selector_list.index: ".x, .y"}
        for node in rule.selectors:
            assert profile.classification_for(node) is None

    def test_grid_area_ignores_patterns_and_pseudo(self):
        stylesheet = parse_css(".x:before { grid-area: a; color: red; }")
        exclude = [RegexpPattern(source=".*")]
        profile = build_selector_profile(stylesheet, force_exclude=exclude)

        assert profile.selectors == {".x:before"}

    def test_grid_template_not_special(self):
        stylesheet = parse_css(".x, .y { grid-template-areas: 'a b'; }")
        profile = build_selector_profile(stylesheet)

        assert profile.selectors == {".x", ".y"}

    def test_media_rules_profiled(self):
        stylesheet = parse_css("@media (max-width: 600px) { .header:after { content: none; } }")
        profile = build_selector_profile(stylesheet)

        assert profile.selectors == {".header"}

    def test_malformed_rule_skipped(self):
        stylesheet = parse_css(".a { color: red; }")
        stylesheet.rules.append(CssRule(properties=["color"], line=2))
        profile = build_selector_profile(stylesheet)

        assert profile.selectors == {".a"}
        assert profile.skipped_rules == 1

    @pytest.mark.parametrize("malformed", [".a, { color: red; }", "a$$b { color: red; }"])
    def test_unparsable_selector_list_skipped(self, malformed):
        stylesheet = parse_css(malformed + "\n.ok { color: red; }")
        profile = build_selector_profile(stylesheet)

        assert profile.selectors == {".ok"}
        assert profile.skipped_rules == 1

    def test_comment_inside_selector(self):
        stylesheet = parse_css(".a /* c */ .b { color: red; }")

        assert build_selector_profile(stylesheet).selectors == {".a .b"}

        profile = build_selector_profile(stylesheet, force_include=[LiteralPattern(value=".a .b")])
        assert profile.classification_for(stylesheet.rules[0].selectors[0]) is True

    def test_force_patterns(self):
        stylesheet = parse_css(".keep:hover, .drop, .test { color: red; }")
        profile = build_selector_profile(
            stylesheet,
            force_include=[LiteralPattern(value=".keep:hover")],
            force_exclude=[RegexpPattern(source="^\\.drop$")],
        )

        selectors = stylesheet.rules[0].selectors
        assert profile.classification_for(selectors[0]) is True
        assert profile.classification_for(selectors[1]) is False
        assert profile.classification_for(selectors[2]) == ".test"
        assert profile.force_kept == [selectors[0].index]
        assert profile.force_dropped == [selectors[1].index]

    def test_empty_stylesheet(self):
        profile = build_selector_profile(parse_css(""))

        assert profile.selectors == set()
        assert profile.classifications == {}


class TestFixtureProfile:
    """Profile of a realistic stylesheet."""

    @pytest.fixture
    def stylesheet(self):
        return parse_fixture(fixture_critical)

    def test_selectors(self, stylesheet):
        profile = build_selector_profile(stylesheet)

        assert profile.selectors == {
            "html",
            "body",
            ".header",
            ".nav a",
            ".nav a:hover",
            ".btn",
            "button",
            "input[type=number]",
            ".page, .sidebar",
            ".modal-open .overlay",
        }

    def test_counts(self, stylesheet):
        profile = build_selector_profile(stylesheet)

        assert len(profile.classifications) == 13
        assert len(profile.force_kept) == 1
        assert len(profile.force_dropped) == 1
        assert profile.skipped_rules == 4

    def test_string_set_matches_mapping(self, stylesheet):
        profile = build_selector_profile(stylesheet)

        assert profile.selectors == _string_values(profile)

    def test_is_kept(self, stylesheet):
        profile = build_selector_profile(stylesheet)
        by_text = {node.text: node for node in stylesheet.nodes if node.kind == "selector"}

        present = {".header", ".btn"}
        assert profile.is_kept(by_text[".btn:before"], present) is True
        assert profile.is_kept(by_text[".header"], present) is True
        assert profile.is_kept(by_text["button::-moz-focus-inner"], present) is False
        assert profile.is_kept(by_text["::selection"], present) is False
        assert profile.is_kept(by_text["::-moz-placeholder"], present) is True
        assert profile.is_kept(by_text["0%"], present) is None
