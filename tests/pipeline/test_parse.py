"""Tests for the parse stage."""

from pathlib import Path

import pytest

from foldline.pipeline.parse import parse_file, parse_stylesheet, read_stylesheet, render
from tests.conftest import fixture_critical, parse_css, selector_texts


class TestRender:
    """Tests for selector text rendering."""

    @pytest.mark.parametrize(
        "text,expected",
        [
            (".a", ".a"),
            ("  .a  ", ".a"),
            (".x,\n  .y", ".x, .y"),
            (".nav   a", ".nav a"),
            ("\t.a >\n.b", ".a > .b"),
        ],
    )
    def test_render(self, text, expected):
        assert render(text) == expected


class TestParseStylesheet:
    """Tests for building the selector arena."""

    def test_rule_selectors(self):
        stylesheet = parse_css(".a, .b > p { color: red; }\n#main { margin: 0 }")

        assert selector_texts(stylesheet) == [[".a", ".b > p"], ["#main"]]

    def test_selector_list_text(self):
        stylesheet = parse_css(".x,\n.y { grid-area: header; }")

        assert stylesheet.rules[0].selector_list.text == ".x, .y"
        assert stylesheet.rules[0].selector_list.kind == "selector_list"

    def test_accepts_str_and_bytes(self):
        assert selector_texts(parse_stylesheet("a { }")) == selector_texts(parse_stylesheet(b"a { }"))

    def test_arena_indices(self):
        stylesheet = parse_css(".a, .b { color: red; }\n.c { color: blue; }")

        assert [node.index for node in stylesheet.nodes] == list(range(len(stylesheet.nodes)))
        for node in stylesheet.nodes:
            assert stylesheet.node(node.index) is node
        assert stylesheet.selector_count == 3

    def test_properties(self):
        stylesheet = parse_css(".a { color: red; grid-area: main; margin: 0 }")

        assert stylesheet.rules[0].properties == ["color", "grid-area", "margin"]
        assert stylesheet.rules[0].declares("grid-area")

    def test_lines(self):
        stylesheet = parse_css("\n\n.a {\n}\n.b { }")

        assert [rule.line for rule in stylesheet.rules] == [3, 5]
        assert stylesheet.rules[1].selectors[0].line == 5

    def test_top_level_has_no_at_rule(self):
        stylesheet = parse_css(".a { }")

        assert stylesheet.rules[0].at_rule is None

    def test_media_at_rule(self):
        stylesheet = parse_css("@media screen { .a { color: red; } }")

        assert stylesheet.rules[0].at_rule == "media"
        assert selector_texts(stylesheet) == [[".a"]]

    def test_supports_at_rule(self):
        stylesheet = parse_css("@supports (display: grid) { .a { display: grid; } }")

        assert stylesheet.rules[0].at_rule == "supports"

    def test_keyframes_blocks_are_rules(self):
        stylesheet = parse_css("@keyframes spin { 0% { opacity: 0; } 100% { opacity: 1; } }")

        assert [rule.at_rule for rule in stylesheet.rules] == ["keyframes", "keyframes"]
        assert selector_texts(stylesheet) == [["0%"], ["100%"]]
        assert stylesheet.rules[0].properties == ["opacity"]

    def test_vendor_keyframes(self):
        stylesheet = parse_css("@-webkit-keyframes fade { 0% { opacity: 0; } }")

        assert stylesheet.rules[0].at_rule == "-webkit-keyframes"

    def test_rule_after_keyframes_has_no_at_rule(self):
        stylesheet = parse_css("@keyframes spin { 0% { opacity: 0; } }\n.a { color: red; }")

        assert stylesheet.rules[-1].at_rule is None
        assert selector_texts(stylesheet)[-1] == [".a"]

    def test_comments_ignored(self):
        stylesheet = parse_css("/* header */\n.a { color: red; }")

        assert selector_texts(stylesheet) == [[".a"]]

    def test_comments_inside_selector_dropped(self):
        stylesheet = parse_css(".a /* c */ .b { color: red; }")

        assert selector_texts(stylesheet) == [[".a .b"]]
        assert stylesheet.rules[0].selector_list.text == ".a .b"

    def test_comment_between_selectors_dropped(self):
        stylesheet = parse_css(".x, /* c */ .y { grid-area: main; }")

        assert stylesheet.rules[0].selector_list.text == ".x, .y"
        assert selector_texts(stylesheet) == [[".x", ".y"]]

    @pytest.mark.parametrize(
        "css",
        [
            ".a, { color: red; }",
            "a$$b { color: red; }",
        ],
    )
    def test_malformed_selector_list(self, css):
        stylesheet = parse_css(css)

        assert stylesheet.has_errors
        assert stylesheet.rules[0].selector_list is None
        assert stylesheet.rules[0].selectors == []

    def test_no_errors(self):
        assert not parse_css(".a { color: red; }").has_errors

    def test_unterminated_block_reports_errors(self):
        stylesheet = parse_css(".a { color: red;")

        assert stylesheet.has_errors


class TestParseFile:
    """Tests for reading stylesheets from disk."""

    def test_parse_fixture(self):
        stylesheet = parse_file(fixture_critical)

        assert stylesheet.path == fixture_critical
        assert not stylesheet.has_errors
        assert len(stylesheet.rules) == 15

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ValueError):
            read_stylesheet(tmp_path / "missing.css")
