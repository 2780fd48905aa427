"""Tests for block parsing: headings, paragraphs and separators."""

import pytest

from colibri import (
    Emphasis,
    HardBreak,
    Heading,
    HeadingLevel,
    Paragraph,
    ParseConfig,
    Parser,
    Position,
    Range,
    SoftBreak,
    Text,
    parse,
    render_debug,
)


class TestHeadingLevels:
    @pytest.mark.parametrize(
        ("source", "level"),
        [
            ("# a", HeadingLevel.H1),
            ("## a", HeadingLevel.H2),
            ("### a", HeadingLevel.H3),
            ("#### a", HeadingLevel.H4),
            ("##### a", HeadingLevel.H5),
            ("###### a", HeadingLevel.H6),
        ],
    )
    def test_levels(self, source: str, level: HeadingLevel) -> None:
        (heading,) = parse(source).children
        assert isinstance(heading, Heading)
        assert heading.heading_level is level
        assert heading.heading_level.depth == len(source) - 2

    def test_seven_markers_is_a_paragraph(self) -> None:
        (block,) = parse("####### a").children
        assert isinstance(block, Paragraph)

    def test_marker_needs_following_space(self) -> None:
        (block,) = parse("#hashtag").children
        assert isinstance(block, Paragraph)

    def test_up_to_three_spaces_indent(self) -> None:
        (block,) = parse("   # a").children
        assert isinstance(block, Heading)
        assert block.raw_value == "   # a"

    def test_four_spaces_is_a_paragraph(self) -> None:
        (block,) = parse("    # a").children
        assert isinstance(block, Paragraph)


class TestHeadingContent:
    def test_emphasis_in_heading(self) -> None:
        parser = Parser("# *headering*")
        end, heading = parser._try_parse_heading(0)
        assert end == 13
        assert render_debug(heading) == "<header><emphasis><text>headering</text></emphasis></header>"
        assert parser.cursor.current == Position(1, 14, 13)

    def test_range_excludes_line_ending(self) -> None:
        doc = parse("# Title\nbody")
        heading = doc.children[0]
        assert heading.range == Range(Position(1, 1, 0), Position(1, 8, 7))
        assert heading.raw_value == "# Title"

    def test_text_range_starts_after_marker(self) -> None:
        (heading,) = parse("## Title").children
        (text,) = heading.children
        assert text.range == Range(Position(1, 4, 3), Position(1, 9, 8))

    def test_closing_sequence_stripped_from_children(self) -> None:
        (heading,) = parse("## Title ##").children
        assert [(type(n), n.value) for n in heading.children] == [(Text, "Title")]
        assert heading.raw_value == "## Title ##"
        assert heading.range.end == Position(1, 12, 11)

    def test_closing_sequence_needs_space(self) -> None:
        (heading,) = parse("# Title#").children
        assert [n.value for n in heading.children] == ["Title", "#"]

    def test_heading_of_only_markers(self) -> None:
        (heading,) = parse("# ###").children
        assert isinstance(heading, Heading)
        assert heading.children == ()
        assert heading.raw_value == "# ###"


class TestParagraphs:
    def test_single_line(self) -> None:
        (para,) = parse("this is text*this is Emphasis*").children
        assert render_debug(para) == (
            "<paragraph><text>this is text</text>"
            "<emphasis><text>this is Emphasis</text></emphasis></paragraph>"
        )
        assert para.range == Range(Position(1, 1, 0), Position(1, 31, 30))

    def test_multiline(self) -> None:
        (para,) = parse("this is text\nmultiline").children
        assert render_debug(para) == (
            "<paragraph><text>this is text</text><softbreak /><text>multiline</text></paragraph>"
        )
        assert para.range.end == Position(2, 10, 22)
        assert para.raw_value == "this is text\nmultiline"

    def test_heading_line_ends_paragraph(self) -> None:
        parser = Parser("this is text\nmultiline\n# headering")
        end, para = parser._try_parse_paragraph(0)
        assert end == 22
        assert parser._source[end:] == "\n# headering"
        assert render_debug(para) == (
            "<paragraph><text>this is text</text><softbreak /><text>multiline</text></paragraph>"
        )
        assert parser.cursor.current == Position(2, 10, 22)
        assert parser.cursor.depth == 0

    def test_hash_line_that_is_not_a_heading_continues(self) -> None:
        (para,) = parse("text\n#tag").children
        assert isinstance(para, Paragraph)
        assert para.raw_value == "text\n#tag"

    def test_hard_break_separates_paragraphs(self) -> None:
        doc = parse("one\n\ntwo")
        assert [type(b) for b in doc.children] == [Paragraph, Paragraph]
        assert doc.children[0].range == Range(Position(1, 1, 0), Position(1, 4, 3))
        assert doc.children[1].range == Range(Position(3, 1, 5), Position(3, 4, 8))

    def test_crlf_soft_break(self) -> None:
        (para,) = parse("a\r\nb").children
        brk = para.children[1]
        assert isinstance(brk, SoftBreak)
        assert brk.value == "\n"
        assert brk.raw_value == "\r\n"
        assert para.children[2].range.begin == Position(2, 1, 3)

    def test_tab_counts_as_a_column(self) -> None:
        (para,) = parse("a\tb").children
        assert para.children[0].value == "a\tb"
        assert para.range.end == Position(1, 4, 3)

    def test_non_ascii_text(self) -> None:
        (para,) = parse("héllo wörld").children
        assert para.children[0].value == "héllo wörld"
        assert para.range.end == Position(1, 12, 11)


class TestHardBreaks:
    def test_dropped_by_default(self) -> None:
        doc = parse("a\n\n\nb")
        assert not any(isinstance(b, HardBreak) for b in doc.children)

    def test_emitted_when_configured(self) -> None:
        doc = parse("a\n\nb", config=ParseConfig(emit_hard_breaks=True))
        assert [type(b) for b in doc.children] == [Paragraph, HardBreak, Paragraph]
        brk = doc.children[1]
        assert brk.range == Range(Position(1, 2, 1), Position(3, 1, 3))
        assert brk.value == "\n\n"

    def test_crlf_hard_break_value(self) -> None:
        doc = parse("a\r\n\r\nb", config=ParseConfig(emit_hard_breaks=True))
        brk = doc.children[1]
        assert brk.value == "\n\n"
        assert brk.raw_value == "\r\n\r\n"

    def test_limit_splits_long_runs(self) -> None:
        config = ParseConfig(emit_hard_breaks=True, hard_break_limit=2)
        doc = parse("a\n\n\n\nb", config=config)
        assert [type(b) for b in doc.children] == [Paragraph, HardBreak, HardBreak, Paragraph]

    def test_leftover_single_ending_is_skipped(self) -> None:
        config = ParseConfig(emit_hard_breaks=True, hard_break_limit=2)
        doc = parse("a\n\n\nb", config=config)
        assert [type(b) for b in doc.children] == [Paragraph, HardBreak, Paragraph]


class TestDocument:
    def test_full_document(self) -> None:
        source = (
            "# *headering*\n\nthis is paragraph\n*this is emphasis*\n\nthis is other paragraph"
        )
        doc = parse(source)
        assert doc.range == Range(Position(1, 1, 0), Position(6, 24, 76))
        assert render_debug(doc) == (
            "<document><header><emphasis><text>headering</text></emphasis></header>"
            "<paragraph><text>this is paragraph</text><softbreak />"
            "<emphasis><text>this is emphasis</text></emphasis></paragraph>"
            "<paragraph><text>this is other paragraph</text></paragraph></document>"
        )

    def test_paragraph_then_heading(self) -> None:
        doc = parse("this is text\nmultiline\n# headering")
        para, heading = doc.children
        assert isinstance(para, Paragraph)
        assert isinstance(heading, Heading)
        assert heading.range == Range(Position(3, 1, 23), Position(3, 12, 34))

    def test_trailing_breaks_are_consumed(self) -> None:
        doc = parse("a\n\n")
        assert len(doc.children) == 1
        assert doc.range.end == Position(3, 1, 3)

    def test_leading_break_is_skipped(self) -> None:
        doc = parse("\n*x*")
        (para,) = doc.children
        assert isinstance(para.children[0], Emphasis)
        assert para.range.begin == Position(2, 1, 1)

    def test_heading_paragraphs_scenario(self) -> None:
        doc = parse("# heading\n\nparagraph one\n*emphasis*\n\nparagraph two")
        assert [type(b) for b in doc.children] == [Heading, Paragraph, Paragraph]
        first = doc.children[1]
        assert [type(n) for n in first.children] == [Text, SoftBreak, Emphasis]
        assert [type(n) for n in doc.children[2].children] == [Text]
