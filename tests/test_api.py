"""Tests for the high-level Colibri API."""

import pytest


class TestParseFunction:
    """Tests for the parse() function."""

    def test_parse_heading(self) -> None:
        from colibri import Heading, HeadingLevel, parse

        doc = parse("# Hello World")
        assert len(doc.children) == 1
        assert isinstance(doc.children[0], Heading)
        assert doc.children[0].heading_level is HeadingLevel.H1

    def test_parse_paragraph(self) -> None:
        from colibri import Paragraph, parse

        doc = parse("Hello World")
        assert len(doc.children) == 1
        assert isinstance(doc.children[0], Paragraph)

    def test_empty_source(self) -> None:
        from colibri import Range, parse

        doc = parse("")
        assert doc.children == ()
        assert doc.range == Range.origin()
        assert doc.raw_value == ""

    def test_document_fields(self) -> None:
        from colibri import HeadingLevel, NodeKind, parse

        doc = parse("text")
        assert doc.kind is NodeKind.DOCUMENT
        assert doc.value == ""
        assert doc.raw_value == "text"
        assert doc.heading_level is HeadingLevel.NIL

    def test_heading_kind_tag(self) -> None:
        from colibri import NodeKind, parse

        assert parse("# x").children[0].kind is NodeKind.HEADERS


class TestSeedDocument:
    def test_seed_is_finalized(self) -> None:
        from colibri import Document, Range, parse

        seed = Document(range=Range.origin())
        doc = parse("# a", seed)
        assert isinstance(doc, Document)
        assert len(doc.children) == 1
        assert seed.children == ()

    def test_seed_with_children_rejected(self) -> None:
        from colibri import Document, Range, parse

        child = parse("x").children[0]
        seed = Document(range=Range.origin(), children=(child,))
        with pytest.raises(ValueError, match="empty"):
            parse("y", seed)


class TestParserClass:
    def test_parser_is_reusable_for_same_source(self) -> None:
        from colibri import Parser

        parser = Parser("*a*\n\nb")
        assert parser.parse() == parser.parse()
        assert parser.cursor.depth == 0

    def test_parser_reads_context_config(self) -> None:
        from colibri import HardBreak, ParseConfig, Parser, parse_config_context

        with parse_config_context(ParseConfig(emit_hard_breaks=True)):
            parser = Parser("a\n\nb")
        doc = parser.parse()
        assert isinstance(doc.children[1], HardBreak)


class TestRenderDebug:
    def test_render_document(self) -> None:
        from colibri import parse, render_debug

        assert render_debug(parse("# *a*\nb")) == (
            "<document><header><emphasis><text>a</text></emphasis></header>"
            "<paragraph><text>b</text></paragraph></document>"
        )

    def test_render_is_idempotent(self) -> None:
        from colibri import parse, render_debug

        doc = parse("a\nb *c*")
        assert render_debug(doc) == render_debug(doc)


class TestPublicExports:
    def test_all_names_importable(self) -> None:
        import colibri

        for name in colibri.__all__:
            assert hasattr(colibri, name), name

    def test_version(self) -> None:
        import colibri

        assert colibri.__version__ == "0.1.0"
