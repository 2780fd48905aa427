"""Tests for character and string-level rules.

Rules take a source index and return the index after the match. The
parser's cursor is checked after every call: a match advances it by
exactly what was consumed, a failure leaves it untouched.
"""

from colibri import ParseConfig, Parser, Position


def _parser(source: str, **config: object) -> Parser:
    return Parser(source, config=ParseConfig(**config))  # type: ignore[arg-type]


class TestCharacterRules:
    def test_match_char(self) -> None:
        parser = _parser("abc")
        assert parser._match_char(0, "a") == 1
        assert parser.cursor.current == Position(1, 2, 1)

    def test_match_char_failure_leaves_cursor(self) -> None:
        parser = _parser("abc")
        assert parser._match_char(0, "b") is None
        assert parser.cursor.current == Position.origin()

    def test_match_char_at_end(self) -> None:
        parser = _parser("")
        assert parser._match_char(0, "a") is None

    def test_tab_advances_column(self) -> None:
        parser = _parser("\tx")
        assert parser._match_tab(0) == 1
        assert parser.cursor.current == Position(1, 2, 1)

    def test_printable_excludes_space_and_controls(self) -> None:
        parser = _parser(" \x01é")
        assert parser._match_printable(0) is None
        assert parser._match_printable(1) is None
        assert parser._match_printable(2) == 3

    def test_non_break_accepts_space_and_tab(self) -> None:
        parser = _parser(" \t\n")
        assert parser._match_non_break(0) == 1
        assert parser._match_non_break(1) == 2
        assert parser._match_non_break(2) is None

    def test_non_break_covers_printable_but_not_controls(self) -> None:
        parser = _parser("é*\x00\r")
        assert parser._match_non_break(0) == 1
        assert parser._match_non_break(1) == 2
        assert parser._match_non_break(2) is None
        assert parser._match_non_break(3) is None
        assert parser.cursor.current == Position(1, 3, 2)

    def test_special_is_ascii_punctuation(self) -> None:
        parser = _parser("*a")
        assert parser._match_special(0) == 1
        assert parser._match_special(1) is None

    def test_non_special_rejects_punctuation(self) -> None:
        parser = _parser("#a")
        assert parser._match_non_special(0) is None
        assert parser.cursor.current == Position.origin()
        assert parser._match_non_special(1) == 2

    def test_unbroken_char_accepts_controls(self) -> None:
        parser = _parser("\x00\n")
        assert parser._match_unbroken_char(0) == 1
        assert parser._match_unbroken_char(1) is None


class TestLineEndings:
    def test_lf(self) -> None:
        parser = _parser("a\nb")
        assert parser._match_line_ending(1) == 2
        assert parser.cursor.current == Position(2, 1, 1)

    def test_crlf_is_one_ending(self) -> None:
        parser = _parser("\r\nb")
        assert parser._match_line_ending(0) == 2
        assert parser.cursor.current == Position(2, 1, 2)

    def test_lone_cr_is_not_a_line_ending(self) -> None:
        parser = _parser("\rb")
        assert parser._match_line_ending(0) is None
        assert parser.cursor.current == Position.origin()


class TestStringRules:
    def test_non_break_run_stops_at_line_ending(self) -> None:
        parser = _parser("abc def\nghi")
        assert parser._match_non_break_run(0) == 7
        assert parser.cursor.current == Position(1, 8, 7)

    def test_non_special_run_stops_at_punctuation(self) -> None:
        parser = _parser("this is text*emphasis*")
        assert parser._match_non_special_run(0) == 12
        assert parser.cursor.current == Position(1, 13, 12)

    def test_spaces_bounded(self) -> None:
        parser = _parser("     x")
        assert parser._match_spaces(0, 0, 3) == 3
        assert parser.cursor.current == Position(1, 4, 3)

    def test_spaces_below_minimum_rolls_back(self) -> None:
        parser = _parser(" x")
        assert parser._match_spaces(0, 2, 4) is None
        assert parser.cursor.current == Position.origin()
        assert parser.cursor.depth == 0

    def test_hard_break_needs_two_endings(self) -> None:
        parser = _parser("\nx")
        assert parser._match_hard_break(0) is None
        assert parser.cursor.current == Position.origin()

    def test_hard_break_folds_run(self) -> None:
        parser = _parser("\n\r\n\nx")
        assert parser._match_hard_break(0) == 4
        assert parser.cursor.current == Position(4, 1, 4)

    def test_hard_break_respects_limit(self) -> None:
        parser = _parser("\n\n\n\n\nx", hard_break_limit=2)
        assert parser._match_hard_break(0) == 2
        assert parser._match_hard_break(2) == 4
        assert parser._match_hard_break(4) is None

    def test_break_or_end_at_end_consumes_nothing(self) -> None:
        parser = _parser("ab")
        assert parser._match_break_or_end(2) == 2
        assert parser.cursor.current == Position.origin()

    def test_bounded_hides_rest_of_input(self) -> None:
        parser = _parser("abcdef")
        with parser._bounded(3):
            assert parser._match_non_break_run(0) == 3
        assert parser._match_non_break_run(3) == 6


class TestPeek:
    def test_peek_restores_cursor(self) -> None:
        parser = _parser("ab\ncd")
        assert parser._peek(parser._match_non_break_run, 0)
        assert parser.cursor.current == Position.origin()

    def test_peek_reports_failure(self) -> None:
        parser = _parser("ab")
        assert not parser._peek(parser._match_line_ending, 0)
