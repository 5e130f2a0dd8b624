"""
Unit tests for the share-text parser (no HTTP layer).
"""
import pytest

from app.core.errors import GarbledHeaderError, MissingHeaderError, ShareTextParseError
from app.services.parsing import parse_share_text

ROWS = ["⬛🟨⬛⬛⬛", "⬛⬛🟩🟨⬛", "🟩🟩🟩⬛🟩", "🟩🟩🟩🟩🟩"]


class TestHeader:
    def test_grouped_puzzle_number_and_four_rows(self):
        text = "Wordle 1,234 4/6\n\n" + "\n".join(ROWS)
        parsed = parse_share_text(text)
        assert parsed.puzzle_number == 1234
        assert parsed.score == 4
        assert parsed.grid == "\n".join(ROWS)
        assert parsed.rows == ROWS

    def test_ungrouped_puzzle_number(self):
        assert parse_share_text("Wordle 1592 5/6").puzzle_number == 1592

    def test_x_maps_to_seven(self):
        parsed = parse_share_text("Wordle 999 X/6\n\n" + "\n".join(ROWS))
        assert parsed.score == 7

    def test_lowercase_x_and_word(self):
        parsed = parse_share_text("wordle 999 x/6")
        assert parsed.score == 7
        assert parsed.puzzle_number == 999

    def test_hard_mode_marker_ignored(self):
        parsed = parse_share_text("Wordle 1,592 3/6*\n" + ROWS[-1])
        assert parsed.score == 3
        assert parsed.grid == ROWS[-1]

    def test_header_after_leading_chatter(self):
        text = "morning all!\nWordle 1,000 2/6\n🟨🟨⬛⬛⬛\n🟩🟩🟩🟩🟩"
        parsed = parse_share_text(text)
        assert parsed.puzzle_number == 1000
        assert parsed.grid == "🟨🟨⬛⬛⬛\n🟩🟩🟩🟩🟩"

    def test_header_may_sit_inside_a_longer_word(self):
        # No word boundary is required before "Wordle"
        parsed = parse_share_text("NotWordle 12 3/6\n🟩🟩🟩🟩🟩")
        assert parsed.puzzle_number == 12
        assert parsed.score == 3

    def test_windows_line_endings(self):
        parsed = parse_share_text("Wordle 1,234 2/6\r\n\r\n🟨🟨⬛⬛⬛\r\n🟩🟩🟩🟩🟩\r\n")
        assert parsed.grid == "🟨🟨⬛⬛⬛\n🟩🟩🟩🟩🟩"


class TestGrid:
    def test_variation_selectors_stripped(self):
        parsed = parse_share_text("Wordle 1 1/6\n⬛\ufe0f⬜\ufe0f🟩🟩🟩")
        assert parsed.grid == "⬛⬜🟩🟩🟩"
        assert "\ufe0f" not in parsed.grid

    def test_white_squares_accepted(self):
        parsed = parse_share_text("Wordle 1 2/6\n⬜⬜🟨⬜⬜\n🟩🟩🟩🟩🟩")
        assert parsed.rows == ["⬜⬜🟨⬜⬜", "🟩🟩🟩🟩🟩"]

    def test_blank_line_inside_grid_is_skipped(self):
        # Blank lines never end collection, even between grid rows
        text = "Wordle 1,234 3/6\n\n⬛🟨⬛⬛⬛\n\n\n🟩🟩🟩⬛🟩\n🟩🟩🟩🟩🟩"
        parsed = parse_share_text(text)
        assert parsed.rows == ["⬛🟨⬛⬛⬛", "🟩🟩🟩⬛🟩", "🟩🟩🟩🟩🟩"]

    def test_non_grid_line_stops_collection(self):
        text = "Wordle 1,234 3/6\n⬛🟨⬛⬛⬛\nso close!\n🟩🟩🟩🟩🟩"
        assert parse_share_text(text).grid == "⬛🟨⬛⬛⬛"

    def test_header_only_gives_empty_grid(self):
        parsed = parse_share_text("Wordle 1,234 6/6")
        assert parsed.grid == ""
        assert parsed.rows == []

    def test_mixed_row_is_not_grid(self):
        parsed = parse_share_text("Wordle 1,234 6/6\n🟩🟩x🟩🟩")
        assert parsed.grid == ""


class TestRejects:
    @pytest.mark.parametrize("text", ["", "   \n\t", "hello there", "⬛🟨⬛⬛⬛\n🟩🟩🟩🟩🟩"])
    def test_no_header_is_missing(self, text):
        with pytest.raises(MissingHeaderError) as exc_info:
            parse_share_text(text)
        assert exc_info.value.code == "MISSING_HEADER"

    @pytest.mark.parametrize("text", ["Wordle 1234 9/6", "Wordle 1234", "Wordle abc 3/6", "Wordle 1234 3/5"])
    def test_header_like_line_is_garbled(self, text):
        with pytest.raises(GarbledHeaderError) as exc_info:
            parse_share_text(text + "\n🟩🟩🟩🟩🟩")
        assert exc_info.value.code == "GARBLED_HEADER"

    def test_commas_only_number_is_garbled(self):
        with pytest.raises(GarbledHeaderError):
            parse_share_text("Wordle ,,, 3/6")

    def test_both_failures_share_a_base_class(self):
        assert issubclass(MissingHeaderError, ShareTextParseError)
        assert issubclass(GarbledHeaderError, ShareTextParseError)
