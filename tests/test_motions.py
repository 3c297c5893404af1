from __future__ import annotations

import pytest

from modal_engine.buffer import TOKEN_PAIRS, Buffer, Cursor


def at(buffer: Buffer, position: tuple[int, int]) -> Cursor:
    col, row = position
    return Cursor(row, col)


def test_word_motion_symmetry() -> None:
    buffer = Buffer.from_text("foo.bar baz")

    first = buffer.find_char_after_separator(Cursor(0, 0))
    second = buffer.find_char_after_separator(at(buffer, first))
    assert first == (4, 0)
    assert second == (8, 0)

    back = buffer.find_char_before_separator(at(buffer, second))
    home = buffer.find_char_before_separator(at(buffer, back))
    assert back == (4, 0)
    assert home == (0, 0)


def test_next_word_crossing_line_lands_on_first_non_blank() -> None:
    buffer = Buffer.from_text("ab\n  cd")

    assert buffer.find_char_after_separator(Cursor(0, 0)) == (2, 1)


def test_next_word_at_document_end_stays_put() -> None:
    buffer = Buffer.from_text("ab")

    assert buffer.find_char_after_separator(Cursor(0, 2)) == (2, 0)


def test_previous_word_at_document_start_stays_put() -> None:
    buffer = Buffer.from_text("ab")

    assert buffer.find_char_before_separator(Cursor(0, 0)) == (0, 0)


def test_whitespace_motions_treat_punctuation_as_word() -> None:
    buffer = Buffer.from_text("foo.bar baz")

    assert buffer.find_char_after_whitespace(Cursor(0, 0)) == (8, 0)
    assert buffer.find_char_before_whitespace(Cursor(0, 8)) == (0, 0)


def test_whitespace_motion_without_whitespace_reaches_end() -> None:
    buffer = Buffer.from_text("abc")

    assert buffer.find_char_after_whitespace(Cursor(0, 0)) == (3, 0)


def test_bracket_matching_forward_and_back() -> None:
    buffer = Buffer.from_text("(a(b)c)")

    assert buffer.find_oposing_token(Cursor(0, 0)) == (6, 0)
    assert buffer.find_oposing_token(Cursor(0, 6)) == (0, 0)
    assert buffer.find_oposing_token(Cursor(0, 2)) == (4, 0)


def test_bracket_matching_unbalanced_returns_cursor() -> None:
    buffer = Buffer.from_text("(a(b)c")

    assert buffer.find_oposing_token(Cursor(0, 0)) == (0, 0)


def test_bracket_matching_off_token_returns_cursor() -> None:
    buffer = Buffer.from_text("abc")

    assert buffer.find_oposing_token(Cursor(0, 1)) == (1, 0)


def test_bracket_matching_across_lines() -> None:
    buffer = Buffer.from_text("{\n  [1, <2>]\n}")

    assert buffer.find_oposing_token(Cursor(0, 0)) == (0, 2)
    assert buffer.find_oposing_token(Cursor(1, 2)) == (9, 1)
    assert buffer.find_oposing_token(Cursor(1, 6)) == (8, 1)


@pytest.mark.parametrize(("opening", "closing"), TOKEN_PAIRS)
def test_every_token_pair_matches(opening: str, closing: str) -> None:
    buffer = Buffer.from_text(f"{opening}x{closing}")

    assert buffer.find_oposing_token(Cursor(0, 0)) == (2, 0)


def test_empty_line_search() -> None:
    buffer = Buffer.from_text("a\n\nb\n")

    assert buffer.find_empty_line_above(Cursor(2, 0)) == 1
    assert buffer.find_empty_line_below(Cursor(0, 0)) == 1


def test_empty_line_search_fallbacks() -> None:
    buffer = Buffer.from_text("a\nb\nc")

    assert buffer.find_empty_line_above(Cursor(2, 0)) == 0
    assert buffer.find_empty_line_below(Cursor(0, 0)) == 2


def test_empty_line_search_with_crlf() -> None:
    buffer = Buffer.from_text("a\r\n\r\nb\r\n\r\nc")

    assert buffer.find_empty_line_above(Cursor(2, 0)) == 1
    assert buffer.find_empty_line_below(Cursor(2, 0)) == 3
