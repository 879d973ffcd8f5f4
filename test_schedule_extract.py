from __future__ import annotations

from schedule_extract import bucket_key, format_lines, group_lines, ordered_lines, page_tokens
from schedule_models import Token


class FakePage:
    """Stands in for a pdfplumber page: just a height and extract_words()."""

    height = 800.0

    def __init__(self, words):
        self._words = words

    def extract_words(self, **kwargs):
        return self._words


def _word(text, x0, top, x1=None, bottom=None):
    return {
        "text": text,
        "x0": x0,
        "x1": x1 if x1 is not None else x0 + 10.0,
        "top": top,
        "bottom": bottom if bottom is not None else top + 8.0,
    }


def test_page_tokens_flip_to_baseline_y_up():
    page = FakePage([_word("JOHN", 20.0, 92.0), _word("  ", 40.0, 92.0), _word("FG", 100.0, 92.0, x1=112.0)])
    tokens = page_tokens(page)
    assert [t.text for t in tokens] == ["JOHN", "FG"]
    assert tokens[0].y == 700.0
    assert tokens[0].height == 8.0
    assert tokens[1].width == 12.0


def test_page_tokens_empty_page():
    assert page_tokens(FakePage([])) == []


def test_bucket_key_uses_two_unit_bins():
    assert bucket_key(100.4) == 100
    assert bucket_key(100.9) == 100
    assert bucket_key(101.2) == 102
    assert bucket_key(7.0, bucket=5.0) == 5.0


def test_group_lines_buckets_nearby_tokens():
    tokens = [Token("B", 50.0, 100.9), Token("A", 10.0, 100.4), Token("C", 10.0, 101.2)]
    groups = group_lines(tokens)
    assert list(groups) == [100, 102]
    assert [t.text for t in groups[100]] == ["B", "A"]


def test_ordered_lines_reading_order():
    tokens = [
        Token("low", 10.0, 100.0),
        Token("right", 60.0, 300.0),
        Token("left", 10.0, 300.0),
        Token("mid", 10.0, 200.0),
    ]
    lines = ordered_lines(group_lines(tokens))
    assert [ln.full_text for ln in lines] == ["left right", "mid", "low"]
    assert [ln.y for ln in lines] == [300, 200, 100]

    down = ordered_lines(group_lines(tokens), y_axis_up=False)
    assert [ln.full_text for ln in down] == ["low", "mid", "left right"]


def test_format_lines():
    lines = ordered_lines(group_lines([Token("SHIFT", 10.0, 50.0), Token("B", 40.0, 50.0)]))
    assert format_lines(lines) == "      50.0: 'SHIFT B'"


def test_bucket_key_rounds_halves_up():
    assert bucket_key(101.0) == 102
    assert bucket_key(105.0) == 106
    assert bucket_key(99.0) == 100


def test_whole_point_baselines_share_a_line():
    groups = group_lines([Token("JOHN", 20.0, 101.0), Token("FG", 100.0, 102.5)])
    assert list(groups) == [102]
    assert [t.text for t in groups[102]] == ["JOHN", "FG"]
