from pathlib import Path

from lqip.utils import hard_wrap, json_output_path, to_hex, truncate_ratio


def test_truncate_does_not_round():
    assert truncate_ratio(100, 33) == 3.03
    assert truncate_ratio(2, 3) == 0.66


def test_truncate_exact_values():
    assert truncate_ratio(29, 100) == 0.29
    assert truncate_ratio(30, 40) == 0.75


def test_truncate_zero_denominator():
    assert truncate_ratio(10, 0) == 0.0


def test_to_hex():
    assert to_hex((255, 0, 16)) == "#ff0010"
    assert to_hex((0, 0, 0, 255)) == "#000000"


def test_hard_wrap():
    assert hard_wrap("abcdefg", 3) == "abc\ndef\ng"
    assert hard_wrap("  abc  ", 3) == "abc"
    assert hard_wrap("abc", 0) == "abc"


def test_json_output_path():
    assert json_output_path("images/photo.final.png") == Path("images/photo.final.json")
