"""Tests for the numeric and string helpers."""
from datetime import date
from unittest.mock import patch

import pytest

from utils import text_utils
from utils.math_utils import clamp, distance, fibonacci
from utils.text_utils import ALPHANUMERIC, capitalize_each_word, remove_chars


class TestMathUtils:

    def test_distance(self):
        assert distance(0, 0, 3, 4) == pytest.approx(5.0)
        assert distance(1, 1, 1, 1) == 0.0

    @pytest.mark.parametrize("value, expected", [(-5, 0), (5, 5), (15, 10), (0, 0), (10, 10)])
    def test_clamp(self, value, expected):
        assert clamp(value, 0, 10) == expected

    def test_clamp_floats(self):
        assert clamp(1.5, 0.0, 1.0) == 1.0

    def test_fibonacci_adds_upper_bound_terms(self):
        assert fibonacci(5) == [0, 1, 1, 2, 3, 5, 8]
        assert len(fibonacci(10)) == 12

    def test_fibonacci_small_bounds(self):
        assert fibonacci(0) == [0, 1]
        assert fibonacci(-3) == [0, 1]


class TestTextUtils:

    def test_capitalize_each_word(self):
        assert capitalize_each_word("hi all, i'm a repository") == "Hi All, I'm A Repository"
        assert capitalize_each_word("DON'T tell me") == "Don't Tell Me"

    def test_capitalize_each_word_keeps_spacing(self):
        assert capitalize_each_word("  two  spaces") == "  Two  Spaces"
        assert capitalize_each_word("") == ""

    def test_remove_chars(self):
        assert remove_chars("abcd", "bc") == "ad"
        assert remove_chars("a-b]c^d", "]^-") == "abcd"
        assert remove_chars("unchanged", "") == "unchanged"

    def test_alphanumeric(self):
        assert len(ALPHANUMERIC) == 62
        assert ALPHANUMERIC.startswith("abc")
        assert ALPHANUMERIC.endswith("789")

    def test_calendar_helpers(self):
        # 2024-03-03 was a Sunday
        with patch.object(text_utils, "date") as fake_date:
            fake_date.today.return_value = date(2024, 3, 3)
            assert text_utils.current_year() == 2024
            assert text_utils.current_month() == 2
            assert text_utils.current_day_of_week() == 1

            fake_date.today.return_value = date(2024, 3, 9)
            assert text_utils.current_day_of_week() == 7
