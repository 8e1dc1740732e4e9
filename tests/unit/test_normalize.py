"""Tests for CSS value normalization."""

import pytest

from search.normalize import normalize_value, referenced_variable


class TestNormalizeValue:
    """Rule-by-rule behaviour of normalize_value."""

    def test_hex_short_and_long_forms_agree(self):
        assert normalize_value("#ABC") == "#aabbcc"
        assert normalize_value("#aabbcc") == "#aabbcc"
        assert normalize_value("#ABCD") == "#aabbccdd"
        assert normalize_value("#11223344") == "#11223344"

    def test_invalid_hex_length_falls_through_to_identity(self):
        assert normalize_value("#abcde") == "#abcde"

    def test_functional_colors_lose_whitespace_and_case(self):
        assert normalize_value("rgb(59, 130, 246)") == "rgb(59,130,246)"
        assert normalize_value("RGBA( 0, 0, 0, .5 )") == "rgba(0,0,0,.5)"
        assert normalize_value("hsl(210 40% 98%)") == "hsl(21040%98%)"

    def test_hex_and_rgb_of_same_color_stay_distinct(self):
        assert normalize_value("#3b82f6") != normalize_value("rgb(59, 130, 246)")

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("16px", "16px"),
            ("2.0rem", "2rem"),
            ("1.50EM", "1.5em"),
            ("0.123456px", "0.1235px"),
            ("100%", "100%"),
            ("50DVH", "50dvh"),
        ],
    )
    def test_dimensions(self, raw, expected):
        assert normalize_value(raw) == expected

    def test_var_reference_drops_fallback(self):
        assert normalize_value("var(--primary, #1e40af)") == "var(--primary)"
        assert normalize_value("var( --spacing-base )") == "var(--spacing-base)"

    def test_var_takes_priority_over_commas(self):
        assert normalize_value("var(--a, 1px, 2px)") == "var(--a)"

    def test_multi_part_values_collapse_whitespace(self):
        assert normalize_value("0 1px  2px rgba(0, 0, 0, 0.1) , 0 0 1px red") == "0 1px 2px rgba(0,0,0,0.1),0 0 1px red"
        assert normalize_value("linear-gradient(to right,  red ,blue)") == "linear-gradient(to right,red,blue)"

    def test_identity_for_other_values(self):
        assert normalize_value("  bold ") == "bold"
        assert normalize_value("1.5") == "1.5"

    def test_dimensions_need_ascii_digits(self):
        arabic_indic = "\u0661\u0662px"
        assert normalize_value(arabic_indic) == arabic_indic
        assert normalize_value("12.50PX") == "12.5px"

    @pytest.mark.parametrize("raw", [None, "", "   "])
    def test_empty_is_not_indexable(self, raw):
        assert normalize_value(raw) is None

    @pytest.mark.parametrize(
        "raw",
        ["#ABC", "rgb(59, 130, 246)", "1.50rem", "var(--x, 4px)", "0 0 1px  red, 0 0 2px blue", "solid"],
    )
    def test_normalization_is_idempotent(self, raw):
        once = normalize_value(raw)
        assert normalize_value(once) == once


class TestReferencedVariable:
    def test_extracts_name_without_fallback(self):
        assert referenced_variable("var(--primary, #1e40af)") == "--primary"
        assert referenced_variable("var(--neutral-4)") == "--neutral-4"

    def test_literal_values_have_no_reference(self):
        assert referenced_variable("#cccccc") is None
        assert referenced_variable("calc(var(--a) * 2)") is None
        assert referenced_variable("") is None
