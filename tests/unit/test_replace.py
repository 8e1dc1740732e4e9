"""Tests for replacement text helpers."""

from search.models import SCOPE_ROOT, TokenRecord
from search.replace import expand_pattern, replace_with_var, replacement_options


def _record(**overrides):
    fields = dict(
        name="--radius-size-s",
        raw_value="8px",
        file="/tmp/t.css",
        offset=0,
        selector=":root",
        scope_kind=SCOPE_ROOT,
    )
    fields.update(overrides)
    return TokenRecord(**fields)


class TestReplaceWithVar:
    def test_wraps_names(self):
        assert replace_with_var("--color-primary") == "var(--color-primary)"
        assert replace_with_var("color-primary") == "var(--color-primary)"
        assert replace_with_var("  --x  ") == "var(--x)"

    def test_existing_var_call_is_untouched(self):
        assert replace_with_var("var(--x, red)") == "var(--x, red)"

    def test_extracts_token_from_surrounding_text(self):
        assert replace_with_var("token --brand-500 (root)") == "var(--brand-500)"


class TestReplacementOptions:
    def test_var_form_only_without_alias(self):
        assert replacement_options(_record()) == ["var(--radius-size-s)"]

    def test_alias_with_pattern(self):
        record = _record(alias="size-s", pattern="rounded-[%]")
        assert replacement_options(record) == ["var(--radius-size-s)", "rounded-[size-s]"]

    def test_alias_without_pattern(self):
        assert replacement_options(_record(alias="size-s")) == ["var(--radius-size-s)", "size-s"]

    def test_expand_pattern_replaces_every_placeholder(self):
        assert expand_pattern("%-%", "a") == "a-a"
