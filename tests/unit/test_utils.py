"""
Unit tests for casing helpers, keyed merging and path normalisation.
"""

from component_meta.core.utils import (
    kebab_to_title_case,
    merge_by_key,
    normalize_path,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    upper_case_first_character,
)


class TestCasing:
    """Test string casing helpers."""

    def test_kebab_case_from_camel_and_pascal(self):
        """Test that word boundaries become dashes and everything is lowercased."""
        assert to_kebab_case("primaryButton") == "primary-button"
        assert to_kebab_case("PrimaryButton") == "primary-button"
        assert to_kebab_case("icon2Left") == "icon2-left"

    def test_kebab_case_from_snake_and_spaces(self):
        """Test that underscores and whitespace collapse into single dashes."""
        assert to_kebab_case("snake_case value") == "snake-case-value"
        assert to_kebab_case("a__b") == "a-b"

    def test_kebab_case_trims_edge_dashes(self):
        """Test that leading and trailing dashes are removed."""
        assert to_kebab_case("--weird--") == "weird"
        assert to_kebab_case("") == ""

    def test_pascal_and_camel_case(self):
        """Test PascalCase and camelCase conversions."""
        assert to_pascal_case("value-change") == "ValueChange"
        assert to_pascal_case("my_event name") == "MyEventName"
        assert to_pascal_case("alreadyCamel") == "AlreadyCamel"
        assert to_camel_case("value-change") == "valueChange"
        assert to_camel_case("") == ""

    def test_title_case(self):
        """Test kebab-case to Title Case."""
        assert kebab_to_title_case("primary-button") == "Primary Button"
        assert kebab_to_title_case("  solo ") == "Solo"

    def test_upper_case_first_character(self):
        """Test that only the first character changes."""
        assert upper_case_first_character("click") == "Click"
        assert upper_case_first_character("") == ""


class TestMergeByKey:
    """Test keyed merging."""

    def test_later_item_replaces_in_first_position(self):
        """Test that a replaced item keeps the position of its key's first occurrence."""
        items = [("a", 1), ("b", 2), ("a", 3)]
        merged = merge_by_key(items, lambda item: item[0])

        assert list(merged) == ["a", "b"]
        assert merged["a"] == ("a", 3)

    def test_custom_merge_combines_values(self):
        """Test that a custom merge sees the stored and incoming items."""
        items = [("a", 1), ("a", 2), ("b", 5)]
        merged = merge_by_key(items, lambda item: item[0], lambda old, new: (old[0], old[1] + new[1]))

        assert merged == {"a": ("a", 3), "b": ("b", 5)}

    def test_empty_input(self):
        """Test that no items gives an empty mapping."""
        assert merge_by_key([], lambda item: item) == {}


class TestNormalizePath:
    """Test path normalisation."""

    def test_absolute_path_is_collapsed(self):
        """Test that dot segments are resolved."""
        assert normalize_path("/repo/src/../lib/./a.ts") == "/repo/lib/a.ts"

    def test_empty_path_stays_empty(self):
        """Test that the empty string is preserved."""
        assert normalize_path("") == ""
