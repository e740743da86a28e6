"""
Unit tests for chain-wide extraction and merging.
"""

from component_meta.core.webcomponent.chain_extractor import Extraction, extract_from_chain

ITEMS = {
    "base": Extraction(items=(("a", "base"), ("b", "base")), warnings=("base warning",)),
    "middle": Extraction(items=(("c", "middle"),)),
    "leaf": Extraction(items=(("a", "leaf"),), warnings=("leaf warning",)),
}


class TestExtractFromChain:
    """Test merging per-class extractions base-first."""

    def test_override_keeps_base_position(self):
        """Test that a derived item replaces the base item in place."""
        result = extract_from_chain(["base", "middle", "leaf"], ITEMS.__getitem__, lambda item: item[0])

        assert result.items == (("a", "leaf"), ("b", "base"), ("c", "middle"))

    def test_warnings_are_concatenated_in_chain_order(self):
        """Test that warnings from every class are kept."""
        result = extract_from_chain(["base", "middle", "leaf"], ITEMS.__getitem__, lambda item: item[0])

        assert result.warnings == ("base warning", "leaf warning")

    def test_custom_merge(self):
        """Test a merge function that combines both items."""
        result = extract_from_chain(
            ["base", "leaf"],
            ITEMS.__getitem__,
            lambda item: item[0],
            lambda old, new: (old[0], f"{old[1]}+{new[1]}"),
        )

        assert result.items[0] == ("a", "base+leaf")

    def test_empty_chain(self):
        """Test that an empty chain extracts nothing."""
        assert extract_from_chain([], ITEMS.__getitem__, lambda item: item[0]) == Extraction()
