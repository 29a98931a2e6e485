from __future__ import annotations

"""Unit tests for the ordered field-fallback lookups."""

from inventory_recon.lookups import FieldChain, first_present, get_path


def test_get_path_walks_nested_mappings() -> None:
    item = {"a": {"b": {"c": 3}}}
    assert get_path(item, "a.b.c") == 3
    assert get_path(item, "a.x.c") is None
    assert get_path(item, "a.b.c.d") is None
    assert get_path(None, "a") is None


def test_first_present_respects_priority_order() -> None:
    """The first path with a usable value wins even when later ones also exist."""
    item = {"primary": 1, "secondary": 2}
    assert first_present(item, ("primary", "secondary")) == 1
    assert first_present(item, ("secondary", "primary")) == 2


def test_first_present_skips_missing_blank_and_nested_objects() -> None:
    item = {"missing": None, "blank": " ", "nested": {"quantity": 9}, "value": 4}
    assert first_present(item, ("absent", "missing", "blank", "nested", "value")) == 4


def test_first_present_treats_zero_as_a_value() -> None:
    item = {"first": 0, "second": 8}
    assert first_present(item, ("first", "second")) == 0


def test_first_present_returns_none_when_nothing_matches() -> None:
    assert first_present({}, ("a", "b.c")) is None


def test_field_chain_quantity_and_text() -> None:
    chain = FieldChain("qty", ("totalInventory.quantity", "totalInventory"))
    assert chain.quantity({"totalInventory": {"quantity": "5"}}) == 5
    assert chain.quantity({"totalInventory": 6}) == 6
    assert chain.quantity({"totalInventory": {"quantity": None}}) == 0

    name = FieldChain("name", ("productName", "name"))
    assert name.text({"name": "  Widget "}) == "Widget"
    assert name.text({}) == ""
