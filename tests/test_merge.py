from __future__ import annotations

"""Tests for the FBA + AWD merge and its ordering guarantees."""

import random

from conftest import fba_item
from inventory_recon.merge import combine_partials, merge_fba_awd, summarize_merge
from inventory_recon.parsers import build_awd_inventory, build_fba_inventory
from inventory_recon.schemas import AwdInventoryPartial, FbaInventoryPartial


def _awd_item(sku, on_hand=0, inbound=0, replenishment=0):
    return {
        "sku": sku,
        "totalInventory": {"quantity": on_hand},
        "totalInboundQuantity": {"quantity": inbound},
        "replenishmentQuantity": {"quantity": replenishment},
    }


def test_merge_across_sku_case_differences(fba_items, awd_items) -> None:
    merged = merge_fba_awd(build_fba_inventory(fba_items), build_awd_inventory(awd_items))
    row = merged["ABC-123"]
    assert row.fba_total == 12
    assert row.fba_inbound == 5
    assert row.awd_quantity == 5
    assert row.awd_inbound == 5
    assert row.amazon_inbound == 10
    assert row.amazon_total == 17
    assert row.name == "Widget"


def test_merge_from_partials() -> None:
    fba = {"A": FbaInventoryPartial(sku="A", fulfillable=10, reserved=2, total_inbound=5)}
    awd = {"A": AwdInventoryPartial(sku="A", awd_quantity=5, awd_inbound=5)}
    row = merge_fba_awd(fba, awd)["A"]
    assert (row.fba_total, row.awd_quantity, row.awd_inbound, row.amazon_inbound) == (12, 5, 5, 10)


def test_sku_missing_from_one_source_contributes_zero() -> None:
    fba = {"ONLY-FBA": FbaInventoryPartial(sku="ONLY-FBA", fulfillable=4, total_inbound=1)}
    awd = {"ONLY-AWD": AwdInventoryPartial(sku="ONLY-AWD", awd_quantity=9, awd_inbound=2)}
    merged = merge_fba_awd(fba, awd)

    assert list(merged) == ["ONLY-AWD", "ONLY-FBA"]
    assert merged["ONLY-FBA"].awd_quantity == 0
    assert merged["ONLY-FBA"].amazon_inbound == 1
    assert merged["ONLY-AWD"].fba_total == 0
    assert merged["ONLY-AWD"].fba_inbound == 0
    assert merged["ONLY-AWD"].amazon_inbound == 2


def test_merge_handles_missing_sources() -> None:
    assert merge_fba_awd(None, None) == {}
    merged = merge_fba_awd({}, {"A": AwdInventoryPartial(sku="A", awd_quantity=1)})
    assert merged["A"].amazon_total == 1


def test_merge_renormalizes_input_keys() -> None:
    """Mappings keyed by raw SKUs still join with normalized ones."""
    fba = {" abc ": FbaInventoryPartial(sku=" abc ", fulfillable=1)}
    awd = {"ABC": AwdInventoryPartial(sku="ABC", awd_quantity=2)}
    merged = merge_fba_awd(fba, awd)
    assert list(merged) == ["ABC"]
    assert merged["ABC"].amazon_total == 3


def test_merged_row_serializes_with_camel_case_aliases(fba_items, awd_items) -> None:
    row = merge_fba_awd(build_fba_inventory(fba_items), build_awd_inventory(awd_items))["ABC-123"]
    dumped = row.model_dump(by_alias=True)
    assert dumped["fbaTotal"] == 12
    assert dumped["amazonInbound"] == 10
    assert "fba_total" not in dumped


def test_merge_is_independent_of_row_order() -> None:
    fba_rows = [fba_item(f"sku-{i % 3}", fulfillable=i, working=i % 2, reserved=1) for i in range(12)]
    awd_rows = [_awd_item(f"SKU-{i % 4}", on_hand=i, inbound=1, replenishment=i % 3) for i in range(10)]
    expected = merge_fba_awd(build_fba_inventory(fba_rows), build_awd_inventory(awd_rows))

    rng = random.Random(7)
    for _ in range(5):
        shuffled_fba = fba_rows[:]
        shuffled_awd = awd_rows[:]
        rng.shuffle(shuffled_fba)
        rng.shuffle(shuffled_awd)
        assert merge_fba_awd(build_fba_inventory(shuffled_fba), build_awd_inventory(shuffled_awd)) == expected


def test_merge_is_independent_of_batch_splitting() -> None:
    """Splitting a feed into batches and combining them gives the same totals."""
    fba_rows = [fba_item("A", fulfillable=3, working=1), fba_item("B", fulfillable=2), fba_item("a", reserved=4)]
    awd_rows = [_awd_item("A", on_hand=5, inbound=3, replenishment=2), _awd_item("C", on_hand=1), _awd_item("a", on_hand=2)]
    whole = merge_fba_awd(build_fba_inventory(fba_rows), build_awd_inventory(awd_rows))

    awd_first = build_awd_inventory(awd_rows[:1])
    awd_rest = build_awd_inventory(awd_rows[1:])
    fba_first = build_fba_inventory(fba_rows[:2])
    fba_rest = build_fba_inventory(fba_rows[2:])

    assert merge_fba_awd(build_fba_inventory(fba_rows), combine_partials(awd_first, awd_rest)) == whole
    assert merge_fba_awd(build_fba_inventory(fba_rows), combine_partials(awd_rest, awd_first)) == whole
    assert merge_fba_awd(combine_partials(fba_rest, fba_first), combine_partials(awd_first, awd_rest)) == whole
    assert whole["A"].fba_total == 7
    assert whole["A"].awd_quantity == 7


def test_partials_add_quantities_and_keep_first_name() -> None:
    left = AwdInventoryPartial(sku="A", awd_quantity=1, awd_inbound=2)
    right = AwdInventoryPartial(sku="A", name="Widget", awd_quantity=3, awd_replenishment=1)
    total = left + right
    assert total == AwdInventoryPartial(sku="A", name="Widget", awd_quantity=4, awd_inbound=2, awd_replenishment=1)
    assert left.awd_quantity == 1


def test_combine_partials_does_not_alias_inputs() -> None:
    batch = {"A": FbaInventoryPartial(sku="A", fulfillable=1)}
    combined = combine_partials(batch, batch)
    assert combined["A"].fulfillable == 2
    assert batch["A"].fulfillable == 1


def test_summarize_merge(fba_items, awd_items) -> None:
    summary = summarize_merge(build_fba_inventory(fba_items), build_awd_inventory(awd_items))
    assert summary == {"totalSkus": 2, "fbaSkus": 2, "awdSkus": 1, "fbaUnits": 13, "awdUnits": 5}
