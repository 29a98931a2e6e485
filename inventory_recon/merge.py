import logging
from collections.abc import Mapping
from typing import TypeVar

from .normalize import normalize_sku
from .schemas import AwdInventoryPartial, FbaInventoryPartial, MergedInventoryRow

logger = logging.getLogger(__name__)

P = TypeVar("P", FbaInventoryPartial, AwdInventoryPartial)


def combine_partials(*mappings: Mapping[str, P] | None) -> dict[str, P]:
    """
    Sums several per-source mappings (e.g. paginated batches of the same feed)
    into one. Keys are re-normalized, so batches built elsewhere still join.
    """
    combined: dict[str, P] = {}
    for mapping in mappings:
        for raw_key, partial in (mapping or {}).items():
            key = normalize_sku(raw_key)
            if not key:
                continue
            if key in combined:
                combined[key] = combined[key] + partial
            else:
                combined[key] = partial.model_copy(update={"sku": key})
    return dict(sorted(combined.items()))


def merge_fba_awd(
    fba_inventory: Mapping[str, FbaInventoryPartial] | None,
    awd_inventory: Mapping[str, AwdInventoryPartial] | None,
) -> dict[str, MergedInventoryRow]:
    """
    Unions FBA and AWD partials into one Amazon-side row per SKU.

    A SKU missing from one source contributes zeros for that source.
    amazon_inbound is always fba_inbound + awd_inbound; a pre-combined inbound
    figure from the raw feed is never used.
    """
    fba = combine_partials(fba_inventory)
    awd = combine_partials(awd_inventory)

    merged: dict[str, MergedInventoryRow] = {}
    for sku in sorted(set(fba) | set(awd)):
        fba_row = fba.get(sku) or FbaInventoryPartial(sku=sku)
        awd_row = awd.get(sku) or AwdInventoryPartial(sku=sku)

        fba_total = fba_row.fulfillable + fba_row.reserved
        merged[sku] = MergedInventoryRow(
            sku=sku,
            name=fba_row.name or awd_row.name,
            asin=fba_row.asin,
            fnsku=fba_row.fnsku,
            fba_fulfillable=fba_row.fulfillable,
            fba_reserved=fba_row.reserved,
            fba_total=fba_total,
            fba_inbound=fba_row.total_inbound,
            awd_quantity=awd_row.awd_quantity,
            awd_inbound=awd_row.awd_inbound,
            awd_replenishment=awd_row.awd_replenishment,
            amazon_total=fba_total + awd_row.awd_quantity,
            amazon_inbound=fba_row.total_inbound + awd_row.awd_inbound,
        )

    logger.debug(
        f"Merged {len(fba)} FBA and {len(awd)} AWD SKU(s) into {len(merged)} row(s)."
    )
    return merged


def summarize_merge(
    fba_inventory: Mapping[str, FbaInventoryPartial] | None,
    awd_inventory: Mapping[str, AwdInventoryPartial] | None,
) -> dict[str, int | float]:
    """Headline counts for a sync: SKUs per source and their unit totals."""
    fba = combine_partials(fba_inventory)
    awd = combine_partials(awd_inventory)
    return {
        "totalSkus": len(set(fba) | set(awd)),
        "fbaSkus": len(fba),
        "awdSkus": len(awd),
        "fbaUnits": sum(row.fulfillable for row in fba.values()),
        "awdUnits": sum(row.awd_quantity for row in awd.values()),
    }
