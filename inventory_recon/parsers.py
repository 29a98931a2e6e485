import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any

import pandas as pd

from .lookups import FieldChain, get_path
from .normalize import normalize_sku, to_number
from .schemas import AwdInventoryPartial, ChannelStock, FbaInventoryPartial

logger = logging.getLogger(__name__)


def _chains(*chains: FieldChain) -> dict[str, FieldChain]:
    return {chain.name: chain for chain in chains}


# --- FBA inventory summaries (SP-API /fba/inventory/v1/summaries) ---
FBA_FIELDS = _chains(
    FieldChain("sku", ("sellerSku", "sku")),
    FieldChain("name", ("productName",)),
    FieldChain("asin", ("asin",)),
    FieldChain("fnsku", ("fnSku", "fnsku")),
    FieldChain("fulfillable", ("inventoryDetails.fulfillableQuantity",)),
    FieldChain("inbound_working", ("inventoryDetails.inboundWorkingQuantity",)),
    FieldChain("inbound_shipped", ("inventoryDetails.inboundShippedQuantity",)),
    FieldChain("inbound_receiving", ("inventoryDetails.inboundReceivingQuantity",)),
    FieldChain(
        "reserved",
        (
            "inventoryDetails.reservedQuantity.totalReservedQuantity",
            "inventoryDetails.reservedQuantity",
        ),
    ),
    FieldChain(
        "unfulfillable",
        (
            "inventoryDetails.unfulfillableQuantity.totalUnfulfillableQuantity",
            "inventoryDetails.unfulfillableQuantity",
        ),
    ),
)

# --- AWD inventory (SP-API /awd/2024-05-09/inventory and older shapes) ---
AWD_FIELDS = _chains(
    FieldChain("sku", ("sku", "msku", "sellerSku", "merchantSku")),
    FieldChain("name", ("productName", "name")),
    FieldChain(
        "on_hand",
        (
            "totalInventory.quantity",
            "inventorySummary.totalQuantity.quantity",
            "inventorySummary.totalQuantity",
            "inventoryDetails.totalQuantity.quantity",
            "inventoryDetails.totalQuantity",
            "inventorySummary.totalOnhandQuantity",
            "totalOnhandQuantity",
            "inventoryDetails.availableDistributableQuantity",
            "totalQuantity",
            "totalInventory",
            "onHandQuantity.quantity",
            "onHandQuantity",
        ),
    ),
    FieldChain(
        "inbound",
        (
            "totalInboundQuantity.quantity",
            "totalInboundQuantity",
            "inboundInventory.quantity",
            "inventorySummary.inboundQuantity.quantity",
            "inventorySummary.inboundQuantity",
            "inventoryDetails.inboundQuantity.quantity",
            "inventoryDetails.inboundQuantity",
        ),
    ),
    FieldChain(
        "replenishment",
        (
            "replenishmentQuantity.quantity",
            "replenishmentQuantity",
            "inventorySummary.replenishmentQuantity.quantity",
            "inventorySummary.replenishmentQuantity",
            "inventoryDetails.replenishmentQuantity.quantity",
            "inventoryDetails.replenishmentQuantity",
        ),
    ),
    FieldChain(
        "reserved",
        (
            "inventorySummary.reservedQuantity.quantity",
            "inventorySummary.reservedQuantity",
            "inventoryDetails.reservedQuantity.quantity",
            "inventoryDetails.reservedQuantity",
            "reservedQuantity.quantity",
            "reservedQuantity",
            "inventoryDetails.reservedDistributableQuantity",
        ),
    ),
)

# Where each API version nests the item array inside a response page.
ITEM_ARRAY_PATHS = {
    "FBA": ("payload.inventorySummaries", "inventorySummaries"),
    "AWD": (
        "inventory",
        "inventoryListings",
        "payload.inventory",
        "payload.inventoryListings",
    ),
}


def _accumulate(
    accumulators: dict[str, dict[str, Any]],
    sku: str,
    quantities: dict[str, Any],
    labels: dict[str, str],
):
    """Adds one row into the running per-SKU totals; quantities sum, labels keep the first non-empty value."""
    existing = accumulators.get(sku)
    if existing is None:
        accumulators[sku] = {"sku": sku, **labels, **quantities}
        return
    for key, value in quantities.items():
        existing[key] += value
    for key, value in labels.items():
        if not existing[key]:
            existing[key] = value


def build_fba_inventory(
    items: Iterable[Any] | None, fields: Mapping[str, FieldChain] = FBA_FIELDS
) -> dict[str, FbaInventoryPartial]:
    """
    Normalizes raw FBA inventory summaries into one partial per SKU.

    - SKUs are joined on their normalized key; blank SKUs are skipped.
    - Duplicate rows (multi-listing) are summed, never overwritten.
    - total_inbound = working + shipped + receiving.
    """
    accumulators: dict[str, dict[str, Any]] = {}
    skipped = 0

    for item in items or []:
        sku = normalize_sku(fields["sku"].resolve(item))
        if not sku:
            skipped += 1
            continue

        working = fields["inbound_working"].quantity(item)
        shipped = fields["inbound_shipped"].quantity(item)
        receiving = fields["inbound_receiving"].quantity(item)

        _accumulate(
            accumulators,
            sku,
            quantities={
                "fulfillable": fields["fulfillable"].quantity(item),
                "reserved": fields["reserved"].quantity(item),
                "unfulfillable": fields["unfulfillable"].quantity(item),
                "inbound_working": working,
                "inbound_shipped": shipped,
                "inbound_receiving": receiving,
                "total_inbound": working + shipped + receiving,
            },
            labels={
                "name": fields["name"].text(item),
                "asin": fields["asin"].text(item),
                "fnsku": fields["fnsku"].text(item),
            },
        )

    if skipped:
        logger.debug(f"FBA: skipped {skipped} item(s) without a SKU.")

    return {sku: FbaInventoryPartial(**acc) for sku, acc in accumulators.items()}


def build_awd_inventory(
    items: Iterable[Any] | None, fields: Mapping[str, FieldChain] = AWD_FIELDS
) -> dict[str, AwdInventoryPartial]:
    """
    Normalizes raw AWD inventory items into one partial per SKU.

    awd_quantity = on-hand + reserved; awd_inbound = inbound + replenishment.
    """
    accumulators: dict[str, dict[str, Any]] = {}
    skipped = 0

    for item in items or []:
        sku = normalize_sku(fields["sku"].resolve(item))
        if not sku:
            skipped += 1
            continue

        replenishment = fields["replenishment"].quantity(item)
        _accumulate(
            accumulators,
            sku,
            quantities={
                "awd_quantity": fields["on_hand"].quantity(item)
                + fields["reserved"].quantity(item),
                "awd_inbound": fields["inbound"].quantity(item) + replenishment,
                "awd_replenishment": replenishment,
            },
            labels={"name": fields["name"].text(item)},
        )

    if skipped:
        logger.debug(f"AWD: skipped {skipped} item(s) without a SKU.")

    return {sku: AwdInventoryPartial(**acc) for sku, acc in accumulators.items()}


# Registry of source schemas the normalizer understands.
NORMALIZERS = {
    "FBA": build_fba_inventory,
    "AWD": build_awd_inventory,
}


def normalize_inventory(
    items: Iterable[Any] | None, source: str
) -> dict[str, FbaInventoryPartial] | dict[str, AwdInventoryPartial]:
    """Runs the normalizer for the named source schema ('FBA' or 'AWD')."""
    normalizer = NORMALIZERS.get(source.strip().upper())
    if normalizer is None:
        raise ValueError(
            f"Unknown inventory source '{source}'. Expected one of: {', '.join(NORMALIZERS)}"
        )
    return normalizer(items)


def _envelope_items(page: Mapping, paths: tuple[str, ...]) -> list | None:
    for path in paths:
        value = get_path(page, path)
        if isinstance(value, list):
            return value
    return None


def extract_inventory_items(payload: Any, source: str) -> list:
    """
    Pulls the item array out of an API response.

    Accepts a single response page, a list of pages, or a bare list of items.
    Anything unrecognized yields an empty list.
    """
    paths = ITEM_ARRAY_PATHS.get(source.strip().upper(), ())

    if isinstance(payload, Mapping):
        return list(_envelope_items(payload, paths) or [])

    if not isinstance(payload, list):
        return []

    items: list = []
    for element in payload:
        page_items = (
            _envelope_items(element, paths) if isinstance(element, Mapping) else None
        )
        if page_items is None:
            items.append(element)
        else:
            items.extend(page_items)
    return items


# --- CSV stock exports (3PL / home location) ---
THREEPL_COLUMN_MAP = {
    "sku": "sku",
    "name": "name",
    "on_hand": "quantity_on_hand",
    "inbound": "quantity_inbound",
}
HOME_COLUMN_MAP = {
    "sku": "sku",
    "name": "name",
    "on_hand": "quantity",
}
# Bundles are virtual kits; gift cards and free samples are not sellable stock.
# SKUs are matched after normalization (upper-case), names as exported.
THREEPL_SKU_EXCLUDE_PATTERN = r"BUNDLE"
THREEPL_NAME_EXCLUDE_PATTERN = r"Gift Card|FREE"


def _numeric_column(
    df: pd.DataFrame, column: str | None, whole_units: bool = False
) -> pd.Series:
    if column is None or column not in df.columns:
        return pd.Series(0, index=df.index)
    values = pd.to_numeric(df[column], errors="coerce").map(to_number)
    if whole_units:
        # stock counts are whole units: "12.7" reads as 12
        values = values.map(math.trunc)
    return values


def _aggregate_channel_report(
    df: pd.DataFrame | None,
    column_map: dict[str, str],
    sku_exclude: str | None = None,
    name_exclude: str | None = None,
    drop_zero_on_hand: bool = False,
) -> dict[str, ChannelStock]:
    """
    A reusable helper for stock exports from non-Amazon locations.
    - Normalizes SKUs and drops rows without one.
    - Coerces quantities to whole units (bad cells become 0, fractions truncate).
    - Optionally drops excluded SKUs/names and rows with nothing on hand.
    - Aggregates duplicate SKUs by summing.
    """
    if df is None or df.empty:
        return {}

    sku_col = column_map["sku"]
    if sku_col not in df.columns:
        logger.warning(f"⚠️ Stock report has no '{sku_col}' column. Skipping.")
        return {}

    temp_df = pd.DataFrame(index=df.index)
    temp_df["sku"] = df[sku_col].map(normalize_sku)

    name_col = column_map.get("name")
    if name_col and name_col in df.columns:
        names = df[name_col].fillna("").astype(str).str.strip()
    else:
        names = pd.Series("", index=df.index)
    temp_df["name"] = names.where(names != "")

    temp_df["on_hand"] = _numeric_column(df, column_map.get("on_hand"), whole_units=True)
    temp_df["inbound"] = _numeric_column(df, column_map.get("inbound"), whole_units=True)

    temp_df = temp_df[temp_df["sku"] != ""]
    if sku_exclude:
        temp_df = temp_df[~temp_df["sku"].str.contains(sku_exclude, regex=True)]
    if name_exclude:
        temp_df = temp_df[
            ~temp_df["name"].fillna("").str.contains(name_exclude, regex=True)
        ]
    if drop_zero_on_hand:
        temp_df = temp_df[temp_df["on_hand"] != 0]

    # Group by the normalized SKU so duplicate rows collapse into one.
    parsed_data = (
        temp_df.groupby("sku", sort=True)
        .agg(name=("name", "first"), on_hand=("on_hand", "sum"), inbound=("inbound", "sum"))
        .reset_index()
    )
    parsed_data["name"] = parsed_data["name"].fillna("")

    return {
        row.sku: ChannelStock(
            sku=row.sku,
            name=row.name,
            on_hand=to_number(row.on_hand),
            inbound=to_number(row.inbound),
        )
        for row in parsed_data.itertuples(index=False)
    }


def parse_threepl_report(df: pd.DataFrame | None) -> dict[str, ChannelStock]:
    """Parses a 3PL (Packiyo) stock export into per-SKU on-hand and inbound units."""
    return _aggregate_channel_report(
        df,
        THREEPL_COLUMN_MAP,
        sku_exclude=THREEPL_SKU_EXCLUDE_PATTERN,
        name_exclude=THREEPL_NAME_EXCLUDE_PATTERN,
        drop_zero_on_hand=True,
    )


def parse_home_report(df: pd.DataFrame | None) -> dict[str, ChannelStock]:
    """Parses the home/warehouse location export (Shopify) into per-SKU on-hand units."""
    return _aggregate_channel_report(df, HOME_COLUMN_MAP)


def parse_velocity_report(df: pd.DataFrame | None) -> dict[str, float]:
    """Loads weekly unit velocity per SKU (columns: sku, weekly_units)."""
    if df is None or df.empty or "sku" not in df.columns:
        return {}
    temp_df = pd.DataFrame(index=df.index)
    temp_df["sku"] = df["sku"].map(normalize_sku)
    temp_df["weekly_units"] = _numeric_column(df, "weekly_units")
    temp_df = temp_df[temp_df["sku"] != ""]
    grouped = temp_df.groupby("sku")["weekly_units"].sum()
    return {sku: to_number(value) for sku, value in grouped.items()}
