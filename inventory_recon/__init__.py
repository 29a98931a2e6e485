"""Reconciles Amazon FBA/AWD, 3PL and home inventory into per-SKU snapshot rows."""

from .lookups import FieldChain, first_present, get_path
from .merge import combine_partials, merge_fba_awd, summarize_merge
from .normalize import normalize_sku, normalize_sku_base, to_number
from .parsers import (
    build_awd_inventory,
    build_fba_inventory,
    extract_inventory_items,
    normalize_inventory,
    parse_home_report,
    parse_threepl_report,
    parse_velocity_report,
)
from .schemas import (
    AwdInventoryPartial,
    ChannelStock,
    FbaInventoryPartial,
    MergedInventoryRow,
    SnapshotRow,
)
from .snapshot import (
    HealthThresholds,
    build_snapshot_rows,
    calculate_snapshot_totals,
    classify_health,
    days_of_supply,
    select_fba_inbound,
    summarize_snapshot,
)

__all__ = [
    "AwdInventoryPartial",
    "ChannelStock",
    "FbaInventoryPartial",
    "FieldChain",
    "HealthThresholds",
    "MergedInventoryRow",
    "SnapshotRow",
    "build_awd_inventory",
    "build_fba_inventory",
    "build_snapshot_rows",
    "calculate_snapshot_totals",
    "classify_health",
    "combine_partials",
    "days_of_supply",
    "extract_inventory_items",
    "first_present",
    "get_path",
    "merge_fba_awd",
    "normalize_inventory",
    "normalize_sku",
    "normalize_sku_base",
    "parse_home_report",
    "parse_threepl_report",
    "parse_velocity_report",
    "select_fba_inbound",
    "summarize_merge",
    "summarize_snapshot",
    "to_number",
]
