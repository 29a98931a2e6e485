"""
Multi-channel inventory snapshot: joins the merged Amazon rows with 3PL and
home stock on the base SKU, then derives totals and stock health per row.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .lookups import FieldChain
from .normalize import Number, normalize_sku_base, to_number
from .schemas import ChannelStock, MergedInventoryRow, SnapshotRow

logger = logging.getLogger(__name__)

NO_VELOCITY_DAYS = 999

# FBA-only inbound on an assembled row. "amazonInbound" already includes AWD
# inbound and must never be read here.
FBA_INBOUND = FieldChain("fba_inbound", ("fbaInbound", "totalInbound", "inbound"))

HEALTH_LABELS = ("critical", "low", "healthy", "overstock", "unknown")


@dataclass(frozen=True)
class HealthThresholds:
    critical_days: int = 14
    low_days: int = 30
    overstock_days: int = 90


DEFAULT_THRESHOLDS = HealthThresholds()


def select_fba_inbound(item: Mapping[str, Any] | None) -> Number:
    """Returns the FBA-only inbound figure of an assembled row."""
    return FBA_INBOUND.quantity(item)


def calculate_snapshot_totals(item: Mapping[str, Any] | None) -> dict[str, Number]:
    """
    Grand totals for one multi-channel row.

    totalInbound = amazonInbound + awdInbound + threeplInbound
    totalUnits   = amazonQty + threeplQty + homeQty + awdQty + totalInbound

    Missing or malformed fields count as 0; this never raises.
    """
    item = item if isinstance(item, Mapping) else {}
    total_inbound = (
        to_number(item.get("amazonInbound"))
        + to_number(item.get("awdInbound"))
        + to_number(item.get("threeplInbound"))
    )
    total_units = (
        to_number(item.get("amazonQty"))
        + to_number(item.get("threeplQty"))
        + to_number(item.get("homeQty"))
        + to_number(item.get("awdQty"))
        + total_inbound
    )
    return {"totalInbound": total_inbound, "totalUnits": total_units}


def days_of_supply(on_hand: Any, weekly_velocity: Any) -> int:
    velocity = to_number(weekly_velocity)
    if velocity <= 0:
        return NO_VELOCITY_DAYS
    # half-up, so a .5 lands on the higher day count
    return math.floor(to_number(on_hand) * 7 / velocity + 0.5)


def classify_health(
    days: int, weekly_velocity: Any, thresholds: HealthThresholds = DEFAULT_THRESHOLDS
) -> str:
    """Buckets days of supply into critical / low / healthy / overstock."""
    if to_number(weekly_velocity) <= 0:
        return "unknown"
    if days < thresholds.critical_days:
        return "critical"
    if days < thresholds.low_days:
        return "low"
    if days <= thresholds.overstock_days:
        return "healthy"
    return "overstock"


def _new_accumulator(sku: str) -> dict[str, Any]:
    return {
        "sku": sku,
        "name": "",
        "amazonQty": 0,
        "amazonInbound": 0,
        "awdQty": 0,
        "awdInbound": 0,
        "threeplQty": 0,
        "threeplInbound": 0,
        "homeQty": 0,
    }


def build_snapshot_rows(
    merged: Mapping[str, MergedInventoryRow] | None,
    threepl: Mapping[str, ChannelStock] | None = None,
    home: Mapping[str, ChannelStock] | None = None,
    velocity: Mapping[str, Any] | None = None,
    suffix: str = "SHOP",
    thresholds: HealthThresholds = DEFAULT_THRESHOLDS,
) -> dict[str, SnapshotRow]:
    """
    Assembles one snapshot row per base SKU across Amazon (FBA + AWD), 3PL and
    home stock. Channel variants of a SKU (e.g. 'ABC123SHOP') collapse into the
    base SKU additively.
    """
    accumulators: dict[str, dict[str, Any]] = {}

    def _row_for(raw_sku: str, name: str) -> dict[str, Any] | None:
        base = normalize_sku_base(raw_sku, suffix)
        if not base:
            return None
        acc = accumulators.setdefault(base, _new_accumulator(base))
        if not acc["name"] and name:
            acc["name"] = name
        return acc

    for raw_sku, row in (merged or {}).items():
        acc = _row_for(row.sku or raw_sku, row.name)
        if acc is None:
            continue
        amazon = row.model_dump(by_alias=True)
        acc["amazonQty"] += to_number(amazon.get("fbaTotal"))
        acc["amazonInbound"] += select_fba_inbound(amazon)
        acc["awdQty"] += to_number(amazon.get("awdQuantity"))
        acc["awdInbound"] += to_number(amazon.get("awdInbound"))

    for raw_sku, stock in (threepl or {}).items():
        acc = _row_for(stock.sku or raw_sku, stock.name)
        if acc is not None:
            acc["threeplQty"] += to_number(stock.on_hand)
            acc["threeplInbound"] += to_number(stock.inbound)

    for raw_sku, stock in (home or {}).items():
        acc = _row_for(stock.sku or raw_sku, stock.name)
        if acc is not None:
            acc["homeQty"] += to_number(stock.on_hand)

    weekly: dict[str, Number] = {}
    for raw_sku, value in (velocity or {}).items():
        base = normalize_sku_base(raw_sku, suffix)
        if base:
            weekly[base] = weekly.get(base, 0) + to_number(value)

    rows: dict[str, SnapshotRow] = {}
    for sku in sorted(accumulators):
        acc = accumulators[sku]
        totals = calculate_snapshot_totals(acc)
        on_hand = totals["totalUnits"] - totals["totalInbound"]
        velocity_value = weekly.get(sku, 0)
        days = days_of_supply(on_hand, velocity_value)
        rows[sku] = SnapshotRow(
            **acc,
            **totals,
            weeklyVelocity=velocity_value,
            daysOfSupply=days,
            health=classify_health(days, velocity_value, thresholds),
        )

    logger.debug(f"Assembled {len(rows)} snapshot row(s).")
    return rows


def summarize_snapshot(rows: Iterable[SnapshotRow] | Mapping[str, SnapshotRow]) -> dict[str, Number]:
    """Channel totals and health counts across a whole snapshot."""
    if isinstance(rows, Mapping):
        rows = rows.values()
    rows = list(rows)

    summary: dict[str, Number] = {
        "totalUnits": sum(r.total_units for r in rows),
        "totalInbound": sum(r.total_inbound for r in rows),
        "amazonUnits": sum(r.amazon_qty for r in rows),
        "amazonInbound": sum(r.amazon_inbound for r in rows),
        "awdUnits": sum(r.awd_qty for r in rows),
        "awdInbound": sum(r.awd_inbound for r in rows),
        "threeplUnits": sum(r.threepl_qty for r in rows),
        "threeplInbound": sum(r.threepl_inbound for r in rows),
        "homeUnits": sum(r.home_qty for r in rows),
    }
    for label in HEALTH_LABELS:
        summary[label] = sum(1 for r in rows if r.health == label)
    summary["skuCount"] = len(rows)
    return summary
