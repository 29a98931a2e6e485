"""Pytest configuration and shared inventory payload fixtures."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[1]
project_root_str = str(PROJECT_ROOT)
if project_root_str not in sys.path:
    # Ensure tests can import `inventory_recon` without package installation.
    sys.path.insert(0, project_root_str)


def fba_item(sku, fulfillable=0, working=0, shipped=0, receiving=0, reserved=0, **extra):
    """Builds one FBA inventory summary in the SP-API response shape."""
    item = {
        "sellerSku": sku,
        "inventoryDetails": {
            "fulfillableQuantity": fulfillable,
            "inboundWorkingQuantity": working,
            "inboundShippedQuantity": shipped,
            "inboundReceivingQuantity": receiving,
            "reservedQuantity": {"totalReservedQuantity": reserved},
        },
    }
    item.update(extra)
    return item


@pytest.fixture
def fba_items() -> list[dict]:
    return [
        fba_item("abc-123", fulfillable=10, working=4, shipped=1, reserved=2, productName="Widget"),
        fba_item("XYZ-9", fulfillable=3),
    ]


@pytest.fixture
def awd_items() -> list[dict]:
    return [
        {
            "sku": "ABC-123",
            "totalInventory": {"quantity": 5},
            "totalInboundQuantity": {"quantity": 3},
            "replenishmentQuantity": {"quantity": 2},
        },
    ]
