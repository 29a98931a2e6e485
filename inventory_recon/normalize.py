"""SKU-key normalization and the missing-value-to-zero numeric rule."""

import math
from collections.abc import Mapping
from typing import Any

Number = int | float


def to_number(value: Any) -> Number:
    """
    Coerces a raw quantity to a finite number.

    None, empty strings, non-numeric strings, NaN/inf, booleans and nested
    objects all become 0 so downstream sums never see NaN or None.
    """
    if value is None or isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            return 0
        return int(value) if value.is_integer() else value
    if isinstance(value, str):
        text = value.strip()
        # underscores are Python literal syntax, not a quantity format
        if not text or "_" in text:
            return 0
        try:
            return int(text)
        except ValueError:
            pass
        try:
            number = float(text)
        except ValueError:
            return 0
        if not math.isfinite(number):
            return 0
        return int(number) if number.is_integer() else number
    if isinstance(value, Mapping):
        return 0
    # numpy scalars and Decimals end up here
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0
    if not math.isfinite(number):
        return 0
    return int(number) if number.is_integer() else number


def normalize_sku(value: Any) -> str:
    """Returns the join key for a raw SKU: trimmed and upper-cased, '' when blank."""
    # pandas reads empty CSV cells as NaN
    if value is None or (isinstance(value, float) and math.isnan(value)):
        return ""
    return str(value).strip().upper()


def normalize_sku_base(value: Any, suffix: str = "SHOP") -> str:
    """
    Strips one trailing channel marker (case-insensitive) from the normalized SKU,
    so 'abc123shop' and 'ABC123' map to the same product.
    """
    key = normalize_sku(value)
    marker = normalize_sku(suffix)
    if marker and key.endswith(marker) and len(key) > len(marker):
        return key[: -len(marker)]
    return key
