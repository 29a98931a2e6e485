"""
Ordered field-fallback lookups.

Upstream inventory APIs move quantities around between versions
(`totalInventory.quantity` in one, `inventorySummary.totalQuantity` in the
next), so each logical field is declared as an ordered list of dotted paths.
The first path that yields a usable scalar wins.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from .normalize import Number, to_number


def get_path(item: Any, path: str) -> Any:
    """Walks a dotted path through nested mappings; None when any hop is missing."""
    current = item
    for part in path.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
        if current is None:
            return None
    return current


def is_empty(value: Any) -> bool:
    # Nested objects are containers, not values: a path that stops on one
    # falls through to the next candidate.
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    return isinstance(value, (Mapping, list, tuple, set))


def first_present(item: Any, paths: Sequence[str]) -> Any:
    """Returns the value at the first path holding a non-empty scalar, else None."""
    for path in paths:
        value = get_path(item, path)
        if not is_empty(value):
            return value
    return None


@dataclass(frozen=True)
class FieldChain:
    """A logical field and the paths that may carry it, highest priority first."""

    name: str
    paths: tuple[str, ...]

    def resolve(self, item: Any) -> Any:
        return first_present(item, self.paths)

    def quantity(self, item: Any) -> Number:
        return to_number(self.resolve(item))

    def text(self, item: Any) -> str:
        value = self.resolve(item)
        return "" if value is None else str(value).strip()
