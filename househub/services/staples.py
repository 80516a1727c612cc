"""Staple templates vs tracked inventory: deduplication and restock lists."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from househub.models.inventory import CustomStaple, DefaultStaple

SOURCE_DEFAULT = "default_staples"
SOURCE_CUSTOM = "custom_staples"


@dataclass
class StapleView:
    """A default or custom staple, flattened to one shape."""
    id: int
    name: str
    category: str
    default_threshold: int
    source_table: str
    display_order: int | None = None


def combine_staples(defaults: Iterable[DefaultStaple], customs: Iterable[CustomStaple]) -> list[StapleView]:
    combined = [
        StapleView(
            id=s.id,
            name=s.name,
            category=s.category,
            default_threshold=s.default_threshold,
            source_table=SOURCE_DEFAULT,
            display_order=s.display_order,
        )
        for s in defaults
    ]
    combined.extend(
        StapleView(
            id=s.id,
            name=s.name,
            category=s.category,
            default_threshold=s.default_threshold,
            source_table=SOURCE_CUSTOM,
        )
        for s in customs
    )
    return combined


def _key(name: Any, category: Any) -> tuple[str, str] | None:
    if not isinstance(name, str) or not name.strip():
        return None
    return name.strip().lower(), category or ""


def find_existing_item(name: str, category: str, items: Iterable[Any]) -> Any | None:
    """Inventory item with the same (case-insensitive) name and category, if any."""
    wanted = _key(name, category)
    if wanted is None:
        return None
    for item in items:
        if _key(getattr(item, "name", None), getattr(item, "category", None)) == wanted:
            return item
    return None


def available_staples(staples: Iterable[StapleView], items: Iterable[Any]) -> list[StapleView]:
    """Staples that are not already tracked in inventory."""
    tracked = {k for k in (_key(getattr(i, "name", None), getattr(i, "category", None)) for i in items) if k}
    return [s for s in staples if _key(s.name, s.category) not in tracked]


def low_stock(items: Iterable[Any]) -> list[Any]:
    """Items at or below their restock threshold."""
    out = []
    for item in items:
        qty, threshold = getattr(item, "quantity", None), getattr(item, "threshold", None)
        if qty is None or threshold is None:
            continue
        if qty <= threshold:
            out.append(item)
    return out
