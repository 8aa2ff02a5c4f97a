import logging
from typing import Dict, List, Optional

from uniform_app.errors import InvalidInput, ItemNotFound
from uniform_app.models.inventory import (
    InventoryItem,
    InventoryItemView,
    InventorySummary,
    ItemTypeSummary,
    SortField,
    SortOrder,
    StockFilter,
    StockLevel,
)
from uniform_app.services.stock_levels import classify, matches_filter, to_views
from uniform_app.services.store import InventoryStore

logger = logging.getLogger(__name__)

_SORT_ATTRIBUTES = {
    SortField.ITEM_TYPE: "item_type",
    SortField.SIZE: "size",
    SortField.QUANTITY: "quantity",
    SortField.LOW_STOCK_THRESHOLD: "low_stock_threshold",
}


def query_items(
    items: List[InventoryItem],
    stock_filter: StockFilter = StockFilter.ALL,
    search: Optional[str] = None,
    sort: Optional[SortField] = None,
    order: SortOrder = SortOrder.ASC,
) -> List[InventoryItemView]:
    """Search by item type or size, filter by stock status, then sort."""
    result = list(items)

    if search:
        term = search.strip().lower()
        result = [
            item for item in result
            if term in item.item_type.lower() or term in item.size.lower()
        ]

    result = [item for item in result if matches_filter(item, stock_filter)]

    if sort is not None:
        attribute = _SORT_ATTRIBUTES[sort]
        result.sort(key=lambda item: getattr(item, attribute), reverse=order == SortOrder.DESC)

    return to_views(result)


def summarize(items: List[InventoryItem], school_id: Optional[str] = None) -> InventorySummary:
    groups: Dict[str, ItemTypeSummary] = {}
    low_stock_count = 0
    out_of_stock_count = 0

    for item in items:
        level = classify(item.quantity, item.low_stock_threshold)
        if level == StockLevel.OUT_OF_STOCK:
            out_of_stock_count += 1
        elif level == StockLevel.LOW_STOCK:
            low_stock_count += 1

        group = groups.get(item.item_type)
        if group is None:
            group = ItemTypeSummary(item_type=item.item_type, total_quantity=0, sizes={}, low_stock=False)
            groups[item.item_type] = group
        group.total_quantity += item.quantity
        group.sizes[item.size] = group.sizes.get(item.size, 0) + item.quantity
        if item.quantity <= item.low_stock_threshold:
            group.low_stock = True

    return InventorySummary(
        school_id=school_id,
        total_items=len(items),
        low_stock_count=low_stock_count,
        out_of_stock_count=out_of_stock_count,
        groups=sorted(groups.values(), key=lambda g: g.item_type),
    )


def restock_item(store: InventoryStore, item_id: str, quantity: int) -> InventoryItem:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidInput("Restock quantity must be a positive whole number.")
    updated = store.adjust_quantity(item_id, quantity)
    logger.info(
        "Restocked %s %s (%s) by %s, now %s",
        updated.school_id, updated.item_type, updated.size, quantity, updated.quantity,
    )
    return updated


def bulk_restock(store: InventoryStore, item_ids: List[str]) -> List[InventoryItem]:
    """Order twice the low-stock threshold for every listed item."""
    items = []
    for item_id in dict.fromkeys(item_ids):
        item = store.get_item(item_id)
        if item is None:
            raise ItemNotFound(f"Inventory item {item_id} not found")
        items.append(item)

    return [restock_item(store, item.id, item.low_stock_threshold * 2) for item in items]
