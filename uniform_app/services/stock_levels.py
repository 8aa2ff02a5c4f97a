"""Stock-level labels and the display percentage for inventory rows."""
from typing import Iterable, List

from uniform_app.models.inventory import InventoryItem, InventoryItemView, StockFilter, StockLevel


def classify(quantity: int, threshold: int) -> StockLevel:
    """Out of stock at zero, low stock at or below the threshold, good above it."""
    if quantity == 0:
        return StockLevel.OUT_OF_STOCK
    if quantity <= threshold:
        return StockLevel.LOW_STOCK
    return StockLevel.GOOD


def stock_percentage(quantity: int, threshold: int) -> float:
    """
    Fill level for progress bars: twice the threshold counts as full.
    Only used for display, never for the classification itself.
    """
    if threshold <= 0:
        return 100.0 if quantity > 0 else 0.0
    return min(quantity / (threshold * 2), 1) * 100


def matches_filter(item: InventoryItem, stock_filter: StockFilter) -> bool:
    if stock_filter == StockFilter.IN_STOCK:
        return item.quantity > 0
    if stock_filter == StockFilter.LOW_STOCK:
        return 0 < item.quantity <= item.low_stock_threshold
    if stock_filter == StockFilter.OUT_OF_STOCK:
        return item.quantity == 0
    return True


def to_view(item: InventoryItem) -> InventoryItemView:
    return InventoryItemView(
        **item.model_dump(),
        stock_level=classify(item.quantity, item.low_stock_threshold),
        stock_percentage=stock_percentage(item.quantity, item.low_stock_threshold),
    )


def to_views(items: Iterable[InventoryItem]) -> List[InventoryItemView]:
    return [to_view(item) for item in items]
