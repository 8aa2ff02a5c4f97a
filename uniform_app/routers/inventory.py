from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from uniform_app.models.inventory import (
    BulkRestockRequest,
    InventoryItemCreate,
    InventoryItemView,
    InventorySummary,
    RestockRequest,
    SortField,
    SortOrder,
    StockFilter,
)
from uniform_app.services import inventory as inventory_service
from uniform_app.services.stock_levels import to_view, to_views
from uniform_app.services.store import InventoryStore, get_store

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory"]
)


@router.post("", response_model=InventoryItemView, status_code=status.HTTP_201_CREATED)
def create_inventory_item(payload: InventoryItemCreate, store: InventoryStore = Depends(get_store)):
    """Add a new (school, item type, size) stock row. Duplicate rows are rejected with 409."""
    return to_view(store.create_item(payload))


@router.get("/all/seller", response_model=List[InventoryItemView])
def read_all_inventory(store: InventoryStore = Depends(get_store)):
    return to_views(store.list_items())


@router.post("/restock/bulk", response_model=List[InventoryItemView])
def bulk_restock(request: BulkRestockRequest, store: InventoryStore = Depends(get_store)):
    """Reorder every selected item at twice its low-stock threshold."""
    return to_views(inventory_service.bulk_restock(store, request.item_ids))


@router.post("/{item_id}/restock", response_model=InventoryItemView)
def restock_item(item_id: str, request: RestockRequest, store: InventoryStore = Depends(get_store)):
    return to_view(inventory_service.restock_item(store, item_id, request.quantity))


@router.get("/{school_id}/summary", response_model=InventorySummary)
def read_inventory_summary(school_id: str, store: InventoryStore = Depends(get_store)):
    return inventory_service.summarize(store.list_items(school_id), school_id=school_id)


@router.get("/{school_id}", response_model=List[InventoryItemView])
def read_school_inventory(
    school_id: str,
    stock_status: StockFilter = Query(StockFilter.ALL, alias="status"),
    search: Optional[str] = None,
    sort: Optional[SortField] = None,
    order: SortOrder = SortOrder.ASC,
    store: InventoryStore = Depends(get_store),
):
    """
    List a school's stock rows.
    - **status**: `all`, `in-stock`, `low-stock` or `out-of-stock`.
    - **search**: case-insensitive match on item type or size.
    - **sort** / **order**: `itemType`, `size`, `quantity` or `lowStockThreshold`, `asc` or `desc`.
    """
    return inventory_service.query_items(
        store.list_items(school_id),
        stock_filter=stock_status,
        search=search,
        sort=sort,
        order=order,
    )
