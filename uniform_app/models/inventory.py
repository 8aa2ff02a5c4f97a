from enum import Enum
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from uniform_app.config import DEFAULT_LOW_STOCK_THRESHOLD
from uniform_app.models.base import CamelModel


class StockLevel(str, Enum):
    OUT_OF_STOCK = "out-of-stock"
    LOW_STOCK = "low-stock"
    GOOD = "good"


class StockFilter(str, Enum):
    ALL = "all"
    IN_STOCK = "in-stock"
    LOW_STOCK = "low-stock"
    OUT_OF_STOCK = "out-of-stock"


class SortField(str, Enum):
    ITEM_TYPE = "itemType"
    SIZE = "size"
    QUANTITY = "quantity"
    LOW_STOCK_THRESHOLD = "lowStockThreshold"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


class InventoryItemCreate(CamelModel):
    school_id: str = Field(..., min_length=1, description="School owning the stock.")
    item_type: str = Field(..., min_length=1, description="Uniform item, e.g. Shirt or Sweater.")
    size: str = Field(..., min_length=1, description="Size label, e.g. M or 32.")
    quantity: int = Field(0, ge=0, strict=True, description="Opening on-hand quantity.")
    low_stock_threshold: int = Field(
        DEFAULT_LOW_STOCK_THRESHOLD,
        ge=1,
        strict=True,
        description="Quantity at or below which the item needs reordering.",
    )

    @field_validator("school_id", "item_type", "size")
    @classmethod
    def strip_identity(cls, v: str) -> str:
        normalized = v.strip()
        if not normalized:
            raise ValueError("must not be blank")
        return normalized


class InventoryItem(CamelModel):
    id: str
    school_id: str
    item_type: str
    size: str
    quantity: int = Field(..., ge=0)
    low_stock_threshold: int


class InventoryItemView(InventoryItem):
    stock_level: StockLevel
    stock_percentage: float


class RestockRequest(CamelModel):
    quantity: int = Field(..., gt=0, strict=True, description="Units received into stock.")


class BulkRestockRequest(CamelModel):
    item_ids: List[str] = Field(..., min_length=1, description="Items to reorder at twice their threshold.")


class ItemTypeSummary(CamelModel):
    item_type: str
    total_quantity: int
    sizes: Dict[str, int]
    low_stock: bool


class InventorySummary(CamelModel):
    school_id: Optional[str] = None
    total_items: int
    low_stock_count: int
    out_of_stock_count: int
    groups: List[ItemTypeSummary]
