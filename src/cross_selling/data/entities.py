"""Catalog entities read during cross-selling resolution."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from ..search.criteria import ASCENDING, DESCENDING, FieldSorting

VISIBILITY_LINK = 10
VISIBILITY_SEARCH = 20
VISIBILITY_ALL = 30

DEFAULT_STREAM_LIMIT = 24


class CrossSellingType(str, Enum):
    PRODUCT_LIST = "productList"
    PRODUCT_STREAM = "productStream"


@dataclass
class Product:
    id: str
    name: str
    product_number: str = ""
    parent_id: Optional[str] = None
    active: bool = True
    is_closeout: bool = False
    stock: int = 0
    price: float = 0.0
    manufacturer: str = ""
    category_ids: List[str] = field(default_factory=list)
    release_date: Optional[str] = None
    visibilities: Dict[str, int] = field(default_factory=dict)

    @property
    def available(self) -> bool:
        return not self.is_closeout or self.stock > 0


@dataclass
class AssignedProduct:
    """Link from a static cross-selling to one product, in curator order."""

    id: str
    product_id: str
    position: int = 0


@dataclass
class CrossSellingDefinition:
    """A named group of related products attached to one product.

    ``assigned_products`` is ``None`` when the association was not loaded.
    """

    id: str
    product_id: str
    name: str
    position: int = 0
    type: CrossSellingType = CrossSellingType.PRODUCT_LIST
    active: bool = True
    product_stream_id: Optional[str] = None
    limit: int = DEFAULT_STREAM_LIMIT
    sort_by: str = "name"
    sort_direction: str = ASCENDING
    assigned_products: Optional[List[AssignedProduct]] = None

    def __post_init__(self) -> None:
        self.type = CrossSellingType(self.type)
        if self.limit < 0:
            raise ValueError(f"Cross-selling {self.id} has a negative limit: {self.limit}")
        if self.sort_direction.upper() not in (ASCENDING, DESCENDING):
            raise ValueError(f"Cross-selling {self.id} has an unsupported sort direction: {self.sort_direction}")

    @property
    def sorting(self) -> FieldSorting:
        return FieldSorting(self.sort_by, self.sort_direction)


@dataclass
class ProductStream:
    """A saved product query; ``filters`` holds the serialized filter tree."""

    id: str
    name: str
    filters: List[Dict[str, object]] = field(default_factory=list)


@dataclass(frozen=True)
class SalesChannelContext:
    sales_channel_id: str
    language_id: str = "default"
