"""Cross-selling resolution services."""

from .elements import CrossSellingElement, CrossSellingElementCollection
from .events import (
    CrossSellingIdsCriteriaEvent,
    CrossSellingsLoadedEvent,
    CrossSellingStreamCriteriaEvent,
    EventDispatcher,
)
from .route import ProductCrossSellingRoute, build_route

__all__ = [
    "CrossSellingElement",
    "CrossSellingElementCollection",
    "CrossSellingIdsCriteriaEvent",
    "CrossSellingStreamCriteriaEvent",
    "CrossSellingsLoadedEvent",
    "EventDispatcher",
    "ProductCrossSellingRoute",
    "build_route",
]
