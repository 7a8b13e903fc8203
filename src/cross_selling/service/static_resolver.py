"""Resolves cross-sellings backed by a curated product list."""
from __future__ import annotations

import logging
from typing import Dict, List, Optional

from ..data.entities import VISIBILITY_LINK, CrossSellingDefinition, Product, SalesChannelContext
from ..search.criteria import Criteria, ProductAvailableFilter
from .availability import handle_available_stock
from .elements import CrossSellingElement
from .events import CrossSellingIdsCriteriaEvent, EventDispatcher
from .interfaces import ConfigReader, EntitySearcher

log = logging.getLogger(__name__)


def sort_by_id_array(products: List[Product], ids: List[str]) -> List[Product]:
    order: Dict[str, int] = {}
    for index, product_id in enumerate(ids):
        order.setdefault(product_id, index)
    return sorted(products, key=lambda product: order.get(product.id, len(ids)))


class StaticCrossSellingResolver:
    def __init__(
        self,
        product_repository: EntitySearcher[Product],
        system_config: ConfigReader,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.product_repository = product_repository
        self.system_config = system_config
        self.event_dispatcher = event_dispatcher

    def resolve(
        self,
        cross_selling: CrossSellingDefinition,
        context: SalesChannelContext,
    ) -> Optional[CrossSellingElement]:
        if not cross_selling.assigned_products:
            return None

        assigned = sorted(cross_selling.assigned_products, key=lambda item: item.position)
        ids = [item.product_id for item in assigned]
        if not ids:
            return None

        criteria = Criteria(ids=list(ids))
        criteria.add_filter(ProductAvailableFilter(context.sales_channel_id, VISIBILITY_LINK))
        criteria = handle_available_stock(criteria, context, self.system_config)

        event = self.event_dispatcher.dispatch(
            CrossSellingIdsCriteriaEvent(cross_selling, criteria, context)
        )

        products = self.product_repository.search(event.criteria, context)
        products = sort_by_id_array(products, ids)
        log.debug(
            "Cross-selling %s resolved %d of %d assigned products",
            cross_selling.id,
            len(products),
            len(assigned),
        )

        return CrossSellingElement(
            cross_selling=cross_selling,
            products=products,
            total=len(cross_selling.assigned_products),
        )
