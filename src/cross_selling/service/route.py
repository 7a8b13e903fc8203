"""Loads the cross-sellings of a product for a sales channel."""
from __future__ import annotations

import logging
from typing import List, Optional

from ..config import SystemConfigService
from ..data.catalog import Catalog
from ..data.entities import CrossSellingDefinition, CrossSellingType, Product, SalesChannelContext
from ..search.criteria import ASCENDING, Criteria, EqualsFilter, FieldSorting
from ..search.repository import EntityRepository, ProductListingLoader, SalesChannelProductRepository
from ..search.stream_builder import ProductStreamBuilder
from .elements import CrossSellingElement, CrossSellingElementCollection
from .events import CrossSellingsLoadedEvent, EventDispatcher
from .interfaces import ConfigReader, EntitySearcher, ListingLoader, StreamFilterBuilder
from .static_resolver import StaticCrossSellingResolver
from .stream_resolver import StreamCrossSellingResolver

log = logging.getLogger(__name__)


def use_product_stream(cross_selling: CrossSellingDefinition) -> bool:
    return (
        cross_selling.type == CrossSellingType.PRODUCT_STREAM
        and cross_selling.product_stream_id is not None
    )


class ProductCrossSellingRoute:
    """Resolves every active cross-selling of a product, in position order.

    Groups without products are dropped. Errors raised while loading
    definitions or resolving any group propagate to the caller, so a request
    either yields the complete collection or fails.
    """

    def __init__(
        self,
        cross_selling_repository: EntitySearcher[CrossSellingDefinition],
        event_dispatcher: EventDispatcher,
        stream_builder: StreamFilterBuilder,
        product_repository: EntitySearcher[Product],
        system_config: ConfigReader,
        listing_loader: ListingLoader[Product],
    ) -> None:
        self.cross_selling_repository = cross_selling_repository
        self.event_dispatcher = event_dispatcher
        self.static_resolver = StaticCrossSellingResolver(product_repository, system_config, event_dispatcher)
        self.stream_resolver = StreamCrossSellingResolver(
            stream_builder, listing_loader, system_config, event_dispatcher
        )

    def load(self, product_id: str, context: SalesChannelContext) -> CrossSellingElementCollection:
        cross_sellings = self.load_cross_sellings(product_id, context)

        elements = CrossSellingElementCollection()
        for cross_selling in cross_sellings:
            element = self.resolve(cross_selling, context)
            if element is None or not element.products:
                log.debug("Skipping empty cross-selling %s", cross_selling.id)
                continue
            elements.add(element)

        self.event_dispatcher.dispatch(CrossSellingsLoadedEvent(elements, context))
        log.info(
            "Loaded %d of %d cross-selling(s) for product %s in sales channel %s",
            len(elements),
            len(cross_sellings),
            product_id,
            context.sales_channel_id,
        )
        return elements

    def resolve(
        self,
        cross_selling: CrossSellingDefinition,
        context: SalesChannelContext,
    ) -> Optional[CrossSellingElement]:
        if use_product_stream(cross_selling):
            return self.stream_resolver.resolve(cross_selling, context)
        return self.static_resolver.resolve(cross_selling, context)

    def load_cross_sellings(self, product_id: str, context: SalesChannelContext) -> List[CrossSellingDefinition]:
        criteria = Criteria()
        criteria.add_association("assigned_products").add_filter(
            EqualsFilter("product_id", product_id),
            EqualsFilter("active", True),
        ).add_sorting(FieldSorting("position", ASCENDING))
        return self.cross_selling_repository.search(criteria, context)


def build_route(
    catalog: Catalog,
    system_config: SystemConfigService,
    event_dispatcher: Optional[EventDispatcher] = None,
) -> ProductCrossSellingRoute:
    """Wire a route over the in-memory repositories of ``catalog``."""
    product_repository = SalesChannelProductRepository(catalog.products)
    return ProductCrossSellingRoute(
        cross_selling_repository=EntityRepository(catalog.cross_sellings, associations=["assigned_products"]),
        event_dispatcher=event_dispatcher or EventDispatcher(),
        stream_builder=ProductStreamBuilder(catalog.product_streams),
        product_repository=product_repository,
        system_config=system_config,
        listing_loader=ProductListingLoader(product_repository),
    )
