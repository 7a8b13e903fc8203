"""Resolves cross-sellings backed by a product stream."""
from __future__ import annotations

import logging

from ..data.entities import CrossSellingDefinition, Product, SalesChannelContext
from ..exceptions import StreamError
from ..search.criteria import Criteria
from .availability import handle_available_stock
from .elements import CrossSellingElement
from .events import CrossSellingStreamCriteriaEvent, EventDispatcher
from .interfaces import ConfigReader, ListingLoader, StreamFilterBuilder

log = logging.getLogger(__name__)


class StreamCrossSellingResolver:
    def __init__(
        self,
        stream_builder: StreamFilterBuilder,
        listing_loader: ListingLoader[Product],
        system_config: ConfigReader,
        event_dispatcher: EventDispatcher,
    ) -> None:
        self.stream_builder = stream_builder
        self.listing_loader = listing_loader
        self.system_config = system_config
        self.event_dispatcher = event_dispatcher

    def resolve(
        self,
        cross_selling: CrossSellingDefinition,
        context: SalesChannelContext,
    ) -> CrossSellingElement:
        stream_id = cross_selling.product_stream_id
        if stream_id is None:
            raise StreamError(f"Cross-selling {cross_selling.id} has no product stream")
        filters = self.stream_builder.build_filters(stream_id, context)

        criteria = Criteria()
        criteria.add_filter(*filters).set_limit(cross_selling.limit).add_sorting(cross_selling.sorting)
        criteria = handle_available_stock(criteria, context, self.system_config)

        event = self.event_dispatcher.dispatch(
            CrossSellingStreamCriteriaEvent(cross_selling, criteria, context)
        )

        products = self.listing_loader.load(event.criteria, context)
        log.debug(
            "Cross-selling %s resolved %d product(s) from stream %s",
            cross_selling.id,
            len(products),
            stream_id,
        )

        return CrossSellingElement(
            cross_selling=cross_selling,
            products=products,
            total=len(products),
        )
