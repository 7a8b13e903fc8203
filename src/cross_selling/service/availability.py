"""Closeout handling shared by both resolvers."""
from __future__ import annotations

import logging

from ..config import HIDE_CLOSEOUT_PRODUCTS_KEY
from ..data.entities import SalesChannelContext
from ..exceptions import ConfigLookupError
from ..search.criteria import Criteria, ProductCloseoutFilter
from .interfaces import ConfigReader

log = logging.getLogger(__name__)


def hide_closeout_products(system_config: ConfigReader, sales_channel_id: str) -> bool:
    try:
        return system_config.get_bool(HIDE_CLOSEOUT_PRODUCTS_KEY, sales_channel_id)
    except ConfigLookupError as exc:
        log.warning("Closeout config unavailable for sales channel %s, showing closeouts: %s", sales_channel_id, exc)
        return False


def handle_available_stock(
    criteria: Criteria,
    context: SalesChannelContext,
    system_config: ConfigReader,
) -> Criteria:
    """Exclude out-of-stock closeout products when the sales channel hides them."""
    if not hide_closeout_products(system_config, context.sales_channel_id):
        return criteria
    criteria.add_filter(ProductCloseoutFilter())
    return criteria
