"""In-memory repositories executing :class:`Criteria` against catalog entities."""
from __future__ import annotations

import dataclasses
from typing import Generic, List, Sequence, TypeVar

from ..data.entities import VISIBILITY_LINK, Product, SalesChannelContext
from .criteria import Criteria, ProductVisibilityFilter, ProductAvailableFilter, sort_entities

T = TypeVar("T")


class EntityRepository(Generic[T]):
    """Searches a fixed list of entities.

    ``associations`` names the attributes that are only hydrated when a
    criteria asks for them through :meth:`Criteria.add_association`.
    """

    def __init__(self, entities: Sequence[T], associations: Sequence[str] = ()) -> None:
        self._entities = list(entities)
        self._associations = tuple(associations)

    def search(self, criteria: Criteria, context: SalesChannelContext) -> List[T]:
        matched = [entity for entity in self._entities if criteria.matches(entity)]
        if criteria.sortings:
            matched = sort_entities(matched, criteria.sortings)
        if criteria.limit is not None:
            matched = matched[: criteria.limit]
        return [self._detach(entity, criteria) for entity in matched]

    def _detach(self, entity: T, criteria: Criteria) -> T:
        skipped = {name: None for name in self._associations if name not in criteria.associations}
        if not skipped:
            return entity
        return dataclasses.replace(entity, **skipped)  # type: ignore[type-var]


class SalesChannelProductRepository(EntityRepository[Product]):
    """Product search scoped to a sales channel.

    Criteria without a visibility restriction get one for link visibility, so
    products hidden from the channel never leak into results.
    """

    def search(self, criteria: Criteria, context: SalesChannelContext) -> List[Product]:
        if not (criteria.has_filter(ProductAvailableFilter) or criteria.has_filter(ProductVisibilityFilter)):
            criteria = dataclasses.replace(criteria, filters=list(criteria.filters))
            criteria.add_filter(ProductAvailableFilter(context.sales_channel_id, VISIBILITY_LINK))
        return super().search(criteria, context)


class ProductListingLoader:
    """Listing search: variants collapse to the first hit per parent product."""

    def __init__(self, repository: SalesChannelProductRepository) -> None:
        self.repository = repository

    def load(self, criteria: Criteria, context: SalesChannelContext) -> List[Product]:
        unlimited = dataclasses.replace(criteria, limit=None)
        products = self.repository.search(unlimited, context)

        seen = set()
        collapsed: List[Product] = []
        for product in products:
            group = product.parent_id or product.id
            if group in seen:
                continue
            seen.add(group)
            collapsed.append(product)

        if criteria.limit is not None:
            collapsed = collapsed[: criteria.limit]
        return collapsed
