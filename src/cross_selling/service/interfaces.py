"""Collaborator protocols the resolution pipeline depends on."""
from __future__ import annotations

from typing import List, Optional, Protocol, TypeVar, runtime_checkable

from ..data.entities import SalesChannelContext
from ..search.criteria import Criteria, Filter

T_co = TypeVar("T_co", covariant=True)


@runtime_checkable
class EntitySearcher(Protocol[T_co]):
    def search(self, criteria: Criteria, context: SalesChannelContext) -> List[T_co]: ...


@runtime_checkable
class ListingLoader(Protocol[T_co]):
    def load(self, criteria: Criteria, context: SalesChannelContext) -> List[T_co]: ...


@runtime_checkable
class StreamFilterBuilder(Protocol):
    def build_filters(self, stream_id: str, context: SalesChannelContext) -> List[Filter]: ...


@runtime_checkable
class ConfigReader(Protocol):
    def get_bool(self, key: str, sales_channel_id: Optional[str] = None) -> bool: ...
