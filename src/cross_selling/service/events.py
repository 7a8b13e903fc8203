"""Extension points dispatched while cross-sellings are resolved."""
from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, List, Type, TypeVar

from ..data.entities import CrossSellingDefinition, SalesChannelContext
from ..search.criteria import Criteria
from .elements import CrossSellingElementCollection

E = TypeVar("E")


@dataclass
class CrossSellingStreamCriteriaEvent:
    """Dispatched before a stream-derived criteria is executed.

    Listeners may mutate ``criteria`` in place or assign a new one; the
    resolver executes whatever ``criteria`` holds afterwards.
    """

    cross_selling: CrossSellingDefinition
    criteria: Criteria
    context: SalesChannelContext


@dataclass
class CrossSellingIdsCriteriaEvent:
    """Dispatched before the criteria of a static product list is executed."""

    cross_selling: CrossSellingDefinition
    criteria: Criteria
    context: SalesChannelContext


@dataclass
class CrossSellingsLoadedEvent:
    elements: CrossSellingElementCollection
    context: SalesChannelContext


class EventDispatcher:
    """Synchronous dispatcher; listeners run in subscription order."""

    def __init__(self) -> None:
        self._listeners: DefaultDict[type, List[Callable[[object], None]]] = defaultdict(list)

    def subscribe(self, event_type: Type[E], listener: Callable[[E], None]) -> None:
        self._listeners[event_type].append(listener)  # type: ignore[arg-type]

    def dispatch(self, event: E) -> E:
        for listener in list(self._listeners[type(event)]):
            listener(event)
        return event
