"""Resolved cross-selling groups returned to callers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

from ..data.entities import CrossSellingDefinition, Product


@dataclass
class CrossSellingElement:
    """A definition with its resolved products.

    For product lists ``total`` is the number of assigned products, even when
    fewer survive filtering; for streams it equals ``len(products)``.
    """

    cross_selling: CrossSellingDefinition
    products: List[Product] = field(default_factory=list)
    total: int = 0


class CrossSellingElementCollection:
    def __init__(self, elements: List[CrossSellingElement] | None = None) -> None:
        self._elements: List[CrossSellingElement] = list(elements or [])

    def add(self, element: CrossSellingElement) -> None:
        self._elements.append(element)

    def __iter__(self) -> Iterator[CrossSellingElement]:
        return iter(self._elements)

    def __len__(self) -> int:
        return len(self._elements)

    def __getitem__(self, index: int) -> CrossSellingElement:
        return self._elements[index]
