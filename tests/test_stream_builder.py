from __future__ import annotations

import pytest

from cross_selling.data.entities import Product, ProductStream, SalesChannelContext
from cross_selling.exceptions import InvalidFilterError, NoStreamFilterError, StreamNotFoundError
from cross_selling.search.criteria import EqualsFilter, NotFilter
from cross_selling.search.stream_builder import ProductStreamBuilder


@pytest.fixture()
def builder() -> ProductStreamBuilder:
    return ProductStreamBuilder(
        [
            ProductStream(
                id="contoso",
                name="Contoso",
                filters=[
                    {"type": "equals", "field": "product.manufacturer", "value": "Contoso"},
                    {"type": "not", "queries": [{"type": "equals", "field": "id", "value": "MAIN"}]},
                ],
            ),
            ProductStream(id="empty", name="Empty"),
            ProductStream(id="broken", name="Broken", filters=[{"type": "between"}]),
        ]
    )


def test_build_filters_compiles_every_stored_filter(
    builder: ProductStreamBuilder, context: SalesChannelContext
) -> None:
    filters = builder.build_filters("contoso", context)

    assert filters[0] == EqualsFilter("product.manufacturer", "Contoso")
    assert isinstance(filters[1], NotFilter)
    assert not filters[1].matches(Product(id="MAIN", name="Main"))


def test_unknown_stream_raises(builder: ProductStreamBuilder, context: SalesChannelContext) -> None:
    with pytest.raises(StreamNotFoundError) as excinfo:
        builder.build_filters("missing", context)
    assert excinfo.value.stream_id == "missing"


def test_stream_without_filters_raises(builder: ProductStreamBuilder, context: SalesChannelContext) -> None:
    with pytest.raises(NoStreamFilterError):
        builder.build_filters("empty", context)


def test_malformed_stream_raises(builder: ProductStreamBuilder, context: SalesChannelContext) -> None:
    with pytest.raises(InvalidFilterError):
        builder.build_filters("broken", context)
