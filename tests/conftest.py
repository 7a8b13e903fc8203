from __future__ import annotations

from typing import Callable, List

import pytest

from cross_selling.config import SystemConfigService
from cross_selling.data.entities import (
    AssignedProduct,
    CrossSellingDefinition,
    CrossSellingType,
    Product,
    SalesChannelContext,
)

SALES_CHANNEL = "storefront"


@pytest.fixture()
def context() -> SalesChannelContext:
    return SalesChannelContext(SALES_CHANNEL)


@pytest.fixture()
def system_config() -> SystemConfigService:
    return SystemConfigService()


@pytest.fixture()
def make_product() -> Callable[..., Product]:
    def _make(product_id: str, **overrides: object) -> Product:
        values = {
            "name": product_id.title(),
            "stock": 10,
            "visibilities": {SALES_CHANNEL: 30},
        }
        values.update(overrides)
        return Product(id=product_id, **values)  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def make_static() -> Callable[..., CrossSellingDefinition]:
    def _make(definition_id: str, assigned: List[tuple], **overrides: object) -> CrossSellingDefinition:
        values = {
            "product_id": "MAIN",
            "name": definition_id,
            "type": CrossSellingType.PRODUCT_LIST,
            "assigned_products": [
                AssignedProduct(id=f"{definition_id}-{product_id}", product_id=product_id, position=position)
                for product_id, position in assigned
            ],
        }
        values.update(overrides)
        return CrossSellingDefinition(id=definition_id, **values)  # type: ignore[arg-type]

    return _make


@pytest.fixture()
def make_stream() -> Callable[..., CrossSellingDefinition]:
    def _make(definition_id: str, stream_id: str | None, **overrides: object) -> CrossSellingDefinition:
        values = {
            "product_id": "MAIN",
            "name": definition_id,
            "type": CrossSellingType.PRODUCT_STREAM,
            "product_stream_id": stream_id,
        }
        values.update(overrides)
        return CrossSellingDefinition(id=definition_id, **values)  # type: ignore[arg-type]

    return _make
