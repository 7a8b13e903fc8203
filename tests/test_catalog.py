from __future__ import annotations

import json
from pathlib import Path

import pytest

from cross_selling.data.catalog import Catalog, read_catalog, write_catalog
from cross_selling.data.entities import (
    AssignedProduct,
    CrossSellingDefinition,
    CrossSellingType,
    Product,
    ProductStream,
)
from cross_selling.exceptions import CatalogError


def test_catalog_file_roundtrip(tmp_path: Path) -> None:
    catalog = Catalog(
        products=[Product(id="SKU-1", name="Widget", visibilities={"storefront": 30})],
        product_streams=[ProductStream(id="s1", name="All", filters=[{"type": "equals", "field": "active", "value": True}])],
        cross_sellings=[
            CrossSellingDefinition(
                id="xs",
                product_id="SKU-1",
                name="Accessories",
                type=CrossSellingType.PRODUCT_STREAM,
                product_stream_id="s1",
                limit=5,
            ),
            CrossSellingDefinition(
                id="xs-2",
                product_id="SKU-1",
                name="Bundle",
                assigned_products=[AssignedProduct(id="ap", product_id="SKU-1", position=2)],
            ),
        ],
    )

    path = write_catalog(catalog, tmp_path / "nested" / "catalog.json")

    assert json.loads(path.read_text())["cross_sellings"][0]["type"] == "productStream"
    assert read_catalog(path) == catalog


def test_sample_catalog_is_loadable() -> None:
    catalog = read_catalog(Path(__file__).resolve().parents[1] / "data" / "sample_catalog.json")

    assert catalog.cross_sellings
    assert all(isinstance(item.type, CrossSellingType) for item in catalog.cross_sellings)


def test_missing_catalog_raises(tmp_path: Path) -> None:
    with pytest.raises(CatalogError):
        read_catalog(tmp_path / "absent.json")


@pytest.mark.parametrize(
    "content",
    [
        "{oops",
        "[]",
        json.dumps({"products": [{"id": "A"}]}),
        json.dumps({"cross_sellings": [{"id": "x", "product_id": "A", "name": "X", "type": "bundle"}]}),
        json.dumps({"cross_sellings": [{"id": "x", "product_id": "A", "name": "X", "limit": -1}]}),
        json.dumps({"cross_sellings": [{"id": "x", "product_id": "A", "name": "X", "sort_direction": "up"}]}),
    ],
)
def test_malformed_catalog_raises(tmp_path: Path, content: str) -> None:
    path = tmp_path / "catalog.json"
    path.write_text(content)

    with pytest.raises(CatalogError):
        read_catalog(path)
