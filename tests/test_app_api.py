import json
from importlib import reload

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient


@pytest.fixture()
def api_client(tmp_path, monkeypatch):
    catalog_path = tmp_path / "catalog.json"
    config_path = tmp_path / "system_config.json"
    catalog = {
        "products": [
            {"id": "SKU-1", "name": "Wireless Mouse", "visibilities": {"storefront": 30}},
            {"id": "SKU-2", "name": "Cable", "stock": 0, "is_closeout": True, "visibilities": {"storefront": 30, "outlet": 30}},
            {"id": "SKU-3", "name": "Charger", "stock": 4, "visibilities": {"storefront": 10, "outlet": 10}},
        ],
        "product_streams": [],
        "cross_sellings": [
            {
                "id": "xs-1",
                "product_id": "SKU-1",
                "name": "Accessories",
                "position": 1,
                "type": "productList",
                "assigned_products": [
                    {"id": "ap-1", "product_id": "SKU-3", "position": 2},
                    {"id": "ap-2", "product_id": "SKU-2", "position": 1},
                ],
            },
            {
                "id": "xs-2",
                "product_id": "SKU-3",
                "name": "Broken",
                "position": 1,
                "type": "productStream",
                "product_stream_id": "missing",
            },
        ],
    }
    catalog_path.write_text(json.dumps(catalog))
    config_path.write_text(
        json.dumps({"sales_channels": {"outlet": {"core.listing.hideCloseoutProductsWhenOutOfStock": True}}})
    )

    monkeypatch.setenv("CATALOG_PATH", str(catalog_path))
    monkeypatch.setenv("SYSTEM_CONFIG_PATH", str(config_path))

    from app import main

    reload(main)
    client = TestClient(main.app)

    yield client

    client.close()


def test_cross_selling_route_returns_ordered_groups(api_client: TestClient):
    response = api_client.post(
        "/store-api/product/SKU-1/cross-selling",
        json={"sales_channel_id": "storefront"},
    )
    assert response.status_code == 200
    payload = response.json()
    assert payload["product_id"] == "SKU-1"
    assert len(payload["elements"]) == 1
    element = payload["elements"][0]
    assert element["cross_selling"]["name"] == "Accessories"
    assert element["cross_selling"]["type"] == "productList"
    assert [product["id"] for product in element["products"]] == ["SKU-2", "SKU-3"]
    assert element["total"] == 2


def test_closeout_hiding_is_scoped_to_sales_channel(api_client: TestClient):
    response = api_client.post(
        "/store-api/product/SKU-1/cross-selling",
        json={"sales_channel_id": "outlet"},
    )
    assert response.status_code == 200
    element = response.json()["elements"][0]
    assert [product["id"] for product in element["products"]] == ["SKU-3"]
    assert element["total"] == 2


def test_request_validation(api_client: TestClient):
    response = api_client.post("/store-api/product/SKU-1/cross-selling", json={})
    assert response.status_code == 422


def test_broken_stream_fails_whole_request(api_client: TestClient):
    response = api_client.post(
        "/store-api/product/SKU-3/cross-selling",
        json={"sales_channel_id": "storefront"},
    )
    assert response.status_code == 500
    assert response.json()["detail"] == "Product stream not found: 'missing'"
