"""JSON persistence for the catalog snapshot served by the in-memory repositories."""
from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from threading import Lock
from typing import Dict, List

from ..exceptions import CatalogError
from .entities import AssignedProduct, CrossSellingDefinition, CrossSellingType, Product, ProductStream

_write_lock = Lock()


@dataclass
class Catalog:
    products: List[Product] = field(default_factory=list)
    product_streams: List[ProductStream] = field(default_factory=list)
    cross_sellings: List[CrossSellingDefinition] = field(default_factory=list)


def _cross_selling_from_dict(row: Dict[str, object]) -> CrossSellingDefinition:
    row = dict(row)
    assigned = row.pop("assigned_products", None)
    definition = CrossSellingDefinition(**row)  # type: ignore[arg-type]
    if assigned is not None:
        definition.assigned_products = [AssignedProduct(**item) for item in assigned]  # type: ignore[union-attr]
    return definition


def catalog_from_dict(raw: Dict[str, object]) -> Catalog:
    try:
        return Catalog(
            products=[Product(**row) for row in raw.get("products", [])],  # type: ignore[union-attr]
            product_streams=[ProductStream(**row) for row in raw.get("product_streams", [])],  # type: ignore[union-attr]
            cross_sellings=[_cross_selling_from_dict(row) for row in raw.get("cross_sellings", [])],  # type: ignore[union-attr]
        )
    except (TypeError, ValueError) as exc:
        raise CatalogError(f"Malformed catalog entry: {exc}") from exc


def catalog_to_dict(catalog: Catalog) -> Dict[str, object]:
    payload = asdict(catalog)
    for row in payload["cross_sellings"]:
        row["type"] = CrossSellingType(row["type"]).value
    return payload


def read_catalog(path: Path) -> Catalog:
    if not path.exists():
        raise CatalogError(f"Catalog file not found: {path}")
    try:
        with path.open() as handle:
            raw = json.load(handle)
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog file {path} is not valid JSON: {exc}") from exc
    if not isinstance(raw, dict):
        raise CatalogError(f"Catalog file {path} must contain an object")
    return catalog_from_dict(raw)


def write_catalog(catalog: Catalog, path: Path) -> Path:
    """Rewrite the whole catalog file; concurrent writers are serialized."""
    with _write_lock:
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w") as handle:
            json.dump(catalog_to_dict(catalog), handle, indent=2)
    return path
