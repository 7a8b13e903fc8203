"""Resolve the cross-sellings of a product from a local catalog snapshot."""
from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT / "src"))

from cross_selling.config import SystemConfigService
from cross_selling.data.catalog import read_catalog
from cross_selling.data.entities import SalesChannelContext
from cross_selling.logging_config import setup_logging
from cross_selling.service import build_route


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("product_id", help="Product whose cross-sellings are resolved.")
    parser.add_argument(
        "--catalog",
        type=Path,
        default=Path("data/sample_catalog.json"),
        help="Path to the catalog JSON snapshot.",
    )
    parser.add_argument(
        "--system-config",
        type=Path,
        default=Path("data/system_config.json"),
        help="Path to the sales-channel configuration JSON file.",
    )
    parser.add_argument("--sales-channel", default="storefront")
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    setup_logging(args.log_level)

    route = build_route(read_catalog(args.catalog), SystemConfigService(args.system_config))
    elements = route.load(args.product_id, SalesChannelContext(args.sales_channel))

    output = [
        {
            "name": element.cross_selling.name,
            "type": element.cross_selling.type.value,
            "total": element.total,
            "products": [product.id for product in element.products],
        }
        for element in elements
    ]
    print(json.dumps(output, indent=2))


if __name__ == "__main__":
    main()
