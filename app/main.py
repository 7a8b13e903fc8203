"""FastAPI application exposing the store API cross-selling route."""
from __future__ import annotations

import os
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from cross_selling.config import SystemConfigService
from cross_selling.data.catalog import read_catalog
from cross_selling.data.entities import SalesChannelContext
from cross_selling.exceptions import CrossSellingError
from cross_selling.logging_config import get_logger, setup_logging
from cross_selling.service import CrossSellingElement, build_route


def _resolve_catalog_path() -> Path:
    configured = os.environ.get("CATALOG_PATH")
    if configured:
        return Path(configured)
    return Path("data/sample_catalog.json")


def _resolve_system_config_path() -> Path:
    configured = os.environ.get("SYSTEM_CONFIG_PATH")
    if configured:
        return Path(configured)
    return Path("data/system_config.json")


setup_logging(os.environ.get("LOG_LEVEL", "INFO"))
log = get_logger(__name__)

app = FastAPI(title="Product Cross-Selling Store API")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
system_config = SystemConfigService(_resolve_system_config_path())
route = build_route(read_catalog(_resolve_catalog_path()), system_config)


class CrossSellingRequest(BaseModel):
    sales_channel_id: str = Field(..., min_length=1, max_length=64)
    language_id: Optional[str] = Field(default=None, max_length=64)

    def to_context(self) -> SalesChannelContext:
        if self.language_id:
            return SalesChannelContext(self.sales_channel_id.strip(), self.language_id.strip())
        return SalesChannelContext(self.sales_channel_id.strip())


def _serialize_element(element: CrossSellingElement) -> Dict[str, object]:
    cross_selling = asdict(element.cross_selling)
    cross_selling["type"] = element.cross_selling.type.value
    return {
        "cross_selling": cross_selling,
        "products": [asdict(product) for product in element.products],
        "total": element.total,
    }


@app.exception_handler(CrossSellingError)
async def cross_selling_error_handler(request: Request, exc: CrossSellingError) -> JSONResponse:
    log.error("Cross-selling request %s failed: %s", request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )


@app.post("/store-api/product/{product_id}/cross-selling")
def api_product_cross_selling(product_id: str, payload: CrossSellingRequest) -> Dict[str, object]:
    elements = route.load(product_id, payload.to_context())
    serialized: List[Dict[str, object]] = [_serialize_element(element) for element in elements]
    return {"product_id": product_id, "elements": serialized}
