# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/adapters/catalog_adapter.py

Cliente del catálogo headless (microCMS, API de contenidos).

Operaciones:
- get_product(id): GET /api/v1/{endpoint}/{id}
- set_stock(id, new_stock): PATCH /api/v1/{endpoint}/{id} con {"stock": n}

Sin token de concurrencia optimista: la serialización por producto vive en
services/stock_service.py.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from app.modules.orders.errors import CatalogReadError, CatalogWriteError
from app.modules.orders.models import ProductStock

logger = logging.getLogger(__name__)

API_KEY_HEADER = "X-MICROCMS-API-KEY"


def _to_product(product_id: str, data: Dict[str, Any]) -> ProductStock:
    images = data.get("images") or []
    texts = data.get("text") or []
    description = ""
    if texts and isinstance(texts[0], dict):
        description = texts[0].get("description") or ""
    return ProductStock(
        product_id=str(data.get("id") or product_id),
        name=str(data.get("name") or ""),
        price=int(data.get("price") or 0),
        stock=int(data.get("stock") or 0),
        is_active=bool(data.get("isActive")),
        description=description or str(data.get("size") or ""),
        image_url=(images[0] or {}).get("url") if images else None,
    )


class MicroCMSCatalog:
    """Lectura/escritura de stock de productos en microCMS."""

    def __init__(
        self,
        service_domain: Optional[str],
        api_key: Optional[str],
        http_client: httpx.AsyncClient,
        endpoint: str = "products",
    ):
        self.service_domain = service_domain
        self.api_key = api_key or ""
        self.endpoint = endpoint
        self._http = http_client

    def _url(self, product_id: str) -> str:
        return f"https://{self.service_domain}.microcms.io/api/v1/{self.endpoint}/{product_id}"

    def _headers(self) -> Dict[str, str]:
        return {API_KEY_HEADER: self.api_key}

    async def get_product(self, product_id: str) -> ProductStock:
        if not product_id:
            raise CatalogReadError("product_id vacío", product_id=product_id)
        if not self.service_domain:
            raise CatalogReadError("MICROCMS_SERVICE_DOMAIN no configurado", product_id=product_id)

        try:
            response = await self._http.get(self._url(product_id), headers=self._headers())
        except httpx.HTTPError as e:
            raise CatalogReadError(f"catálogo inaccesible: {e!r}", product_id=product_id) from e

        if response.status_code == 404:
            raise CatalogReadError(f"producto desconocido: {product_id}", product_id=product_id)
        if response.status_code >= 400:
            raise CatalogReadError(
                f"lectura de producto falló: {response.status_code}", product_id=product_id
            )

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogReadError(f"respuesta inválida del catálogo: {e}", product_id=product_id) from e
        if not isinstance(data, dict):
            raise CatalogReadError(
                f"respuesta inválida del catálogo: se esperaba un objeto, llegó {type(data).__name__}",
                product_id=product_id,
            )

        try:
            return _to_product(product_id, data)
        except (ValueError, TypeError, AttributeError, KeyError, IndexError) as e:
            raise CatalogReadError(f"respuesta inválida del catálogo: {e}", product_id=product_id) from e

    async def set_stock(self, product_id: str, new_stock: int) -> None:
        if isinstance(new_stock, bool) or not isinstance(new_stock, int) or new_stock < 0:
            raise ValueError(f"new_stock debe ser entero no negativo, recibido {new_stock!r}")
        if not self.service_domain:
            raise CatalogWriteError("MICROCMS_SERVICE_DOMAIN no configurado", product_id=product_id)

        try:
            response = await self._http.patch(
                self._url(product_id),
                headers=self._headers(),
                json={"stock": new_stock},
            )
        except httpx.HTTPError as e:
            raise CatalogWriteError(f"catálogo inaccesible: {e!r}", product_id=product_id) from e

        if response.status_code >= 400:
            raise CatalogWriteError(
                f"Failed to update stock: {response.status_code}", product_id=product_id
            )

        logger.info("catalog_stock_updated product_id=%s stock=%s", product_id, new_stock)


__all__ = ["MicroCMSCatalog", "API_KEY_HEADER"]

# Fin del archivo backend/app/modules/orders/adapters/catalog_adapter.py
