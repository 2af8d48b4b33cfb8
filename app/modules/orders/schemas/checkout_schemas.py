# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/schemas/checkout_schemas.py

Schemas Pydantic de los endpoints públicos de checkout y stock.
Los nombres JSON (productId, isActive) son el contrato con el frontend.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CheckoutItemIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    # Defaults vacíos: los faltantes los rechaza la fachada con 400 {error}
    product_id: str = Field(default="", alias="productId", description="ID del producto en el catálogo.")
    quantity: int = Field(default=0, description="Cantidad solicitada (≥ 1).")


class CheckoutRequest(BaseModel):
    """Carrito enviado por el frontend. Un carrito vacío se rechaza con 400 en la fachada."""

    items: List[CheckoutItemIn] = Field(default_factory=list)


class CheckoutResponse(BaseModel):
    url: str = Field(description="URL del checkout hospedado del proveedor.")


class StockCheckRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: Optional[str] = Field(default=None, alias="productId")


class StockCheckResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    stock: int
    is_active: bool = Field(alias="isActive")


class ErrorResponse(BaseModel):
    error: str


__all__ = [
    "CheckoutItemIn",
    "CheckoutRequest",
    "CheckoutResponse",
    "StockCheckRequest",
    "StockCheckResponse",
    "ErrorResponse",
]

# Fin del archivo backend/app/modules/orders/schemas/checkout_schemas.py
