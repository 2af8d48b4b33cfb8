# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/services/stock_service.py

Ajuste de inventario tras un pago completado.

Regla:
- new_stock = max(0, stock - quantity) (nunca negativo)
- Cada línea es independiente: cualquier fallo (incluso uno no clasificado
  del catálogo) queda como ERROR, se notifica y no aborta las demás
- Líneas sin referencia al catálogo quedan SKIPPED (no cuentan como fallo)

El read-modify-write de cada producto se serializa con un lock por
product_id, de modo que dos pedidos concurrentes del mismo producto no
pierden decrementos dentro del proceso.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from app.modules.orders.adapters.catalog_adapter import MicroCMSCatalog
from app.modules.orders.adapters.notifier_adapter import SlackNotifier
from app.modules.orders.enums import StockOutcome
from app.modules.orders.errors import CatalogReadError, CatalogWriteError
from app.modules.orders.metrics import observe_stock_adjustment
from app.modules.orders.models import LineItem, StockAdjustment
from app.shared.utils.keyed_lock import KeyedLock

logger = logging.getLogger(__name__)


class StockService:
    """Decrementos de stock best-effort por línea de pedido."""

    def __init__(
        self,
        catalog: MicroCMSCatalog,
        notifier: SlackNotifier,
        locks: Optional[KeyedLock] = None,
    ) -> None:
        self.catalog = catalog
        self.notifier = notifier
        self._locks = locks or KeyedLock()

    async def decrement(self, item: LineItem) -> StockAdjustment:
        """
        Decrementa el stock de un producto y retorna el resultado.

        Raises:
            CatalogReadError / CatalogWriteError: propagados para que
            adjust_stock los convierta en un resultado ERROR.
        """
        async with self._locks.hold(item.product_id):
            product = await self.catalog.get_product(item.product_id)
            new_stock = max(0, product.stock - item.quantity)
            await self.catalog.set_stock(item.product_id, new_stock)

        logger.info(
            "stock_decremented product_id=%s qty=%s previous=%s new=%s",
            item.product_id,
            item.quantity,
            product.stock,
            new_stock,
        )
        return StockAdjustment(
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            outcome=StockOutcome.OK,
            previous_stock=product.stock,
            new_stock=new_stock,
        )

    async def adjust_stock(self, items: Sequence[LineItem]) -> List[StockAdjustment]:
        adjustments: List[StockAdjustment] = []

        for item in items:
            if not item.has_product_ref:
                logger.warning("stock_adjustment_skipped name=%s reason=no_product_ref", item.name)
                adjustment = StockAdjustment(
                    product_id="",
                    name=item.name,
                    quantity=item.quantity,
                    outcome=StockOutcome.SKIPPED,
                    reason="sin referencia al catálogo",
                )
            else:
                try:
                    adjustment = await self.decrement(item)
                except (CatalogReadError, CatalogWriteError) as e:
                    logger.error(
                        "stock_adjustment_failed product_id=%s error=%s", item.product_id, e
                    )
                    adjustment = await self._failed(item, e)
                except Exception as e:
                    logger.exception(
                        "stock_adjustment_unexpected_error product_id=%s", item.product_id
                    )
                    adjustment = await self._failed(item, e)

            observe_stock_adjustment(adjustment.outcome.value)
            adjustments.append(adjustment)

        return adjustments

    async def _failed(self, item: LineItem, error: Exception) -> StockAdjustment:
        await self.notifier.notify_error(
            str(error) or type(error).__name__,
            f"Actualización de stock fallida (producto {item.product_id}, {item.name})",
        )
        return StockAdjustment(
            product_id=item.product_id,
            name=item.name,
            quantity=item.quantity,
            outcome=StockOutcome.ERROR,
            reason=str(error) or type(error).__name__,
        )


__all__ = ["StockService"]

# Fin del archivo backend/app/modules/orders/services/stock_service.py
