# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/enums/fulfillment_state_enum.py

Estados de la máquina de fulfillment de un pago completado.

    RECEIVED → VERIFIED → ITEMS_EXTRACTED → STOCK_ADJUSTED → RECORDED → NOTIFIED → DONE

Terminales alternativos:
- FAILED: firma inválida o error irrecuperable antes de RECORDED
- IGNORED: evento verificado de un tipo que no dispara fulfillment
- DUPLICATE: el pedido ya existe en el ledger (reentrega del proveedor)

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from enum import StrEnum


class FulfillmentState(StrEnum):
    RECEIVED = "received"
    VERIFIED = "verified"
    ITEMS_EXTRACTED = "items_extracted"
    STOCK_ADJUSTED = "stock_adjusted"
    RECORDED = "recorded"
    NOTIFIED = "notified"
    DONE = "done"
    FAILED = "failed"
    IGNORED = "ignored"
    DUPLICATE = "duplicate"

    @property
    def is_terminal(self) -> bool:
        return self in (
            FulfillmentState.DONE,
            FulfillmentState.FAILED,
            FulfillmentState.IGNORED,
            FulfillmentState.DUPLICATE,
        )


__all__ = ["FulfillmentState"]

# Fin del archivo backend/app/modules/orders/enums/fulfillment_state_enum.py
