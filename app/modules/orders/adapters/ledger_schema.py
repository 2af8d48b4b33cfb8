# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/adapters/ledger_schema.py

Esquema de columnas de la hoja de pedidos.

Un único esquema canónico (v1, 15 columnas A:O). La versión se expone en
configuración (LEDGER_SCHEMA_VERSION); agregar una versión nueva es
registrar otro LedgerSchema en SCHEMAS, no duplicar el flujo.

    A  order_id          I  shipping_address
    B  created_at        J  customer_name
    C  item names (\\n)   K  phone
    D  quantities (\\n)   L  status
    E  unit prices (\\n)  M  inventory_updated (TRUE/FALSE)
    F  total_amount      N  notes
    G  customer_email    O  dashboard_url
    H  postal_code

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, List, Sequence

from app.modules.orders.models import LineItem, OrderRecord

MULTI_VALUE_SEPARATOR = "\n"

# Con USER_ENTERED un texto que empieza así se evalúa como fórmula
FORMULA_PREFIXES = ("=", "+", "-", "@")
TEXT_ESCAPE = "'"


def _cell(row: Sequence, index: int) -> str:
    if index < len(row) and row[index] is not None:
        value = str(row[index])
        return value[1:] if value.startswith(TEXT_ESCAPE) else value
    return ""


def escape_text(value: str) -> str:
    """Fuerza texto literal en celdas con datos del comprador o del catálogo."""
    if value and value.startswith(FORMULA_PREFIXES):
        return TEXT_ESCAPE + value
    return value


def _to_int(value: str) -> int:
    cleaned = value.replace(",", "").replace("¥", "").strip()
    if not cleaned:
        return 0
    try:
        return int(float(cleaned))
    except ValueError:
        return 0


def _split(value: str) -> List[str]:
    return value.split(MULTI_VALUE_SEPARATOR) if value else []


def record_to_row_v1(record: OrderRecord) -> List:
    names = MULTI_VALUE_SEPARATOR.join(item.name for item in record.items)
    quantities = MULTI_VALUE_SEPARATOR.join(str(item.quantity) for item in record.items)
    prices = MULTI_VALUE_SEPARATOR.join(str(item.unit_price) for item in record.items)
    return [
        record.order_id,
        record.created_at,
        escape_text(names),
        quantities,
        prices,
        record.total_amount,
        escape_text(record.customer_email),
        escape_text(record.postal_code),
        escape_text(record.shipping_address),
        escape_text(record.customer_name),
        escape_text(record.phone),
        record.status,
        "TRUE" if record.inventory_updated else "FALSE",
        escape_text(record.notes),
        record.dashboard_url,
    ]


def row_to_record_v1(row: Sequence) -> OrderRecord:
    """Reconstruye el pedido desde la fila; tolera filas cortas (celdas vacías al final)."""
    names = _split(_cell(row, 2))
    quantities = _split(_cell(row, 3))
    prices = _split(_cell(row, 4))

    items = []
    for i, name in enumerate(names):
        items.append(
            LineItem(
                product_id="",
                name=name,
                quantity=_to_int(quantities[i]) if i < len(quantities) else 0,
                unit_price=_to_int(prices[i]) if i < len(prices) else 0,
            )
        )

    return OrderRecord(
        order_id=_cell(row, 0),
        created_at=_cell(row, 1),
        items=items,
        total_amount=_to_int(_cell(row, 5)),
        customer_email=_cell(row, 6),
        postal_code=_cell(row, 7),
        shipping_address=_cell(row, 8),
        customer_name=_cell(row, 9),
        phone=_cell(row, 10),
        status=_cell(row, 11),
        inventory_updated=_cell(row, 12).strip().upper() == "TRUE",
        notes=_cell(row, 13),
        dashboard_url=_cell(row, 14),
    )


@dataclass(frozen=True)
class LedgerSchema:
    version: str
    column_count: int
    order_id_column: int
    to_row: Callable[[OrderRecord], List]
    from_row: Callable[[Sequence], OrderRecord]


SCHEMAS: Dict[str, LedgerSchema] = {
    "v1": LedgerSchema(
        version="v1",
        column_count=15,
        order_id_column=0,
        to_row=record_to_row_v1,
        from_row=row_to_record_v1,
    ),
}


def get_schema(version: str) -> LedgerSchema:
    try:
        return SCHEMAS[version]
    except KeyError:
        raise ValueError(f"Esquema de ledger no registrado: {version!r}") from None


__all__ = [
    "LedgerSchema",
    "SCHEMAS",
    "escape_text",
    "get_schema",
    "record_to_row_v1",
    "row_to_record_v1",
]

# Fin del archivo backend/app/modules/orders/adapters/ledger_schema.py
