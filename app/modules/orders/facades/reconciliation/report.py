# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/reconciliation/report.py

Mensaje agregado de discrepancias para el canal de operaciones.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from __future__ import annotations

from typing import Any, Dict, List


def format_mismatch_line(mismatch: Dict[str, Any]) -> str:
    return (
        f"Sin registro: session={mismatch['session_id']}, "
        f"payment={mismatch['payment_intent_id']}, "
        f"amount=¥{mismatch['amount_total']}"
    )


def format_mismatch_report(mismatches: List[Dict[str, Any]], window_hours: int = 24) -> str:
    return "\n".join(
        [
            "⚠️ Chequeo de integridad de pedidos - discrepancias detectadas",
            "",
            f"Periodo revisado: últimas {window_hours} horas",
            f"Discrepancias: {len(mismatches)}",
            "",
            *(format_mismatch_line(m) for m in mismatches),
        ]
    )


__all__ = ["format_mismatch_line", "format_mismatch_report"]

# Fin del archivo backend/app/modules/orders/facades/reconciliation/report.py
