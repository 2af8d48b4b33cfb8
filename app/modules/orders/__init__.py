# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/__init__.py

Módulo Orders: checkout, fulfillment de pagos completados y reconciliación
contra el ledger de pedidos.

Autor: Tienda Backend
Fecha: 2026-10-19
"""
