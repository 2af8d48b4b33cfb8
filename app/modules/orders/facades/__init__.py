# -*- coding: utf-8 -*-
"""
backend/app/modules/orders/facades/__init__.py

Fachadas del módulo Orders: webhooks, fulfillment, checkout y reconciliación.

Autor: Tienda Backend
Fecha: 2026-10-19
"""
