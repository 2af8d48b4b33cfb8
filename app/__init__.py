# -*- coding: utf-8 -*-
"""
backend/app/__init__.py

Paquete principal 'app' del backend de checkout y fulfillment de pedidos.

Módulos:
- app.main: aplicación FastAPI
- app.modules.orders: checkout, webhook de pago, fulfillment y reconciliación
- app.shared: configuración, scheduler, middleware y utilidades

Autor: Tienda Backend
Fecha: 2026-10-19
"""

__version__ = "0.1.0"

# Fin del archivo backend/app/__init__.py
