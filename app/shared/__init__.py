# -*- coding: utf-8 -*-
"""
backend/app/shared/__init__.py

Infraestructura compartida: configuración, middleware, scheduler y utilidades.
No inicializa settings en import-time para no afectar la recolección de tests.
"""
