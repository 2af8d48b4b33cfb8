# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/__init__.py

Jobs programados en proceso (APScheduler).

Autor: Tienda Backend
Fecha: 2026-10-19
"""

from .scheduler_service import SchedulerService

__all__ = ["SchedulerService"]
