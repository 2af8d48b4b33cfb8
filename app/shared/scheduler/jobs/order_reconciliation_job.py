# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/jobs/order_reconciliation_job.py

Job programado de reconciliación pagos ↔ ledger de pedidos.

Desactivado por defecto (RECONCILIATION_SCHEDULE_ENABLED=false): en
despliegues serverless el disparo llega por GET /api/check-orders.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.modules.orders.facades.reconciliation import ReconciliationJob
    from app.shared.config.settings_base import BaseAppSettings
    from app.shared.scheduler import SchedulerService

_logger = logging.getLogger("scheduler.order_reconciliation")

JOB_ID = "order_reconciliation"


async def run_order_reconciliation(job: "ReconciliationJob") -> None:
    """Un fallo de la corrida se registra; el siguiente disparo vuelve a intentar."""
    try:
        result = await job.run()
        _logger.info(
            "order_reconciliation_job_done checked=%s mismatches=%s",
            result.checked,
            len(result.mismatches),
        )
    except Exception as e:
        _logger.error("order_reconciliation_job_failed error=%s", e, exc_info=True)


def register_order_reconciliation_job(
    scheduler: "SchedulerService",
    job: "ReconciliationJob",
    settings: "BaseAppSettings",
) -> bool:
    """Registra el job si está habilitado. Retorna True si quedó programado."""
    if not settings.reconciliation_schedule_enabled:
        _logger.info("order_reconciliation_job_disabled")
        return False

    scheduler.add_cron_job(
        run_order_reconciliation,
        job_id=JOB_ID,
        cron_expression=settings.reconciliation_cron,
        job=job,
    )
    return True


__all__ = ["JOB_ID", "register_order_reconciliation_job", "run_order_reconciliation"]
