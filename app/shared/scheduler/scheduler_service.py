# -*- coding: utf-8 -*-
"""
backend/app/shared/scheduler/scheduler_service.py

Programación de tareas periódicas en proceso con APScheduler.

Se usa para disparar la reconciliación sin depender de un cron externo.
Jobs en memoria: con varias réplicas cada una ejecuta su propio job.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from apscheduler.executors.asyncio import AsyncIOExecutor
from apscheduler.jobstores.memory import MemoryJobStore
from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.cron import CronTrigger

logger = logging.getLogger(__name__)


class SchedulerService:
    """
    Envoltura delgada sobre AsyncIOScheduler.

    - coalesce: ejecuciones perdidas se combinan en una
    - max_instances=1: una corrida de cada job a la vez
    """

    def __init__(self, timezone: str = "UTC"):
        self._scheduler = AsyncIOScheduler(
            jobstores={"default": MemoryJobStore()},
            executors={"default": AsyncIOExecutor()},
            job_defaults={
                "coalesce": True,
                "max_instances": 1,
                "misfire_grace_time": 30,
            },
            timezone=timezone,
        )
        self._started = False

    def start(self) -> None:
        if not self._started:
            self._scheduler.start()
            self._started = True
            logger.info("scheduler_started jobs=%s", len(self._scheduler.get_jobs()))

    def shutdown(self, wait: bool = True) -> None:
        if self._started:
            self._scheduler.shutdown(wait=wait)
            self._started = False
            logger.info("scheduler_stopped")

    def add_cron_job(
        self,
        func: Callable,
        job_id: str,
        cron_expression: str,
        **kwargs: Any,
    ) -> str:
        """
        Agrega un job con expresión cron de 5 campos ("m h dom mon dow").

        Raises:
            ValueError: si la expresión no tiene 5 campos o es inválida
        """
        if len(cron_expression.split()) != 5:
            raise ValueError("Expresión cron inválida (requiere 5 campos)")
        trigger = CronTrigger.from_crontab(cron_expression)

        self._scheduler.add_job(
            func=func,
            trigger=trigger,
            id=job_id,
            name=job_id,
            replace_existing=True,
            kwargs=kwargs,
        )
        logger.info("scheduler_job_added job_id=%s cron=%r", job_id, cron_expression)
        return job_id

    def get_jobs(self) -> List[Dict[str, Any]]:
        return [
            {
                "id": job.id,
                "name": job.name,
                "next_run": getattr(job, "next_run_time", None),
                "trigger": str(job.trigger),
            }
            for job in self._scheduler.get_jobs()
        ]

    def get_job_status(self, job_id: str) -> Optional[dict]:
        job = self._scheduler.get_job(job_id)
        if job is None:
            return None
        return {
            "id": job.id,
            "name": job.name,
            "next_run": getattr(job, "next_run_time", None),
            "trigger": str(job.trigger),
        }

    @property
    def is_running(self) -> bool:
        return self._started and self._scheduler.running


# Fin del archivo backend/app/shared/scheduler/scheduler_service.py
