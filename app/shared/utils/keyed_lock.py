# -*- coding: utf-8 -*-
"""
backend/app/shared/utils/keyed_lock.py

Registro de asyncio.Lock por clave (serialización in-process por recurso).

Uso:
    locks = KeyedLock()
    async with locks.hold("prod_123"):
        ...

Los locks se liberan del registro cuando ya no hay holders ni waiters.
Solo serializa dentro de un proceso; con varias réplicas hace falta un
lock distribuido.

Autor: Tienda Backend
Fecha: 2026-10-19
"""

import asyncio
from contextlib import asynccontextmanager
from typing import AsyncIterator, Dict, Tuple


class KeyedLock:
    def __init__(self):
        self._locks: Dict[str, Tuple[asyncio.Lock, int]] = {}

    @asynccontextmanager
    async def hold(self, key: str) -> AsyncIterator[None]:
        lock, users = self._locks.get(key, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[key] = (lock, users + 1)
        try:
            async with lock:
                yield
        finally:
            lock, users = self._locks[key]
            if users <= 1:
                del self._locks[key]
            else:
                self._locks[key] = (lock, users - 1)

    def is_locked(self, key: str) -> bool:
        entry = self._locks.get(key)
        return bool(entry and entry[0].locked())

    def __len__(self) -> int:
        return len(self._locks)


__all__ = ["KeyedLock"]

# Fin del archivo backend/app/shared/utils/keyed_lock.py
