"""
Guard de una sola corrida de sync por proceso.

Motivacion:
- Dos corridas simultaneas contra la misma coleccion pueden crear el mismo
  item dos veces (ambas ven "no existe" y ambas hacen create).
- El motor no se serializa solo; la capa HTTP / CLI usa este guard.

No bloquea: si ya hay una corrida, se rechaza la nueva en lugar de
encolarla.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger

from classes_sync.shared.exceptions.sync import SyncAlreadyRunningError


class SyncRunGuard:
    """
    Lock no bloqueante por nombre de coleccion.

    Usa `threading.Lock` porque la corrida se ejecuta en un thread
    (`asyncio.to_thread`), no en el event loop.
    """

    _locks: dict[str, threading.Lock] = {}
    _meta_lock = threading.Lock()

    @classmethod
    def _get_or_create_lock(cls, key: str) -> threading.Lock:
        with cls._meta_lock:
            lock = cls._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                cls._locks[key] = lock
            return lock

    @classmethod
    @contextmanager
    def hold(cls, key: str = "default") -> Iterator[None]:
        """
        Context manager que toma el guard o falla de inmediato.

        Raises:
            SyncAlreadyRunningError: si otra corrida tiene el guard
        """
        lock = cls._get_or_create_lock(key)
        if not lock.acquire(blocking=False):
            logger.warning(f"Sync ya esta corriendo para '{key}'. Se rechaza la nueva corrida.")
            raise SyncAlreadyRunningError()
        try:
            yield
        finally:
            lock.release()

    @classmethod
    def is_running(cls, key: str = "default") -> bool:
        with cls._meta_lock:
            lock: Optional[threading.Lock] = cls._locks.get(key)
        return lock is not None and lock.locked()
