"""
Distributed exclusivity locks.

Several service instances may race for the same office, so the lock has
to live in a shared store rather than in process memory. Callers depend
only on :class:`DistributedLock`; the backend is picked with the
``RESERVATION_LOCK_BACKEND`` setting.

Usage:
    lock = get_lock_backend()
    with lock.acquire("reservation_office_42", timeout=10, wait=3):
        ...  # held for at most ``timeout`` seconds
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator
from uuid import uuid4

from django.conf import settings  # type: ignore
from django.core.cache import caches  # type: ignore
from django.utils.module_loading import import_string  # type: ignore
from django_redis import get_redis_connection  # type: ignore
from redis.exceptions import LockError  # type: ignore

logger = logging.getLogger(__name__)


class LockTimeout(Exception):
    """Raised when a lock could not be acquired within the wait bound."""

    def __init__(self, key: str, wait: float):
        self.key = key
        self.wait = wait
        super().__init__(f"Could not acquire lock {key!r} within {wait}s")


class DistributedLock(ABC):
    """Mutual exclusion keyed by an arbitrary string."""

    @abstractmethod
    def acquire(self, key: str, *, timeout: float, wait: float):
        """
        Return a context manager holding the lock for ``key``.

        Blocks up to ``wait`` seconds, raising :class:`LockTimeout` when the
        lock is still taken. The lock expires by itself after ``timeout``
        seconds so a crashed holder cannot block others forever. Leaving
        the ``with`` block always releases it.
        """


class CacheLock(DistributedLock):
    """
    Lock built on the atomic ``add`` of a Django cache backend.

    Works with any backend whose ``add`` is atomic (redis, memcached,
    locmem). Only the holder's token releases the key.

    Release is a ``get`` followed by a ``delete``, which is not atomic: if
    the key expires between the two calls and another caller takes it,
    the former holder deletes the new holder's key. Keep ``timeout`` well
    above the time spent under the lock, or use ``RedisLock``, whose
    release is a single server-side check-and-delete.
    """

    def __init__(self, cache_alias: str = "default", poll_interval: float = 0.05):
        self.cache_alias = cache_alias
        self.poll_interval = poll_interval

    @contextmanager
    def acquire(self, key: str, *, timeout: float, wait: float) -> Iterator[None]:
        cache = caches[self.cache_alias]
        token = uuid4().hex
        deadline = time.monotonic() + wait
        while not cache.add(key, token, timeout):
            if time.monotonic() >= deadline:
                logger.warning(f"Lock {key} not acquired within {wait}s")
                raise LockTimeout(key, wait)
            time.sleep(self.poll_interval)
        logger.debug(f"Lock {key} acquired")
        try:
            yield
        finally:
            if cache.get(key) == token:
                cache.delete(key)
                logger.debug(f"Lock {key} released")
            else:
                logger.warning(f"Lock {key} expired before release")


class RedisLock(DistributedLock):
    """Lock backed by redis-py's ``Lock`` on the django-redis connection."""

    def __init__(self, cache_alias: str = "default"):
        self.cache_alias = cache_alias

    @contextmanager
    def acquire(self, key: str, *, timeout: float, wait: float) -> Iterator[None]:
        client = get_redis_connection(self.cache_alias)
        lock = client.lock(key, timeout=timeout, blocking_timeout=wait)
        if not lock.acquire():
            logger.warning(f"Lock {key} not acquired within {wait}s")
            raise LockTimeout(key, wait)
        logger.debug(f"Lock {key} acquired")
        try:
            yield
        finally:
            try:
                lock.release()
                logger.debug(f"Lock {key} released")
            except LockError:
                logger.warning(f"Lock {key} expired before release")


def get_lock_backend() -> DistributedLock:
    """Instantiate the lock class named by ``RESERVATION_LOCK_BACKEND``."""
    backend = getattr(settings, "RESERVATION_LOCK_BACKEND", "shared.infrastructure.locks.CacheLock")
    return import_string(backend)()
