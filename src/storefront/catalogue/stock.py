"""Per-product stock locks.

A reservation reads the product's quantity, checks it and writes the
decremented value back. Holding the product's lock for the whole command
dispatch (which includes the unit-of-work commit) serialises concurrent
reservations of the same product inside this process. Reservations of
different products proceed in parallel.

Locks exist only for products that have been reserved; callers check the
product exists before taking one, and deleting a product discards its lock.
"""

import threading
from collections import defaultdict
from contextlib import contextmanager

import structlog

logger = structlog.get_logger(__name__)

_registry_lock = threading.Lock()
_product_locks: dict[str, threading.Lock] = defaultdict(threading.Lock)


def _lock_for(product_id: str) -> threading.Lock:
    with _registry_lock:
        return _product_locks[str(product_id)]


@contextmanager
def stock_lock(product_id: str):
    """Hold the stock lock of ``product_id`` for the duration of the block."""
    lock = _lock_for(product_id)
    with lock:
        logger.debug("Stock lock acquired", product_id=str(product_id))
        yield


def discard_stock_lock(product_id: str) -> None:
    with _registry_lock:
        _product_locks.pop(str(product_id), None)


def has_stock_lock(product_id: str) -> bool:
    with _registry_lock:
        return str(product_id) in _product_locks


def reset_stock_locks() -> None:
    """Forget all product locks (useful for testing)."""
    with _registry_lock:
        _product_locks.clear()
