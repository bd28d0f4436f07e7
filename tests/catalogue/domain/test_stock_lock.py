"""Domain tests for the per-product stock lock registry."""

import threading

from storefront.catalogue.stock import _lock_for, discard_stock_lock, has_stock_lock, reset_stock_locks, stock_lock


class TestStockLock:
    def test_same_product_shares_a_lock(self):
        assert _lock_for("prod-1") is _lock_for("prod-1")

    def test_different_products_have_different_locks(self):
        assert _lock_for("prod-1") is not _lock_for("prod-2")

    def test_lock_is_held_inside_the_block(self):
        with stock_lock("prod-1"):
            assert _lock_for("prod-1").locked()
        assert not _lock_for("prod-1").locked()

    def test_other_products_are_not_blocked(self):
        acquired = threading.Event()

        def reserve_other():
            with stock_lock("prod-2"):
                acquired.set()

        with stock_lock("prod-1"):
            worker = threading.Thread(target=reserve_other)
            worker.start()
            assert acquired.wait(timeout=2)
            worker.join()

    def test_reset_forgets_locks(self):
        lock = _lock_for("prod-1")
        reset_stock_locks()
        assert _lock_for("prod-1") is not lock

    def test_discard_forgets_one_product(self):
        _lock_for("prod-1")
        _lock_for("prod-2")

        discard_stock_lock("prod-1")

        assert not has_stock_lock("prod-1")
        assert has_stock_lock("prod-2")

    def test_discarding_an_unknown_product_is_a_no_op(self):
        discard_stock_lock("never-locked")
        assert not has_stock_lock("never-locked")
