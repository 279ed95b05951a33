"""
Tests for the object pool.

Covers acquire/release bookkeeping, exhaustive reset of pooled fields,
handle lookup, and the saturation policy (fixed arena, oldest slot recycled).
"""

from dataclasses import dataclass, field
from typing import List

import pytest

from kiosk.pool import ObjectPool, PooledObject, PoolStats


@dataclass
class Spark(PooledObject):
    x: float = 0.0
    y: float = 0.0
    label: str = 'spark'
    trail: List[float] = field(default_factory=list)


@dataclass(kw_only=True)
class NoDefault(PooledObject):
    x: float


# ============================================================================
# PooledObject
# ============================================================================


class TestPooledObjectReset:
    """Test that reset() restores every declared field."""

    def test_reset_restores_defaults(self):
        """Test plain defaults are restored."""
        spark = Spark(x=5.0, y=7.0, label='hot')
        spark.reset()
        assert spark.x == 0.0
        assert spark.y == 0.0
        assert spark.label == 'spark'

    def test_reset_uses_fresh_default_factory(self):
        """Test mutable fields get a new object, not a shared one."""
        spark = Spark()
        old_trail = spark.trail
        old_trail.append(1.0)
        spark.reset()
        assert spark.trail == []
        assert spark.trail is not old_trail

    def test_reset_keeps_bookkeeping(self):
        """Test handle and active are left to the pool."""
        spark = Spark(handle=9, active=True, x=3.0)
        spark.reset()
        assert spark.handle == 9
        assert spark.active is True

    def test_field_without_default_raises(self):
        """Test a pooled field with no default is reported."""
        obj = NoDefault(x=1.0)
        with pytest.raises(TypeError, match="NoDefault.x"):
            obj.reset()


# ============================================================================
# ObjectPool
# ============================================================================


class TestObjectPoolAcquireRelease:
    """Test basic acquire and release."""

    def test_acquire_marks_active_with_fresh_handle(self):
        """Test every acquire yields a new, increasing handle."""
        pool = ObjectPool(Spark, max_size=4)
        a = pool.acquire()
        b = pool.acquire()
        assert a.active and b.active
        assert b.handle > a.handle > 0

    def test_release_makes_slot_reusable(self):
        """Test a released object is handed out again before growing."""
        pool = ObjectPool(Spark, max_size=4)
        a = pool.acquire()
        a.x = 42.0
        pool.release(a)
        b = pool.acquire()
        assert b is a
        assert b.x == 0.0
        assert len(pool) == 1

    def test_reacquire_changes_handle(self):
        """Test the same slot gets a new identity on each acquire."""
        pool = ObjectPool(Spark, max_size=1)
        a = pool.acquire()
        first = a.handle
        pool.release(a)
        assert pool.acquire().handle != first

    def test_release_is_idempotent(self):
        """Test releasing twice is a no-op the second time."""
        pool = ObjectPool(Spark, max_size=2)
        a = pool.acquire()
        pool.release(a)
        pool.release(a)
        assert pool.stats().active == 0
        assert not a.active

    def test_active_objects_is_snapshot_in_slot_order(self):
        """Test the active list is a copy in slot order."""
        pool = ObjectPool(Spark, max_size=4)
        a, b, c = pool.acquire(), pool.acquire(), pool.acquire()
        pool.release(b)
        active = pool.active_objects()
        assert active == [a, c]
        active.clear()
        assert len(pool.active_objects()) == 2

    def test_get_by_handle(self):
        """Test handle lookup finds only active objects."""
        pool = ObjectPool(Spark, max_size=4)
        a = pool.acquire()
        handle = a.handle
        assert pool.get(handle) is a
        pool.release(a)
        assert pool.get(handle) is None
        assert pool.get(999) is None

    def test_clear_deactivates_and_resets_all(self):
        """Test clear keeps the arena but empties it."""
        pool = ObjectPool(Spark, max_size=4)
        for _ in range(3):
            pool.acquire().x = 10.0
        pool.clear()
        assert len(pool) == 3
        assert pool.active_objects() == []
        assert all(obj.x == 0.0 for obj in pool._slots)

    def test_invalid_max_size(self):
        """Test a non-positive capacity is rejected."""
        with pytest.raises(ValueError):
            ObjectPool(Spark, max_size=0)


class TestObjectPoolSaturation:
    """Test behaviour once max_size objects are active."""

    def test_never_grows_past_max(self):
        """Test sustained pressure keeps the arena at max_size."""
        pool = ObjectPool(Spark, max_size=5)
        for _ in range(100):
            pool.acquire()
        assert len(pool) == 5
        assert pool.stats().total == 5
        assert pool.stats().active == 5

    def test_recycles_least_recently_acquired(self):
        """Test the slot acquired longest ago is reused."""
        pool = ObjectPool(Spark, max_size=3)
        a, b, c = pool.acquire(), pool.acquire(), pool.acquire()
        a.x = 1.0
        recycled = pool.acquire()
        assert recycled is a
        assert recycled.x == 0.0
        assert recycled.active

        # b is now the oldest acquisition
        assert pool.acquire() is b

    def test_recycled_slot_gets_new_handle(self):
        """Test the old handle no longer resolves after recycling."""
        pool = ObjectPool(Spark, max_size=1)
        a = pool.acquire()
        old = a.handle
        pool.acquire()
        assert pool.get(old) is None
        assert pool.get(a.handle) is a

    def test_evictions_counted(self):
        """Test stats report how many active slots were recycled."""
        pool = ObjectPool(Spark, max_size=2)
        for _ in range(5):
            pool.acquire()
        assert pool.stats() == PoolStats(total=2, active=2, inactive=0, evictions=3)

    def test_inactive_slot_preferred_over_eviction(self):
        """Test a free slot is used before anything is recycled."""
        pool = ObjectPool(Spark, max_size=2)
        a, b = pool.acquire(), pool.acquire()
        pool.release(b)
        assert pool.acquire() is b
        assert pool.stats().evictions == 0
        assert a.active
