"""
Object pool for high-churn game entities.

Falling items and score popups are created and destroyed many times per
second. The pool keeps a fixed arena of objects and hands them out again
instead of allocating new ones each frame.

Usage:
    @dataclass
    class Spark(PooledObject):
        x: float = 0.0
        y: float = 0.0

    pool = ObjectPool(Spark, max_size=50)
    spark = pool.acquire()
    spark.x = 10.0
    ...
    pool.release(spark)

Saturation policy:
    Once ``max_size`` objects exist the arena never grows. If every slot is
    active, ``acquire()`` recycles the slot that was acquired longest ago,
    even though it is still in use. Such evictions are counted in
    ``stats().evictions``.
"""
from dataclasses import MISSING, dataclass, fields
from typing import Callable, Generic, List, Optional, TypeVar

from kiosk.logging import get_logger

log = get_logger('pool')

_BOOKKEEPING_FIELDS = ('handle', 'active')


@dataclass
class PooledObject:
    """Base for objects that live in an ObjectPool.

    ``reset()`` restores every dataclass field to its declared default, so
    a subclass cannot forget a field. Every field of a subclass must
    therefore have a default or a default_factory.

    Attributes:
        handle: Identity assigned on each acquire (0 while never acquired)
        active: Whether the object is currently handed out
    """
    handle: int = 0
    active: bool = False

    def reset(self) -> None:
        """Restore every field except the pool bookkeeping to its default."""
        for f in fields(self):
            if f.name in _BOOKKEEPING_FIELDS:
                continue
            if f.default is not MISSING:
                setattr(self, f.name, f.default)
            elif f.default_factory is not MISSING:
                setattr(self, f.name, f.default_factory())
            else:
                raise TypeError(
                    f"{type(self).__name__}.{f.name} has no default; pooled fields need one"
                )


T = TypeVar('T', bound=PooledObject)


@dataclass(frozen=True)
class PoolStats:
    """Snapshot of pool occupancy."""
    total: int
    active: int
    inactive: int
    evictions: int


class ObjectPool(Generic[T]):
    """Fixed-capacity arena of reusable objects.

    Args:
        factory: Builds a new object with default field values
        max_size: Hard cap on the number of objects ever created
        name: Label used in log messages
    """

    def __init__(self, factory: Callable[[], T], max_size: int = 100, name: str = 'pool'):
        if max_size <= 0:
            raise ValueError(f"max_size must be positive, got {max_size}")
        self._factory = factory
        self._max_size = max_size
        self._name = name
        self._slots: List[T] = []
        self._acquired_at: List[int] = []  # acquire sequence number per slot
        self._sequence = 0
        self._next_handle = 1
        self._evictions = 0

    @property
    def max_size(self) -> int:
        return self._max_size

    def __len__(self) -> int:
        """Number of objects in the arena (active or not)."""
        return len(self._slots)

    def acquire(self) -> T:
        """Hand out an object, marked active and with a fresh handle."""
        index = self._find_inactive()
        if index is None:
            if len(self._slots) < self._max_size:
                obj = self._factory()
                obj.active = False
                self._slots.append(obj)
                self._acquired_at.append(0)
                index = len(self._slots) - 1
            else:
                index = min(range(len(self._slots)), key=self._acquired_at.__getitem__)
                victim = self._slots[index]
                self._evictions += 1
                log.debug("%s saturated (%d slots), recycling handle %d",
                          self._name, self._max_size, victim.handle)
                victim.reset()

        obj = self._slots[index]
        obj.active = True
        obj.handle = self._next_handle
        self._next_handle += 1
        self._sequence += 1
        self._acquired_at[index] = self._sequence
        return obj

    def release(self, obj: T) -> None:
        """Return an object to the pool. Releasing an inactive object is a no-op."""
        if not obj.active:
            return
        obj.active = False
        obj.reset()

    def get(self, handle: int) -> Optional[T]:
        """Find the active object with this handle."""
        for obj in self._slots:
            if obj.active and obj.handle == handle:
                return obj
        return None

    def active_objects(self) -> List[T]:
        """Snapshot list of active objects, in slot order."""
        return [obj for obj in self._slots if obj.active]

    def clear(self) -> None:
        """Deactivate and reset every object; the arena itself is kept."""
        for obj in self._slots:
            obj.active = False
            obj.reset()

    def stats(self) -> PoolStats:
        """Current occupancy and eviction count."""
        active = sum(1 for obj in self._slots if obj.active)
        return PoolStats(
            total=len(self._slots),
            active=active,
            inactive=len(self._slots) - active,
            evictions=self._evictions,
        )

    def _find_inactive(self) -> Optional[int]:
        for index, obj in enumerate(self._slots):
            if not obj.active:
                return index
        return None
