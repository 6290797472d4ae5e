"""Per-key locking for read-aggregate-write sequences."""

from collections.abc import Hashable
from dataclasses import dataclass, field
from threading import Lock

DEFAULT_STRIPES = 64


@dataclass
class KeyedLocks:
    """Maps keys onto a fixed pool of locks.

    Equal keys always share a lock; unrelated keys may share one too, which
    only costs some parallelism. Memory stays bounded by the pool size.
    """

    stripes: int = DEFAULT_STRIPES
    _locks: tuple[Lock, ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.stripes < 1:
            raise ValueError("stripes must be at least 1")
        self._locks = tuple(Lock() for _ in range(self.stripes))

    def lock_for(self, key: Hashable) -> Lock:
        """Return the lock serializing work on a key."""
        return self._locks[hash(key) % self.stripes]
