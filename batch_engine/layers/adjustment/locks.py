"""At most one in-flight adjustment per dish."""

from __future__ import annotations

import threading
import weakref
from contextlib import ExitStack, contextmanager
from typing import Iterable, Iterator


class DishLockRegistry:
    """One lock per (event_id, dish_name).

    Adjustments to the same dish serialize on its lock; different dishes never
    contend with each other. A lock lives only while someone holds a reference
    to it, so dishes of rebuilt or finished events do not pile up.
    """

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._locks: weakref.WeakValueDictionary[tuple[int, str], threading.Lock] = weakref.WeakValueDictionary()

    def lock_for(self, event_id: int, dish_name: str) -> threading.Lock:
        key = (event_id, dish_name)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.Lock()
                self._locks[key] = lock
            return lock

    @contextmanager
    def hold(self, event_id: int, dish_name: str) -> Iterator[None]:
        with self.lock_for(event_id, dish_name):
            yield

    @contextmanager
    def hold_many(self, event_id: int, dish_names: Iterable[str]) -> Iterator[None]:
        """Hold the locks of several dishes of one event, taken in name order."""
        with ExitStack() as stack:
            for dish_name in sorted(set(dish_names)):
                stack.enter_context(self.lock_for(event_id, dish_name))
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)


dish_locks = DishLockRegistry()
