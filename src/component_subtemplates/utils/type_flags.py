"""Per-class once-only flags.

Used for the "main template compiled" and "sub-templates processed" markers.
Flags are keyed by class identity and held weakly, so classes created in
tests or at runtime can still be garbage collected.
"""

from __future__ import annotations

import threading
import weakref
from collections.abc import Callable


class TypeFlags:
    """A set of classes plus one re-entrant lock per class.

    ``run_once`` gives at-most-once semantics under concurrent callers: the
    flag is checked again while holding the class lock, so a thread that
    loses the race blocks until the winner has finished and then returns
    without doing the work itself.

    The flag is only set after ``func`` returns. If it raises, the class
    stays unflagged and a later call can try again.

    Example:
            >>> compiled = TypeFlags()
            >>> compiled.run_once(Card, compile_card)
            True
            >>> compiled.run_once(Card, compile_card)
            False

    """

    __slots__ = ("_flags", "_guard", "_locks")

    def __init__(self) -> None:
        self._flags: weakref.WeakSet[type] = weakref.WeakSet()
        self._locks: weakref.WeakKeyDictionary[type, threading.RLock] = (
            weakref.WeakKeyDictionary()
        )
        self._guard = threading.Lock()

    def is_set(self, cls: type) -> bool:
        return cls in self._flags

    def lock_for(self, cls: type) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(cls)
            if lock is None:
                lock = self._locks[cls] = threading.RLock()
            return lock

    def run_once(
        self,
        cls: type,
        func: Callable[[type], None],
        *,
        force: bool = False,
    ) -> bool:
        """Run ``func(cls)`` unless the flag is already set.

        Args:
            cls: Class the flag belongs to.
            func: Work to run while holding the class lock.
            force: Run even when the flag is set (the flag stays set).

        Returns:
            True if ``func`` ran in this call.
        """
        if not force and cls in self._flags:
            return False
        with self.lock_for(cls):
            if not force and cls in self._flags:
                return False
            func(cls)
            self._flags.add(cls)
            return True
