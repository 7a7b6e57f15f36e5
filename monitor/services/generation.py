"""
LoadGeneration - invalidates the results of superseded refreshes.

Each refresh calls ``next()`` and keeps the token. Before applying a
category's items it checks ``is_current(token)``; a newer refresh makes the
old token stale, so late results are dropped instead of overwriting newer
ones.
"""

import asyncio


class LoadGeneration:
    def __init__(self):
        self._current = 0
        self._tasks: set[asyncio.Task] = set()

    @property
    def current(self) -> int:
        return self._current

    def next(self) -> int:
        """Start a new generation and cancel the tasks of the previous one."""
        self._current += 1
        self.cancel_tracked()
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current

    def track(self, task: asyncio.Task) -> asyncio.Task:
        """Attach a task to the current generation so ``next()`` can cancel it."""
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    def cancel_tracked(self) -> int:
        pending = [t for t in self._tasks if not t.done()]
        for task in pending:
            task.cancel()
        self._tasks.clear()
        return len(pending)
