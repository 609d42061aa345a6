"""
Effect scheduler.

Runs asynchronous units of work on the event loop, grouped under an
effect id, and hands each result to a delivery callback.

Rules:
- cancel(effect_id) cancels every task registered under the id,
  whether it is still waiting out a debounce delay or already running.
- A result is delivered only if its task is still registered when it
  finishes, so a canceled task can never deliver, even if it managed
  to produce a value.
- Cancellation is not an error and is never reported.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Hashable, List, Set

logger = logging.getLogger(__name__)

Work = Callable[[], Awaitable[Any]]


class EffectScheduler:
    """
    Task registry keyed by effect id.

    `deliver` is called with the value returned by each work item that
    completes without being canceled.
    """

    def __init__(self, deliver: Callable[[Any], None]):
        self._deliver = deliver
        self._tasks: Dict[Hashable, Set[asyncio.Task]] = {}

    @property
    def pending(self) -> List[Hashable]:
        """Effect ids that currently have registered tasks."""
        return list(self._tasks)

    def run(self, effect_id: Hashable, work: Work, delay: float = 0.0) -> asyncio.Task:
        """Start `work` under `effect_id`, alongside anything already there."""
        task = asyncio.get_running_loop().create_task(
            self._execute(effect_id, work, delay), name=f"effect:{effect_id}"
        )
        self._tasks.setdefault(effect_id, set()).add(task)
        task.add_done_callback(lambda t: self._reap(effect_id, t))
        return task

    def run_canceling_previous(self, effect_id: Hashable, work: Work) -> asyncio.Task:
        self.cancel(effect_id)
        return self.run(effect_id, work)

    def run_debounced(self, effect_id: Hashable, delay: float, work: Work) -> asyncio.Task:
        """Start `work` after `delay` seconds unless the id is canceled or debounced again first."""
        self.cancel(effect_id)
        return self.run(effect_id, work, delay=delay)

    def cancel(self, effect_id: Hashable) -> None:
        tasks = self._tasks.pop(effect_id, None)
        if not tasks:
            return
        logger.debug("Canceling %d task(s) under %s", len(tasks), effect_id)
        for task in tasks:
            task.cancel()

    def cancel_all(self) -> None:
        for effect_id in list(self._tasks):
            self.cancel(effect_id)

    async def join(self) -> None:
        """Wait until no task is registered."""
        while self._tasks:
            tasks = [t for group in self._tasks.values() for t in group]
            await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self) -> None:
        """Cancel everything and wait for the canceled tasks to unwind."""
        tasks = [t for group in self._tasks.values() for t in group]
        self.cancel_all()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def _execute(self, effect_id: Hashable, work: Work, delay: float) -> None:
        if delay > 0:
            await asyncio.sleep(delay)
        result = await work()

        if asyncio.current_task() not in self._tasks.get(effect_id, ()):
            logger.debug("Dropping result of canceled task under %s", effect_id)
            return
        self._deliver(result)

    def _reap(self, effect_id: Hashable, task: asyncio.Task) -> None:
        group = self._tasks.get(effect_id)
        if group is not None:
            group.discard(task)
            if not group:
                del self._tasks[effect_id]

        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error("Effect task under %s crashed", effect_id, exc_info=exc)
