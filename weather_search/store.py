"""
Event dispatch loop for one search session.

Events arrive from two places: the user (dispatch) and finished effects
(via the scheduler). They are queued and fed one at a time, in arrival
order, through search_reducer. After each transition the new state is
published to subscribers and the returned effects are handed to the
scheduler.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from dataclasses import dataclass
from typing import Callable, List

from .actions import SearchAction
from .effects import CancelTask, Effect, StartCancelingTask, StartDebouncedTask
from .reducer import SEARCH_DEBOUNCE, search_reducer
from .scheduler import EffectScheduler
from .state import SearchState
from .weather_clients import LocationSearchClient

logger = logging.getLogger(__name__)

Subscriber = Callable[[SearchState], None]


@dataclass
class SearchEnvironment:
    """Collaborators the session depends on, passed in explicitly."""
    client: LocationSearchClient
    search_debounce: float = SEARCH_DEBOUNCE


class SearchStore:
    """
    Serialized driver around search_reducer.

    Usage:
        async with SearchStore(env) as store:
            unsubscribe = store.subscribe(print)
            store.dispatch(SearchQueryChanged("san"))
    """

    def __init__(self, environment: SearchEnvironment, initial_state: SearchState | None = None):
        self.environment = environment
        self.scheduler = EffectScheduler(deliver=self.dispatch)
        self._state = initial_state or SearchState()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._subscribers: List[Subscriber] = []
        self._loop_task: asyncio.Task | None = None

    @property
    def state(self) -> SearchState:
        return self._state

    def dispatch(self, action: SearchAction) -> None:
        """Queue an event. Never blocks; safe to call before start()."""
        self._queue.put_nowait(action)

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register `callback` for every committed state. Returns an unsubscribe function."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def start(self) -> None:
        if self._loop_task is None:
            self._loop_task = asyncio.get_running_loop().create_task(
                self._run(), name="search-dispatch-loop"
            )
            logger.info("Search dispatch loop started")

    async def stop(self) -> None:
        try:
            if self._loop_task is not None:
                self._loop_task.cancel()
                try:
                    await self._loop_task
                except asyncio.CancelledError:
                    pass
        finally:
            self._loop_task = None
            await self.scheduler.shutdown()
        logger.info("Search dispatch loop stopped")

    async def drain(self) -> None:
        """Wait until every queued event has been through the reducer."""
        await self._queue.join()

    async def settle(self) -> None:
        """Wait until no events are queued and no effects are outstanding."""
        while True:
            await self.drain()
            if not self.scheduler.pending:
                return
            await self.scheduler.join()

    async def __aenter__(self) -> "SearchStore":
        self.start()
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.stop()

    async def _run(self) -> None:
        while True:
            action = await self._queue.get()
            try:
                self._process(action)
            except Exception:
                logger.exception("Failed to process search event %r", action)
            finally:
                self._queue.task_done()

    def _process(self, action: SearchAction) -> None:
        state, effects = search_reducer(
            self._state, action, debounce=self.environment.search_debounce
        )
        self._state = state
        logger.debug("%s -> %d effect(s)", type(action).__name__, len(effects))

        self._publish(state)
        for effect in effects:
            self._perform(effect)

    def _publish(self, state: SearchState) -> None:
        for callback in list(self._subscribers):
            try:
                callback(state)
            except Exception:
                logger.exception("Search state subscriber %r failed", callback)

    def _perform(self, effect: Effect) -> None:
        if isinstance(effect, CancelTask):
            self.scheduler.cancel(effect.effect_id)
            return

        work = functools.partial(effect.operation, self.environment.client)
        if isinstance(effect, StartDebouncedTask):
            self.scheduler.run_debounced(effect.effect_id, effect.delay, work)
        elif isinstance(effect, StartCancelingTask):
            self.scheduler.run_canceling_previous(effect.effect_id, work)
        else:
            raise TypeError(f"Unknown effect: {effect!r}")
