"""Fixed-capacity scheduler for cscope database builds.

# FILE_CONTEXT: Bounds and serializes build operations across directories
# ROLE: Accepts at most `capacity` outstanding builds; rejects the rest
# CONCURRENCY: Slot array is owned by the queue and only mutated in submit()

A submitted build first waits for every build that was still pending when it
was registered, then runs. Builds therefore never overlap with builds already
outstanding at submission time, while up to `capacity` of them may be
accepted ahead of execution. Submissions beyond capacity fail immediately
with QueueFull instead of waiting.
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from enum import Enum
from functools import partial

from loguru import logger

from scopehound.core.exceptions import QueueFull

DEFAULT_CAPACITY = 2


class SlotState(Enum):
    """Explicit settlement state of a build operation."""

    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


class BuildOperation:
    """One registered build, as stored in a queue slot.

    ``state`` is written by the operation's own execution and, for every
    outcome including cancellation before the first step, by its task's
    completion callback. Probing it never blocks and never touches the
    stored result.
    """

    def __init__(self, slot: int, waits_on: tuple[BuildOperation, ...] = ()) -> None:
        self.slot = slot
        self.waits_on = waits_on
        self.state = SlotState.PENDING
        self.task: asyncio.Task[str] | None = None

    @classmethod
    def settled(cls, slot: int) -> BuildOperation:
        """An already-fulfilled placeholder occupying an idle slot."""
        operation = cls(slot)
        operation.state = SlotState.FULFILLED
        return operation

    @property
    def is_settled(self) -> bool:
        return self.state is not SlotState.PENDING

    def __repr__(self) -> str:
        return f"BuildOperation(slot={self.slot}, state={self.state.value}, waits_on={len(self.waits_on)})"


class BuildQueue:
    """Scheduler holding a fixed array of build slots.

    Args:
        capacity: Number of slots, i.e. the maximum number of builds that may
            be registered as outstanding at any time
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._slots: list[BuildOperation] = [
            BuildOperation.settled(index) for index in range(capacity)
        ]
        # PATTERN: Lazy lock creation within event loop context
        self._lock: asyncio.Lock | None = None

    @property
    def capacity(self) -> int:
        return len(self._slots)

    @property
    def slots(self) -> tuple[BuildOperation, ...]:
        """Snapshot of the operation currently stored in each slot."""
        return tuple(self._slots)

    def pending(self) -> tuple[BuildOperation, ...]:
        """Operations registered and not yet settled, in slot order."""
        return tuple(op for op in self._slots if not op.is_settled)

    async def submit(self, operation: Callable[[], Awaitable[str]]) -> str:
        """Register a build and wait for its result.

        Args:
            operation: Zero-argument factory returning the build coroutine;
                it is only called once every prerequisite build has settled

        Returns:
            Whatever the build operation returns (captured stdout)

        Raises:
            QueueFull: If no slot holds a settled operation
        """
        if self._lock is None:
            self._lock = asyncio.Lock()

        # CRITICAL: No await between probing slots and storing the new
        # operation, so concurrent submissions never see a stale pending set
        async with self._lock:
            build = self._register(operation)

        # Shielded: a caller that stops waiting does not cancel the build,
        # which later submissions may be waiting on
        assert build.task is not None
        return await asyncio.shield(build.task)

    def _register(self, operation: Callable[[], Awaitable[str]]) -> BuildOperation:
        index = self._first_settled_slot()
        if index is None:
            logger.debug(f"Build queue full ({self.capacity} builds outstanding)")
            raise QueueFull(self.capacity)

        build = BuildOperation(index, waits_on=self.pending())
        build.task = asyncio.create_task(self._execute(build, operation))
        build.task.add_done_callback(partial(self._on_done, build))
        self._slots[index] = build
        logger.debug(f"Registered build in slot {index}, waiting on {len(build.waits_on)}")
        return build

    def _first_settled_slot(self) -> int | None:
        for index, op in enumerate(self._slots):
            logger.debug(f"queue state {index} {op.state.value}")
            if op.is_settled:
                return index
        return None

    async def _execute(
        self, build: BuildOperation, operation: Callable[[], Awaitable[str]]
    ) -> str:
        try:
            prerequisites = [op.task for op in build.waits_on if op.task is not None]
            if prerequisites:
                # Outcome of earlier builds is irrelevant; only their completion
                await asyncio.wait(prerequisites)
            logger.debug(f"Starting build in slot {build.slot}")
            result = await operation()
        except BaseException:
            build.state = SlotState.REJECTED
            raise
        build.state = SlotState.FULFILLED
        return result

    @staticmethod
    def _on_done(build: BuildOperation, task: asyncio.Task[str]) -> None:
        # A task cancelled before its first step never runs _execute, so its
        # slot is settled here
        if task.cancelled():
            logger.debug(f"Build in slot {build.slot} cancelled")
            build.state = SlotState.REJECTED
            return
        error = task.exception()
        if error is not None:
            logger.debug(f"Build in slot {build.slot} finished with error: {error}")
            build.state = SlotState.REJECTED
        elif not build.is_settled:
            build.state = SlotState.FULFILLED
