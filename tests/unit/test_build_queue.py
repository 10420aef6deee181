"""Tests for the fixed-capacity build scheduler."""

import asyncio

import pytest

from scopehound.core.exceptions import QueueFull
from scopehound.services.build_queue import BuildQueue, SlotState


class Gate:
    """Build operation factory that blocks until released."""

    def __init__(self, result: str = "ok", error: Exception | None = None) -> None:
        self.result = result
        self.error = error
        self.started = asyncio.Event()
        self.release = asyncio.Event()

    async def __call__(self) -> str:
        self.started.set()
        await self.release.wait()
        if self.error is not None:
            raise self.error
        return self.result


async def _settle(*tasks) -> None:
    await asyncio.wait(tasks)


def test_rejects_zero_capacity():
    with pytest.raises(ValueError):
        BuildQueue(0)


def test_starts_with_all_slots_settled():
    queue = BuildQueue()
    assert queue.capacity == 2
    assert all(op.is_settled for op in queue.slots)
    assert queue.pending() == ()


@pytest.mark.asyncio
async def test_first_submission_runs_without_delay():
    queue = BuildQueue()

    async def build() -> str:
        return "built"

    assert await queue.submit(build) == "built"
    assert queue.slots[0].state is SlotState.FULFILLED
    assert queue.slots[0].waits_on == ()


@pytest.mark.asyncio
async def test_third_submission_fails_fast_and_leaves_slots_untouched():
    queue = BuildQueue(2)
    first, second = Gate("one"), Gate("two")
    t1 = asyncio.create_task(queue.submit(first))
    t2 = asyncio.create_task(queue.submit(second))
    await asyncio.sleep(0)

    before = queue.slots
    assert [op.state for op in before] == [SlotState.PENDING, SlotState.PENDING]

    third = Gate("three")
    with pytest.raises(QueueFull):
        await queue.submit(third)

    assert queue.slots == before
    assert all(a is b for a, b in zip(queue.slots, before))
    assert not third.started.is_set()

    first.release.set()
    second.release.set()
    assert await t1 == "one"
    assert await t2 == "two"


@pytest.mark.asyncio
async def test_builds_registered_while_pending_run_in_order():
    queue = BuildQueue(2)
    order: list[str] = []
    first, second = Gate("one"), Gate("two")

    async def tracked(name: str, gate: Gate) -> str:
        order.append(f"start {name}")
        result = await gate()
        order.append(f"end {name}")
        return result

    t1 = asyncio.create_task(queue.submit(lambda: tracked("one", first)))
    t2 = asyncio.create_task(queue.submit(lambda: tracked("two", second)))
    await first.started.wait()
    await asyncio.sleep(0)

    # The second build waits for the first one to settle before starting
    assert queue.slots[1].waits_on == (queue.slots[0],)
    assert not second.started.is_set()

    second.release.set()
    first.release.set()
    await _settle(t1, t2)

    assert order == ["start one", "end one", "start two", "end two"]


@pytest.mark.asyncio
async def test_failed_prerequisite_does_not_block_next_build():
    queue = BuildQueue(2)
    failing = Gate(error=RuntimeError("boom"))
    t1 = asyncio.create_task(queue.submit(failing))
    await asyncio.sleep(0)

    async def build() -> str:
        return "after failure"

    t2 = asyncio.create_task(queue.submit(build))
    await asyncio.sleep(0)
    failing.release.set()

    with pytest.raises(RuntimeError, match="boom"):
        await t1
    assert await t2 == "after failure"
    assert queue.slots[0].state is SlotState.REJECTED
    assert queue.slots[1].state is SlotState.FULFILLED


@pytest.mark.asyncio
async def test_settled_slot_is_reused_and_wait_set_only_holds_pending():
    queue = BuildQueue(2)
    first, second = Gate("one"), Gate("two")
    t1 = asyncio.create_task(queue.submit(first))
    t2 = asyncio.create_task(queue.submit(second))
    await asyncio.sleep(0)

    first.release.set()
    assert await t1 == "one"
    slot0_before = queue.slots[0]
    pending_second = queue.slots[1]
    assert slot0_before.is_settled
    assert not pending_second.is_settled

    third = Gate("three")
    t3 = asyncio.create_task(queue.submit(third))
    await asyncio.sleep(0)

    reused = queue.slots[0]
    assert reused is not slot0_before
    assert reused.state is SlotState.PENDING
    # Only the build still pending at submission time is waited on
    assert reused.waits_on == (pending_second,)

    second.release.set()
    third.release.set()
    assert await t2 == "two"
    assert await t3 == "three"


@pytest.mark.asyncio
async def test_capacity_one_serializes_by_rejection():
    queue = BuildQueue(1)
    gate = Gate("only")
    t1 = asyncio.create_task(queue.submit(gate))
    await asyncio.sleep(0)

    async def build() -> str:
        return "next"

    with pytest.raises(QueueFull):
        await queue.submit(build)

    gate.release.set()
    assert await t1 == "only"
    assert await queue.submit(build) == "next"


@pytest.mark.asyncio
async def test_caller_cancellation_does_not_cancel_build():
    queue = BuildQueue(2)
    gate = Gate("survived")
    waiter = asyncio.create_task(queue.submit(gate))
    await gate.started.wait()
    operation = queue.slots[0]

    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert operation.state is SlotState.PENDING
    gate.release.set()
    assert operation.task is not None
    assert await operation.task == "survived"
    assert operation.state is SlotState.FULFILLED


@pytest.mark.asyncio
async def test_build_cancelled_before_it_starts_frees_its_slot():
    queue = BuildQueue(1)
    never_run = Gate("never")
    waiter = asyncio.create_task(queue.submit(never_run))
    await asyncio.sleep(0)
    cancelled = queue.slots[0]
    assert cancelled.task is not None

    cancelled.task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    assert cancelled.task.cancelled()
    assert cancelled.state is SlotState.REJECTED
    assert not never_run.started.is_set()

    async def build() -> str:
        return "next"

    assert await queue.submit(build) == "next"
    assert queue.slots[0].waits_on == ()
