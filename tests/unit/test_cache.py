"""Tests for per-example memoization."""

import asyncio

import pytest

from letspec.context import ExampleContext
from letspec.helpers import (
    CircularHelperEvaluation,
    ExampleLifecycleError,
    MemoizationCache,
    Scope,
    declare_helper,
)


def running_context(scope: Scope) -> ExampleContext:
    ctx = ExampleContext(scope.chain())
    ctx.begin_eager_phase()
    ctx.begin_running()
    return ctx


class TestSyncMemoization:
    def test_block_runs_once_and_value_identity_is_stable(self):
        scope = Scope("Group")
        calls = []

        def block(ctx):
            calls.append(1)
            return []

        declaration = declare_helper(scope, "items", block)
        ctx = running_context(scope)

        first = ctx.cache.get_or_compute(declaration, ctx)
        first.append("mutated")
        second = ctx.cache.get_or_compute(declaration, ctx)

        assert first is second
        assert second == ["mutated"]
        assert len(calls) == 1
        assert declaration in ctx.cache
        assert len(ctx.cache) == 1

    def test_caches_are_independent_per_instance(self):
        scope = Scope("Group")
        counter = {"n": 0}

        def block(ctx):
            counter["n"] += 1
            return counter["n"]

        declare_helper(scope, None, block)

        assert running_context(scope).subject() == 1
        assert running_context(scope).subject() == 2

    def test_same_identifier_at_different_depths_are_distinct_entries(self):
        outer = Scope("Outer")
        inner = Scope("Inner", outer)
        outer_decl = declare_helper(outer, "value", lambda ctx: "outer", subject=False)
        inner_decl = declare_helper(inner, "value", lambda ctx: "inner", subject=False)
        cache = MemoizationCache()
        ctx = running_context(inner)

        assert cache.get_or_compute(outer_decl, ctx) == "outer"
        assert cache.get_or_compute(inner_decl, ctx) == "inner"
        assert len(cache) == 2

    def test_failures_are_not_memoized(self):
        scope = Scope("Group")
        attempts = []

        def block(ctx):
            attempts.append(1)
            raise KeyError("boom")

        declaration = declare_helper(scope, None, block)
        ctx = running_context(scope)

        with pytest.raises(KeyError, match="boom"):
            ctx.subject()
        assert declaration not in ctx.cache

        with pytest.raises(KeyError):
            ctx.subject()
        assert len(attempts) == 2

    def test_self_reference_raises_circular_evaluation(self):
        scope = Scope("Group")
        declare_helper(scope, "loop", lambda ctx: ctx.loop() + 1)
        ctx = running_context(scope)

        with pytest.raises(CircularHelperEvaluation) as exc_info:
            ctx.subject()

        assert exc_info.value.path == ("loop", "loop")
        assert "loop -> loop" in str(exc_info.value)
        assert len(ctx.cache) == 0

    def test_indirect_cycle_reports_full_path(self):
        scope = Scope("Group")
        declare_helper(scope, "a", lambda ctx: ctx.b(), subject=False)
        declare_helper(scope, "b", lambda ctx: ctx.c(), subject=False)
        declare_helper(scope, "c", lambda ctx: ctx.a(), subject=False)
        ctx = running_context(scope)

        with pytest.raises(CircularHelperEvaluation) as exc_info:
            ctx.get("a")

        assert exc_info.value.path == ("a", "b", "c", "a")

    def test_cycle_state_does_not_leak_after_failure(self):
        scope = Scope("Group")
        state = {"loop": True}

        def block(ctx):
            if state["loop"]:
                return ctx.subject()
            return "done"

        declare_helper(scope, None, block)
        ctx = running_context(scope)

        with pytest.raises(CircularHelperEvaluation):
            ctx.subject()

        state["loop"] = False
        assert ctx.subject() == "done"

    def test_async_block_on_sync_path_raises_type_error(self):
        scope = Scope("Group")

        async def block(ctx):
            return 1

        declare_helper(scope, "value", block)
        ctx = running_context(scope)

        with pytest.raises(TypeError, match="aget"):
            ctx.get("value")

    def test_clear_discards_values(self):
        scope = Scope("Group")
        declaration = declare_helper(scope, None, lambda ctx: object())
        ctx = running_context(scope)
        ctx.subject()

        ctx.cache.clear()

        assert declaration not in ctx.cache


class TestAsyncMemoization:
    def test_concurrent_readers_share_one_computation(self):
        scope = Scope("Group")
        calls = []

        async def block(ctx):
            calls.append(1)
            await asyncio.sleep(0.01)
            return object()

        declare_helper(scope, "resource", block)
        ctx = running_context(scope)

        async def main():
            return await asyncio.gather(*(ctx.aget("resource") for _ in range(5)))

        values = asyncio.run(main())

        assert len(calls) == 1
        assert all(v is values[0] for v in values)

    def test_sync_and_async_blocks_share_the_cache(self):
        scope = Scope("Group")
        declare_helper(scope, "sync_value", lambda ctx: [1])

        async def async_value(ctx):
            return ctx.sync_value() + [2]

        declare_helper(scope, "async_value", async_value, subject=False)
        ctx = running_context(scope)

        async def main():
            first = await ctx.aget("async_value")
            second = await ctx.aget("async_value")
            return first, second

        first, second = asyncio.run(main())

        assert first is second
        assert first == [1, 2]
        assert ctx.subject() == [1]

    def test_async_failure_reaches_every_waiter_and_is_not_cached(self):
        scope = Scope("Group")
        calls = []

        async def block(ctx):
            calls.append(1)
            await asyncio.sleep(0)
            raise RuntimeError("unavailable")

        declaration = declare_helper(scope, None, block)
        ctx = running_context(scope)

        async def main():
            return await asyncio.gather(ctx.asubject(), ctx.asubject(), return_exceptions=True)

        results = asyncio.run(main())

        assert len(calls) == 1
        assert all(isinstance(r, RuntimeError) for r in results)
        assert declaration not in ctx.cache

    def test_async_self_reference_raises_instead_of_deadlocking(self):
        scope = Scope("Group")

        async def block(ctx):
            return await ctx.asubject()

        declare_helper(scope, None, block)
        ctx = running_context(scope)

        with pytest.raises(CircularHelperEvaluation):
            asyncio.run(ctx.asubject())

    def test_sync_block_reading_itself_through_aget_is_circular(self):
        scope = Scope("Group")
        declare_helper(scope, "loop", lambda ctx: ctx.loop(), subject=False)
        declare_helper(scope, "outer", lambda ctx: ctx.inner(), subject=False)
        declare_helper(scope, "inner", lambda ctx: ctx.outer(), subject=False)
        ctx = running_context(scope)

        with pytest.raises(CircularHelperEvaluation) as exc_info:
            asyncio.run(ctx.aget("loop"))
        assert exc_info.value.path == ("loop", "loop")

        with pytest.raises(CircularHelperEvaluation) as exc_info:
            asyncio.run(ctx.aget("outer"))
        assert exc_info.value.path == ("outer", "inner", "outer")

    def test_sync_read_during_async_computation_raises(self):
        scope = Scope("Group")
        started = []

        async def slow(ctx):
            started.append(1)
            await asyncio.sleep(0.01)
            return 1

        declare_helper(scope, "slow", slow, subject=False)
        ctx = running_context(scope)

        async def main():
            task = asyncio.ensure_future(ctx.aget("slow"))
            await asyncio.sleep(0)
            with pytest.raises(ExampleLifecycleError, match="aget"):
                ctx.get("slow")
            return await task

        assert asyncio.run(main()) == 1
        assert len(started) == 1
