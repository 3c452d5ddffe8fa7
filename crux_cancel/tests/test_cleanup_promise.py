"""Tests for ``cleanup_promise`` and the ``CleanupRun`` state machine.

Every scenario checks that the cleanup action ran (exactly once) before the
call returned or raised, and that a primary error is never masked by a
failing cleanup.
"""
from __future__ import annotations

import asyncio
import json

import pytest

from crux_cancel.base.abort import OperationTimeout, RunPhase, cleanup_promise
from crux_cancel.base.abort_parts.cleanup_run import CleanupRun
from crux_cancel.base.cancellation import CancellationController, OperationAborted


class _Flag:
    """Records cleanup invocations."""

    def __init__(self) -> None:
        self.calls = 0

    def __call__(self) -> None:
        self.calls += 1

    @property
    def called(self) -> bool:
        return self.calls > 0


def _later(delay, fn, *args):
    asyncio.get_running_loop().call_later(delay, fn, *args)


@pytest.mark.asyncio
async def test_cleans_up_after_direct_resolve():
    cleanup = _Flag()

    def command(resolve, _reject, _token, _reset):
        resolve(1)
        return cleanup

    assert await cleanup_promise(command) == 1  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cleans_up_after_delayed_resolve():
    cleanup = _Flag()

    def command(resolve, _reject, _token, _reset):
        _later(0.001, resolve, "a")
        return cleanup

    assert await cleanup_promise(command) == "a"  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cleans_up_after_direct_reject():
    cleanup = _Flag()
    error = ValueError()

    def command(_resolve, reject, _token, _reset):
        reject(error)
        return cleanup

    with pytest.raises(ValueError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cleans_up_after_delayed_reject():
    cleanup = _Flag()
    error = ValueError()

    def command(_resolve, reject, _token, _reset):
        _later(0.001, reject, error)
        return cleanup

    with pytest.raises(ValueError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cleans_up_before_timeout_is_reported():
    cleanup = _Flag()

    with pytest.raises(OperationTimeout) as excinfo:
        await cleanup_promise(lambda *_args: cleanup, timeout=0.01)

    assert excinfo.value.timeout == 0.01  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cleans_up_on_signal():
    controller = CancellationController()
    cleanup = _Flag()

    pending = asyncio.ensure_future(cleanup_promise(lambda *_args: cleanup, signal=controller.token))
    await asyncio.sleep(0)
    assert cleanup.called is False  # nosec B101 - pytest assert in tests
    controller.cancel()

    with pytest.raises(OperationAborted):
        await pending
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests
    assert controller.token.listener_count == 0  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
@pytest.mark.parametrize("timeout", [None, 0.01])
async def test_no_setup_when_already_cancelled(timeout):
    controller = CancellationController()
    controller.cancel()

    def command(*_args):
        pytest.fail("unexpected call")

    with pytest.raises(OperationAborted):
        await cleanup_promise(command, timeout=timeout, signal=controller.token)


@pytest.mark.asyncio
async def test_synchronous_raise_fails_the_call():
    error = RuntimeError("any-error")

    def command(*_args):
        raise error

    with pytest.raises(RuntimeError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cleanup_may_be_returned_asynchronously():
    cleanup = _Flag()

    async def command(resolve, _reject, _token, _reset):
        resolve(None)
        return cleanup

    assert await cleanup_promise(command) is None  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_async_command_failure_fails_the_call():
    error = RuntimeError("any-error")

    async def command(*_args):
        raise error

    with pytest.raises(RuntimeError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_async_cleanup_with_direct_error():
    cleanup = _Flag()
    error = ValueError("quick")

    async def command(_resolve, reject, _token, _reset):
        reject(error)
        return cleanup

    with pytest.raises(ValueError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_command_sees_signal_cancelled_before_returning_cleanup():
    controller = CancellationController()
    cleanup = _Flag()
    observed = []

    async def command(_resolve, _reject, token, _reset):
        await asyncio.sleep(0.01)
        observed.append(token.cancelled)
        return cleanup

    pending = asyncio.ensure_future(cleanup_promise(command, signal=controller.token))
    await asyncio.sleep(0)
    controller.cancel()

    with pytest.raises(OperationAborted):
        await pending
    assert observed == [True]  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_reset_extends_the_deadline():
    cleanup = _Flag()

    def command(resolve, _reject, _token, reset):
        def step() -> None:
            reset()
            _later(0.07, resolve, "hello")

        _later(0.07, step)
        return cleanup

    assert await cleanup_promise(command, timeout=0.1) == "hello"  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
@pytest.mark.parametrize("delay", [None, 0.001])
async def test_cleanup_error_fails_a_successful_call(delay):
    error = ValueError("cleanup")

    def failing_cleanup():
        raise error

    def command(resolve, _reject, _token, _reset):
        if delay is None:
            resolve("hello")
        else:
            _later(delay, resolve, "hello")
        return failing_cleanup

    with pytest.raises(ValueError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_primary_error_wins_over_cleanup_error():
    error_a = ValueError("a")
    error_b = KeyError("b")

    def failing_cleanup():
        raise error_b

    def command(_resolve, reject, _token, _reset):
        reject(error_a)
        return failing_cleanup

    with pytest.raises(ValueError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error_a  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_primary_error_wins_over_async_cleanup_error():
    error_a = ValueError("a")
    error_b = KeyError("b")
    finished = []

    async def failing_cleanup():
        await asyncio.sleep(0.01)
        finished.append(True)
        raise error_b

    def command(_resolve, reject, _token, _reset):
        reject(error_a)
        return failing_cleanup

    with pytest.raises(ValueError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error_a  # nosec B101 - pytest assert in tests
    assert finished == [True]  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
@pytest.mark.parametrize("delay", [None, 0.001])
async def test_async_cleanup_finishes_before_returning(delay):
    finished = []

    async def slow_cleanup():
        await asyncio.sleep(0.01)
        finished.append(True)

    def command(resolve, _reject, _token, _reset):
        if delay is None:
            resolve("hello")
        else:
            _later(delay, resolve, "hello")
        return slow_cleanup

    assert await cleanup_promise(command) == "hello"  # nosec B101 - pytest assert in tests
    assert finished == [True]  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
@pytest.mark.parametrize("delay", [None, 0.001])
async def test_async_cleanup_error_fails_a_successful_call(delay):
    error = ValueError("cleanup")

    async def failing_cleanup():
        await asyncio.sleep(0.01)
        raise error

    def command(resolve, _reject, _token, _reset):
        if delay is None:
            resolve("hello")
        else:
            _later(delay, resolve, "hello")
        return failing_cleanup

    with pytest.raises(ValueError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
@pytest.mark.parametrize("delay", [None, 0.01])
async def test_successful_async_cleanup_keeps_rejection(delay):
    error = ValueError()

    async def slow_cleanup():
        await asyncio.sleep(0.01)

    def command(_resolve, reject, _token, _reset):
        if delay is None:
            reject(error)
        else:
            _later(delay, reject, error)
        return slow_cleanup

    with pytest.raises(ValueError) as excinfo:
        await cleanup_promise(command)
    assert excinfo.value is error  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_cleanup_runs_exactly_once_despite_repeated_callbacks():
    controller = CancellationController()
    cleanup = _Flag()

    def command(resolve, reject, _token, _reset):
        resolve("first")
        resolve("second")
        reject(ValueError("ignored"))
        return cleanup

    result = await cleanup_promise(command, timeout=1.0, signal=controller.token)
    controller.cancel()

    assert result == "first"  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_async_cleanup_completes_before_timeout_is_reported():
    finished = []

    async def slow_cleanup():
        await asyncio.sleep(0.02)
        finished.append(True)

    with pytest.raises(OperationTimeout):
        await cleanup_promise(lambda *_args: slow_cleanup, timeout=0.01)
    assert finished == [True]  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_task_cancellation_still_runs_cleanup():
    cleanup = _Flag()

    pending = asyncio.ensure_future(cleanup_promise(lambda *_args: cleanup))
    await asyncio.sleep(0)
    pending.cancel()

    with pytest.raises(asyncio.CancelledError):
        await pending
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_reject_requires_an_exception():
    def command(_resolve, reject, _token, _reset):
        reject("not an exception")
        return _Flag()

    with pytest.raises(TypeError):
        await cleanup_promise(command)


@pytest.mark.asyncio
async def test_command_must_return_a_callable():
    def command(resolve, _reject, _token, _reset):
        resolve(1)
        return "not callable"

    with pytest.raises(TypeError):
        await cleanup_promise(command)


@pytest.mark.asyncio
async def test_settlement_is_logged(log_records):
    def command(resolve, _reject, _token, _reset):
        resolve(1)
        return _Flag()

    await cleanup_promise(command)

    events = [json.loads(r.getMessage()) for r in log_records if r.name == "crux_cancel.cleanup"]
    settled = events[-1]
    assert settled["event"] == "cleanup.settled"  # nosec B101 - pytest assert in tests
    assert settled["operation"] == "cleanup_promise"  # nosec B101 - pytest assert in tests
    assert settled["outcome"] == "resolved"  # nosec B101 - pytest assert in tests
    assert settled["cleanup_failed"] is False  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_run_phases_without_early_finish():
    cleanup = _Flag()
    run = CleanupRun(lambda *_args: cleanup, None, lambda: None)

    outcome = run.start()
    assert run.phase is RunPhase.RUNNING  # nosec B101 - pytest assert in tests
    run.resolve(5)
    run.reject(ValueError("late"))

    assert run.phase is RunPhase.SETTLED  # nosec B101 - pytest assert in tests
    assert await outcome == 5  # nosec B101 - pytest assert in tests
    assert run.finish.result == 5 and not run.finish.failed  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_run_latches_before_async_cleanup_arrives():
    cleanup = _Flag()

    async def command(*_args):
        return cleanup

    run = CleanupRun(command, None, lambda: None)
    outcome = run.start()
    run.reject(KeyError("early"))
    assert run.phase is RunPhase.LATCHED  # nosec B101 - pytest assert in tests
    assert cleanup.called is False  # nosec B101 - pytest assert in tests

    with pytest.raises(KeyError):
        await outcome
    assert run.phase is RunPhase.SETTLED  # nosec B101 - pytest assert in tests
    assert cleanup.calls == 1  # nosec B101 - pytest assert in tests


@pytest.mark.asyncio
async def test_sync_cleanup_raising_cancelled_error_still_settles():
    controller = CancellationController()
    later_listener = []

    def cancelling_cleanup():
        raise asyncio.CancelledError()

    pending = asyncio.ensure_future(
        cleanup_promise(lambda *_args: cancelling_cleanup, signal=controller.token)
    )
    await asyncio.sleep(0)
    controller.token.add_listener(lambda: later_listener.append(1))
    controller.cancel()

    done, _ = await asyncio.wait([pending], timeout=0.2)
    assert pending in done  # nosec B101 - pytest assert in tests
    with pytest.raises(OperationAborted):
        pending.result()
    assert later_listener == [1]  # nosec B101 - pytest assert in tests
