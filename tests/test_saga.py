import pytest

from services.saga import Saga, SagaCompensationFailed


def test_steps_share_context():
    saga = (
        Saga("demo")
        .step("first", lambda ctx: 41)
        .step("second", lambda ctx: ctx["first"] + 1)
    )
    assert saga.run() == {"first": 41, "second": 42}


def test_failure_unwinds_completed_steps_in_reverse_and_reraises():
    calls = []
    boom = RuntimeError("insert failed")

    def fail(ctx):
        raise boom

    saga = (
        Saga("demo")
        .step("a", lambda ctx: calls.append("a"), compensate=lambda ctx: calls.append("undo a"))
        .step("b", lambda ctx: calls.append("b"), compensate=lambda ctx: calls.append("undo b"))
        .step("c", fail, compensate=lambda ctx: calls.append("undo c"))
        .step("d", lambda ctx: calls.append("d"))
    )
    with pytest.raises(RuntimeError) as info:
        saga.run()
    assert info.value is boom
    assert calls == ["a", "b", "undo b", "undo a"]


def test_failed_compensation_reports_both_errors():
    original = RuntimeError("movement insert failed")
    cleanup = RuntimeError("delete failed")

    def raise_(exc):
        raise exc

    saga = (
        Saga("demo")
        .step("account", lambda ctx: 1, compensate=lambda ctx: raise_(cleanup))
        .step("movement", lambda ctx: raise_(original))
    )
    with pytest.raises(SagaCompensationFailed) as info:
        saga.run()
    assert info.value.step == "movement"
    assert info.value.error is original
    assert info.value.failures == [("account", cleanup)]
    assert "movement insert failed" in str(info.value)
    assert "delete failed" in str(info.value)


def test_unwind_continues_after_a_failed_compensation():
    calls = []
    cleanup = RuntimeError("nope")

    def raise_(exc):
        raise exc

    saga = (
        Saga("demo")
        .step("a", lambda ctx: None, compensate=lambda ctx: calls.append("undo a"))
        .step("b", lambda ctx: None, compensate=lambda ctx: raise_(cleanup))
        .step("c", lambda ctx: raise_(ValueError("bad")))
    )
    with pytest.raises(SagaCompensationFailed):
        saga.run()
    assert calls == ["undo a"]
