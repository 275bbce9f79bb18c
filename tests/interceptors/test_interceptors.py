import pytest
from unittest.mock import MagicMock

from exceptions.custom_exceptions import UnavailableError
from interceptors.header_interceptor import HeaderServerInterceptor
from interceptors.interceptor import Interceptor, run_pipeline
from interceptors.latency_interceptor import (
    FaultInjectionInterceptor,
    LatencyInjectionInterceptor,
)
from server.call_context import CallContext


class RecordingInterceptor(Interceptor):
    def __init__(self, label, calls):
        self.label = label
        self.calls = calls

    def intercept(self, context, proceed):
        self.calls.append(f"{self.label}:before")
        result = proceed()
        self.calls.append(f"{self.label}:after")
        return result


def _rng(roll=50, draw=0.5):
    rng = MagicMock()
    rng.randrange.return_value = roll
    rng.random.return_value = draw
    return rng


def test_pipeline_runs_first_interceptor_outermost():
    calls = []
    context = CallContext(method="GetFeature")
    result = run_pipeline(
        [RecordingInterceptor("a", calls), RecordingInterceptor("b", calls)],
        context,
        lambda: calls.append("handler") or "done",
    )
    assert result == "done"
    assert calls == ["a:before", "b:before", "handler", "b:after", "a:after"]


def test_pipeline_without_interceptors_calls_handler():
    assert run_pipeline([], CallContext(method="GetFeature"), lambda: 42) == 42


def test_header_interceptor_attaches_response_header():
    context = CallContext(method="GetFeature", invocation_metadata={"client": "x"})
    result = HeaderServerInterceptor().intercept(context, lambda: "ok")
    assert result == "ok"
    assert context.response_metadata == {
        "custom_server_header_key": "customRespondValue"
    }


@pytest.mark.parametrize(
    "roll, expected_ms", [(0, 10_000), (3, 5_000), (7, 2_000), (50, 250)]
)
def test_latency_tiers(roll, expected_ms):
    interceptor = LatencyInjectionInterceptor(
        enabled=True, base_delay_ms=250, rng=_rng(roll=roll)
    )
    assert interceptor.pick_delay_ms() == expected_ms


def test_latency_interceptor_sleeps_before_handler():
    sleeper = MagicMock()
    handler = MagicMock(return_value="ok")
    interceptor = LatencyInjectionInterceptor(
        enabled=True, rng=_rng(roll=0), sleeper=sleeper
    )
    assert interceptor.intercept(CallContext(method="GetFeature"), handler) == "ok"
    sleeper.assert_called_once_with(10.0)
    handler.assert_called_once()


def test_latency_interceptor_skips_zero_delay_and_disabled():
    sleeper = MagicMock()
    LatencyInjectionInterceptor(
        enabled=True, base_delay_ms=0, rng=_rng(roll=99), sleeper=sleeper
    ).intercept(CallContext(method="GetFeature"), lambda: None)
    LatencyInjectionInterceptor(
        enabled=False, rng=_rng(roll=0), sleeper=sleeper
    ).intercept(CallContext(method="GetFeature"), lambda: None)
    sleeper.assert_not_called()


def test_fault_interceptor_rejects_before_handler():
    handler = MagicMock()
    interceptor = FaultInjectionInterceptor(rate=0.5, rng=_rng(draw=0.1))
    with pytest.raises(UnavailableError):
        interceptor.intercept(CallContext(method="UpdateFeature"), handler)
    handler.assert_not_called()


def test_fault_interceptor_passes_through():
    assert (
        FaultInjectionInterceptor(rate=0.5, rng=_rng(draw=0.9)).intercept(
            CallContext(method="GetFeature"), lambda: "ok"
        )
        == "ok"
    )
    assert (
        FaultInjectionInterceptor().intercept(
            CallContext(method="GetFeature"), lambda: "ok"
        )
        == "ok"
    )
