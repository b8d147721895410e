import asyncio

import pytest
from immutables import Map

from blocstore import (
    AuthFailure,
    FailureKind,
    HandlerError,
    NetworkFailure,
    ServerFailure,
    StoreError,
    ValidationFailure,
    classify_failure,
    create_selector,
)
from blocstore.features.counter import CounterState
from blocstore.immutable_utils import freeze, thaw


def test_selector_memoizes_on_identical_input():
    calls = []
    items = (1, 2, 3)

    def total(values):
        calls.append(values)
        return sum(values)

    selector = create_selector(lambda state: state["items"], result_fn=total)
    state = {"items": items}
    assert selector(state) == 6
    assert selector({"items": items}) == 6
    assert len(calls) == 1
    assert selector.cache_info() == (1, 1)


def test_selector_recomputes_on_new_input():
    selector = create_selector(lambda state: state.value, result_fn=lambda v: v * 10)
    assert selector(CounterState(value=1000)) == 10000
    assert selector(CounterState(value=2000)) == 20000
    assert selector.cache_info() == (0, 2)


def test_deep_selector_compares_by_value():
    selector = create_selector(lambda state: list(state), result_fn=len, deep=True)
    selector([1, 2])
    selector([1, 2])
    assert selector.cache_info() == (1, 1)
    selector.cache_clear()
    selector([1, 2])
    assert selector.cache_info() == (1, 2)


def test_selector_accepts_state_pairs():
    selector = create_selector(lambda s: s.value, lambda s: s.value > 0, result_fn=lambda v, positive: (v, positive))
    assert selector((CounterState(value=-1), CounterState(value=3))) == (3, True)


def test_single_selector_is_returned_unchanged():
    get_value = lambda state: state.value
    assert create_selector(get_value) is get_value


def test_selector_requires_input():
    with pytest.raises(ValueError):
        create_selector()


def test_classify_passes_failures_through():
    failure = ValidationFailure("Email is required")
    assert classify_failure(failure) is failure


@pytest.mark.parametrize("error", [ConnectionError("refused"), asyncio.TimeoutError(), TimeoutError("slow")])
def test_classify_network_errors(error):
    assert classify_failure(error).kind == FailureKind.NETWORK


def test_classify_uses_fallback_and_prefix():
    failure = classify_failure(ValueError("bad payload"), fallback=AuthFailure, prefix="Login failed")
    assert failure == AuthFailure("Login failed: bad payload")
    assert failure.details == {"cause": "ValueError"}


def test_classify_defaults_to_server_failure():
    failure = classify_failure(RuntimeError())
    assert isinstance(failure, ServerFailure)
    assert failure.message == "RuntimeError"


def test_failure_messages_and_serialization():
    assert ValidationFailure("Email is required").user_message == "Invalid input: Email is required"
    assert ServerFailure("x").user_message == "Server error. Please try again later."
    assert NetworkFailure("x").to_dict()["kind"] == "network"
    assert ServerFailure("x") != AuthFailure("x")
    assert len({ServerFailure("x"), ServerFailure("x")}) == 1


def test_error_details_in_str():
    error = StoreError("dispatch failed", operation="dispatch", store="counter")
    assert "operation='dispatch'" in str(error)
    assert error.to_dict()["error_type"] == "StoreError"
    handler_error = HandlerError("boom", event_type="[Counter] Increase Number", store_name="counter")
    assert handler_error.details["event_type"] == "[Counter] Increase Number"


def test_freeze_and_thaw_nested_json():
    data = {"user": {"id": "1", "tags": ["a", "b"]}, "flags": {"x"}}
    frozen = freeze(data)
    assert isinstance(frozen, Map)
    assert isinstance(frozen["user"], Map)
    assert frozen["user"]["tags"] == ("a", "b")
    assert thaw(frozen) == {"user": {"id": "1", "tags": ["a", "b"]}, "flags": {"x"}}


def test_freeze_pydantic_model():
    frozen = freeze(CounterState(value=5))
    assert frozen == Map({"value": 5})
