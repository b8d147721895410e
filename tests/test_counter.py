import asyncio
import random

import pytest

from blocstore.config import CounterSettings, StoreConfig
from blocstore.features.counter import (
    CounterState,
    DecreaseNumber,
    DivideNumber,
    IncreaseNumber,
    MultiplyNumber,
    ResetNumber,
    SetValue,
    create_counter_registry,
    create_counter_selectors,
    create_counter_store,
    get_counter_info,
    get_distance_from_zero,
    get_is_at_max,
    get_is_at_midpoint,
    get_percentage_from_max,
    get_percentage_from_min,
    truncate_divide,
)


def reduce(value, event):
    registry = create_counter_registry()
    return registry.resolve(event)(CounterState(value=value), event).value


def run_store(events, initial_value=0):
    async def scenario():
        store = create_counter_store(initial_value)
        seen = []
        store.subscribe(lambda state: seen.append(state.value))
        for event in events:
            store.dispatch(event)
        await store.join()
        store.close()
        return store.state.value, seen

    return asyncio.run(scenario())


def test_increase_and_decrease_step_by_one():
    assert reduce(0, IncreaseNumber()) == 1
    assert reduce(0, DecreaseNumber()) == -1


def test_increase_saturates_at_max():
    assert reduce(100, IncreaseNumber()) == 100
    assert reduce(99, IncreaseNumber()) == 100


def test_decrease_saturates_at_min():
    assert reduce(-50, DecreaseNumber()) == -50
    assert reduce(-49, DecreaseNumber()) == -50


def test_reset_goes_to_zero():
    assert reduce(77, ResetNumber()) == 0
    assert reduce(-12, ResetNumber()) == 0


def test_multiply_clamps_to_bounds():
    assert reduce(60, MultiplyNumber()) == 100
    assert reduce(-30, MultiplyNumber()) == -50
    assert reduce(20, MultiplyNumber()) == 40


def test_divide_truncates_toward_zero():
    assert reduce(-1, DivideNumber()) == 0
    assert reduce(-3, DivideNumber()) == -1
    assert reduce(7, DivideNumber()) == 3
    assert reduce(-50, DivideNumber()) == -25


def test_truncate_divide_differs_from_floor_division():
    assert truncate_divide(-1, 2) == 0
    assert -1 // 2 == -1
    assert truncate_divide(5, -2) == -2


def test_set_value_clamps():
    assert reduce(0, SetValue(value=150)) == 100
    assert reduce(0, SetValue(value=-999)) == -50
    assert reduce(0, SetValue(value=42)) == 42


def test_random_sequences_stay_in_bounds():
    rng = random.Random(1234)
    for start in (-50, -1, 0, 50, 100):
        value = start
        for _ in range(300):
            event = rng.choice([IncreaseNumber(), DecreaseNumber()])
            value = reduce(value, event)
            assert -50 <= value <= 100


def test_events_compare_structurally():
    assert SetValue(value=3) == SetValue(value=3)
    assert SetValue(value=3) != SetValue(value=4)
    assert IncreaseNumber() == IncreaseNumber()
    assert hash(SetValue(value=3)) == hash(SetValue(value=3))


def test_events_are_immutable():
    event = SetValue(value=3)
    with pytest.raises(Exception):
        event.value = 4


def test_store_applies_events_in_order():
    final, seen = run_store([SetValue(value=10), MultiplyNumber(), DecreaseNumber(), DivideNumber()])
    assert seen == [10, 20, 19, 9]
    assert final == 9


def test_saturated_increase_is_not_notified_twice():
    final, seen = run_store([IncreaseNumber(), IncreaseNumber(), IncreaseNumber()], initial_value=99)
    assert final == 100
    assert seen == [100]


def test_reset_at_zero_is_not_notified():
    final, seen = run_store([ResetNumber()])
    assert final == 0
    assert seen == []


def test_initial_value_is_clamped():
    store = create_counter_store(500)
    assert store.current() == CounterState(value=100)
    store.close()


def test_custom_bounds_from_config():
    config = StoreConfig(counter=CounterSettings(min_value=0, max_value=10))

    async def scenario():
        store = create_counter_store(9, config=config)
        store.dispatch(IncreaseNumber())
        store.dispatch(IncreaseNumber())
        await store.join()
        high = store.state.value
        store.dispatch(SetValue(value=-5))
        await store.join()
        low = store.state.value
        store.close()
        return high, low

    assert asyncio.run(scenario()) == (10, 0)


def test_counter_selectors():
    state = CounterState(value=50)
    assert get_percentage_from_max(state) == 50.0
    assert get_percentage_from_min(CounterState(value=-25)) == 50.0
    assert get_percentage_from_min(CounterState(value=-200)) == 100.0
    assert get_distance_from_zero(CounterState(value=-7)) == 7
    assert get_is_at_midpoint(CounterState(value=25))
    assert not get_is_at_midpoint(state)
    assert get_is_at_max(CounterState(value=100))
    assert get_counter_info(state) == {"value": 50, "percentage_from_max": 50.0, "distance_from_zero": 50}


def test_percentage_from_max_never_negative():
    assert get_percentage_from_max(CounterState(value=-10)) == 0.0


def test_selectors_follow_custom_bounds():
    settings = CounterSettings(min_value=-10, max_value=10)
    selectors = create_counter_selectors(settings)

    async def scenario():
        store = create_counter_store(config=StoreConfig(counter=settings))
        store.dispatch(SetValue(value=50))
        await store.join()
        state = store.state
        store.close()
        return state

    state = asyncio.run(scenario())
    assert state == CounterState(value=10)
    assert selectors.is_at_max(state)
    assert not get_is_at_max(state)
    assert selectors.percentage_from_max(state) == 100.0
    assert selectors.percentage_from_min(CounterState(value=-5)) == 50.0
    assert selectors.is_at_min(CounterState(value=-10))
    assert selectors.is_at_midpoint(CounterState(value=0))
    assert selectors.counter_info(state) == {"value": 10, "percentage_from_max": 100.0, "distance_from_zero": 10}


def test_default_selectors_match_default_settings():
    selectors = create_counter_selectors()
    state = CounterState(value=100)
    assert selectors.is_at_max(state) and get_is_at_max(state)
    assert selectors.percentage_from_max(CounterState(value=50)) == get_percentage_from_max(CounterState(value=50))
