from .counter_events import (
    CounterEvent,
    DecreaseNumber,
    DivideNumber,
    IncreaseNumber,
    MultiplyNumber,
    ResetNumber,
    SetValue,
)
from .counter_handlers import create_counter_registry, truncate_divide
from .counter_selectors import (
    CounterSelectors,
    create_counter_selectors,
    get_counter_info,
    get_distance_from_zero,
    get_is_at_max,
    get_is_at_midpoint,
    get_is_at_min,
    get_percentage_from_max,
    get_percentage_from_min,
    get_value,
)
from .counter_states import CounterState
from .counter_store import create_counter_store

__all__ = [
    # Events
    "CounterEvent", "IncreaseNumber", "DecreaseNumber", "ResetNumber",
    "MultiplyNumber", "DivideNumber", "SetValue",
    # State
    "CounterState",
    # Handlers
    "create_counter_registry", "truncate_divide",
    # Selectors
    "CounterSelectors", "create_counter_selectors", "get_value", "get_percentage_from_max", "get_percentage_from_min",
    "get_distance_from_zero", "get_is_at_midpoint", "get_is_at_max",
    "get_is_at_min", "get_counter_info",
    # Store
    "create_counter_store",
]
