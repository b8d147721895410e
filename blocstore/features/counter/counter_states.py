from blocstore.states import State


class CounterState(State):
    value: int = 0
