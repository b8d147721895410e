from typing import ClassVar

from blocstore.events import Event


class CounterEvent(Event):
    """所有計數器事件的基礎類。"""


class IncreaseNumber(CounterEvent):
    type: ClassVar[str] = "[Counter] Increase Number"


class DecreaseNumber(CounterEvent):
    type: ClassVar[str] = "[Counter] Decrease Number"


class ResetNumber(CounterEvent):
    type: ClassVar[str] = "[Counter] Reset Number"


class MultiplyNumber(CounterEvent):
    type: ClassVar[str] = "[Counter] Multiply Number"


class DivideNumber(CounterEvent):
    type: ClassVar[str] = "[Counter] Divide Number"


class SetValue(CounterEvent):
    """將計數器設為指定值，超出範圍時夾在邊界上。"""

    type: ClassVar[str] = "[Counter] Set Value"

    value: int
