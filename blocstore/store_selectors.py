from typing import Any, Callable, Optional, Tuple

from .types import StateSelector


def create_selector(
    *selectors: StateSelector,
    result_fn: Optional[Callable[..., Any]] = None,
    deep: bool = False,
) -> StateSelector:
    """
    創建一個複合選擇器，以上一次的輸入做記憶化。

    Args:
        *selectors: 多個輸入選擇器，這些函數會從 state 中提取對應的值
        result_fn: 處理輸出結果的函數，將多個選擇器的輸出進行處理
        deep: 以 == 比較輸入 (預設以 is 比較)

    Returns:
        經過快取優化的 selector 函數

    範例:
        >>> get_value = lambda state: state.value
        >>> get_percentage = create_selector(get_value, result_fn=lambda v: v / 100 * 100)
    """
    if not selectors:
        raise ValueError("create_selector 至少需要一個輸入選擇器")

    # 如果沒有 result_fn 且只有一個選擇器，直接返回該選擇器
    if result_fn is None and len(selectors) == 1:
        return selectors[0]

    if result_fn is None:
        result_fn = lambda *args: args

    last_inputs: Optional[Tuple[Any, ...]] = None
    last_result: Any = None
    hits = misses = 0

    def _same(a: Tuple[Any, ...], b: Tuple[Any, ...]) -> bool:
        if deep:
            return a == b
        return all(x is y for x, y in zip(a, b))

    def selector(state: Any) -> Any:
        nonlocal last_inputs, last_result, hits, misses
        # 處理 state 為 (old, new) 的元組情況，僅使用新狀態
        if isinstance(state, tuple) and len(state) == 2:
            state = state[1]
        inputs = tuple(select(state) for select in selectors)
        if last_inputs is not None and _same(inputs, last_inputs):
            hits += 1
            return last_result
        misses += 1
        last_result = result_fn(*inputs)
        last_inputs = inputs
        return last_result

    def cache_info() -> Tuple[int, int]:
        return hits, misses

    def cache_clear() -> None:
        nonlocal last_inputs, last_result
        last_inputs = None
        last_result = None

    selector.cache_info = cache_info  # type: ignore[attr-defined]
    selector.cache_clear = cache_clear  # type: ignore[attr-defined]
    return selector
