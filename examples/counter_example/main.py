"""
blocstore 範例：計數器 Store，展示 dispatch、訂閱、選擇器與中介軟體。
"""
import asyncio
import json
import logging

from blocstore import DevToolsMiddleware, StoreConfig, configure_logging
from blocstore.features.counter import (
    DecreaseNumber,
    DivideNumber,
    IncreaseNumber,
    MultiplyNumber,
    ResetNumber,
    SetValue,
    create_counter_selectors,
    create_counter_store,
    get_value,
)


async def main() -> None:
    config = StoreConfig.from_env()
    configure_logging(config.log_level)
    logger = logging.getLogger("counter_example")

    devtools = DevToolsMiddleware()
    store = create_counter_store(config=config, middleware=[devtools])
    selectors = create_counter_selectors(config.counter)

    # 訂閱狀態變化
    store.select(get_value).subscribe(
        on_next=lambda t: print(f"計數變化: {t[0]} -> {t[1]}")
    )
    store.select(selectors.counter_info).subscribe(
        on_next=lambda info_tuple: print(
            f"計數器信息更新: {json.dumps(info_tuple[1], ensure_ascii=False, indent=2)}"
        )
    )
    store.select(selectors.is_at_max).subscribe(
        on_next=lambda t: t[1] and logger.warning("計數器已達上限")
    )

    print("\n==== 開始測試基本操作 ====")
    store.dispatch(IncreaseNumber())
    store.dispatch(SetValue(value=60))
    store.dispatch(MultiplyNumber())
    store.dispatch(IncreaseNumber())  # 已在上限，不會通知
    store.dispatch(DivideNumber())
    store.dispatch(DecreaseNumber())
    await store.join()

    print("\n==== 開始測試邊界 ====")
    store.dispatch(SetValue(value=-999))
    store.dispatch(DivideNumber())
    store.dispatch(ResetNumber())
    await store.join()

    print("\n==== 歷史紀錄 ====")
    for prev_state, event, next_state in devtools.get_history():
        print(f"{event.type}: {prev_state.value} -> {next_state.value}")

    print("\n==== 最終狀態 ====")
    print(store.state)
    store.close()
    await store.wait_closed()


if __name__ == "__main__":
    asyncio.run(main())
