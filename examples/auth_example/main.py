"""
blocstore 範例：AppScope 與驗證 Store。

以假的 repository 模擬後端延遲，展示登入驗證失敗、登入成功、
同一個 tick 內登入又登出，以及重新啟動時恢復持久化的 session。
"""
import asyncio
import random
from datetime import datetime

from blocstore import AppScope, NetworkFailure, PerformanceMonitorMiddleware, StoreConfig
from blocstore.features.auth import (
    AuthSession,
    InMemorySessionStorage,
    LoginRequested,
    LogoutRequested,
    RegisterRequested,
    User,
    auth_error_message,
    current_user_email,
)
from blocstore.features.dashboard import DashboardData, DashboardDataRequested, DashboardTabChanged


class DemoAuthRepository:
    def __init__(self, flaky: bool = False):
        self.flaky = flaky

    async def login(self, email: str, password: str) -> AuthSession:
        await asyncio.sleep(0.2)
        if self.flaky and random.random() < 0.5:
            raise NetworkFailure("Network error: connection reset")
        user = User(id="demo-1", email=email, name="Demo User", created_at=datetime.now())
        return AuthSession(user=user, token="demo-token")

    async def register(self, email: str, password: str, name: str) -> AuthSession:
        await asyncio.sleep(0.2)
        user = User(id="demo-2", email=email, name=name, created_at=datetime.now())
        return AuthSession(user=user, token="demo-token")


class DemoDashboardRepository:
    async def get_dashboard_data(self) -> DashboardData:
        await asyncio.sleep(0.1)
        return DashboardData(user_name="Demo User", user_email="demo@example.com", total_items=5, unread_notifications=3)


def print_state(label: str):
    def _print(state) -> None:
        detail = auth_error_message(state) or current_user_email(state) or ""
        print(f"[{label}] {type(state).__name__} {detail}")
    return _print


async def main() -> None:
    config = StoreConfig.from_env()
    storage = InMemorySessionStorage()

    async with AppScope(DemoAuthRepository(), storage, config, configure_logs=True) as scope:
        scope.auth.subscribe(print_state("auth"))
        await scope.auth.join()

        print("\n==== 驗證失敗 ====")
        scope.auth.dispatch(LoginRequested(email="not-an-email", password="password123"))
        scope.auth.dispatch(RegisterRequested(email="demo@example.com", password="password123", name="x"))
        await scope.auth.join()

        print("\n==== 登入後立即登出 ====")
        scope.auth.dispatch(LoginRequested(email="demo@example.com", password="password123"))
        scope.auth.dispatch(LogoutRequested())
        await scope.auth.join()

        print("\n==== 登入 ====")
        scope.auth.dispatch(LoginRequested(email="demo@example.com", password="password123"))
        await scope.auth.join()

        dashboard = scope.create_dashboard_store(
            DemoDashboardRepository(), middleware=[PerformanceMonitorMiddleware(threshold_ms=50)]
        )
        dashboard.subscribe(lambda state: print(f"[dashboard] {state!r}"))
        dashboard.dispatch(DashboardTabChanged(index=2))
        dashboard.dispatch(DashboardDataRequested())
        await dashboard.join()
        dashboard.close()

    print("\n==== 重新啟動，恢復 session ====")
    async with AppScope(DemoAuthRepository(), storage, config) as scope:
        scope.auth.subscribe(print_state("auth"))
        await scope.auth.join()
        print(f"最終狀態: {scope.auth.state!r}")


if __name__ == "__main__":
    asyncio.run(main())
