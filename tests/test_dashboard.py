import asyncio

from blocstore.features.dashboard import (
    DashboardData,
    DashboardDataRequested,
    DashboardError,
    DashboardInitial,
    DashboardLoaded,
    DashboardLoading,
    DashboardTabChanged,
    create_dashboard_store,
    tab_changed_handler,
)


def run_dashboard(repository, events, **kwargs):
    async def scenario():
        store = create_dashboard_store(repository, **kwargs)
        seen = []
        store.subscribe(seen.append)
        for event in events:
            store.dispatch(event)
        await store.join()
        store.close()
        return store.state, seen

    return asyncio.run(scenario())


def test_tab_change_keeps_error_message():
    state = tab_changed_handler(DashboardError(message="x", current_tab_index=0), DashboardTabChanged(index=2))
    assert state == DashboardError(message="x", current_tab_index=2)


def test_tab_change_keeps_loaded_data():
    data = DashboardData(user_name="a", user_email="a@example.com")
    state = tab_changed_handler(DashboardLoaded(data=data), DashboardTabChanged(index=3))
    assert isinstance(state, DashboardLoaded)
    assert state.data == data
    assert state.current_tab_index == 3


def test_tab_change_accepts_any_index():
    state = tab_changed_handler(DashboardInitial(current_tab_index=1), DashboardTabChanged(index=-1))
    assert state == DashboardInitial(current_tab_index=-1)


def test_data_request_preserves_tab_index(dashboard_repository):
    state, seen = run_dashboard(dashboard_repository, [DashboardTabChanged(index=2), DashboardDataRequested()])
    assert [type(s) for s in seen] == [DashboardInitial, DashboardLoading, DashboardLoaded]
    assert all(s.current_tab_index == 2 for s in seen)
    assert state.data.total_items == 3


def test_tab_change_during_fetch_applies_after_load(make_dashboard_repository):
    repository = make_dashboard_repository(delay=0.02)
    state, seen = run_dashboard(repository, [DashboardDataRequested(), DashboardTabChanged(index=1)])
    assert [type(s) for s in seen] == [DashboardLoading, DashboardLoaded, DashboardLoaded]
    assert seen[1].current_tab_index == 0
    assert state.current_tab_index == 1
    assert isinstance(state, DashboardLoaded)


def test_fetch_failure_becomes_error_with_index(make_dashboard_repository):
    repository = make_dashboard_repository(error=RuntimeError("503"))
    state, _ = run_dashboard(repository, [DashboardDataRequested()], initial_tab_index=4)
    assert state == DashboardError(message="Failed to load dashboard data: 503", current_tab_index=4)


def test_network_failure_message(make_dashboard_repository):
    repository = make_dashboard_repository(error=TimeoutError("timed out"))
    state, _ = run_dashboard(repository, [DashboardDataRequested()])
    assert state.message == "Network error: timed out"


def test_refetch_from_error(make_dashboard_repository):
    repository = make_dashboard_repository(error=RuntimeError("503"))

    async def scenario():
        store = create_dashboard_store(repository)
        store.dispatch(DashboardDataRequested())
        await store.join()
        first = store.state
        repository.error = None
        store.dispatch(DashboardDataRequested())
        await store.join()
        second = store.state
        store.close()
        return first, second

    first, second = asyncio.run(scenario())
    assert isinstance(first, DashboardError)
    assert isinstance(second, DashboardLoaded)
    assert repository.calls == 2


def test_malformed_payload_becomes_error(make_dashboard_repository):
    repository = make_dashboard_repository(payload={"user_name": "x"})
    state, seen = run_dashboard(repository, [DashboardTabChanged(index=1), DashboardDataRequested()])
    assert [type(s) for s in seen] == [DashboardInitial, DashboardLoading, DashboardError]
    assert state.current_tab_index == 1
    assert state.message.startswith("Failed to load dashboard data: ")
    assert "user_email" in state.message
