import asyncio
from datetime import datetime

from blocstore.failures import NetworkFailure
from blocstore.features.home import HomeError, HomeItem, HomeItemsRequested, HomeLoaded, HomeLoading, create_home_store
from blocstore.features.notification import (
    NotificationItem,
    NotificationLoaded,
    NotificationsRequested,
    create_notification_store,
    get_unread_count,
)
from blocstore.features.profile import Profile, ProfileError, ProfileLoaded, ProfileRequested, create_profile_store
from blocstore.features.theme import (
    ThemeDarkRequested,
    ThemeLoadRequested,
    ThemeMode,
    ThemeSystemRequested,
    ThemeToggled,
    create_theme_store,
    toggled_mode,
)

CREATED = datetime(2024, 1, 1)


class FakeHomeRepository:
    def __init__(self, error=None, payload=None):
        self.error = error
        self.payload = payload

    async def get_home_items(self):
        if self.error is not None:
            raise self.error
        if self.payload is not None:
            return self.payload
        return [HomeItem(id="1", title="First", created_at=CREATED), HomeItem(id="2", title="Second", created_at=CREATED)]


class FakeProfileRepository:
    def __init__(self, error=None):
        self.error = error

    async def get_profile(self):
        if self.error is not None:
            raise self.error
        return Profile(id="1", name="Eve", email="eve@example.com", created_at=CREATED)


class FakeNotificationRepository:
    async def get_notifications(self):
        return [
            NotificationItem(id="1", title="a", message="m", created_at=CREATED),
            NotificationItem(id="2", title="b", message="m", is_read=True, created_at=CREATED),
            NotificationItem(id="3", title="c", message="m", created_at=CREATED),
        ]


class FakeThemeRepository:
    def __init__(self, stored=None, fail_save=False, fail_load=False):
        self.stored = stored
        self.fail_save = fail_save
        self.fail_load = fail_load

    async def get_theme_mode(self):
        if self.fail_load:
            raise OSError("prefs unavailable")
        return self.stored

    async def save_theme_mode(self, theme_mode):
        if self.fail_save:
            raise OSError("prefs read-only")
        self.stored = theme_mode
        return True


def run(factory, repository, events):
    async def scenario():
        store = factory(repository)
        seen = []
        store.subscribe(seen.append)
        for event in events:
            store.dispatch(event)
        await store.join()
        store.close()
        return store.state, seen

    return asyncio.run(scenario())


def test_home_items_load():
    state, seen = run(create_home_store, FakeHomeRepository(), [HomeItemsRequested()])
    assert isinstance(seen[0], HomeLoading)
    assert isinstance(state, HomeLoaded)
    assert [item.title for item in state.items] == ["First", "Second"]


def test_home_items_failure():
    state, _ = run(create_home_store, FakeHomeRepository(error=RuntimeError("bad gateway")), [HomeItemsRequested()])
    assert state == HomeError(message="Failed to load home items: bad gateway")


def test_home_malformed_items_become_error():
    repository = FakeHomeRepository(payload=[{"id": "1"}])
    state, seen = run(create_home_store, repository, [HomeItemsRequested()])
    assert [type(s) for s in seen] == [HomeLoading, HomeError]
    assert state.message.startswith("Failed to load home items: ")


def test_profile_load():
    state, _ = run(create_profile_store, FakeProfileRepository(), [ProfileRequested()])
    assert isinstance(state, ProfileLoaded)
    assert state.profile.name == "Eve"


def test_profile_failure_keeps_classified_message():
    repository = FakeProfileRepository(error=NetworkFailure("Network error: offline"))
    state, _ = run(create_profile_store, repository, [ProfileRequested()])
    assert state == ProfileError(message="Network error: offline")


def test_notifications_unread_count():
    state, _ = run(create_notification_store, FakeNotificationRepository(), [NotificationsRequested()])
    assert isinstance(state, NotificationLoaded)
    assert get_unread_count(state) == 2


def test_toggled_mode():
    assert toggled_mode(ThemeMode.LIGHT) is ThemeMode.DARK
    assert toggled_mode(ThemeMode.DARK) is ThemeMode.LIGHT
    assert toggled_mode(ThemeMode.SYSTEM) is ThemeMode.LIGHT


def test_theme_toggle_saves_then_emits():
    repository = FakeThemeRepository()
    state, seen = run(create_theme_store, repository, [ThemeToggled(), ThemeToggled()])
    assert [s.theme_mode for s in seen] == [ThemeMode.LIGHT, ThemeMode.DARK]
    assert state.is_dark
    assert repository.stored is ThemeMode.DARK


def test_theme_save_failure_keeps_state():
    state, seen = run(create_theme_store, FakeThemeRepository(fail_save=True), [ThemeDarkRequested()])
    assert seen == []
    assert state.is_system


def test_theme_load_uses_stored_preference():
    state, _ = run(create_theme_store, FakeThemeRepository(stored=ThemeMode.DARK), [ThemeLoadRequested()])
    assert state.theme_mode is ThemeMode.DARK


def test_theme_load_failure_falls_back_to_system():
    state, seen = run(create_theme_store, FakeThemeRepository(fail_load=True), [ThemeLoadRequested()])
    assert state.is_system
    assert len(seen) == 1


def test_theme_explicit_modes():
    state, _ = run(create_theme_store, FakeThemeRepository(), [ThemeDarkRequested(), ThemeSystemRequested()])
    assert state.is_system
