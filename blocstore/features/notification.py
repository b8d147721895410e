from datetime import datetime
from typing import Any, ClassVar, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel, ConfigDict

from blocstore.config import StoreConfig
from blocstore.events import Event
from blocstore.handlers import HandlerRegistry, create_registry, on
from blocstore.states import State
from blocstore.store import Store, create_store
from blocstore.store_selectors import create_selector
from blocstore.types import EmitterProtocol

from .loading import load_resource


class NotificationItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    message: str
    is_read: bool = False
    created_at: datetime


class NotificationsRequested(Event):
    type: ClassVar[str] = "[Notification] Requested"


class NotificationState(State):
    pass


class NotificationInitial(NotificationState):
    pass


class NotificationLoading(NotificationState):
    pass


class NotificationLoaded(NotificationState):
    notifications: Tuple[NotificationItem, ...]


class NotificationError(NotificationState):
    message: str


@runtime_checkable
class NotificationRepository(Protocol):
    async def get_notifications(self) -> List[NotificationItem]: ...


def create_notification_registry(repository: NotificationRepository) -> HandlerRegistry:
    async def on_notifications_requested(event: NotificationsRequested, emit: EmitterProtocol) -> None:
        await load_resource(
            emit,
            repository.get_notifications,
            loading=NotificationLoading(),
            loaded=lambda items: NotificationLoaded(notifications=tuple(items)),
            error=lambda message: NotificationError(message=message),
            label="notifications",
        )

    return create_registry(on(NotificationsRequested, on_notifications_requested))


def create_notification_store(
    repository: NotificationRepository,
    *,
    config: Optional[StoreConfig] = None,
    middleware: Iterable[Any] = (),
) -> Store[NotificationState]:
    return create_store(
        NotificationInitial(),
        create_notification_registry(repository),
        name="notification",
        middleware=middleware,
        config=config,
    )


# ====== Selectors ======
get_notifications = lambda state: state.notifications if isinstance(state, NotificationLoaded) else ()
get_unread_count = create_selector(
    get_notifications, result_fn=lambda items: sum(1 for item in items if not item.is_read)
)
