"""
首頁動態 Store。

    HomeInitial → HomeItemsRequested → HomeLoading → HomeLoaded | HomeError
"""
from datetime import datetime
from typing import Any, ClassVar, Iterable, List, Optional, Protocol, Tuple, runtime_checkable

from pydantic import BaseModel, ConfigDict

from blocstore.config import StoreConfig
from blocstore.events import Event
from blocstore.handlers import HandlerRegistry, create_registry, on
from blocstore.states import State
from blocstore.store import Store, create_store
from blocstore.types import EmitterProtocol

from .loading import load_resource


class HomeItem(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    image_url: Optional[str] = None
    created_at: datetime


# ====== Events ======
class HomeItemsRequested(Event):
    type: ClassVar[str] = "[Home] Items Requested"


# ====== States ======
class HomeState(State):
    pass


class HomeInitial(HomeState):
    pass


class HomeLoading(HomeState):
    pass


class HomeLoaded(HomeState):
    items: Tuple[HomeItem, ...]


class HomeError(HomeState):
    message: str


@runtime_checkable
class HomeRepository(Protocol):
    async def get_home_items(self) -> List[HomeItem]: ...


def create_home_registry(repository: HomeRepository) -> HandlerRegistry:
    async def on_items_requested(event: HomeItemsRequested, emit: EmitterProtocol) -> None:
        await load_resource(
            emit,
            repository.get_home_items,
            loading=HomeLoading(),
            loaded=lambda items: HomeLoaded(items=tuple(items)),
            error=lambda message: HomeError(message=message),
            label="home items",
        )

    return create_registry(on(HomeItemsRequested, on_items_requested))


def create_home_store(
    repository: HomeRepository,
    *,
    config: Optional[StoreConfig] = None,
    middleware: Iterable[Any] = (),
) -> Store[HomeState]:
    return create_store(
        HomeInitial(), create_home_registry(repository), name="home", middleware=middleware, config=config
    )
