from datetime import datetime
from typing import Any, ClassVar, Iterable, Optional, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict

from blocstore.config import StoreConfig
from blocstore.events import Event
from blocstore.handlers import HandlerRegistry, create_registry, on
from blocstore.states import State
from blocstore.store import Store, create_store
from blocstore.types import EmitterProtocol

from .loading import load_resource


class Profile(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    email: str
    avatar: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime


class ProfileRequested(Event):
    type: ClassVar[str] = "[Profile] Requested"


class ProfileState(State):
    pass


class ProfileInitial(ProfileState):
    pass


class ProfileLoading(ProfileState):
    pass


class ProfileLoaded(ProfileState):
    profile: Profile


class ProfileError(ProfileState):
    message: str


@runtime_checkable
class ProfileRepository(Protocol):
    async def get_profile(self) -> Profile: ...


def create_profile_registry(repository: ProfileRepository) -> HandlerRegistry:
    async def on_profile_requested(event: ProfileRequested, emit: EmitterProtocol) -> None:
        await load_resource(
            emit,
            repository.get_profile,
            loading=ProfileLoading(),
            loaded=lambda profile: ProfileLoaded(profile=profile),
            error=lambda message: ProfileError(message=message),
            label="profile",
        )

    return create_registry(on(ProfileRequested, on_profile_requested))


def create_profile_store(
    repository: ProfileRepository,
    *,
    config: Optional[StoreConfig] = None,
    middleware: Iterable[Any] = (),
) -> Store[ProfileState]:
    return create_store(
        ProfileInitial(), create_profile_registry(repository), name="profile", middleware=middleware, config=config
    )
