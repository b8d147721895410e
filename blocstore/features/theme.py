"""
主題偏好 Store。

切換主題時先透過 ThemeRepository 儲存，再發出新狀態；儲存失敗只記錄日誌，
狀態保持不變。載入偏好失敗時退回 system。
"""
import enum
import logging
from typing import Any, ClassVar, Iterable, Optional, Protocol, runtime_checkable

from blocstore.config import StoreConfig
from blocstore.events import Event
from blocstore.handlers import HandlerRegistry, create_registry, on
from blocstore.states import State
from blocstore.store import Store, create_store
from blocstore.types import EmitterProtocol

logger = logging.getLogger(__name__)


class ThemeMode(str, enum.Enum):
    LIGHT = "light"
    DARK = "dark"
    SYSTEM = "system"


# ====== Events ======
class ThemeToggled(Event):
    type: ClassVar[str] = "[Theme] Toggled"


class ThemeLightRequested(Event):
    type: ClassVar[str] = "[Theme] Light Requested"


class ThemeDarkRequested(Event):
    type: ClassVar[str] = "[Theme] Dark Requested"


class ThemeSystemRequested(Event):
    type: ClassVar[str] = "[Theme] System Requested"


class ThemeLoadRequested(Event):
    type: ClassVar[str] = "[Theme] Load Requested"


# ====== States ======
class ThemeState(State):
    theme_mode: ThemeMode = ThemeMode.SYSTEM

    @property
    def is_light(self) -> bool:
        return self.theme_mode is ThemeMode.LIGHT

    @property
    def is_dark(self) -> bool:
        return self.theme_mode is ThemeMode.DARK

    @property
    def is_system(self) -> bool:
        return self.theme_mode is ThemeMode.SYSTEM


class ThemeInitial(ThemeState):
    pass


class ThemeLoaded(ThemeState):
    pass


@runtime_checkable
class ThemeRepository(Protocol):
    async def get_theme_mode(self) -> Optional[ThemeMode]: ...

    async def save_theme_mode(self, theme_mode: ThemeMode) -> bool: ...


def toggled_mode(current: ThemeMode) -> ThemeMode:
    # light 與 dark 互換，system 一律切到 light
    return ThemeMode.DARK if current is ThemeMode.LIGHT else ThemeMode.LIGHT


class ThemeHandlers:
    def __init__(self, repository: ThemeRepository):
        self._repository = repository

    async def on_toggled(self, event: ThemeToggled, emit: EmitterProtocol) -> None:
        new_mode = toggled_mode(emit.state.theme_mode)
        logger.info("Theme toggled to: %s", new_mode.value)
        await self._save_and_emit(emit, new_mode)

    async def on_light(self, event: ThemeLightRequested, emit: EmitterProtocol) -> None:
        await self._save_and_emit(emit, ThemeMode.LIGHT)

    async def on_dark(self, event: ThemeDarkRequested, emit: EmitterProtocol) -> None:
        await self._save_and_emit(emit, ThemeMode.DARK)

    async def on_system(self, event: ThemeSystemRequested, emit: EmitterProtocol) -> None:
        await self._save_and_emit(emit, ThemeMode.SYSTEM)

    async def on_load(self, event: ThemeLoadRequested, emit: EmitterProtocol) -> None:
        try:
            mode = await self._repository.get_theme_mode() or ThemeMode.SYSTEM
        except Exception:
            logger.exception("載入主題偏好失敗，使用 system")
            mode = ThemeMode.SYSTEM
        logger.info("Theme preference loaded: %s", mode.value)
        emit(ThemeLoaded(theme_mode=mode))

    async def _save_and_emit(self, emit: EmitterProtocol, mode: ThemeMode) -> None:
        try:
            await self._repository.save_theme_mode(mode)
        except Exception:
            logger.exception("儲存主題 %s 失敗", mode.value)
            return
        emit(ThemeLoaded(theme_mode=mode))


def create_theme_registry(repository: ThemeRepository) -> HandlerRegistry:
    handlers = ThemeHandlers(repository)
    return create_registry(
        on(ThemeToggled, handlers.on_toggled),
        on(ThemeLightRequested, handlers.on_light),
        on(ThemeDarkRequested, handlers.on_dark),
        on(ThemeSystemRequested, handlers.on_system),
        on(ThemeLoadRequested, handlers.on_load),
    )


def create_theme_store(
    repository: ThemeRepository,
    *,
    config: Optional[StoreConfig] = None,
    middleware: Iterable[Any] = (),
) -> Store[ThemeState]:
    return create_store(
        ThemeInitial(), create_theme_registry(repository), name="theme", middleware=middleware, config=config
    )
