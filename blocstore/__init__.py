"""
blocstore：單向資料流的反應式狀態管理核心。

每個 feature 建立自己的 Store；Store 接收不可變的事件，依序執行對應的處理器，
並向訂閱者發出不可變的狀態。
"""
import logging

from .errors import BlocStoreError, ConfigurationError, HandlerError, StoreError
from .failures import (
    AuthFailure,
    Failure,
    FailureKind,
    NetworkFailure,
    ServerFailure,
    ValidationFailure,
    classify_failure,
)
from .events import Event, event_type
from .states import State, evolve
from .handlers import HandlerRegistry, create_registry, on
from .config import AuthSettings, CounterSettings, StoreConfig
from .middleware import BaseMiddleware, DevToolsMiddleware, LoggerMiddleware, PerformanceMonitorMiddleware
from .store import Emitter, Store, create_store
from .store_selectors import create_selector
from .logging_config import configure_logging
from .app_scope import AppScope

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

# 匯出所有公開 API
__all__ = [
    # Errors
    "BlocStoreError", "StoreError", "HandlerError", "ConfigurationError",

    # Failures
    "Failure", "FailureKind", "ValidationFailure", "NetworkFailure",
    "ServerFailure", "AuthFailure", "classify_failure",

    # Events & States
    "Event", "event_type", "State", "evolve",

    # Handlers
    "HandlerRegistry", "create_registry", "on",

    # Config
    "StoreConfig", "CounterSettings", "AuthSettings",

    # Middleware
    "BaseMiddleware", "LoggerMiddleware", "DevToolsMiddleware", "PerformanceMonitorMiddleware",

    # Store
    "Store", "Emitter", "create_store",

    # Selectors
    "create_selector",

    # Logging
    "configure_logging",

    # App scope
    "AppScope",
]
