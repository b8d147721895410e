"""
blocstore 的日誌設定。

函式庫本身只透過 ``logging.getLogger(__name__)`` 記錄日誌，並在套件層級
掛上 NullHandler；應用程式 (或範例腳本) 呼叫 configure_logging 才會輸出到主控台。
"""
import logging
import sys
from typing import Optional, Union

LOGGER_NAME = "blocstore"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(
    level: Union[int, str] = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream=None,
) -> logging.Logger:
    """
    為 blocstore 的 logger 安裝主控台 handler。

    重複呼叫只會更新等級與格式，不會重複安裝 handler。

    Args:
        level: 日誌等級，數字或名稱 (例如 "DEBUG")。
        fmt: 日誌格式。
        stream: 輸出串流，預設為 sys.stderr。

    Returns:
        blocstore 的根 logger。
    """
    root = logging.getLogger(LOGGER_NAME)
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)

    handler: Optional[logging.Handler] = next(
        (h for h in root.handlers if getattr(h, "_blocstore_console", False)), None
    )
    if handler is None:
        handler = logging.StreamHandler(stream or sys.stderr)
        handler._blocstore_console = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    handler.setFormatter(logging.Formatter(fmt))
    return root
