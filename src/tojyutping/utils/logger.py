"""
日誌與計時工具

所有模組都透過 `get_logger()` 取得 `tojyutping` 底下的子 logger，
使用者可以直接用標準 logging 控制輸出：

    import logging
    logging.getLogger("tojyutping").setLevel(logging.DEBUG)

或呼叫 `enable_debug_logging()` 快速開啟。
"""

import functools
import logging
import time
from typing import Callable, Optional

ROOT_LOGGER_NAME = "tojyutping"
DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

TimingCallback = Callable[[str, float], None]


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    取得套件 logger

    Args:
        name: 子 logger 名稱（如 "loader"），None 時回傳根 logger

    Returns:
        logging.Logger: 名稱為 `tojyutping.<name>` 的 logger
    """
    if not name:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def setup_logger(level: int = logging.INFO, fmt: str = DEFAULT_FORMAT) -> logging.Logger:
    """
    為套件根 logger 掛上 StreamHandler（重複呼叫只會調整等級）

    Args:
        level: 日誌等級
        fmt: 日誌格式

    Returns:
        logging.Logger: 套件根 logger
    """
    logger = get_logger()
    logger.setLevel(level)

    handler = next(
        (h for h in logger.handlers if getattr(h, "_tojyutping_handler", False)),
        None,
    )
    if handler is None:
        handler = logging.StreamHandler()
        handler._tojyutping_handler = True
        handler.setFormatter(logging.Formatter(fmt))
        logger.addHandler(handler)
    handler.setLevel(level)
    return logger


def enable_debug_logging() -> logging.Logger:
    """開啟 DEBUG 等級日誌"""
    return setup_logger(level=logging.DEBUG)


class TimingContext:
    """
    計時 context manager

    離開區塊時以指定等級記錄耗時，並呼叫可選的回呼函數。

    使用範例:
        with TimingContext("parse_dictionary", logger=logger) as timing:
            ...
        print(timing.elapsed)
    """

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        level: int = logging.DEBUG,
        callback: Optional[TimingCallback] = None,
    ):
        self.operation = operation
        self.logger = logger or get_logger("timing")
        self.level = level
        self.callback = callback
        self.elapsed = 0.0
        self._start = 0.0

    def __enter__(self) -> "TimingContext":
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.elapsed = time.perf_counter() - self._start
        self.logger.log(self.level, f"[Timing] {self.operation}: {self.elapsed * 1000:.2f}ms")
        if self.callback is not None:
            self.callback(self.operation, self.elapsed)
        return False


def log_timing(operation: Optional[str] = None, level: int = logging.DEBUG):
    """
    函數計時裝飾器

    Args:
        operation: 記錄用的操作名稱，預設為函數的 qualname
        level: 日誌等級
    """

    def decorator(func: Callable) -> Callable:
        name = operation or func.__qualname__
        logger = get_logger(func.__module__)

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            with TimingContext(name, logger=logger, level=level):
                return func(*args, **kwargs)

        return wrapper

    return decorator
