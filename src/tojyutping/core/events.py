"""
事件模型（Event Model）

字典載入失敗不會拋出例外，而是降級為空字典。
需要得知「這次載入是否成功」的呼叫端，請傳入事件回呼（event handler）。
"""

from __future__ import annotations

from typing import Callable, Literal, TypedDict


class DictionaryEvent(TypedDict, total=False):
    type: Literal["loaded", "degraded"]
    path: str

    # loaded
    entries: int
    elapsed: float

    # degraded
    degrade_reason: Literal["not_found", "unreadable", "malformed"]
    exception_type: str
    exception_message: str


DictionaryEventHandler = Callable[[DictionaryEvent], None]
