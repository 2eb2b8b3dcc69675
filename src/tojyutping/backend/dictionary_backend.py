"""
字典後端 (DictionaryBackend)

持有整個行程共享的基底字典，第一次使用時才載入。
實作為執行緒安全的單例模式：多個執行緒同時第一次存取時，
字典只會被解析一次，也不會有人看到解析到一半的字典。
"""

import os
import threading
from typing import Any, Dict, Optional, Union

from tojyutping.core.events import DictionaryEventHandler
from tojyutping.core.loader import load_dictionary
from tojyutping.core.node import TrieNode
from tojyutping.utils.logger import TimingContext, get_logger

logger = get_logger(__name__)


# =============================================================================
# 全域狀態
# =============================================================================

_instance: Optional["DictionaryBackend"] = None
_instance_lock = threading.Lock()


class DictionaryBackend:
    """
    字典後端

    職責:
    - 載入字典檔（只做一次）
    - 提供載入完成、之後唯讀的根節點
    - 提供字典統計資訊

    使用方式:
        backend = get_dictionary_backend()  # 取得單例
        root = backend.root

    測試或需要其他字典檔時，可直接建立獨立實例:
        backend = DictionaryBackend(data_path="my_data.txt")
    """

    def __init__(
        self,
        data_path: Optional[Union[str, "os.PathLike[str]"]] = None,
        on_event: Optional[DictionaryEventHandler] = None,
    ):
        self._data_path = data_path
        self._on_event = on_event
        self._root: Optional[TrieNode] = None
        self._loaded = False
        self._init_lock = threading.Lock()

    def initialize(self) -> None:
        """
        載入字典

        此方法是執行緒安全的，多次呼叫不會重複載入。
        載入失敗時字典為空，不拋出例外。
        """
        if self._root is not None:
            return

        with self._init_lock:
            if self._root is not None:
                return

            root = TrieNode()
            with TimingContext("DictionaryBackend.initialize", logger=logger):
                self._loaded = load_dictionary(root, self._data_path, on_event=self._on_event)
            # 填好之後才公開
            self._root = root

    def is_initialized(self) -> bool:
        """檢查是否已初始化"""
        return self._root is not None

    def is_loaded(self) -> bool:
        """檢查字典檔是否成功載入（失敗時為空字典）"""
        return self._loaded

    @property
    def root(self) -> TrieNode:
        """取得根節點，尚未初始化時會自動初始化"""
        if self._root is None:
            self.initialize()
        return self._root

    def get_stats(self) -> Dict[str, Any]:
        """
        取得字典統計

        Returns:
            Dict: 包含 loaded, nodes, entries, max_depth
        """
        nodes = 0
        entries = 0
        max_depth = 0
        stack = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            nodes += 1
            if node.values:
                entries += 1
            max_depth = max(max_depth, depth)
            stack.extend((child, depth + 1) for child in node.children.values())

        return {
            "loaded": self._loaded,
            "nodes": nodes,
            "entries": entries,
            "max_depth": max_depth,
        }


# =============================================================================
# 便捷函數
# =============================================================================

def get_dictionary_backend() -> DictionaryBackend:
    """
    取得 DictionaryBackend 單例

    字典檔位置依序為：環境變數 TOJYUTPING_DATA_PATH → 套件內的 data/data.txt

    Returns:
        DictionaryBackend: 單例實例
    """
    global _instance

    if _instance is not None:
        return _instance

    with _instance_lock:
        if _instance is None:
            _instance = DictionaryBackend()
        return _instance
