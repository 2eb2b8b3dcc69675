"""
字典層 (Dictionary Layers)

查詢時「取得某節點的讀音」與「取得某節點的子節點」都透過層來解析：

- BaseLayer: 直接讀取節點本身的資料
- CustomizationLayer: 先查自己的覆寫表，沒有才交給上一層（責任鏈）

自訂層只持有對上一層的參考，上一層不知道有哪些自訂層，
因此共享的基底字典與其他兄弟層都不會受影響。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Protocol, Sequence, Tuple, runtime_checkable

from tojyutping.utils.logger import get_logger

from .node import TrieNode

logger = get_logger(__name__)


@runtime_checkable
class DictionaryLayer(Protocol):
    """查詢時解析節點資料的最小介面"""

    @property
    def root(self) -> TrieNode:
        ...

    def child(self, node: TrieNode, char: str) -> Optional[TrieNode]:
        """取得 node 之後接 char 的節點，不存在時回傳 None"""
        ...

    def resolve(self, node: TrieNode) -> Optional[Tuple[str, ...]]:
        """取得 node 的讀音候選，沒有詞條時回傳 None"""
        ...


class BaseLayer:
    """直接讀取節點資料的基底層"""

    def __init__(self, root: TrieNode):
        self._root = root

    @property
    def root(self) -> TrieNode:
        return self._root

    def child(self, node: TrieNode, char: str) -> Optional[TrieNode]:
        return node.children.get(char)

    def resolve(self, node: TrieNode) -> Optional[Tuple[str, ...]]:
        return node.values


class OverrideState(Enum):
    """覆寫狀態"""
    NOT_OVERRIDDEN = "not_overridden"  # 交給上一層
    VALUES = "values"                  # 以指定讀音取代
    SUPPRESSED = "suppressed"          # 明確標記為沒有讀音


@dataclass(frozen=True)
class Override:
    state: OverrideState
    values: Tuple[str, ...] = ()

    @classmethod
    def with_values(cls, values: Sequence[str]) -> "Override":
        return cls(OverrideState.VALUES, tuple(values))

    @classmethod
    def suppressed(cls) -> "Override":
        return cls(OverrideState.SUPPRESSED)


NOT_OVERRIDDEN = Override(OverrideState.NOT_OVERRIDDEN)


class CustomizationLayer:
    """
    可覆寫特定詞條的衍生層

    - 覆寫表以節點身分為 key（每條字元路徑恰有一個節點，等同以詞為 key）
    - 基底字典沒有的詞會在本層私有的嫁接表 (graft) 建立新節點，
      不會修改任何上層節點的 children
    - 單一擁有者在自訂階段寫入，之後僅供讀取；不支援多執行緒同時寫入

    使用範例:
        layer = CustomizationLayer(BaseLayer(root))
        layer.customize("好", ["hou3"])
        layer.customize("嘅", None)   # 明確設定為沒有讀音
    """

    def __init__(self, parent: DictionaryLayer):
        self._parent = parent
        self._overlay: Dict[TrieNode, Override] = {}
        self._grafts: Dict[Tuple[TrieNode, str], TrieNode] = {}

    @property
    def root(self) -> TrieNode:
        return self._parent.root

    @property
    def parent(self) -> DictionaryLayer:
        return self._parent

    def child(self, node: TrieNode, char: str) -> Optional[TrieNode]:
        grafted = self._grafts.get((node, char))
        if grafted is not None:
            return grafted
        return self._parent.child(node, char)

    def override_for(self, node: TrieNode) -> Override:
        """取得本層對 node 的覆寫（不往上層查）"""
        return self._overlay.get(node, NOT_OVERRIDDEN)

    def resolve(self, node: TrieNode) -> Optional[Tuple[str, ...]]:
        override = self.override_for(node)
        if override.state is OverrideState.VALUES:
            return override.values
        if override.state is OverrideState.SUPPRESSED:
            return None
        return self._parent.resolve(node)

    def customize(self, key: str, values: Optional[Sequence[str]]) -> None:
        """
        覆寫一個詞的讀音

        Args:
            key: 一個或多個漢字
            values: 取代用的讀音列表（第一個為預設讀音）；None 表示明確設定為沒有讀音

        Raises:
            ValueError: key 為空字串
            TypeError: values 不是字串序列
        """
        if not key:
            raise ValueError("Customization key must not be empty")

        if values is None:
            override = Override.suppressed()
        else:
            if isinstance(values, str):
                raise TypeError(f"Expected a sequence of strings for {key!r}, got a single string")
            values = tuple(values)
            for value in values:
                if not isinstance(value, str):
                    raise TypeError(f"Pronunciation for {key!r} must be str, got {type(value).__name__}")
            override = Override.with_values(values)

        node = self.root
        for char in key:
            next_node = self.child(node, char)
            if next_node is None:
                next_node = TrieNode()
                self._grafts[(node, char)] = next_node
            node = next_node

        self._overlay[node] = override
        logger.debug(f"Customized {key!r}: {override.state.value} {list(override.values)}")

    def __len__(self) -> int:
        return len(self._overlay)
