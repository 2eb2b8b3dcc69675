"""
查詢引擎 (Trie)

- get(): 逐位置做最長匹配，取最長詞條的預設讀音
- get_all(): 列出每個字所有可能的讀音（供候選列表使用，不做斷詞）
- customize(): 建立帶有覆寫的新 Trie，原本的 Trie 不受影響
"""

from __future__ import annotations

import os
from typing import TYPE_CHECKING, List, Mapping, Optional, Sequence, Tuple, Union

from .layers import BaseLayer, CustomizationLayer, DictionaryLayer
from .loader import load_dictionary, parse_dictionary
from .node import TrieNode

if TYPE_CHECKING:
    from .events import DictionaryEventHandler

CustomValue = Union[str, Sequence[str], None]


class Trie:
    """
    粵拼字典樹

    預設使用整個行程共享的基底字典（第一次使用時載入，只載入一次）；
    也可以注入自己的根節點或字典層，方便測試建立獨立的實例。

    使用範例:
        trie = Trie()
        trie.get("你好")          # [("你", "nei5"), ("好", "hou2")]
        custom = trie.customize({"好": "hou3"})
        custom.get("好")          # [("好", "hou3")]
        custom.get("你好")        # 詞條優先: [("你", "nei5"), ("好", "hou2")]
    """

    def __init__(self, root: Optional[TrieNode] = None, *, layer: Optional[DictionaryLayer] = None):
        if layer is None:
            if root is None:
                from tojyutping.backend import get_dictionary_backend

                root = get_dictionary_backend().root
            layer = BaseLayer(root)
        elif root is not None:
            raise ValueError("Pass either root or layer, not both")
        self._layer = layer

    @classmethod
    def from_text(cls, data: str) -> "Trie":
        """由字典檔內容建立獨立的 Trie（格式錯誤時拋出 ValueError）"""
        root = TrieNode()
        parse_dictionary(data, root)
        return cls(root)

    @classmethod
    def from_file(
        cls,
        path: Union[str, "os.PathLike[str]"],
        on_event: Optional["DictionaryEventHandler"] = None,
    ) -> "Trie":
        """由字典檔建立獨立的 Trie（讀取失敗時降級為空字典）"""
        root = TrieNode()
        load_dictionary(root, path, on_event=on_event)
        return cls(root)

    @property
    def layer(self) -> DictionaryLayer:
        return self._layer

    @property
    def root(self) -> TrieNode:
        return self._layer.root

    def get_value(self, node: TrieNode) -> Optional[Tuple[str, ...]]:
        return self._layer.resolve(node)

    def get(self, text: str) -> List[Tuple[str, Optional[str]]]:
        """
        取得每個字的最佳讀音

        從每個位置出發沿字典樹走到最遠，採用最後一個有讀音的節點（最長匹配）的
        第一個候選，並把它的音節依序分給匹配到的每個字。

        Args:
            text: 任意文字

        Returns:
            List[Tuple[str, Optional[str]]]: (字, 粵拼)；查不到時粵拼為 None
        """
        layer = self._layer
        root = layer.root
        chars = list(text)
        result: List[Tuple[str, Optional[str]]] = []
        i = 0

        while i < len(chars):
            node = root
            matched = ""
            match_end = i

            for j in range(i, len(chars)):
                node = layer.child(node, chars[j])
                if node is None:
                    break
                values = layer.resolve(node)
                if values:
                    matched = values[0]
                    match_end = j

            if match_end == i:
                result.append((chars[i], matched or None))
                i += 1
                continue

            parts = matched.split()
            for offset, char in enumerate(chars[i:match_end + 1]):
                result.append((char, parts[offset] if offset < len(parts) else None))
            i = match_end + 1

        return result

    def get_all(self, text: str) -> List[Tuple[str, List[str]]]:
        """
        取得每個字所有可能的讀音

        每個字依「所在詞條長度」分桶收集讀音，輸出時由長到短攤平並去重，
        較長詞條的讀音排在前面。單字本身的候選放在長度 0 的桶。

        Args:
            text: 任意文字

        Returns:
            List[Tuple[str, List[str]]]: (字, 讀音列表)；查不到時列表為空
        """
        layer = self._layer
        root = layer.root
        chars = list(text)

        buckets: List[List[List[str]]] = []
        for char in chars:
            node = layer.child(root, char)
            values = layer.resolve(node) if node is not None else None
            buckets.append([_unique(values)] if values is not None else [])

        for i in range(len(chars)):
            node = layer.child(root, chars[i])
            if node is None:
                continue

            for j in range(i + 1, len(chars)):
                node = layer.child(node, chars[j])
                if node is None:
                    break
                values = layer.resolve(node)
                if values is None:
                    continue

                length = j - i
                for pronunciation in values:
                    parts = pronunciation.split()
                    for offset, part in enumerate(parts[:length + 1]):
                        char_buckets = buckets[i + offset]
                        while len(char_buckets) <= length:
                            char_buckets.append([])
                        if part not in char_buckets[length]:
                            char_buckets[length].append(part)

        return [
            (char, _unique(p for bucket in reversed(char_buckets) for p in bucket))
            for char, char_buckets in zip(chars, buckets)
        ]

    def customize(self, entries: Mapping[str, CustomValue]) -> "Trie":
        """
        建立帶有覆寫的新 Trie

        Args:
            entries: 詞 → 讀音；值可以是單一字串、字串列表，或 None（明確設定為沒有讀音）

        Returns:
            Trie: 新的 Trie，本身與其他已建立的 Trie 不受影響
        """
        layer = CustomizationLayer(self._layer)
        for key, value in entries.items():
            layer.customize(key, [value] if isinstance(value, str) else value)
        return Trie(layer=layer)


def _unique(items) -> List[str]:
    seen = set()
    result = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result
