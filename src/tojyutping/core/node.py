"""
字典樹節點
"""

from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple


@dataclass(eq=False)
class TrieNode:
    """
    字典樹上的一個位置

    Attributes:
        children: 下一個字 → 子節點
        values: 以此節點結尾的詞的讀音候選（第一個為預設讀音），
                多字詞的讀音以空白分隔每個字的音節；None 表示此處沒有詞條

    節點以物件身分 (identity) 雜湊，可作為覆寫表的 key。
    """

    children: Dict[str, "TrieNode"] = field(default_factory=dict)
    values: Optional[Tuple[str, ...]] = None
