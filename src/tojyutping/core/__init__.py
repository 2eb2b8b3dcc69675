"""
核心查詢層

編碼表、字典載入器、字典樹與自訂層。
"""

from .codec import decode_jyutping, encode_jyutping
from .events import DictionaryEvent, DictionaryEventHandler
from .layers import (
    BaseLayer,
    CustomizationLayer,
    DictionaryLayer,
    Override,
    OverrideState,
)
from .loader import find_data_file, load_dictionary, parse_dictionary
from .node import TrieNode
from .trie import Trie

__all__ = [
    "decode_jyutping",
    "encode_jyutping",
    "DictionaryEvent",
    "DictionaryEventHandler",
    "BaseLayer",
    "CustomizationLayer",
    "DictionaryLayer",
    "Override",
    "OverrideState",
    "find_data_file",
    "load_dictionary",
    "parse_dictionary",
    "TrieNode",
    "Trie",
]
