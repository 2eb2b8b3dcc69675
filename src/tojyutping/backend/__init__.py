"""
後端模組

管理整個行程共享、只載入一次的基底字典。
"""

from .dictionary_backend import DictionaryBackend, get_dictionary_backend

__all__ = [
    "DictionaryBackend",
    "get_dictionary_backend",
]
