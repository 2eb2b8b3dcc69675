"""
tojyutping - 粵拼標註 (Chinese text → Jyutping / IPA)

核心概念：
- 字典以字典樹 (trie) 儲存，整個行程共享一份，第一次使用時載入
- 查詢採最長匹配：多字詞的讀音優先於單字讀音
- customize() 以覆寫層建立新的轉換器，不修改共享字典

官方入口（穩定 API）：
- `tojyutping.JyutpingConverter`
- `tojyutping.get_jyutping` 等模組層級便捷函數
"""

import logging

# =============================================================================
# 轉換器（官方入口）
# =============================================================================
from tojyutping.converter import (
    JyutpingConverter,
    customize,
    get_default_converter,
    get_ipa,
    get_ipa_candidates,
    get_ipa_list,
    get_ipa_text,
    get_jyutping,
    get_jyutping_candidates,
    get_jyutping_list,
    get_jyutping_text,
)
from tojyutping.config import ConverterConfig

# =============================================================================
# 查詢引擎（進階用途）
# =============================================================================
from tojyutping.core import CustomizationLayer, Trie, TrieNode, decode_jyutping, encode_jyutping
from tojyutping.backend import DictionaryBackend, get_dictionary_backend
from tojyutping.ipa import jyutping_to_ipa

# =============================================================================
# 日誌工具
# =============================================================================
from tojyutping.utils.logger import enable_debug_logging, get_logger

logging.getLogger("tojyutping").addHandler(logging.NullHandler())

__all__ = [
    # Converter
    "JyutpingConverter",
    "ConverterConfig",
    "get_default_converter",
    "get_jyutping_list",
    "get_jyutping",
    "get_jyutping_text",
    "get_jyutping_candidates",
    "get_ipa_list",
    "get_ipa",
    "get_ipa_text",
    "get_ipa_candidates",
    "customize",
    "jyutping_to_ipa",
    # Engine (advanced)
    "Trie",
    "TrieNode",
    "CustomizationLayer",
    "DictionaryBackend",
    "get_dictionary_backend",
    "decode_jyutping",
    "encode_jyutping",
    # Logging
    "get_logger",
    "enable_debug_logging",
]

__version__ = "0.1.0"
