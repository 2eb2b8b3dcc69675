"""
粵拼轉換器 (JyutpingConverter)

在查詢引擎之上提供各種輸出格式：

- get_jyutping_list / get_ipa_list: (字, 讀音) 列表
- get_jyutping / get_ipa: 行內標註，如 "你(nei5)好(hou2)"、"你[nei̯˩˧]好[hou̯˧˥]"
- get_jyutping_text / get_ipa_text: 排版後的純讀音文字
- get_jyutping_candidates / get_ipa_candidates: 每個字所有可能讀音
- customize: 建立帶有自訂讀音的新轉換器

模組層級同名函數使用延遲建立的預設轉換器。
"""

import logging
import threading
from typing import Callable, List, Mapping, Optional, Tuple

from tojyutping.core.trie import CustomValue, Trie
from tojyutping.utils.logger import TimingContext, get_logger

from .config import ConverterConfig
from .formatting import format_ipa_text, format_romanization_text
from .ipa import jyutping_to_ipa


class JyutpingConverter:
    """
    粵拼轉換器

    生命週期:
    - 預設轉換器共享同一份基底字典（只載入一次）
    - customize() 建立輕量的新轉換器，只多一層覆寫，不影響原本的轉換器

    使用範例:
        converter = JyutpingConverter()
        converter.get_jyutping("你好")                      # "你(nei5)好(hou2)"
        custom = converter.customize({"好": "hou3"})
        custom.get_jyutping("好")                           # "好(hou3)"
        custom.get_jyutping("你好")                         # 詞條優先: "你(nei5)好(hou2)"
    """

    def __init__(
        self,
        trie: Optional[Trie] = None,
        *,
        config: Optional[ConverterConfig] = None,
        verbose: bool = False,
        on_timing: Optional[Callable[[str, float], None]] = None,
    ):
        self._config = config or ConverterConfig(verbose=verbose, on_timing=on_timing)
        self._logger = get_logger("converter")

        if trie is None:
            with self._log_timing("JyutpingConverter.load"):
                if self._config.data_path is not None:
                    trie = Trie.from_file(self._config.data_path)
                else:
                    trie = Trie()
            if self._config.verbose:
                self._logger.info("JyutpingConverter initialized")
        self._trie = trie

    def _log_timing(self, operation: str) -> TimingContext:
        return TimingContext(
            operation=operation,
            logger=self._logger,
            level=logging.DEBUG,
            callback=self._config.on_timing,
        )

    @property
    def trie(self) -> Trie:
        return self._trie

    @property
    def config(self) -> ConverterConfig:
        return self._config

    # ========== 粵拼 ==========

    def get_jyutping_list(self, text: str) -> List[Tuple[str, Optional[str]]]:
        """取得 (字, 粵拼或 None) 列表"""
        return self._trie.get(text)

    def get_jyutping(self, text: str) -> str:
        """取得行內標註，如 "你(nei5)好(hou2)" """
        return "".join(
            char if jyutping is None else f"{char}({jyutping})"
            for char, jyutping in self._trie.get(text)
        )

    def get_jyutping_text(self, text: str) -> str:
        """取得排版後的粵拼文字，如 "你好！" → "nei5 hou2!" """
        return format_romanization_text(text, self.get_jyutping_list)

    def get_jyutping_candidates(self, text: str) -> List[Tuple[str, List[str]]]:
        """取得每個字所有可能的粵拼"""
        return self._trie.get_all(text)

    # ========== IPA ==========

    def get_ipa_list(self, text: str) -> List[Tuple[str, Optional[str]]]:
        """取得 (字, IPA 或 None) 列表"""
        return [
            (char, None if jyutping is None else jyutping_to_ipa(jyutping))
            for char, jyutping in self._trie.get(text)
        ]

    def get_ipa(self, text: str) -> str:
        """取得行內標註，如 "你[nei̯˩˧]好[hou̯˧˥]" """
        return "".join(
            char if jyutping is None else f"{char}[{jyutping_to_ipa(jyutping)}]"
            for char, jyutping in self._trie.get(text)
        )

    def get_ipa_text(self, text: str) -> str:
        """取得排版後的 IPA 文字"""
        return format_ipa_text(text, self.get_ipa_list)

    def get_ipa_candidates(self, text: str) -> List[Tuple[str, List[str]]]:
        """取得每個字所有可能的 IPA"""
        return [
            (char, [jyutping_to_ipa(j) for j in candidates])
            for char, candidates in self._trie.get_all(text)
        ]

    # ========== 自訂 ==========

    def customize(self, entries: Mapping[str, CustomValue]) -> "JyutpingConverter":
        """
        建立帶有自訂讀音的新轉換器

        Args:
            entries: 詞 → 讀音；值可以是單一字串、字串列表，或 None（明確設定為沒有讀音）

        Returns:
            JyutpingConverter: 新的轉換器，原本的轉換器不受影響
        """
        with self._log_timing("JyutpingConverter.customize"):
            trie = self._trie.customize(entries)
        self._logger.debug(f"Customized converter with {len(entries)} entries")
        return JyutpingConverter(trie, config=self._config)


# =============================================================================
# 預設轉換器
# =============================================================================

_default_converter: Optional[JyutpingConverter] = None
_default_lock = threading.Lock()


def get_default_converter() -> JyutpingConverter:
    """取得預設轉換器（第一次呼叫時建立）"""
    global _default_converter

    if _default_converter is not None:
        return _default_converter

    with _default_lock:
        if _default_converter is None:
            _default_converter = JyutpingConverter()
        return _default_converter


# =============================================================================
# 便捷函數
# =============================================================================

def get_jyutping_list(text: str) -> List[Tuple[str, Optional[str]]]:
    return get_default_converter().get_jyutping_list(text)


def get_jyutping(text: str) -> str:
    return get_default_converter().get_jyutping(text)


def get_jyutping_text(text: str) -> str:
    return get_default_converter().get_jyutping_text(text)


def get_jyutping_candidates(text: str) -> List[Tuple[str, List[str]]]:
    return get_default_converter().get_jyutping_candidates(text)


def get_ipa_list(text: str) -> List[Tuple[str, Optional[str]]]:
    return get_default_converter().get_ipa_list(text)


def get_ipa(text: str) -> str:
    return get_default_converter().get_ipa(text)


def get_ipa_text(text: str) -> str:
    return get_default_converter().get_ipa_text(text)


def get_ipa_candidates(text: str) -> List[Tuple[str, List[str]]]:
    return get_default_converter().get_ipa_candidates(text)


def customize(entries: Mapping[str, CustomValue]) -> JyutpingConverter:
    return get_default_converter().customize(entries)
