"""
粵拼 → IPA 轉換

以正規表示式把音節拆成 聲母 / 韻腹 / 韻尾 / 聲調，再逐段查表。
部分韻母（如 ei、ou、ing）的實際音值與字面拆解不同，優先查特殊韻母表。
"""

import re
from functools import lru_cache
from typing import Any, Dict

# =============================================================================
# IPA 對照表
# =============================================================================

ONSET_TO_IPA = {
    "b": "p",
    "p": "pʰ",
    "m": "m",
    "f": "f",
    "d": "t",
    "t": "tʰ",
    "n": "n",
    "l": "l",
    "g": "k",
    "k": "kʰ",
    "ng": "ŋ",
    "gw": "kʷ",
    "kw": "kʷʰ",
    "w": "w",
    "h": "h",
    "z": "t͡s",
    "c": "t͡sʰ",
    "s": "s",
    "j": "j",
}

NUCLEUS_TO_IPA = {
    "aa": "aː",
    "a": "ɐ",
    "e": "ɛː",
    "i": "iː",
    "o": "ɔː",
    "u": "uː",
    "oe": "œː",
    "eo": "ɵ",
    "yu": "yː",
}

RHYME_TO_IPA = {
    "ei": "ei̯",
    "ing": "eŋ",
    "ik": "ek̚",
    "ou": "ou̯",
    "ung": "oŋ",
    "uk": "ok̚",
    "eoi": "ɵy̑",
    "m": "m̩",
    "ng": "ŋ̍",
}

CODA_TO_IPA = {
    "i": "i̯",
    "u": "u̯",
    "m": "m",
    "n": "n",
    "ng": "ŋ",
    "p": "p̚",
    "t": "t̚",
    "k": "k̚",
}

TONE_TO_IPA = {
    "1": "˥",
    "2": "˧˥",
    "3": "˧",
    "4": "˨˩",
    "5": "˩˧",
    "6": "˨",
}

# 聲母後面不能只剩聲調：讓 m4、ng5 這類成音節鼻音落到韻母
JYUTPING_PATTERN = re.compile(
    r"^([gk]w?|ng|[bpmfdtnlhwzcsj]?)(?![1-6]?$)((aa?|oe?|eo?|y?u|i?)(ng|[iumnptk]?))([1-6]?)$",
    re.IGNORECASE,
)

_SYLLABLE_SEPARATOR = re.compile(r"[\W_]+")


def _syllable_to_ipa(syllable: str) -> str:
    match = JYUTPING_PATTERN.match(syllable)
    if match is None:
        return ""

    onset, final, nucleus, coda, tone = match.groups()
    parts = [ONSET_TO_IPA.get(onset, "")]
    if final in RHYME_TO_IPA:
        parts.append(RHYME_TO_IPA[final])
    else:
        parts.append(NUCLEUS_TO_IPA.get(nucleus, ""))
        parts.append(CODA_TO_IPA.get(coda, ""))
    parts.append(TONE_TO_IPA.get(tone, ""))
    return "".join(parts)


@lru_cache(maxsize=10000)
def jyutping_to_ipa(text: str) -> str:
    """
    粵拼 → IPA

    Args:
        text: 一個或多個粵拼音節（以空白或標點分隔）

    Returns:
        str: IPA，音節之間以 "." 連接；無法解析的音節輸出空字串

    範例:
        >>> jyutping_to_ipa("nei5")
        'nei̯˩˧'
        >>> jyutping_to_ipa("hou2")
        'hou̯˧˥'
    """
    syllables = [s for s in _SYLLABLE_SEPARATOR.split(text.lower()) if s]
    return ".".join(_syllable_to_ipa(s) for s in syllables)


def get_cache_stats() -> Dict[str, Any]:
    """
    取得 IPA 轉換快取統計

    Returns:
        Dict: 包含 hits, misses, currsize, maxsize
    """
    info = jyutping_to_ipa.cache_info()
    return {
        "hits": info.hits,
        "misses": info.misses,
        "currsize": info.currsize,
        "maxsize": info.maxsize,
    }


def clear_cache() -> None:
    """清除 IPA 轉換快取"""
    jyutping_to_ipa.cache_clear()
