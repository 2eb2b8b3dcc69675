"""
粵拼編碼表 (Jyutping Codec)

字典檔中的每個音節以一個整數 id 表示：

    tone        = id % 6 + 1
    final_index = (id % 402) // 6
    onset_index = id // 402

final_index >= 54 時查特殊韻母表，否則拆成
NUCLEI[final_index // 9] + CODAS[final_index % 9]。

在檔案中每個 id 佔兩個 ASCII 字元：
    chr(id // 90 + 33) + chr(id % 90 + 33)
"""

from functools import lru_cache
from typing import Dict

# =============================================================================
# 音節組成表（順序即編碼，不可更動）
# =============================================================================

ONSETS = (
    "", "b", "p", "m", "f", "d", "t", "n", "l", "g",
    "k", "ng", "gw", "kw", "w", "h", "z", "c", "s", "j",
)

NUCLEI = ("aa", "a", "e", "i", "o", "u")

CODAS = ("", "i", "u", "m", "n", "ng", "p", "t", "k")

RHYMES = (
    "oe", "oen", "oeng", "oet", "oek",
    "eoi", "eon", "eot",
    "yu", "yun", "yut",
    "m", "ng",
)

TONE_COUNT = 6
REGULAR_FINAL_COUNT = len(NUCLEI) * len(CODAS)
IDS_PER_ONSET = (REGULAR_FINAL_COUNT + len(RHYMES)) * TONE_COUNT
ID_COUNT = len(ONSETS) * IDS_PER_ONSET

PAIR_OFFSET = 33
PAIR_RADIX = 90


def decode_jyutping(jyutping_id: int) -> str:
    """
    整數 id → 粵拼音節

    Args:
        jyutping_id: 介於 [0, ID_COUNT) 的編碼

    Returns:
        str: 粵拼（如 0 → "aa1"）

    Raises:
        ValueError: id 超出範圍（只會來自損壞的字典檔）
    """
    if not 0 <= jyutping_id < ID_COUNT:
        raise ValueError(f"Jyutping id out of range: {jyutping_id}")

    tone = jyutping_id % TONE_COUNT + 1
    final_index = (jyutping_id % IDS_PER_ONSET) // TONE_COUNT
    onset_index = jyutping_id // IDS_PER_ONSET

    if final_index >= REGULAR_FINAL_COUNT:
        final = RHYMES[final_index - REGULAR_FINAL_COUNT]
    else:
        final = NUCLEI[final_index // len(CODAS)] + CODAS[final_index % len(CODAS)]

    return f"{ONSETS[onset_index]}{final}{tone}"


@lru_cache(maxsize=1)
def _syllable_table() -> Dict[str, int]:
    table: Dict[str, int] = {}
    for jyutping_id in range(ID_COUNT):
        table.setdefault(decode_jyutping(jyutping_id), jyutping_id)
    return table


def encode_jyutping(syllable: str) -> int:
    """
    粵拼音節 → 整數 id（decode_jyutping 的反函數）

    Raises:
        ValueError: 編碼表無法表示此音節
    """
    try:
        return _syllable_table()[syllable]
    except KeyError:
        raise ValueError(f"Cannot encode Jyutping syllable: {syllable!r}") from None


def decode_pair(first: str, second: str) -> str:
    """把字典檔中的兩個字元解碼為一個音節"""
    return decode_jyutping((ord(first) - PAIR_OFFSET) * PAIR_RADIX + (ord(second) - PAIR_OFFSET))


def encode_pair(syllable: str) -> str:
    """把一個音節編碼為字典檔中的兩個字元"""
    high, low = divmod(encode_jyutping(syllable), PAIR_RADIX)
    return chr(high + PAIR_OFFSET) + chr(low + PAIR_OFFSET)
