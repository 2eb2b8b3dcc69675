"""
讀音文字排版

把 (字, 讀音) 序列排成可閱讀的文字：

- format_romanization_text: 音節以空白分隔，標點歸一為 ASCII，括號/引號前後補空白，
  查不到讀音的連續片段（數字、外文等）以 "[…]" 表示
- format_ipa_text: 音節以 "." 相連，次要停頓為 "|"，主要停頓為 "‖"，
  查不到讀音的片段以 "⸨…⸩" 表示

排版只消費查詢結果，不影響查詢行為。
"""

import re
from typing import Callable, Dict, FrozenSet, Iterable, List, Optional, Tuple

Converter = Callable[[str], Iterable[Tuple[str, Optional[str]]]]

# =============================================================================
# 標點歸一表
# =============================================================================

_PUNCT_PAIRS = (
    ("!\"'(),-./:;?[]{}~", "!\"'(),-./:;?[]{}~"),
    ("·", "·"),
    ("‐‑‒–—―", "------"),
    ("‘’“”", "‘’“”"),
    ("…⋮⋯", "………"),
    ("⸱⸳", "··"),
    ("⸺⸻", "--"),
    ("、。", ",."),
    ("〈〉《》「」『』", "‘’“”“”‘’"),
    ("【】〔〕〖〗〘〙〚〛", "[][][][][]"),
    ("〜", "~"),
    ("〝〞〟", "“””"),
    ("・", "·"),
    ("︐︑︒︓︔︕︖", ",,.:;!?"),
    ("︗︘", "[]"),
    ("︙", "…"),
    ("︱︲", "--"),
    ("︵︶︷︸︹︺︻︼︽︾︿﹀﹁﹂﹃﹄", "(){}[][]“”‘’“”‘’"),
    ("﹇﹈", "[]"),
    ("﹐﹑﹒﹔﹕﹖﹗", ",,.;:?!"),
    ("﹘", "-"),
    ("﹙﹚﹛﹜﹝﹞", "(){}[]"),
    ("﹣", "-"),
    ("！＂＇（），－．／：；？［］｛｝～", "!\"'(),-./:;?[]{}~"),
    ("｟｠", "()"),
    ("｡", "."),
    ("｢｣", "“”"),
    ("､", ","),
    ("･", "·"),
)

PUNCT_MAP: Dict[str, str] = {
    source: target
    for sources, targets in _PUNCT_PAIRS
    for source, target in zip(sources, targets)
}

# =============================================================================
# 標點分類
# =============================================================================

LEFT_BRACKETS = frozenset("([{‘“")
RIGHT_BRACKETS = frozenset(")]}’”")
LEFT_TO_RIGHT_BRACKET = {"(": ")", "[": "]", "{": "}", "‘": "’", "“": "”"}
LEFT_PUNCT = LEFT_BRACKETS
RIGHT_PUNCT = frozenset("!,.:;?…)]}’”")
OTHER_PUNCT = frozenset("\"'·-~")
LEFT_OR_OTHER_PUNCT = frozenset(" ") | LEFT_PUNCT | OTHER_PUNCT
RIGHT_OR_OTHER_PUNCT = RIGHT_PUNCT | OTHER_PUNCT

MINUS_SIGNS = frozenset("-﹣－")
DECIMAL_SEPARATORS = frozenset("',.·⸱⸳﹒＇．")

# ASCII、全形、數學粗體/雙線/無襯線/無襯線粗體/等寬、分段數字
_DIGIT_BASES = (0x30, 0xFF10, 0x1D7CE, 0x1D7D8, 0x1D7E2, 0x1D7EC, 0x1D7F6, 0x1FBF0)
DIGITS: FrozenSet[str] = frozenset(chr(base + n) for base in _DIGIT_BASES for n in range(10))

UNKNOWN_OR_HYPHEN = frozenset(("", "-"))

ROMANIZATION_PLACEHOLDER = "[…]"
IPA_PLACEHOLDER = "⸨…⸩"
IPA_MAJOR_BREAK = "‖"
IPA_MINOR_BREAK = "|"
MAJOR_BREAKS = frozenset(".!?…")
MINOR_BREAKS = frozenset(",/:;-~()[]{}")

# 不含控制字元的連續片段
_SEGMENT_PATTERN = re.compile(r"[^\x00-\x1f\x80-\x9f]+")
_WHITESPACE = re.compile(r"\s+")


def _tokenize(segment: str, conv: Converter) -> Tuple[List[str], List[Optional[str]]]:
    """
    把查詢結果拆成 (讀音或歸一後標點, 原始標點)

    有讀音的字：(讀音, None)；沒有讀音的非空白字：(歸一標點或 "", 原字)；空白略過。
    """
    tokens: List[str] = []
    sources: List[Optional[str]] = []
    for char, pronunciation in conv(segment):
        if pronunciation is not None:
            tokens.append(pronunciation)
            sources.append(None)
        elif char.strip():
            tokens.append(PUNCT_MAP.get(char[0], ""))
            sources.append(char[0])
    return tokens, sources


def _is_minus_before_digit(sources: List[Optional[str]], i: int) -> bool:
    return sources[i] in MINUS_SIGNS and sources[i + 1] in DIGITS


def _is_decimal_separator(sources: List[Optional[str]], i: int) -> bool:
    return (
        sources[i] in DECIMAL_SEPARATORS
        and sources[i + 1] in DIGITS
        and i > 0
        and sources[i - 1] in DIGITS
    )


# =============================================================================
# 粵拼排版
# =============================================================================

def _format_romanization_segment(segment: str, conv: Converter) -> str:
    tokens, sources = _tokenize(segment, conv)
    # 前後各補一個哨兵
    t: List[Optional[str]] = [None, *tokens, None]
    d: List[Optional[str]] = [None, *sources, None]

    out = ""
    pending = ""  # 尚未閉合的括號/引號（存放期待的右括號）

    for i in range(1, len(d) - 1):
        p, c, n = t[i - 1], t[i], t[i + 1]

        def between() -> bool:
            # 兩側（跨過括號後）都是音節
            j = i - 1
            while j > 0 and t[j] is not None and len(t[j]) == 1 and t[j] in RIGHT_BRACKETS:
                j -= 1
            before = j > 0 and t[j] is not None and len(t[j]) > 1
            j = i + 1
            while j < len(t) - 1 and t[j] is not None and len(t[j]) == 1 and t[j] in LEFT_BRACKETS:
                j += 1
            after = t[j] is not None and len(t[j]) > 1
            return before and after

        def left_space() -> str:
            return " " if out and out[-1] not in LEFT_OR_OTHER_PUNCT else ""

        def right_space() -> str:
            if d[i + 1] in MINUS_SIGNS:
                return " " if i < len(d) - 2 and d[i + 2] in DIGITS else ""
            return " " if n and n[0] not in RIGHT_OR_OTHER_PUNCT else ""

        if len(c) > 1:
            out += left_space() + c
            out += right_space()
        elif not c or (_is_minus_before_digit(d, i) and p is not None and p not in UNKNOWN_OR_HYPHEN):
            if not out.endswith(ROMANIZATION_PLACEHOLDER):
                out += ROMANIZATION_PLACEHOLDER
        elif _is_decimal_separator(d, i):
            continue
        elif c in LEFT_PUNCT:
            out += left_space() + c
            pending += LEFT_TO_RIGHT_BRACKET[c]
        elif c in RIGHT_PUNCT:
            out += c
            out += right_space()
            j = pending.rfind(c)
            if j >= 0:
                pending = pending[:j]
        elif c == "-":
            if p == "-":
                continue
            out += " – " if n == "-" or between() else c
        elif c == "~":
            out += "~ " if (p == "~" and n != "~") or between() else c
        elif c == "·":
            out += c
        else:
            # 直引號：與最近一個尚未閉合的相同引號配對
            j = len(pending) - 1
            while j >= 0 and pending[j] not in RIGHT_BRACKETS and pending[j] != c:
                j -= 1
            if j >= 0 and pending[j] == c:
                pending = pending[:j]
                out += c
                out += right_space()
            else:
                out += left_space() + c
                pending += c

    return _WHITESPACE.sub(" ", out.strip())


def format_romanization_text(text: str, conv: Converter) -> str:
    """
    排版粵拼文字

    Args:
        text: 原文
        conv: 查詢函數，回傳 (字, 粵拼或 None) 序列

    Returns:
        str: 排版後的粵拼，例如 "你好！" → "nei5 hou2!"
    """
    return _SEGMENT_PATTERN.sub(lambda m: _format_romanization_segment(m.group(), conv), text)


# =============================================================================
# IPA 排版
# =============================================================================

def _format_ipa_segment(segment: str, conv: Converter) -> str:
    t, d = _tokenize(segment, conv)
    d.append(None)

    out: List[str] = []
    for i, c in enumerate(t):
        if len(c) > 1:
            out.append(c)
        elif not c or (_is_minus_before_digit(d, i) and (i == 0 or t[i - 1] not in UNKNOWN_OR_HYPHEN)):
            if not out or out[-1] != IPA_PLACEHOLDER:
                out.append(IPA_PLACEHOLDER)
        elif out:
            if _is_decimal_separator(d, i):
                continue
            if c in MAJOR_BREAKS:
                if len(out[-1]) > 1:
                    out.append(IPA_MAJOR_BREAK)
                else:
                    out[-1] = IPA_MAJOR_BREAK
            elif c in MINOR_BREAKS and len(out[-1]) > 1:
                out.append(IPA_MINOR_BREAK)

    if out and len(out[-1]) == 1:
        out.pop()

    result = ""
    for i, c in enumerate(out):
        result += c
        if i < len(out) - 1:
            n = out[i + 1]
            joined = c != IPA_PLACEHOLDER and len(c) > 1 and n != IPA_PLACEHOLDER and len(n) > 1
            result += "." if joined else " "
    return result


def format_ipa_text(text: str, conv: Converter) -> str:
    """
    排版 IPA 文字

    Args:
        text: 原文
        conv: 查詢函數，回傳 (字, IPA 或 None) 序列

    Returns:
        str: 排版後的 IPA
    """
    return _SEGMENT_PATTERN.sub(lambda m: _format_ipa_segment(m.group(), conv), text)
