"""
測試查詢引擎

驗證：
1. get() 最長匹配與預設讀音
2. get_all() 收集所有讀音，較長詞條優先
3. 任意輸入都不會失敗
"""

import pytest

from tojyutping.core.trie import Trie

from conftest import encode_values

# 「香港」本身沒有讀音，只有更長的「香港仔」有
PREFIX_DICTIONARY = (
    "{"
    + "香" + encode_values("hoeng1") + "{" + "港" + "{" + "仔" + encode_values("hoeng1 gong2 zai2") + "}" + "}"
    + "人" + encode_values("jan4")
    + "}"
)


class TestGet:
    """測試 get()"""

    def test_single_character_uses_first_candidate(self, sample_trie):
        assert sample_trie.get("好") == [("好", "hou2")]
        assert sample_trie.get("行") == [("行", "hang4")]

    def test_phrase(self, sample_trie):
        assert sample_trie.get("你好") == [("你", "nei5"), ("好", "hou2")]
        assert sample_trie.get("香港") == [("香", "hoeng1"), ("港", "gong2")]

    def test_longest_match_wins(self, sample_trie):
        # 「行」單字預設 hang4，在「銀行」中應為 hong4
        assert sample_trie.get("銀行") == [("銀", "ngan4"), ("行", "hong4")]
        assert sample_trie.get("哥哥") == [("哥", "go4"), ("哥", "go1")]

    def test_segments_after_match(self, sample_trie):
        assert sample_trie.get("香港人") == [("香", "hoeng1"), ("港", "gong2"), ("人", "jan4")]
        assert sample_trie.get("行銀行") == [("行", "hang4"), ("銀", "ngan4"), ("行", "hong4")]

    def test_prefix_without_values(self, sample_trie):
        assert sample_trie.get("香") == [("香", None)]
        assert sample_trie.get("港") == [("港", None)]

    def test_match_stops_at_last_node_with_values(self):
        trie = Trie.from_text(PREFIX_DICTIONARY)
        assert trie.get("香港人") == [("香", "hoeng1"), ("港", None), ("人", "jan4")]
        assert trie.get("香港仔") == [("香", "hoeng1"), ("港", "gong2"), ("仔", "zai2")]

    def test_short_phrase_reading_pads_with_none(self, sample_trie):
        custom = sample_trie.customize({"你好人": "nei5 hou2"})
        assert custom.get("你好人") == [("你", "nei5"), ("好", "hou2"), ("人", None)]

    def test_multi_syllable_character(self, sample_trie):
        assert sample_trie.get("卅") == [("卅", "saa1 aa6")]

    def test_unknown_characters(self, sample_trie):
        assert sample_trie.get("abc") == [("a", None), ("b", None), ("c", None)]
        assert sample_trie.get("你x好") == [("你", "nei5"), ("x", None), ("好", "hou2")]

    def test_empty_input(self, sample_trie):
        assert sample_trie.get("") == []

    def test_iterates_by_code_point(self, sample_trie):
        result = sample_trie.get("😀你")
        assert result == [("😀", None), ("你", "nei5")]


class TestGetAll:
    """測試 get_all()"""

    def test_single_character(self, sample_trie):
        assert sample_trie.get_all("好") == [("好", ["hou2", "hou3"])]

    def test_longer_match_first(self, sample_trie):
        assert sample_trie.get_all("銀行") == [
            ("銀", ["ngan4"]),
            ("行", ["hong4", "hang4", "haang4"]),
        ]

    def test_phrase_only_reading(self, sample_trie):
        assert sample_trie.get_all("香港") == [("香", ["hoeng1"]), ("港", ["gong2"])]

    def test_deduplicates(self, sample_trie):
        assert sample_trie.get_all("哥哥") == [("哥", ["go4", "go1"]), ("哥", ["go1"])]

    def test_unknown_and_empty(self, sample_trie):
        assert sample_trie.get_all("") == []
        assert sample_trie.get_all("x") == [("x", [])]

    def test_short_phrase_reading_adds_nothing_to_extra_characters(self, sample_trie):
        custom = sample_trie.customize({"你好人": "nei5 hou2"})
        assert custom.get_all("你好人") == [
            ("你", ["nei5"]),
            ("好", ["hou2", "hou3"]),
            ("人", ["jan4"]),
        ]

    @pytest.mark.parametrize("text", ["你好", "銀行", "香港人", "哥哥", "行銀行", "卅x好"])
    def test_superset_of_get(self, sample_trie, text):
        best = sample_trie.get(text)
        candidates = sample_trie.get_all(text)
        assert [c for c, _ in best] == [c for c, _ in candidates]
        for (_, reading), (_, options) in zip(best, candidates):
            if reading is not None:
                assert reading in options
