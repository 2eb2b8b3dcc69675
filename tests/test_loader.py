"""
測試字典載入器

驗證：
1. 巢狀範圍、同層詞條、候選順序與 "~" 接續標記
2. 格式錯誤時拋出 ValueError
3. 檔案找不到或格式錯誤時降級為空字典並發出事件
"""

import logging

import pytest

from tojyutping.core.codec import encode_pair
from tojyutping.core.loader import (
    DATA_PATH_ENV,
    find_data_file,
    load_dictionary,
    parse_dictionary,
)
from tojyutping.core.node import TrieNode

from conftest import SAMPLE_ENTRY_COUNT


class TestParseDictionary:
    """測試 parse_dictionary"""

    def setup_method(self):
        self.root = TrieNode()

    def test_entry_count(self, sample_data):
        assert parse_dictionary(sample_data, self.root) == SAMPLE_ENTRY_COUNT

    def test_top_level_keys(self, sample_data):
        parse_dictionary(sample_data, self.root)
        assert set(self.root.children) == {"你", "好", "哥", "香", "人", "銀", "行", "卅"}
        assert self.root.values is None

    def test_candidates_keep_order(self, sample_data):
        parse_dictionary(sample_data, self.root)
        assert self.root.children["好"].values == ("hou2", "hou3")
        assert self.root.children["行"].values == ("hang4", "hong4", "haang4")

    def test_nested_phrase(self, sample_data):
        parse_dictionary(sample_data, self.root)
        nei = self.root.children["你"]
        assert nei.values == ("nei5",)
        assert nei.children["好"].values == ("nei5 hou2",)
        # 巢狀範圍結束後回到根節點
        assert "好" in self.root.children

    def test_prefix_without_values(self, sample_data):
        parse_dictionary(sample_data, self.root)
        heung = self.root.children["香"]
        assert heung.values is None
        assert heung.children["港"].values == ("hoeng1 gong2",)

    def test_continuation_marker(self, sample_data):
        parse_dictionary(sample_data, self.root)
        assert self.root.children["卅"].values == ("saa1 aa6",)

    def test_empty_scope(self):
        assert parse_dictionary("{}", self.root) == 0
        assert self.root.children == {}

    def test_data_without_key(self):
        with pytest.raises(ValueError):
            parse_dictionary("{" + encode_pair("nei5") + "}", self.root)

    def test_truncated_pair(self):
        with pytest.raises(ValueError):
            parse_dictionary("{你!", self.root)

    def test_unexpected_character(self):
        with pytest.raises(ValueError):
            parse_dictionary("{你" + encode_pair("nei5") + "|}", self.root)

    def test_out_of_range_id(self):
        with pytest.raises(ValueError):
            parse_dictionary("{你zz}", self.root)


class TestLoadDictionary:
    """測試 load_dictionary 的降級行為"""

    def setup_method(self):
        self.root = TrieNode()
        self.events = []

    def test_load_file(self, sample_file):
        assert load_dictionary(self.root, sample_file, on_event=self.events.append)
        assert self.root.children["好"].values == ("hou2", "hou3")

        assert len(self.events) == 1
        event = self.events[0]
        assert event["type"] == "loaded"
        assert event["entries"] == SAMPLE_ENTRY_COUNT
        assert event["elapsed"] >= 0

    def test_missing_file(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING, logger="tojyutping"):
            ok = load_dictionary(self.root, tmp_path / "missing.txt", on_event=self.events.append)

        assert not ok
        assert self.root.children == {}
        assert self.events[0]["type"] == "degraded"
        assert self.events[0]["degrade_reason"] == "not_found"
        assert any(r.levelno == logging.WARNING for r in caplog.records)

    def test_malformed_file_leaves_root_empty(self, tmp_path):
        path = tmp_path / "broken.txt"
        path.write_text("{你" + encode_pair("nei5") + "{好!", encoding="utf-8")

        assert not load_dictionary(self.root, path, on_event=self.events.append)
        assert self.root.children == {}
        assert self.events[0]["degrade_reason"] == "malformed"
        assert self.events[0]["exception_type"] == "ValueError"

    def test_unreadable_file(self, tmp_path):
        path = tmp_path / "latin1.txt"
        path.write_bytes(b"{\xff\xfe}")

        assert not load_dictionary(self.root, path, on_event=self.events.append)
        assert self.events[0]["degrade_reason"] == "unreadable"


class TestFindDataFile:
    """測試字典檔位置"""

    def test_explicit_path(self, sample_file):
        assert find_data_file(sample_file) == sample_file

    def test_explicit_missing_path(self, tmp_path):
        assert find_data_file(tmp_path / "missing.txt") is None

    def test_environment_variable(self, monkeypatch, sample_file):
        monkeypatch.setenv(DATA_PATH_ENV, str(sample_file))
        assert find_data_file() == sample_file
