"""
共用測試資料

正式字典檔不隨測試附上，這裡以編碼表序列化一份小字典：

    你 nei5      你好 nei5 hou2
    好 hou2 / hou3
    哥 go1       哥哥 go4 go1
    香 (無讀音)  香港 hoeng1 gong2
    人 jan4
    銀 ngan4     銀行 ngan4 hong4
    行 hang4 / hong4 / haang4
    卅 saa1~aa6  (一個字兩個音節)
"""

import pytest

from tojyutping.backend import dictionary_backend
from tojyutping.core.codec import encode_pair
from tojyutping.core.trie import Trie


def encode_values(*candidates: str) -> str:
    """把候選讀音編碼成字典檔格式；"~" 連接同一個字的多個音節"""
    return "".join(
        "~".join(encode_pair(syllable) for syllable in token.split("~"))
        for candidate in candidates
        for token in candidate.split()
    )


SAMPLE_DICTIONARY = (
    "{"
    + "你" + encode_values("nei5") + "{" + "好" + encode_values("nei5 hou2") + "}"
    + "好" + encode_values("hou2", "hou3")
    + "哥" + encode_values("go1") + "{" + "哥" + encode_values("go4 go1") + "}"
    + "香" + "{" + "港" + encode_values("hoeng1 gong2") + "}"
    + "人" + encode_values("jan4")
    + "銀" + encode_values("ngan4") + "{" + "行" + encode_values("ngan4 hong4") + "}"
    + "行" + encode_values("hang4", "hong4", "haang4")
    + "卅" + encode_values("saa1~aa6")
    + "}"
)

SAMPLE_ENTRY_COUNT = 11


@pytest.fixture
def sample_data() -> str:
    return SAMPLE_DICTIONARY


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "data.txt"
    path.write_text(SAMPLE_DICTIONARY, encoding="utf-8")
    return path


@pytest.fixture
def sample_trie() -> Trie:
    return Trie.from_text(SAMPLE_DICTIONARY)


@pytest.fixture
def shared_sample_backend(monkeypatch, sample_file):
    """把行程共享的字典後端換成測試字典"""
    backend = dictionary_backend.DictionaryBackend(data_path=sample_file)
    monkeypatch.setattr(dictionary_backend, "_instance", backend)
    monkeypatch.setattr("tojyutping.converter._default_converter", None)
    return backend
