"""
字典載入器

字典檔是一個緊湊的文字串流：

- 碼位 >= 256 的字元（漢字）延伸目前路徑，深度加一
- 碼位 < 123 的字元是目前節點的讀音資料，每個音節佔兩個字元；
  一個候選讀音由 depth 個音節組成，音節後若接 `~` 表示下一個音節仍屬於同一個字
- `{` 開啟巢狀範圍（記住目前節點與深度），`}` 結束範圍

檔案找不到、無法讀取或格式錯誤時，字典保持為空並發出警告，查詢仍可正常運作。
"""

import os
from pathlib import Path
from typing import List, Optional, Union

from tojyutping.utils.logger import TimingContext, get_logger

from .codec import decode_pair
from .events import DictionaryEvent, DictionaryEventHandler
from .node import TrieNode

logger = get_logger(__name__)

DATA_PATH_ENV = "TOJYUTPING_DATA_PATH"
DEFAULT_DATA_FILE = Path(__file__).resolve().parent.parent / "data" / "data.txt"

SCOPE_OPEN = "{"
SCOPE_CLOSE = "}"
CONTINUATION = "~"

# 小於此碼位的字元為讀音資料
_VALUE_LIMIT = 123
# 大於等於此碼位的字元為鍵（漢字）
_KEY_START = 256

PathLike = Union[str, "os.PathLike[str]"]


def parse_dictionary(data: str, root: TrieNode) -> int:
    """
    解析字典串流並填入 root

    Args:
        data: 字典檔全文
        root: 要填入的根節點

    Returns:
        int: 帶有讀音的詞條數

    Raises:
        ValueError: 資料格式錯誤
    """
    node_stack: List[TrieNode] = [root]
    depth_stack: List[int] = [0]
    entries = 0
    size = len(data)
    i = 1  # 第一個字元開啟根範圍

    while node_stack and i < size:
        node = node_stack[-1]
        depth = depth_stack[-1]

        while i < size and ord(data[i]) >= _KEY_START:
            char = data[i]
            child = node.children.get(char)
            if child is None:
                child = TrieNode()
                node.children[char] = child
            node = child
            depth += 1
            i += 1

        values: List[str] = []
        while i < size and ord(data[i]) < _VALUE_LIMIT:
            if depth == 0:
                raise ValueError(f"Pronunciation data without a key at offset {i}")
            syllables: List[str] = []
            count = 0
            while count < depth:
                if i + 1 >= size:
                    raise ValueError(f"Truncated pronunciation data at offset {i}")
                syllables.append(decode_pair(data[i], data[i + 1]))
                i += 2
                if i < size and data[i] == CONTINUATION:
                    i += 1
                else:
                    count += 1
            values.append(" ".join(syllables))

        if values:
            node.values = tuple(values)
            entries += 1

        if i >= size:
            break
        char = data[i]
        if char == SCOPE_OPEN:
            node_stack.append(node)
            depth_stack.append(depth)
            i += 1
        elif char == SCOPE_CLOSE:
            node_stack.pop()
            depth_stack.pop()
            i += 1
        elif ord(char) < _KEY_START:
            raise ValueError(f"Unexpected character {char!r} at offset {i}")

    return entries


def find_data_file(path: Optional[PathLike] = None) -> Optional[Path]:
    """
    尋找字典檔

    順序：明確指定的路徑 → 環境變數 TOJYUTPING_DATA_PATH → 套件內的 data/data.txt

    Returns:
        Optional[Path]: 找到的檔案路徑，找不到時為 None
    """
    if path is not None:
        candidate = Path(path)
        return candidate if candidate.is_file() else None

    env_path = os.environ.get(DATA_PATH_ENV)
    if env_path:
        candidate = Path(env_path)
        if candidate.is_file():
            return candidate
        logger.debug(f"{DATA_PATH_ENV}={env_path} does not exist, falling back to bundled data")

    if DEFAULT_DATA_FILE.is_file():
        return DEFAULT_DATA_FILE
    return None


def load_dictionary(
    root: TrieNode,
    path: Optional[PathLike] = None,
    on_event: Optional[DictionaryEventHandler] = None,
) -> bool:
    """
    讀取字典檔並填入 root

    失敗時 root 保持原樣（空），記錄警告並發出 degraded 事件，不拋出例外。

    Args:
        root: 要填入的根節點
        path: 字典檔路徑，None 時使用 find_data_file() 的結果
        on_event: 事件回呼

    Returns:
        bool: 是否載入成功
    """
    data_file = find_data_file(path)
    display_path = str(data_file or path or DEFAULT_DATA_FILE)

    if data_file is None:
        logger.warning(f"Could not find Jyutping dictionary file: {display_path}")
        _emit(on_event, {
            "type": "degraded",
            "path": display_path,
            "degrade_reason": "not_found",
        })
        return False

    try:
        data = data_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning(f"Could not read Jyutping dictionary file {display_path}: {e}")
        _emit(on_event, {
            "type": "degraded",
            "path": display_path,
            "degrade_reason": "unreadable",
            "exception_type": type(e).__name__,
            "exception_message": str(e),
        })
        return False

    # 先解析到暫存節點，成功後才交給 root，避免外界看到一半的字典
    scratch = TrieNode()
    with TimingContext("parse_dictionary", logger=logger) as timing:
        try:
            entries = parse_dictionary(data, scratch)
        except ValueError as e:
            logger.warning(f"Malformed Jyutping dictionary file {display_path}: {e}")
            _emit(on_event, {
                "type": "degraded",
                "path": display_path,
                "degrade_reason": "malformed",
                "exception_type": type(e).__name__,
                "exception_message": str(e),
            })
            return False

    root.children = scratch.children
    root.values = scratch.values
    logger.info(f"Loaded {entries} Jyutping entries from {display_path}")
    _emit(on_event, {
        "type": "loaded",
        "path": display_path,
        "entries": entries,
        "elapsed": timing.elapsed,
    })
    return True


def _emit(handler: Optional[DictionaryEventHandler], event: DictionaryEvent) -> None:
    if handler is not None:
        handler(event)
