"""
全域配置模組

提供統一的配置類別，控制日誌、計時與字典檔位置。

使用方式:
    from tojyutping import JyutpingConverter

    # 簡單開啟 verbose 模式
    converter = JyutpingConverter(verbose=True)

    # 進階: 使用標準 logging 控制
    import logging
    logging.getLogger("tojyutping").setLevel(logging.DEBUG)

字典檔位置也可以用環境變數 TOJYUTPING_DATA_PATH 指定。
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Optional, Union

from .utils.logger import setup_logger


def configure_logging(verbose: bool = False) -> None:
    """
    根據 verbose 設定配置 logging

    Args:
        verbose: 是否開啟詳細日誌
    """
    if verbose:
        setup_logger(level=logging.DEBUG)


@dataclass
class ConverterConfig:
    """
    轉換器配置類別 (進階用途)

    屬性:
        verbose: 是否開啟詳細日誌
        on_timing: 計時回呼函數 (operation: str, elapsed: float) -> None
        data_path: 字典檔路徑；None 時使用共享的預設字典

    使用範例:
        config = ConverterConfig(data_path="/opt/dict/data.txt")
        converter = JyutpingConverter(config=config)
    """

    verbose: bool = False
    on_timing: Optional[Callable[[str, float], None]] = None
    data_path: Optional[Union[str, "os.PathLike[str]"]] = None

    def __post_init__(self):
        configure_logging(self.verbose)


# 預設配置實例 (靜默模式)
DEFAULT_CONFIG = ConverterConfig(verbose=False)
