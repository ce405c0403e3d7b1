"""
文件 I/O 工具函数

提供安全的文件读写功能：
- 原子写入（防止 XLIFF 文件写到一半损坏）
- 源字符串 JSONL 读取
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterator

from .errors import SourceNodeError

# 获取模块级 logger
logger = logging.getLogger(__name__)


def ensure_parent_dir(path: str | Path) -> Path:
    """确保父目录存在"""
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    return p


def write_text_file(
    path: str | Path,
    text: str,
    encoding: str = 'utf-8',
    atomic: bool = True
) -> None:
    """写入文本文件

    Args:
        path: 文件路径
        text: 文件内容
        encoding: 编码
        atomic: 是否使用原子写入（先写临时文件再重命名）
    """
    p = ensure_parent_dir(path)

    if not atomic:
        p.write_text(text, encoding=encoding, newline='')
        return

    fd, tmp_path = tempfile.mkstemp(
        dir=p.parent,
        prefix=f".{p.name}.",
        suffix=".tmp"
    )
    try:
        with os.fdopen(fd, 'w', encoding=encoding, newline='') as f:
            f.write(text)
        # 原子重命名
        os.replace(tmp_path, p)
    except BaseException:
        # 清理临时文件
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def iter_jsonl_objects(path: str | Path) -> Iterator[tuple[int, Dict[str, Any]]]:
    """逐行读取 JSONL，产出 (行号, 对象)

    空行会被跳过；无法解析的行直接报错，不做静默跳过
    （源字符串缺失会导致已有翻译被删除）。

    Raises:
        SourceNodeError: 行不是合法 JSON 对象
    """
    p = Path(path)
    with p.open('r', encoding='utf-8-sig') as f:
        for line_num, line in enumerate(f, 1):
            if not line.strip():
                continue
            try:
                obj = json.loads(line)
            except json.JSONDecodeError as e:
                raise SourceNodeError(
                    f"Invalid JSON in {p.name}:{line_num}: {e.msg}",
                    line_no=line_num,
                    file=str(p),
                ) from e
            if not isinstance(obj, dict):
                raise SourceNodeError(
                    f"Expected a JSON object in {p.name}:{line_num}",
                    line_no=line_num,
                    file=str(p),
                )
            yield line_num, obj
