"""
Pytest 配置文件

为所有测试配置共享的 fixtures 和设置
"""

import sys
from pathlib import Path

import pytest

# 允许直接从源码包导入（不要求已安装）
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root / "src"))

from xliff_tools.core import SourceNode, TranslationDocument, TranslationState, TranslationUnit  # noqa: E402


@pytest.fixture
def make_document():
    """按 (id, source, target, state, note) 元组构造文档"""
    def _make(*rows, original="strings.resx"):
        doc = TranslationDocument.new("de")
        doc.original = original
        for row in rows:
            unit_id, source, target, state, *rest = row
            doc.units.append(TranslationUnit(
                id=unit_id,
                source=source,
                target=target,
                state=TranslationState.parse(state),
                note=rest[0] if rest else "",
            ))
        return doc
    return _make


@pytest.fixture
def nodes():
    """把 (id, source[, note]) 元组转成 SourceNode 列表"""
    def _nodes(*rows):
        return [SourceNode(*row) for row in rows]
    return _nodes
