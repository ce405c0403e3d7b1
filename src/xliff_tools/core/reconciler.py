"""
增量同步器：让 XLIFF 文档跟上最新提取出的源字符串

每次构建：
- 源中删除的字符串 → 删除对应 trans-unit
- 源文本/注释有变化 → 更新 source，并按状态决定 target 的处理
- 源与译文占位符数量不一致 → 译文重置为原文，状态回到 new
- 新字符串 → 按 id 顺序插入到合适位置（不整体重排，避免大 diff）
"""

from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..utils.errors import DuplicateSourceIdError
from ..utils.placeholder import get_replacement_count
from .model import SourceNode, TranslationDocument, TranslationState, TranslationUnit

# 获取模块级 logger
logger = logging.getLogger(__name__)


def index_source_nodes(source_nodes: Iterable[SourceNode], source_document_id: str) -> dict[str, SourceNode]:
    """
    Map node ids to nodes, preserving source order.

    Raises:
        DuplicateSourceIdError: two nodes share an id
    """
    nodes_by_id: dict[str, SourceNode] = {}
    for node in source_nodes:
        if node.id in nodes_by_id:
            raise DuplicateSourceIdError(node.id, source_document_id)
        nodes_by_id[node.id] = node
    return nodes_by_id


def find_insert_index(units: Sequence[TranslationUnit], unit_id: str) -> int:
    """Index of the first unit whose id sorts after *unit_id*, or ``len(units)``."""
    for index, unit in enumerate(units):
        if unit_id < unit.id:
            return index
    return len(units)


def _sync_unit(unit: TranslationUnit, node: SourceNode) -> bool:
    changed = False

    if unit.source != node.source or (node.note is not None and unit.note != node.note):
        unit.source = node.source

        # note 为 None 表示源格式本身没有注释，译者可能直接在 xlf 里写了注释，不能覆盖
        if node.note is not None:
            unit.note = node.note

        if unit.state == TranslationState.NEW:
            # 尚未翻译：译文直接跟随新原文
            unit.target = node.source
        elif unit.state == TranslationState.TRANSLATED:
            unit.state = TranslationState.NEEDS_REVIEW_TRANSLATION

        logger.debug(f"Updated trans-unit '{unit.id}' (state: {unit.state})")
        changed = True

    # Also runs for unchanged sources: a translator can break the target too.
    source_count = get_replacement_count(unit.source)
    target_count = get_replacement_count(unit.target)
    if source_count != target_count:
        logger.debug(
            f"Reset trans-unit '{unit.id}': target needs {target_count} "
            f"format arguments, source provides {source_count}"
        )
        unit.target = node.source
        unit.state = TranslationState.NEW
        changed = True

    return changed


def update_document(
    document: TranslationDocument,
    source_nodes: Iterable[SourceNode],
    source_document_id: str,
) -> bool:
    """
    Bring *document* in line with *source_nodes*.

    Args:
        document: Document to mutate in place
        source_nodes: Freshly extracted strings, in source order
        source_document_id: Logical path of the source artifact

    Returns:
        True if the document was modified

    Raises:
        DuplicateSourceIdError: raised before any modification
    """
    source_nodes = list(source_nodes)
    pending = index_source_nodes(source_nodes, source_document_id)
    changed = False
    removed = updated = added = 0

    if document.original != source_document_id:
        # 源文件改名时保留已有翻译，只更新 original
        logger.debug(f"Original changed: '{document.original}' -> '{source_document_id}'")
        document.original = source_document_id
        changed = True

    if document.has_empty_group:
        # 旧版工具留下的空 group，没有必要继续维护它的 id
        document.has_empty_group = False
        changed = True

    kept: list[TranslationUnit] = []
    for unit in document.units:
        node = pending.pop(unit.id, None)
        if node is None:
            logger.debug(f"Removed trans-unit '{unit.id}'")
            removed += 1
            changed = True
            continue
        if _sync_unit(unit, node):
            updated += 1
            changed = True
        kept.append(unit)
    document.units[:] = kept

    # Walk source_nodes, not pending.values(): insertion order must follow the source.
    for node in source_nodes:
        if node.id not in pending:
            continue
        unit = TranslationUnit(
            id=node.id,
            source=node.source,
            target=node.source,
            state=TranslationState.NEW,
            note=node.note or "",
        )
        document.units.insert(find_insert_index(document.units, unit.id), unit)
        logger.debug(f"Added trans-unit '{unit.id}'")
        added += 1
        changed = True

    if changed:
        logger.info(
            f"{source_document_id}: {added} added, {updated} updated, {removed} removed"
        )
    return changed


def is_sorted(units: Sequence[TranslationUnit]) -> bool:
    return all(a.id < b.id for a, b in zip(units, units[1:]))


def sort_units(document: TranslationDocument) -> bool:
    """
    Reorder units by id (ordinal).

    Returns:
        True if the order changed
    """
    if is_sorted(document.units):
        return False
    document.units.sort(key=lambda unit: unit.id)
    logger.debug(f"Sorted {len(document.units)} trans-units of '{document.original}'")
    return True
