"""
Exception hierarchy for xliff-tools.

All errors raised on purpose by the library derive from ``XliffToolsError``
so that callers (the CLI, a build host) can surface them uniformly.
"""

from __future__ import annotations

from typing import Optional


class XliffToolsError(Exception):
    """xliff-tools 基础异常"""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} | Details: {self.details}"
        return self.message


class BuildError(XliffToolsError):
    """构建错误：上游数据有问题，本次更新无法继续"""


class DuplicateSourceIdError(BuildError):
    """Two source nodes of one document share the same id."""

    def __init__(self, node_id: str, document_id: str):
        super().__init__(
            f"The document '{document_id}' has a duplicate node '{node_id}'.",
            {"node_id": node_id, "document_id": document_id},
        )
        self.node_id = node_id
        self.document_id = document_id


class DocumentParseError(XliffToolsError, ValueError):
    """XLIFF 内容不是合法的 XML"""

    def __init__(self, message: str, line: Optional[int] = None, **kwargs):
        details = {"line": line, **kwargs} if line is not None or kwargs else None
        super().__init__(message, details)
        self.line = line


class DocumentStructureError(XliffToolsError):
    """Well-formed XML that breaks the trans-unit contract (missing id, target, state...)."""

    def __init__(self, message: str, unit_id: Optional[str] = None, **kwargs):
        details = {"unit_id": unit_id, **kwargs} if unit_id is not None or kwargs else None
        super().__init__(message, details)
        self.unit_id = unit_id


class DocumentNotLoadedError(XliffToolsError):
    """文档尚未加载内容"""


class SourceNodeError(XliffToolsError):
    """源字符串输入格式错误（缺少 id / source 等）"""

    def __init__(self, message: str, line_no: Optional[int] = None, **kwargs):
        details = {"line_no": line_no, **kwargs} if line_no is not None or kwargs else None
        super().__init__(message, details)
        self.line_no = line_no


class ConfigurationError(XliffToolsError):
    """配置错误（无效值等）"""

    def __init__(self, message: str, config_key: Optional[str] = None, **kwargs):
        details = {"config_key": config_key, **kwargs}
        super().__init__(message, details)
        self.config_key = config_key
