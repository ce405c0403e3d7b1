"""
XLIFF 本地化工具

让构建流程中的 XLIFF 翻译文档与源字符串保持同步：
- 增量更新（新增、删除、修改）
- 翻译状态维护
- 占位符一致性检查
- 规范排序
"""

__version__ = "0.1.0"
__all__ = ["utils", "core", "cli"]
