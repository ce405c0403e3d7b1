from .errors import (
    XliffToolsError, BuildError, DuplicateSourceIdError, DocumentParseError,
    DocumentStructureError, DocumentNotLoadedError, SourceNodeError, ConfigurationError,
)
from .placeholder import get_replacement_count, iter_format_items
from .io import write_text_file, iter_jsonl_objects
from .config import XliffConfig, ConfigManager
from .logger import ToolLogger, setup_logger

__all__ = [
    # errors
    "XliffToolsError",
    "BuildError",
    "DuplicateSourceIdError",
    "DocumentParseError",
    "DocumentStructureError",
    "DocumentNotLoadedError",
    "SourceNodeError",
    "ConfigurationError",
    # placeholder
    "get_replacement_count",
    "iter_format_items",
    # io
    "write_text_file",
    "iter_jsonl_objects",
    # config
    "XliffConfig",
    "ConfigManager",
    # logger
    "ToolLogger",
    "setup_logger",
]
