"""
XLIFF 核心模块

提供文档模型、增量同步与读写功能
"""

from .document import Loadable, Savable, XlfDocument, load_document, save_document
from .model import SourceNode, TranslationDocument, TranslationState, TranslationUnit
from .reconciler import sort_units, update_document

__all__ = [
    'XlfDocument',
    'Loadable',
    'Savable',
    'load_document',
    'save_document',
    'SourceNode',
    'TranslationDocument',
    'TranslationState',
    'TranslationUnit',
    'update_document',
    'sort_units',
]
