"""
XLIFF 文档对象

- load / load_new / save：读写与新建
- update：与最新源字符串同步
- sort：按 id 规范排序
- get_translations / get_untranslated_resource_ids：供回填步骤查询
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import IO, Iterable, Optional, Protocol, runtime_checkable

from ..utils.errors import DocumentNotLoadedError
from ..utils.io import write_text_file
from .model import DEFAULT_DATATYPE, DEFAULT_SOURCE_LANGUAGE, SourceNode, TranslationDocument
from .reconciler import sort_units, update_document
from .xliff import read_document, write_document

logger = logging.getLogger(__name__)


@runtime_checkable
class Loadable(Protocol):
    @property
    def has_content(self) -> bool: ...

    def load(self, reader: IO) -> None: ...


@runtime_checkable
class Savable(Protocol):
    def save(self, writer: IO[str]) -> None: ...


class XlfDocument:
    """
    A document in XLIFF format which can be updated from extracted source
    strings and produce translation data for the step that applies them.

    See https://en.wikipedia.org/wiki/XLIFF
    """

    def __init__(self, document: Optional[TranslationDocument] = None):
        self._document = document

    @property
    def has_content(self) -> bool:
        """Whether content has been loaded or created."""
        return self._document is not None

    @property
    def document(self) -> TranslationDocument:
        return self._ensure_content()

    def _ensure_content(self) -> TranslationDocument:
        if self._document is None:
            raise DocumentNotLoadedError("The XLIFF document has no content; call load() or load_new() first")
        return self._document

    def load(self, reader: IO) -> None:
        """Load (or reload) the document content from *reader*."""
        self._document = read_document(reader)

    def load_new(
        self,
        target_language: str,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        datatype: str = DEFAULT_DATATYPE,
    ) -> None:
        """Start a new, empty document for *target_language*."""
        self._document = TranslationDocument.new(
            target_language,
            source_language=source_language,
            datatype=datatype,
        )

    def save(self, writer: IO[str]) -> None:
        write_document(self._ensure_content(), writer)

    def to_string(self) -> str:
        buffer = io.StringIO()
        self.save(buffer)
        return buffer.getvalue()

    def update(self, source_nodes: Iterable[SourceNode], source_document_id: str) -> bool:
        """
        Update this document from the given source strings.

        Returns:
            True if any changes were made to this document
        """
        return update_document(self._ensure_content(), source_nodes, source_document_id)

    def sort(self) -> bool:
        """
        Sort the trans-units by id.

        Returns:
            True if the document was modified
        """
        return sort_units(self._ensure_content())

    def get_translations(self) -> dict[str, str]:
        """Translations keyed by id (value = target text)."""
        return self._ensure_content().get_translations()

    def get_untranslated_resource_ids(self) -> set[str]:
        return self._ensure_content().get_untranslated_resource_ids()


def load_document(path: str | Path) -> XlfDocument:
    """Open *path* and load it into a new ``XlfDocument``."""
    doc = XlfDocument()
    with open(path, "rb") as f:
        doc.load(f)
    logger.debug(f"Loaded {path}")
    return doc


def save_document(doc: Savable, path: str | Path) -> None:
    """Write *doc* to *path* atomically."""
    buffer = io.StringIO()
    doc.save(buffer)
    write_text_file(path, buffer.getvalue())
    logger.debug(f"Saved {path}")
