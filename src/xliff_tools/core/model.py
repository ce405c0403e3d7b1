"""
Typed model of a translation document.

``SourceNode`` values come from an extractor and are rebuilt every build;
``TranslationDocument`` is the persisted bundle that the reconciler mutates
in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional, Union

from ..utils.errors import DocumentStructureError, SourceNodeError

# original 属性的占位值，第一次 update 时会被替换
ORIGINAL_PLACEHOLDER = "_"

DEFAULT_SOURCE_LANGUAGE = "en"
DEFAULT_DATATYPE = "xml"


class TranslationState(str, Enum):
    """States the reconciler assigns; anything else is passed through as a plain str."""

    NEW = "new"
    TRANSLATED = "translated"
    NEEDS_REVIEW_TRANSLATION = "needs-review-translation"

    @classmethod
    def parse(cls, value: str) -> Union["TranslationState", str]:
        try:
            return cls(value)
        except ValueError:
            return value

    def __str__(self) -> str:
        return self.value


State = Union[TranslationState, str]


@dataclass(frozen=True)
class SourceNode:
    """One translatable string as produced by an extractor."""

    id: str
    source: str
    # None: the source format has no notes at all
    note: Optional[str] = None

    @classmethod
    def from_dict(cls, obj: dict[str, Any]) -> "SourceNode":
        """Build a node from ``{"id": ..., "source": ..., "note": ...}``."""
        node_id = obj.get("id")
        source = obj.get("source")
        note = obj.get("note")
        if not isinstance(node_id, str) or not node_id:
            raise SourceNodeError("Source node is missing a string 'id'", row=obj)
        if not isinstance(source, str):
            raise SourceNodeError(f"Source node '{node_id}' is missing a string 'source'", row=obj)
        if note is not None and not isinstance(note, str):
            raise SourceNodeError(f"Source node '{node_id}' has a non-string 'note'", row=obj)
        return cls(id=node_id, source=source, note=note)


@dataclass
class TranslationUnit:
    id: str
    source: str
    target: str
    state: State = TranslationState.NEW
    note: str = ""

    @property
    def is_translated(self) -> bool:
        return self.state == TranslationState.TRANSLATED


@dataclass
class TranslationDocument:
    """
    File-level metadata plus the ordered list of translation units.

    The order of ``units`` is the persisted order. Ids are unique.
    ``has_empty_group`` records a legacy empty ``<group>`` under ``<body>``
    so that it survives a load/save round trip until the next update.
    """

    source_language: str
    target_language: str
    original: str = ORIGINAL_PLACEHOLDER
    datatype: str = DEFAULT_DATATYPE
    units: list[TranslationUnit] = field(default_factory=list)
    has_empty_group: bool = False

    @classmethod
    def new(
        cls,
        target_language: str,
        source_language: str = DEFAULT_SOURCE_LANGUAGE,
        datatype: str = DEFAULT_DATATYPE,
    ) -> "TranslationDocument":
        """Minimal valid document: no units, placeholder ``original``."""
        return cls(
            source_language=source_language,
            target_language=target_language,
            original=ORIGINAL_PLACEHOLDER,
            datatype=datatype,
        )

    def ids(self) -> list[str]:
        return [unit.id for unit in self.units]

    def find(self, unit_id: str) -> Optional[TranslationUnit]:
        for unit in self.units:
            if unit.id == unit_id:
                return unit
        return None

    def get_translations(self) -> dict[str, str]:
        """
        Map every unit id to its target text, in document order.

        Raises:
            DocumentStructureError: a unit has no target text
        """
        translations: dict[str, str] = {}
        for unit in self.units:
            if unit.target is None:
                raise DocumentStructureError("Translation unit has no target", unit_id=unit.id)
            translations[unit.id] = unit.target
        return translations

    def get_untranslated_resource_ids(self) -> set[str]:
        """Ids of every unit whose state is not exactly ``translated``."""
        return {unit.id for unit in self.units if not unit.is_translated}

    def state_counts(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for unit in self.units:
            key = str(unit.state)
            counts[key] = counts.get(key, 0) + 1
        return counts
