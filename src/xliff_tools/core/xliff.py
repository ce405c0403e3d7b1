"""
XLIFF 1.2 reader/writer.

Maps between the markup and ``TranslationDocument``::

    xliff
      file  [datatype, source-language, target-language, original]
        body
          trans-unit* [id]
            source
            target  [state]
            note

Only a flat ``body`` is supported. The one exception is an empty ``group``
left behind by older tools, which is remembered on the model so that the
reconciler can drop it.
"""

from __future__ import annotations

import logging
from typing import IO, Optional

from lxml import etree

from ..utils.errors import DocumentParseError, DocumentStructureError
from .model import (
    DEFAULT_DATATYPE,
    DEFAULT_SOURCE_LANGUAGE,
    ORIGINAL_PLACEHOLDER,
    TranslationDocument,
    TranslationState,
    TranslationUnit,
)

logger = logging.getLogger(__name__)

XLIFF_NS = "urn:oasis:names:tc:xliff:document:1.2"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XLIFF_VERSION = "1.2"
SCHEMA_LOCATION = f"{XLIFF_NS} xliff-core-1.2-transitional.xsd"

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'


def _qname(ns: Optional[str], name: str) -> str:
    return f"{{{ns}}}{name}" if ns else name


def _text(element: etree._Element) -> str:
    # 与 XElement.Value 一致：拼接所有后代文本
    return "".join(element.itertext())


def _make_parser(encoding: Optional[str] = None) -> etree.XMLParser:
    return etree.XMLParser(
        encoding=encoding,
        resolve_entities=False,  # Prevent XXE attacks
        no_network=True,
        huge_tree=False,
    )


def parse_xml(data: str | bytes) -> etree._Element:
    """Parse raw markup into an element, raising ``DocumentParseError`` on bad input."""
    if not data or not data.strip():
        raise DocumentParseError("Empty XLIFF document")
    if isinstance(data, str):
        # lxml 不接受带编码声明的 str，统一转成 UTF-8 字节并强制解析器编码
        data, parser = data.encode("utf-8"), _make_parser("utf-8")
    else:
        parser = _make_parser()
    try:
        return etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        line = e.position[0] if getattr(e, "position", None) else None
        raise DocumentParseError(f"Malformed XLIFF document: {e.msg}", line=line) from e


def _read_unit(element: etree._Element, ns: Optional[str]) -> TranslationUnit:
    unit_id = element.get("id")
    if unit_id is None:
        raise DocumentStructureError("trans-unit is missing its 'id' attribute", line=element.sourceline)

    source_element = element.find(_qname(ns, "source"))
    target_element = element.find(_qname(ns, "target"))
    note_element = element.find(_qname(ns, "note"))
    if source_element is None:
        raise DocumentStructureError("trans-unit has no <source>", unit_id=unit_id)
    if target_element is None:
        raise DocumentStructureError("trans-unit has no <target>", unit_id=unit_id)
    state = target_element.get("state")
    if state is None:
        raise DocumentStructureError("<target> is missing its 'state' attribute", unit_id=unit_id)

    return TranslationUnit(
        id=unit_id,
        source=_text(source_element),
        target=_text(target_element),
        state=TranslationState.parse(state),
        note=_text(note_element) if note_element is not None else "",
    )


def document_from_element(root: etree._Element) -> TranslationDocument:
    """
    Build a ``TranslationDocument`` from a parsed ``xliff`` root element.

    Raises:
        DocumentStructureError: required elements or attributes are missing,
            ids repeat, or ``body`` holds anything but trans-units
    """
    ns = etree.QName(root).namespace
    file_element = root.find(_qname(ns, "file"))
    if file_element is None:
        raise DocumentStructureError("XLIFF document has no <file> element")
    body = file_element.find(_qname(ns, "body"))
    if body is None:
        raise DocumentStructureError("XLIFF <file> has no <body> element")

    document = TranslationDocument(
        source_language=file_element.get("source-language", DEFAULT_SOURCE_LANGUAGE),
        target_language=file_element.get("target-language", ""),
        original=file_element.get("original", ORIGINAL_PLACEHOLDER),
        datatype=file_element.get("datatype", DEFAULT_DATATYPE),
    )

    seen: set[str] = set()
    for child in body:
        if not isinstance(child.tag, str):
            continue  # comments / processing instructions
        name = etree.QName(child).localname
        if name == "group":
            if len(child):
                raise DocumentStructureError(
                    "Nested <group> elements are not supported",
                    group_id=child.get("id"),
                )
            document.has_empty_group = True
            continue
        if name != "trans-unit":
            raise DocumentStructureError(f"Unexpected <{name}> in <body>", line=child.sourceline)

        unit = _read_unit(child, ns)
        if unit.id in seen:
            raise DocumentStructureError("Duplicate trans-unit id", unit_id=unit.id)
        seen.add(unit.id)
        document.units.append(unit)

    logger.debug(f"Read XLIFF document '{document.original}' with {len(document.units)} units")
    return document


def read_document(reader: IO) -> TranslationDocument:
    """Read a whole XLIFF document from a text or binary stream."""
    return document_from_element(parse_xml(reader.read()))


def document_to_element(document: TranslationDocument) -> etree._Element:
    root = etree.Element(_qname(XLIFF_NS, "xliff"), nsmap={None: XLIFF_NS, "xsi": XSI_NS})
    root.set("version", XLIFF_VERSION)
    root.set(_qname(XSI_NS, "schemaLocation"), SCHEMA_LOCATION)

    file_element = etree.SubElement(root, _qname(XLIFF_NS, "file"))
    file_element.set("datatype", document.datatype)
    file_element.set("source-language", document.source_language)
    file_element.set("target-language", document.target_language)
    file_element.set("original", document.original)

    body = etree.SubElement(file_element, _qname(XLIFF_NS, "body"))
    if document.has_empty_group:
        etree.SubElement(body, _qname(XLIFF_NS, "group"))

    for unit in document.units:
        unit_element = etree.SubElement(body, _qname(XLIFF_NS, "trans-unit"))
        unit_element.set("id", unit.id)
        etree.SubElement(unit_element, _qname(XLIFF_NS, "source")).text = unit.source
        target = etree.SubElement(unit_element, _qname(XLIFF_NS, "target"))
        target.set("state", str(unit.state))
        target.text = unit.target
        # 空 note 写成自闭合 <note />
        etree.SubElement(unit_element, _qname(XLIFF_NS, "note")).text = unit.note or None

    etree.indent(root, space="  ")
    return root


def write_document(document: TranslationDocument, writer: IO[str]) -> None:
    """Serialize *document* as indented XLIFF 1.2 text."""
    root = document_to_element(document)
    writer.write(XML_DECLARATION)
    writer.write(etree.tostring(root, encoding="unicode"))
    writer.write("\n")
