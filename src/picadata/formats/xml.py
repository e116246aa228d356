# topmark:header:start
#
#   project      : PicaData
#   file         : xml.py
#   file_relpath : src/picadata/formats/xml.py
#   license      : MIT
#   copyright    : (c) 2025 PicaData contributors
#
# topmark:header:end

"""PICA-XML and PICA+ XML (PPXML).

Both parsers read incrementally with `xml.etree.ElementTree.iterparse` and
release each ``record`` element once it has been converted, so memory use
does not grow with the size of the input.

Both writers open the document lazily: the XML declaration and the opening
``<collection>`` are written together with the first record, and
`finalize()` closes the collection (emitting an empty one if no record was
written).
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import TYPE_CHECKING, ClassVar
from xml.sax.saxutils import escape, quoteattr

from picadata.constants import (
    EPN_CODE,
    EPN_TAG,
    HOLDING_TAG,
    ILN_CODE,
    PICA_XML_NAMESPACE,
    PPXML_NAMESPACE,
)
from picadata.core.errors import PicaParseError
from picadata.formats.base import RecordParser, RecordWriter
from picadata.formats.types import PicaType
from picadata.record import Record

if TYPE_CHECKING:
    from collections.abc import Iterator

    from picadata.record import Field


def _split_tag(tag: str) -> tuple[str, str]:
    """Return ``(namespace, local_name)`` of an ElementTree tag."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


def _normalize_occurrence(occ: str | None) -> str:
    occ = (occ or "").strip()
    if occ.isdigit() and len(occ) < 2:
        return occ.zfill(2)
    return occ


class XmlRecordParser(RecordParser):
    """Common iterparse loop; subclasses convert one ``record`` element."""

    namespace: ClassVar[str]

    def _iter_records(self) -> Iterator[Record]:
        root: ET.Element | None = None
        try:
            for event, elem in ET.iterparse(self.stream, events=("start", "end")):
                if event == "start":
                    if root is None:
                        root = elem
                        self._check_namespace(_split_tag(elem.tag)[0])
                    continue
                namespace, local = _split_tag(elem.tag)
                if local != "record" or namespace not in (self.namespace, ""):
                    continue
                yield Record.from_fields(self._parse_record(elem))
                elem.clear()
                if root is not None and root is not elem:
                    root.clear()
        except ET.ParseError as exc:
            line, column = exc.position
            raise PicaParseError(
                f"malformed XML: {exc}",
                record_number=self.count + 1,
                position=f"line {line}, column {column}",
            ) from exc

    def _check_namespace(self, namespace: str) -> None:
        """Reject documents in another XML vocabulary, e.g. PPXML read as PICA-XML."""
        if namespace not in (self.namespace, ""):
            raise PicaParseError(
                f"unexpected XML namespace {namespace!r}, expected {self.namespace!r}",
                record_number=self.count + 1,
                position="root element",
            )

    def _parse_record(self, elem: ET.Element) -> list[Field]:
        raise NotImplementedError


class XmlParser(XmlRecordParser):
    """Parser for PICA-XML (``<datafield>``/``<subfield>``)."""

    pica_type = PicaType.XML
    namespace = PICA_XML_NAMESPACE

    def _parse_record(self, elem: ET.Element) -> list[Field]:
        fields: list[Field] = []
        for df in elem:
            if _split_tag(df.tag)[1] != "datafield":
                continue
            subfields = [
                (sf.get("code", ""), sf.text or "")
                for sf in df
                if _split_tag(sf.tag)[1] == "subfield"
            ]
            fields.append(
                self.make_field(
                    df.get("tag", ""),
                    _normalize_occurrence(df.get("occurrence")),
                    subfields,
                    position=f"datafield {df.get('tag', '')!r}",
                )
            )
        return fields


class PPXmlParser(XmlRecordParser):
    """Parser for PICA+ XML (``<global>``, ``<owner>``, ``<local>``, ``<copy>``)."""

    pica_type = PicaType.PPXML
    namespace = PPXML_NAMESPACE

    def _parse_record(self, elem: ET.Element) -> list[Field]:
        fields: list[Field] = []
        self._collect(elem, "", fields)
        return fields

    def _collect(self, elem: ET.Element, default_occ: str, fields: list[Field]) -> None:
        for child in elem:
            local = _split_tag(child.tag)[1]
            if local == "tag":
                occ = child.get("occ")
                subfields = [
                    (sf.get("id", ""), sf.text or "")
                    for sf in child
                    if _split_tag(sf.tag)[1] == "subf"
                ]
                fields.append(
                    self.make_field(
                        child.get("id", ""),
                        _normalize_occurrence(occ if occ else default_occ),
                        subfields,
                        position=f"tag {child.get('id', '')!r}",
                    )
                )
            elif local == "copy":
                self._collect(child, child.get("occ", ""), fields)
            elif local in ("global", "owner", "local"):
                self._collect(child, default_occ, fields)


class XmlDocumentWriter(RecordWriter):
    """Writer base handling the lazily opened ``<collection>`` document."""

    namespace: ClassVar[str]
    _started: bool = False

    def _header(self) -> str:
        return (
            '<?xml version="1.0" encoding="UTF-8"?>\n'
            f"<collection xmlns={quoteattr(self.namespace)}>\n"
        )

    def write(self, record: Record) -> None:
        if not self._started:
            self.stream.write(self._header())
            self._started = True
        super().write(record)

    def finalize(self) -> None:
        if not self._started:
            self.stream.write(self._header())
            self._started = True
        self.stream.write("</collection>\n")
        self.stream.flush()


class XmlWriter(XmlDocumentWriter):
    """Writer for PICA-XML."""

    pica_type = PicaType.XML
    namespace = PICA_XML_NAMESPACE

    def serialize(self, record: Record) -> str:
        out: list[str] = ["  <record>\n"]
        for f in record:
            occ = f" occurrence={quoteattr(f.occurrence)}" if f.occurrence else ""
            out.append(f"    <datafield tag={quoteattr(f.tag)}{occ}>\n")
            for code, value in f.subfields:
                out.append(f"      <subfield code={quoteattr(code)}>{escape(value)}</subfield>\n")
            out.append("    </datafield>\n")
        out.append("  </record>\n")
        return "".join(out)


class PPXmlWriter(XmlDocumentWriter):
    """Writer for PICA+ XML.

    Level 0 fields go to ``<global>``. Each holding becomes an ``<owner>``
    with its level 1 fields in ``<local>`` and one ``<copy>`` per item.
    """

    pica_type = PicaType.PPXML
    namespace = PPXML_NAMESPACE

    @staticmethod
    def _tag(f: Field, indent: str) -> str:
        out = [f"{indent}<tag id={quoteattr(f.tag)} occ={quoteattr(f.occurrence)}>\n"]
        for code, value in f.subfields:
            out.append(f"{indent}  <subf id={quoteattr(code)}>{escape(value)}</subf>\n")
        out.append(f"{indent}</tag>\n")
        return "".join(out)

    def serialize(self, record: Record) -> str:
        out: list[str] = ["  <record>\n", '    <global opacflag="" status="">\n']
        out.extend(self._tag(f, "      ") for f in record if f.level == 0)
        out.append("    </global>\n")
        for holding in record.holdings:
            iln = next(
                (f.first_value(ILN_CODE) or "" for f in holding if f.tag == HOLDING_TAG), ""
            )
            out.append(f"    <owner iln={quoteattr(iln)}>\n")
            local = [f for f in holding if f.level == 1]
            if local:
                out.append("      <local>\n")
                out.extend(self._tag(f, "        ") for f in local)
                out.append("      </local>\n")
            for item in Record.from_fields(holding).items:
                epn = next((f.first_value(EPN_CODE) or "" for f in item if f.tag == EPN_TAG), "")
                occ = item[0].occurrence
                out.append(f"      <copy occ={quoteattr(occ)} epn={quoteattr(epn)}>\n")
                out.extend(self._tag(f, "        ") for f in item)
                out.append("      </copy>\n")
            out.append("    </owner>\n")
        out.append("  </record>\n")
        return "".join(out)
