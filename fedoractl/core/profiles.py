"""Parsers for Fedora profile and version-history XML.

Profiles are flattened into plain dicts: one key per child element of the
profile root, holding a scalar when the element appeared once and a list when
it appeared several times. ``objModels`` is always a list.
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Any

from dateutil.parser import isoparse
from lxml import etree

from fedoractl.core.exceptions import InvalidArgumentError, ParseError
from fedoractl.core.logging import get_logger

logger = get_logger(__name__)

# =============================================================================
# Constants
# =============================================================================

ACCESS_NS = "http://www.fedora.info/definitions/1/0/access/"
MANAGEMENT_NS = "http://www.fedora.info/definitions/1/0/management/"

NAMESPACES = {"access": ACCESS_NS, "management": MANAGEMENT_NS}

MULTI_VALUED_FIELDS = frozenset({"objModels"})
NESTED_FIELDS = frozenset({"repositoryPID", "repositoryOAI-identifier"})
INTEGER_FIELDS = frozenset({"dsSize"})
BOOLEAN_FIELDS = frozenset({"dsVersionable", "dsChecksumValid"})
DATE_FIELDS = frozenset({"dsCreateDate", "objCreateDate", "objLastModDate"})

XML_PARSER = etree.XMLParser(remove_blank_text=True, resolve_entities=False, no_network=True)
XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")
ENCODING_DECLARATION = re.compile(rb"^\s*<\?xml[^>]*encoding=[\"']([A-Za-z0-9._-]+)[\"']")

Record = dict[str, Any]


# =============================================================================
# Helpers
# =============================================================================


def ensure_namespace(xml: str, element: str, namespace: str) -> str:
    """Declare ``namespace`` on every ``element`` tag if the document has none.

    Some servers omit the namespace declaration on profile and history
    documents; the XPath queries below always use the namespaced form.
    """
    if "xmlns=" in xml:
        return xml
    return re.sub(rf"<{re.escape(element)}(?=[\s/>])", f'<{element} xmlns="{namespace}"', xml)


def _to_text(xml: str | bytes, document: str) -> str:
    """Decode ``xml`` and drop its XML declaration.

    Bytes are decoded with the declared encoding (UTF-8 otherwise). Text is
    already decoded, so a leftover ``encoding=`` would mislead lxml.
    """
    if isinstance(xml, bytes):
        match = ENCODING_DECLARATION.match(xml)
        encoding = match.group(1).decode("ascii") if match else "utf-8-sig"
        try:
            xml = xml.decode(encoding)
        except (LookupError, UnicodeDecodeError) as e:
            raise ParseError(document, str(e)) from e
    return XML_DECLARATION.sub("", xml.lstrip("\ufeff"), count=1).strip()


def _parse(xml: str, document: str) -> etree._Element:
    try:
        return etree.fromstring(xml.encode("utf-8"), parser=XML_PARSER)
    except etree.XMLSyntaxError as e:
        raise ParseError(document, str(e)) from e


def _local_name(node: etree._Element) -> str:
    return etree.QName(node).localname


def _elements(node: etree._Element) -> list[etree._Element]:
    # skips comments and processing instructions
    return [child for child in node if isinstance(child.tag, str)]


def _collect(root: etree._Element) -> dict[str, list[Any]]:
    """Group the text of each child element by local name."""
    values: dict[str, list[Any]] = {}
    for node in _elements(root):
        name = _local_name(node)
        bucket = values.setdefault(name, [])
        children = _elements(node)
        if name in MULTI_VALUED_FIELDS:
            if children:
                bucket.extend((child.text or "").strip() for child in children)
            elif (node.text or "").strip():
                bucket.append(node.text.strip())
        elif name in NESTED_FIELDS:
            nested: dict[str, list[Any]] = {}
            for child in children:
                nested.setdefault(_local_name(child), []).append((child.text or "").strip())
            bucket.append(_collapse(nested))
        else:
            bucket.append((node.text or "").strip())
    return values


def _collapse(values: dict[str, list[Any]]) -> Record:
    record: Record = {}
    for name, items in values.items():
        if name in MULTI_VALUED_FIELDS or len(items) != 1:
            record[name] = items
        else:
            record[name] = items[0] if items[0] != "" else None
    return record


def _coerce(record: Record) -> Record:
    for name, value in record.items():
        if not isinstance(value, str):
            continue
        if name in INTEGER_FIELDS:
            try:
                record[name] = int(value)
            except ValueError:
                pass
        elif name in BOOLEAN_FIELDS:
            record[name] = value.lower() == "true"
        elif name in DATE_FIELDS:
            record[name] = _parse_date(value)
    return record


def _parse_date(value: str) -> datetime | str:
    try:
        return isoparse(value)
    except ValueError:
        return value


def _record(root: etree._Element, attributes: tuple[str, ...] = ()) -> Record:
    record = _coerce(_collapse(_collect(root)))
    for attribute in attributes:
        if attribute in root.attrib:
            record.setdefault(attribute, root.get(attribute))
    return record


def _expect_root(root: etree._Element, namespace: str, name: str, document: str) -> None:
    if root.tag != f"{{{namespace}}}{name}":
        raise ParseError(document, f"unexpected root element {root.tag}")


# =============================================================================
# Profiles
# =============================================================================


def parse_repository_profile(xml: str | bytes | None) -> Record | None:
    """Parse a ``describe`` document.

    Returns:
        The profile record, or None if the document could not be parsed.
    """
    if not xml:
        return None
    try:
        text = ensure_namespace(_to_text(xml, "repository profile"), "fedoraRepository", ACCESS_NS)
        root = _parse(text, "repository profile")
        _expect_root(root, ACCESS_NS, "fedoraRepository", "repository profile")
    except ParseError as e:
        logger.warning("Ignoring unparseable repository profile: %s", e)
        return None
    return _collapse(_collect(root))


def parse_object_profile(xml: str | bytes | None) -> Record:
    """Parse an object profile (``objects/{pid}?format=xml``).

    An empty document yields an empty record.

    Raises:
        ParseError: If the document is not a well-formed object profile.
    """
    text = _to_text(xml or "", "object profile")
    if not text:
        return {}
    root = _parse(ensure_namespace(text, "objectProfile", ACCESS_NS), "object profile")
    _expect_root(root, ACCESS_NS, "objectProfile", "object profile")
    return _record(root, ("pid",))


def _datastream_record(node: etree._Element) -> Record:
    return _record(node, ("pid", "dsID"))


def parse_datastream_profile(xml: str | bytes | None) -> Record:
    """Parse a datastream profile (``objects/{pid}/datastreams/{dsid}?format=xml``).

    An empty document yields an empty record, which is what callers get for
    a datastream that does not exist yet.

    Raises:
        ParseError: If the document is not a well-formed datastream profile.
    """
    text = _to_text(xml or "", "datastream profile")
    if not text:
        return {}
    root = _parse(ensure_namespace(text, "datastreamProfile", MANAGEMENT_NS), "datastream profile")
    _expect_root(root, MANAGEMENT_NS, "datastreamProfile", "datastream profile")
    return _datastream_record(root)


# =============================================================================
# Version History
# =============================================================================


def parse_datastream_history(xml: str | bytes | None) -> dict[str, Record]:
    """Parse a datastream history into ``{dsCreateDate: profile}``.

    Versions keep document order; a repeated create date keeps the last one.
    """
    text = _to_text(xml or "", "datastream history")
    if not text:
        return {}
    root = _parse(ensure_namespace(text, "datastreamProfile", MANAGEMENT_NS), "datastream history")
    versions: dict[str, Record] = {}
    for node in root.xpath("//management:datastreamProfile", namespaces=NAMESPACES):
        key = node.findtext(f"{{{MANAGEMENT_NS}}}dsCreateDate", default="").strip()
        record = _datastream_record(node)
        # pid and dsID live on the datastreamHistory root
        for attribute in ("pid", "dsID"):
            if attribute in root.attrib:
                record.setdefault(attribute, root.get(attribute))
        versions[key] = record
    return versions


def parse_object_history(xml: str | bytes | None) -> list[str]:
    """Parse an object history into its change dates, oldest first as served."""
    text = _to_text(xml or "", "object history")
    if not text:
        return []
    root = _parse(ensure_namespace(text, "fedoraObjectHistory", ACCESS_NS), "object history")
    return [
        (node.text or "").strip()
        for node in root.xpath("//access:objectChangeDate", namespaces=NAMESPACES)
    ]


def parse_version_history(kind: str, xml: str | bytes | None) -> dict[str, Record] | list[str]:
    """Parse a version history document of the given kind.

    Args:
        kind: ``"datastream"`` or ``"object"``.
        xml: History document.

    Raises:
        InvalidArgumentError: For an unknown kind.
    """
    if kind == "datastream":
        return parse_datastream_history(xml)
    if kind == "object":
        return parse_object_history(xml)
    raise InvalidArgumentError("kind", f"expected 'datastream' or 'object', got {kind!r}")
