# Conversion between MST string tables and XML
# for Sonic the Hedgehog (2006)
# Last updated: 2026-10-19
#
# <?xml version='1.0' encoding='UTF-8'?>
# <mst06 name="msg_hint" mst_version="1" endianness="B">
#     <message index="0" name="hint_01" placeholder="button_a">Press \n to jump</message>
#     ...
#     <DiffOffTbl>\x41\x42\x41...</DiffOffTbl>
# </mst06>
#
# Message text and placeholders are escaped with escaping.escape().

import logging
import re

from lxml import etree

from escaping import escape, escape_bytes, unescape, unescape_bytes
from mst import (MST_VERSION, EmptyTableError, EncodeError, StringTable,
                 XmlSemanticError, XmlSyntaxError)
from mst_reader import MAX_FILE_SIZE, MIN_FILE_SIZE, RECORD_SIZE
from mst_writer import DEFAULT_TABLE_NAME, default_message_name

log = logging.getLogger(__name__)

ROOT_TAG = 'mst06'
MESSAGE_TAG = 'message'
DIFF_OFFSET_TABLE_TAG = 'DiffOffTbl'

DEFAULT_INDENT = '\t'

# No index past this could fit in a 16 MiB file
MAX_MESSAGE_INDEX = (MAX_FILE_SIZE - MIN_FILE_SIZE) // RECORD_SIZE

_UNSIGNED_RE = re.compile(r'\s*\+?[0-9]+\s*')


def to_xml_tree(table):
    if not table.entries:
        raise EmptyTableError()

    root = etree.Element(ROOT_TAG)
    root.set('name', table.name or DEFAULT_TABLE_NAME)
    root.set('mst_version', table.version)
    root.set('endianness', 'B' if table.big_endian else 'L')

    try:
        for (i, entry) in enumerate(table.entries):
            msg = etree.SubElement(root, MESSAGE_TAG)
            msg.set('index', str(i))
            msg.set('name', entry.name or default_message_name(i))
            placeholder = table.placeholder(i)
            if placeholder is not None:
                msg.set('placeholder', escape(placeholder))
            if entry.text:
                msg.text = escape(entry.text)
    except ValueError as e:
        # lxml rejects strings that can't be stored in XML
        raise EncodeError(f'Message {i}: {e}') from e

    if table.diff_offset_table:
        etree.SubElement(root, DIFF_OFFSET_TABLE_TAG).text = escape_bytes(table.diff_offset_table)

    return etree.ElementTree(root)

def save_xml_bytes(table, indent=DEFAULT_INDENT):
    tree = to_xml_tree(table)
    if indent is not None:
        etree.indent(tree, space=indent)
    return etree.tostring(tree, xml_declaration=True, encoding='UTF-8') + b'\n'

def save_xml(table, filename, indent=DEFAULT_INDENT):
    output = save_xml_bytes(table, indent)
    with open(filename, 'wb') as f:
        f.write(output)


def parse_unsigned(value):
    if value is None or not _UNSIGNED_RE.fullmatch(value):
        return None
    return int(value)

def _load_root_attributes(table, root, report):
    problems = []

    name = root.get('name')
    if name is None:
        problems.append(f'"{ROOT_TAG}" element has no "name" attribute.')
    elif not name:
        problems.append(f'"{ROOT_TAG}" element\'s "name" attribute is empty.')
    else:
        table.name = name

    version = root.get('mst_version', MST_VERSION)
    if version != MST_VERSION:
        problems.append(f'"{ROOT_TAG}" element has unsupported "mst_version" {version!r} -- only {MST_VERSION!r} is supported.')
    else:
        table.version = version

    endianness = root.get('endianness', 'B')
    if endianness not in ('B', 'L'):
        problems.append(f'"{ROOT_TAG}" element has invalid "endianness" {endianness!r} -- expected "B" or "L".')
    else:
        table.big_endian = (endianness == 'B')

    for p in problems:
        report(p)
    return not problems

def _load_messages(table, messages, report):
    seen = set()
    for msg in messages:
        line = msg.sourceline

        index_attr = msg.get('index')
        index = parse_unsigned(index_attr)
        if index_attr is None:
            report(f'Line {line}: "{MESSAGE_TAG}" element has no "index" attribute.')
            continue
        elif index is None:
            report(f'Line {line}: "{MESSAGE_TAG}" element\'s "index" attribute is not an unsigned integer.')
            continue
        elif index > MAX_MESSAGE_INDEX:
            report(f'Line {line}: "{MESSAGE_TAG}" element\'s "index" attribute is too large ({index}).')
            continue

        name = msg.get('name')
        if name is None:
            report(f'Line {line}: "{MESSAGE_TAG}" element has no "name" attribute.')
            continue
        elif not name:
            report(f'Line {line}: "{MESSAGE_TAG}" element has an empty "name" attribute.')
            continue

        if index in seen:
            report(f'Line {line}: Duplicate message index {index}. This message will supersede the previous message.')
        seen.add(index)

        text = unescape(msg.text or '')
        placeholder = msg.get('placeholder')
        if placeholder is not None:
            placeholder = unescape(placeholder)
        table.set(index, name, text, placeholder)

    missing = [i for i in range(len(table.entries)) if i not in seen]
    if missing:
        report('Missing message indexes: ' + ', '.join(str(i) for i in missing) +
               '. Empty messages will be used for these.')

def load_xml_bytes(data, table=None, errors=None):
    """
    Parse an mst06 XML document.

    Problems with single "message" elements are added to ``errors`` (and
    logged) and the element is skipped. A malformed document raises
    XmlSyntaxError. Bad attributes on the root element raise
    XmlSemanticError, after the rest of the document has been checked, with
    every problem found.
    """
    if table is None:
        table = StringTable()
    table.clear()

    diagnostics = []

    def report(message):
        log.warning('%s', message)
        diagnostics.append(message)
        if errors is not None:
            errors.append(message)

    parser = etree.XMLParser(resolve_entities=False, no_network=True)
    try:
        root = etree.fromstring(data, parser)
    except etree.XMLSyntaxError as e:
        report(str(e))
        raise XmlSyntaxError(str(e)) from e

    if root.tag != ROOT_TAG:
        message = f'"{ROOT_TAG}" element not found.'
        report(message)
        raise XmlSyntaxError(message)

    root_ok = _load_root_attributes(table, root, report)

    messages = root.findall(MESSAGE_TAG)
    if not messages:
        table.name = ''
        message = f'"{ROOT_TAG}" element has no "{MESSAGE_TAG}" elements.'
        report(message)
        raise XmlSyntaxError(message)

    _load_messages(table, messages, report)

    diff_elem = root.find(DIFF_OFFSET_TABLE_TAG)
    if diff_elem is not None and diff_elem.text:
        try:
            table.diff_offset_table = unescape_bytes(diff_elem.text)
        except ValueError as e:
            report(f'Line {diff_elem.sourceline}: "{DIFF_OFFSET_TABLE_TAG}" element is invalid: {e}')

    if not root_ok:
        raise XmlSemanticError(diagnostics)
    return table

def load_xml(filename, table=None, errors=None):
    with open(filename, 'rb') as f:
        data = f.read()
    return load_xml_bytes(data, table, errors)
