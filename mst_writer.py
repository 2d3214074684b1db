# MST (BINA/WTXT) string table writer
# for Sonic the Hedgehog (2006)
# Last updated: 2026-10-19

import logging

from mst import EmptyTableError, EncodeError
from mst_reader import (BINA_HEADER_SIZE, BINA_MAGIC, MAX_FILE_SIZE,
                        RECORD_SIZE, WTXT_HEADER_SIZE, WTXT_MAGIC)
from offset_table import align4, decode_positions, encode_offsets
from text_funcs import CP_SJIS, to_encoded_cstr, to_encoded_wstr

log = logging.getLogger(__name__)

DEFAULT_TABLE_NAME = 'XXX_MSG_TBL'

def default_message_name(index):
    return f'XXX_MSG_{index}'


class NameBlob:
    """Shift-JIS string pool. Identical strings are only stored once."""

    def __init__(self):
        self.data = bytearray()
        self.offsets = {}

    def add(self, s):
        offset = self.offsets.get(s)
        if offset is not None:
            return offset
        try:
            encoded = to_encoded_cstr(s, CP_SJIS)
        except UnicodeEncodeError as e:
            raise EncodeError(f'Cannot encode {s!r} as Shift-JIS: {e.reason}') from e
        offset = len(self.data)
        self.data.extend(encoded)
        self.offsets[s] = offset
        return offset


def build_blobs(table):
    names = NameBlob()
    text_data = bytearray()
    # (name, text, placeholder) offsets, relative to their blob; None means "no pointer"
    records = []

    table_name_offset = names.add(table.name or DEFAULT_TABLE_NAME)

    for (i, entry) in enumerate(table.entries):
        name_offset = names.add(entry.name or default_message_name(i))

        text_offset = None
        if entry.text:
            text_offset = len(text_data)
            text_data.extend(to_encoded_wstr(entry.text, table.big_endian))

        placeholder_offset = None
        placeholder = table.placeholder(i)
        if placeholder is not None:
            placeholder_offset = names.add(placeholder)

        records.append((name_offset, text_offset, placeholder_offset))

    return table_name_offset, records, bytes(text_data), bytes(names.data)

def pointer_positions(records):
    # Location of every non-null pointer in the data region.
    # A record with only a name pointer leaves a 12-byte step, written as 'C'.
    # The legacy (name, text) pair layout only has 'A' and 'B' steps. Readers decode any step.
    positions = [4]
    for (i, rec) in enumerate(records):
        base = WTXT_HEADER_SIZE + i * RECORD_SIZE
        for (field, offset) in enumerate(rec):
            if offset is not None:
                positions.append(base + field * 4)
    return positions

def build_diff_offset_table(table, positions):
    raw = table.diff_offset_table
    if raw and decode_positions(raw) == positions:
        # Same pointer layout as the file this table was loaded from.
        # Keep its offset table byte-for-byte.
        return bytes(raw)
    return encode_offsets(positions)

def save_mst_bytes(table):
    if not table.entries:
        raise EmptyTableError()

    byteorder = table.byteorder
    table_name_offset, records, text_data, name_data = build_blobs(table)

    count = len(records)
    text_base = WTXT_HEADER_SIZE + count * RECORD_SIZE
    name_base = text_base + len(text_data)
    doff_tbl_offset = align4(name_base + len(name_data))

    positions = pointer_positions(records)
    diff_tbl = bytearray(build_diff_offset_table(table, positions))
    diff_tbl.extend(b'\0' * (align4(len(diff_tbl)) - len(diff_tbl)))

    file_size = BINA_HEADER_SIZE + doff_tbl_offset + len(diff_tbl)
    if file_size > MAX_FILE_SIZE:
        raise EncodeError(f'String table is too big: {file_size} bytes (maximum is 16 MiB)')

    region = bytearray()
    region.extend(int.from_bytes(WTXT_MAGIC, 'big').to_bytes(4, byteorder))
    region.extend((name_base + table_name_offset).to_bytes(4, byteorder))
    region.extend(count.to_bytes(4, byteorder))

    for (i, (name_offset, text_offset, placeholder_offset)) in enumerate(records):
        region.extend((name_base + name_offset).to_bytes(4, byteorder))
        region.extend((0 if text_offset is None else text_base + text_offset).to_bytes(4, byteorder))
        region.extend((0 if placeholder_offset is None else name_base + placeholder_offset).to_bytes(4, byteorder))

    assert len(region) == text_base
    region.extend(text_data)
    region.extend(name_data)
    region.extend(b'\0' * (doff_tbl_offset - len(region)))
    region.extend(diff_tbl)

    out_file_data = bytearray()
    out_file_data.extend(file_size.to_bytes(4, byteorder))
    out_file_data.extend(doff_tbl_offset.to_bytes(4, byteorder))
    out_file_data.extend(len(diff_tbl).to_bytes(4, byteorder))
    out_file_data.extend(b'\0' * 10)
    out_file_data.extend(table.version.encode('ascii'))
    out_file_data.extend(b'B' if table.big_endian else b'L')
    out_file_data.extend(BINA_MAGIC)
    out_file_data.extend(b'\0' * 4)
    out_file_data.extend(region)

    assert len(out_file_data) == file_size
    log.debug('Built MST file: %d messages, %d bytes', count, file_size)
    return bytes(out_file_data)

def save_mst(table, filename):
    # Build the whole file before the output is opened
    output = save_mst_bytes(table)
    with open(filename, 'wb') as f:
        f.write(output)
