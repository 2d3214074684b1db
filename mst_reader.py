# MST (BINA/WTXT) string table reader
# for Sonic the Hedgehog (2006)
# Last updated: 2026-10-19
#
# File layout:
#   0x00  BINA header (0x20 bytes)
#   0x20  WTXT header: 'WTXT', table name offset, message count
#   0x2C  message records: name offset, text offset, placeholder offset
#         message text (UTF-16), names (Shift-JIS), differential offset table
# Every offset is relative to the end of the BINA header, and 0 means "none".

import logging

from mst import (MST_VERSION, BoundsError, InvalidHeaderError, SizeError,
                 StringEntry, StringTable)
from offset_table import decode_offsets, read_u32
from text_funcs import CP_SJIS, read_cstr, read_wstr

log = logging.getLogger(__name__)

BINA_MAGIC = b'BINA'
WTXT_MAGIC = b'WTXT'

BINA_HEADER_SIZE = 0x20
WTXT_HEADER_SIZE = 0x0C
RECORD_SIZE = 0x0C

MIN_FILE_SIZE = BINA_HEADER_SIZE + WTXT_HEADER_SIZE + RECORD_SIZE
MAX_FILE_SIZE = 16 * 1024 * 1024


def parse_header(data):
    if len(data) < BINA_HEADER_SIZE:
        raise SizeError(f'File is too small for a BINA header ({len(data)} bytes)')
    if data[0x18:0x1C] != BINA_MAGIC:
        raise InvalidHeaderError('File is not a BINA file')

    version = chr(data[0x16])
    endianness = chr(data[0x17])
    if version != MST_VERSION:
        raise InvalidHeaderError(f'Unsupported BINA version {version!r} -- only version {MST_VERSION!r} is supported')
    if endianness not in ('B', 'L'):
        raise InvalidHeaderError(f'Invalid BINA endianness {endianness!r} -- expected B or L')

    byteorder = 'big' if endianness == 'B' else 'little'
    return {
        'file_size': int.from_bytes(data[0:4], byteorder),
        'doff_tbl_offset': int.from_bytes(data[4:8], byteorder),
        'doff_tbl_length': int.from_bytes(data[8:12], byteorder),
        'version': version,
        'big_endian': endianness == 'B',
    }

def check_sizes(header):
    file_size = header['file_size']
    if file_size < MIN_FILE_SIZE:
        raise SizeError(f'File size {file_size} is too small (minimum is {MIN_FILE_SIZE} bytes)')
    if file_size > MAX_FILE_SIZE:
        raise SizeError(f'File size {file_size} is too big (maximum is 16 MiB)')
    doff_end = BINA_HEADER_SIZE + header['doff_tbl_offset'] + header['doff_tbl_length']
    if doff_end > file_size:
        raise BoundsError(f'Differential offset table ends at 0x{doff_end:X}, past the end of the file (0x{file_size:X})')

def has_wtxt_header(region, byteorder):
    if len(region) < WTXT_HEADER_SIZE:
        return False
    magic = int.from_bytes(WTXT_MAGIC, 'big').to_bytes(4, byteorder)
    return region[0:4] == magic


class _ScanStopped(Exception):
    pass


class _Scanner:
    def __init__(self, table, region, errors, strict):
        self.table = table
        self.region = region
        self.errors = errors
        self.strict = strict

    def fail(self, message):
        if self.strict:
            raise BoundsError(message)
        log.warning('%s', message)
        if self.errors is not None:
            self.errors.append(message)
        raise _ScanStopped()

    def name_at(self, offset, what):
        if offset == 0:
            return ''
        if offset >= len(self.region):
            self.fail(f'{what} offset 0x{offset:X} is out of range')
        return read_cstr(self.region, offset, CP_SJIS)

    def text_at(self, offset, what):
        if offset == 0:
            return ''
        if offset >= len(self.region):
            self.fail(f'{what} offset 0x{offset:X} is out of range')
        return read_wstr(self.region, offset, self.table.big_endian)

    def read_table_name(self, offset):
        # A bad table name isn't fatal, even in strict mode
        if offset == 0:
            return
        if offset >= len(self.region):
            message = f'String table name offset 0x{offset:X} is out of range'
            log.warning('%s', message)
            if self.errors is not None:
                self.errors.append(message)
            return
        self.table.name = read_cstr(self.region, offset, CP_SJIS)

    def read_records(self):
        byteorder = self.table.byteorder
        self.read_table_name(read_u32(self.region, 4, byteorder))
        count = read_u32(self.region, 8, byteorder)

        for i in range(count):
            rec = WTXT_HEADER_SIZE + i * RECORD_SIZE
            if rec + RECORD_SIZE > len(self.region):
                self.fail(f'Message {i}: record at 0x{rec:X} is past the end of the file ({count} messages declared)')
            name_offset = read_u32(self.region, rec, byteorder)
            text_offset = read_u32(self.region, rec + 4, byteorder)
            placeholder_offset = read_u32(self.region, rec + 8, byteorder)

            name = self.name_at(name_offset, f'Message {i}: name')
            text = self.text_at(text_offset, f'Message {i}: text')
            placeholder = self.name_at(placeholder_offset, f'Message {i}: placeholder')

            self.table.entries.append(StringEntry(name, text))
            if placeholder_offset != 0:
                self.table.placeholders[i] = placeholder

    def read_offset_pairs(self, diff_tbl):
        offsets = decode_offsets(diff_tbl, self.region, self.table.byteorder)
        if not offsets:
            self.fail('Differential offset table is empty')
        self.read_table_name(offsets[0])

        # After the table name, offsets come in (name, text) pairs
        i = 1
        while i + 1 < len(offsets):
            msg_num = len(self.table.entries)
            name = self.name_at(offsets[i], f'Message {msg_num}: name')
            if offsets[i+1] >= offsets[0]:
                # The "text" is inside the name table, so this message has no text.
                # That offset is the next message's name.
                text = ''
                i += 1
            else:
                text = self.text_at(offsets[i+1], f'Message {msg_num}: text')
                i += 2
            self.table.entries.append(StringEntry(name, text))


def load_mst_bytes(data, table=None, errors=None, strict=False):
    """
    Parse an MST file.

    Header and size problems raise an MstFormatError. A bad message pointer
    stops reading at that message: the messages before it are kept and the
    problem is added to ``errors`` (and logged), unless ``strict`` is set, in
    which case BoundsError is raised.
    """
    if table is None:
        table = StringTable()
    table.clear()

    header = parse_header(data)
    check_sizes(header)
    file_size = header['file_size']
    if len(data) < file_size:
        raise SizeError(f'Short read: file header says {file_size} bytes, but only {len(data)} are available')

    table.version = header['version']
    table.big_endian = header['big_endian']

    region = bytes(data[BINA_HEADER_SIZE:file_size])
    doff_start = header['doff_tbl_offset']
    diff_tbl = region[doff_start:doff_start + header['doff_tbl_length']]
    table.diff_offset_table = diff_tbl

    scanner = _Scanner(table, region, errors, strict)
    try:
        if has_wtxt_header(region, table.byteorder):
            scanner.read_records()
        else:
            log.debug('No WTXT header; walking the differential offset table')
            scanner.read_offset_pairs(diff_tbl)
    except _ScanStopped:
        pass

    table.rebuild_name_index()
    return table

def load_mst(filename, table=None, errors=None, strict=False):
    with open(filename, 'rb') as f:
        head = f.read(BINA_HEADER_SIZE)
        header = parse_header(head)
        check_sizes(header)
        f.seek(0)
        data = f.read(header['file_size'])
    return load_mst_bytes(data, table, errors, strict)
