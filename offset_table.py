# BINA differential offset table encoder/decoder
# for Sonic the Hedgehog (2006)
# Last updated: 2026-10-19
#
# The table lists the location of every pointer in the data region, each one
# stored as the distance from the previous pointer, divided by 4.
# The top two bits of the first byte give the size of the entry:
#   00 - end of table
#   01 - 6-bit distance, 1 byte
#   10 - 14-bit distance, 2 bytes
#   11 - 30-bit distance, 4 bytes

from mst import BoundsError

SIZE_1BYTE = 0x40
SIZE_2BYTE = 0x80
SIZE_4BYTE = 0xC0

MAX_1BYTE_DIFF = 0x3F << 2
MAX_2BYTE_DIFF = 0x3FFF << 2
MAX_4BYTE_DIFF = 0x3FFFFFFF << 2

def align4(n):
    return (n + 3) & ~3

def iter_diffs(diff_tbl):
    i = 0
    n = len(diff_tbl)
    while i < n:
        b0 = diff_tbl[i]
        size = b0 & 0xC0
        if size == 0:
            break
        elif size == SIZE_1BYTE:
            yield (b0 & 0x3F) << 2
            i += 1
        elif size == SIZE_2BYTE:
            if i + 2 > n:
                # Truncated entry. Stop here, the same as a terminator.
                break
            yield ((b0 & 0x3F) << 10) | (diff_tbl[i+1] << 2)
            i += 2
        else:
            if i + 4 > n:
                break
            yield ((b0 & 0x3F) << 26) | (diff_tbl[i+1] << 18) | \
                  (diff_tbl[i+2] << 10) | (diff_tbl[i+3] << 2)
            i += 4

def decode_positions(diff_tbl):
    positions = []
    cursor = 0
    for diff in iter_diffs(diff_tbl):
        cursor += diff
        positions.append(cursor)
    return positions

def read_u32(data, offset, byteorder):
    if offset < 0 or offset + 4 > len(data):
        raise BoundsError(f'u32 read out of bounds at 0x{offset:X} (data size 0x{len(data):X})')
    return int.from_bytes(data[offset:offset+4], byteorder)

def decode_offsets(diff_tbl, data, byteorder):
    """
    Walk the differential offset table over ``data`` (the region right after
    the BINA header) and return the 32-bit value found at each listed location.

    Raises BoundsError if the table points past the end of ``data``.
    """
    return [read_u32(data, pos, byteorder) for pos in decode_positions(diff_tbl)]

def encode_diff(diff):
    if diff <= 0 or diff % 4 != 0:
        raise ValueError(f'Pointer distance {diff} is not a positive multiple of 4')
    if diff <= MAX_1BYTE_DIFF:
        return bytes([SIZE_1BYTE | (diff >> 2)])
    if diff <= MAX_2BYTE_DIFF:
        return bytes([SIZE_2BYTE | (diff >> 10), (diff >> 2) & 0xFF])
    if diff <= MAX_4BYTE_DIFF:
        return bytes([SIZE_4BYTE | (diff >> 26), (diff >> 18) & 0xFF,
                      (diff >> 10) & 0xFF, (diff >> 2) & 0xFF])
    raise ValueError(f'Pointer distance 0x{diff:X} is too large for the offset table')

def encode_offsets(positions):
    # No terminator is added; the table length in the header marks the end
    out = bytearray()
    prev = 0
    for pos in positions:
        out.extend(encode_diff(pos - prev))
        prev = pos
    return bytes(out)
