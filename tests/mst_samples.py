"""
Hand-packed MST files for the tests.
"""


def u32(value, big_endian=True):
    return value.to_bytes(4, 'big' if big_endian else 'little')

def bina_header(file_size, doff_tbl_offset, doff_tbl_length, big_endian=True,
                version=b'1', magic=b'BINA'):
    return (u32(file_size, big_endian) + u32(doff_tbl_offset, big_endian) +
            u32(doff_tbl_length, big_endian) + b'\0' * 10 + version +
            (b'B' if big_endian else b'L') + magic + b'\0' * 4)

def make_mst(region, doff_tbl_offset, doff_tbl_length, big_endian=True, **kwargs):
    file_size = kwargs.pop('file_size', 0x20 + len(region))
    return bina_header(file_size, doff_tbl_offset, doff_tbl_length, big_endian, **kwargs) + region

def hello_mst(big_endian=True, diff_tbl=b'ABA\0'):
    """
    One message, "MSG_HELLO" -> "Hi", in table "msg_test".
    Names are stored with the table name last, unlike what mst_writer produces.
    """
    codec = 'utf_16_be' if big_endian else 'utf_16_le'
    wtxt = b'WTXT' if big_endian else b'TXTW'
    region = bytearray()
    region += wtxt + u32(40, big_endian) + u32(1, big_endian)
    region += u32(30, big_endian) + u32(24, big_endian) + u32(0, big_endian)
    region += 'Hi'.encode(codec) + b'\0\0'       # 24
    region += b'MSG_HELLO\0'                      # 30
    region += b'msg_test\0'                       # 40
    region += b'\0' * 3                           # 49
    assert len(region) == 52
    region += diff_tbl
    return make_mst(bytes(region), 52, len(diff_tbl), big_endian)

def writer_layout_mst(diff_tbl):
    """
    Table "T" with one message "A" -> "x", laid out exactly the way
    mst_writer lays it out, with a caller-supplied offset table.
    """
    region = bytearray()
    region += b'WTXT' + u32(28) + u32(1)
    region += u32(30) + u32(24) + u32(0)
    region += b'\0x\0\0'                          # 24
    region += b'T\0A\0'                           # 28
    assert len(region) == 32
    region += diff_tbl
    return make_mst(bytes(region), 32, len(diff_tbl))

def legacy_mst():
    """
    No WTXT header: message pointers are only found through the offset table.
    Message N1 has no text, so its "text" pointer is really N2's name.
    """
    region = bytearray()
    region += u32(32)                             # table name
    region += u32(36) + u32(24)                   # N0 -> "a"
    region += u32(39)                             # N1, name only
    region += u32(42) + u32(28)                   # N2 -> "c"
    region += b'\0a\0\0'                          # 24
    region += b'\0c\0\0'                          # 28
    region += b'TBL\0'                            # 32
    region += b'N0\0N1\0N2\0'                     # 36
    region += b'\0' * 3                           # 45
    assert len(region) == 48
    diff_tbl = b'\x40AAAAA\0\0'
    region += diff_tbl
    return make_mst(bytes(region), 48, len(diff_tbl))
