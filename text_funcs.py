# Text encoding helpers for MST string tables
# for Sonic the Hedgehog (2006)
# Last updated: 2026-10-19

import codecs

# Code page IDs used by the MST format and its XML form
CP_SJIS = 932
CP_1252 = 1252
CP_LATIN1 = 28591
CP_UTF8 = 65001

_CODEPAGE_NAMES = {
    CP_SJIS: 'mskanji',
    CP_1252: 'cp1252',
    CP_LATIN1: 'latin_1',
    CP_UTF8: 'utf_8',
}

def codepage_name(cp):
    name = _CODEPAGE_NAMES.get(cp, f'cp{cp}')
    # Raises LookupError for code pages Python doesn't know about
    return codecs.lookup(name).name

def decode_bytes(cp, raw):
    """
    Decode a legacy code page string, falling back to cp1252 and then Latin-1.
    Latin-1 maps every byte, so this never fails.
    """
    for encoding in (codepage_name(cp), 'cp1252', 'latin_1'):
        try:
            text = bytes(raw).decode(encoding)
        except UnicodeDecodeError:
            continue
        if cp == CP_SJIS:
            # Some Shift-JIS decoders map 0x8160 to U+301C WAVE DASH.
            # Windows cp932 maps it to U+FF5E FULLWIDTH TILDE, which is what the game expects.
            text = text.replace('\u301c', '\uff5e')
        return text
    raise AssertionError('latin_1 decoding cannot fail')

def encode_str(cp, text):
    try:
        return text.encode(codepage_name(cp))
    except UnicodeEncodeError:
        if cp == CP_1252:
            raise
    return text.encode('cp1252')

def utf16_bswap(raw):
    if len(raw) % 2 != 0:
        raise ValueError(f'UTF-16 data has an odd length ({len(raw)} bytes)')
    swapped = bytearray(raw)
    swapped[0::2] = raw[1::2]
    swapped[1::2] = raw[0::2]
    return bytes(swapped)

# Message text is handled as big-endian UTF-16.
# Little-endian files are byte swapped on the way in and out.

def utf16_decode(raw, big_endian):
    if not big_endian:
        raw = utf16_bswap(raw)
    # surrogatepass keeps unpaired surrogates, so any code unit sequence survives
    return bytes(raw).decode('utf_16_be', 'surrogatepass')

def utf16_encode(text, big_endian):
    encoded = text.encode('utf_16_be', 'surrogatepass')
    if not big_endian:
        encoded = utf16_bswap(encoded)
    return encoded

def find_cstr_end(data, offset):
    end_index = data.find(0, offset)
    if end_index < 0:
        # Unterminated string runs to the end of the buffer
        end_index = len(data)
    return end_index

def read_cstr(data, offset, cp=CP_SJIS):
    return decode_bytes(cp, data[offset:find_cstr_end(data, offset)])

def find_wstr_end(data, offset):
    # The terminator is a zero code unit, so only look at even distances from the start
    it = offset
    while it + 2 <= len(data):
        if data[it] == 0 and data[it+1] == 0:
            return it
        it += 2
    return it

def read_wstr(data, offset, big_endian):
    return utf16_decode(data[offset:find_wstr_end(data, offset)], big_endian)

def to_encoded_cstr(text, cp=CP_SJIS):
    return encode_str(cp, text) + b'\0'

def to_encoded_wstr(text, big_endian):
    return utf16_encode(text, big_endian) + b'\0\0'
