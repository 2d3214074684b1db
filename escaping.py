# Escaping of message text for the MST XML form
# Last updated: 2026-10-19

_ESCAPES = {
    '\\': '\\\\',
    '\n': '\\n',
    '\f': '\\f',
}

_UNESCAPES = {
    '\\': '\\',
    'n': '\n',
    'f': '\f',
}

_HEX_DIGITS = '0123456789abcdefABCDEF'

def needs_hex_escape(c):
    # XML 1.0 can't hold most C0 controls, and parsers turn '\r' into '\n'
    return c < ' ' and c != '\t'

def needs_unicode_escape(c):
    # Unpaired UTF-16 surrogates and U+FFFE/U+FFFF aren't XML characters
    return '\ud800' <= c <= '\udfff' or c in '\ufffe\uffff'

def escape(text):
    """
    Escape a message for use as XML text or attribute content.

    Backslash, newline and form feed become \\\\, \\n and \\f. Other control
    characters that XML can't carry become \\xHH, and unpaired surrogates
    and noncharacters become \\uHHHH.
    """
    out = []
    for c in text:
        if c in _ESCAPES:
            out.append(_ESCAPES[c])
        elif needs_hex_escape(c):
            out.append(f'\\x{ord(c):02X}')
        elif needs_unicode_escape(c):
            out.append(f'\\u{ord(c):04X}')
        else:
            out.append(c)
    escaped = ''.join(out)

    # A whitespace-only text node gets replaced when the XML is indented.
    # Escape the first character so the node has real content.
    if escaped and escaped.strip(' \t') == '':
        escaped = f'\\x{ord(escaped[0]):02X}' + escaped[1:]
    return escaped

def unescape(text):
    out = []
    i = 0
    n = len(text)
    while i < n:
        c = text[i]
        if c != '\\':
            out.append(c)
            i += 1
            continue

        if i + 1 >= n:
            # Backslash at the end of the string
            out.append('\\')
            break

        nxt = text[i+1]
        if nxt in _UNESCAPES:
            out.append(_UNESCAPES[nxt])
            i += 2
        elif nxt == 'x' and i + 4 <= n and all(h in _HEX_DIGITS for h in text[i+2:i+4]):
            out.append(chr(int(text[i+2:i+4], 16)))
            i += 4
        elif nxt == 'u' and i + 6 <= n and all(h in _HEX_DIGITS for h in text[i+2:i+6]):
            out.append(chr(int(text[i+2:i+6], 16)))
            i += 6
        else:
            # Invalid escape sequence. Keep it as-is.
            out.append(c)
            out.append(nxt)
            i += 2
    return ''.join(out)

def escape_bytes(raw):
    return ''.join(f'\\x{b:02X}' for b in raw)

def unescape_bytes(text):
    # Whitespace between bytes is allowed so the XML can be wrapped
    text = ''.join(text.split())
    decoded = unescape(text)
    try:
        return decoded.encode('latin_1')
    except UnicodeEncodeError:
        raise ValueError('Byte string contains characters outside \\x00-\\xFF') from None
