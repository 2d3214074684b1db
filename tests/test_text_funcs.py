import unittest

from text_funcs import (CP_SJIS, codepage_name, decode_bytes, encode_str,
                        read_cstr, read_wstr, to_encoded_wstr, utf16_bswap,
                        utf16_decode, utf16_encode)


class TestCodePages(unittest.TestCase):

    def test_codepage_names(self):
        self.assertEqual(codepage_name(932), 'cp932')
        self.assertEqual(codepage_name(1252), 'cp1252')
        self.assertEqual(codepage_name(65001), 'utf-8')
        with self.assertRaises(LookupError):
            codepage_name(123456)

    def test_decode_shift_jis(self):
        # "テスト"
        self.assertEqual(decode_bytes(CP_SJIS, b'\x83\x65\x83\x58\x83\x67'), 'テスト')

    def test_wave_dash_is_fullwidth_tilde(self):
        self.assertEqual(decode_bytes(CP_SJIS, b'\x81\x60'), '～')

    def test_fallback_decoding(self):
        # 0x82 0x20 isn't valid Shift-JIS, but it is cp1252
        self.assertEqual(decode_bytes(CP_SJIS, b'\x82\x20'), '\u201a ')
        # 0x81 isn't mapped in cp1252, so Latin-1 is used
        self.assertEqual(decode_bytes(CP_SJIS, b'\x81'), '\x81')

    def test_encode_with_fallback(self):
        self.assertEqual(encode_str(CP_SJIS, 'MSG_01'), b'MSG_01')
        self.assertEqual(encode_str(CP_SJIS, 'テ'), b'\x83\x65')
        with self.assertRaises(UnicodeEncodeError):
            encode_str(CP_SJIS, '\U0001F600')


class TestUtf16(unittest.TestCase):

    def test_byte_orders(self):
        self.assertEqual(utf16_encode('Hi', True), b'\0H\0i')
        self.assertEqual(utf16_encode('Hi', False), b'H\0i\0')
        self.assertEqual(utf16_decode(b'\0H\0i', True), 'Hi')
        self.assertEqual(utf16_decode(b'H\0i\0', False), 'Hi')
        self.assertEqual(utf16_encode('\U0001F600', False), b'\x3D\xD8\x00\xDE')

    def test_little_endian_is_swapped_big_endian(self):
        text = 'ソニック'
        self.assertEqual(utf16_encode(text, False), utf16_bswap(utf16_encode(text, True)))

    def test_unpaired_surrogates_survive(self):
        text = 'a\ud800b'
        for big_endian in (True, False):
            self.assertEqual(utf16_decode(utf16_encode(text, big_endian), big_endian), text)

    def test_bswap(self):
        self.assertEqual(utf16_bswap(b'\0H\0i'), b'H\0i\0')
        with self.assertRaises(ValueError):
            utf16_bswap(b'\0H\0')


class TestStrings(unittest.TestCase):

    def test_read_cstr(self):
        data = b'abc\0def'
        self.assertEqual(read_cstr(data, 0), 'abc')
        # Unterminated string at the end of the buffer
        self.assertEqual(read_cstr(data, 4), 'def')

    def test_read_wstr(self):
        data = to_encoded_wstr('ĀA', True) + b'\0B\0\0'
        self.assertEqual(read_wstr(data, 0, True), 'ĀA')
        self.assertEqual(read_wstr(data, 6, True), 'B')

    def test_read_wstr_ignores_misaligned_zero_bytes(self):
        # 0x0100 0x0041: a zero byte pair straddles the two code units
        self.assertEqual(read_wstr(b'\x01\x00\x00\x41\0\0', 0, True), 'ĀA')

    def test_read_wstr_unterminated(self):
        self.assertEqual(read_wstr(b'\0H\0i\0', 0, True), 'Hi')


if __name__ == '__main__':
    unittest.main()
