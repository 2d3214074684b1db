import random
import unittest

from escaping import escape, escape_bytes, unescape, unescape_bytes


class TestEscape(unittest.TestCase):

    def test_basic_escapes(self):
        self.assertEqual(escape('a\\b'), 'a\\\\b')
        self.assertEqual(escape('foo\nbar'), 'foo\\nbar')
        self.assertEqual(escape('page\fbreak'), 'page\\fbreak')

    def test_other_control_characters(self):
        self.assertEqual(escape('a\rb\x01'), 'a\\x0Db\\x01')
        self.assertEqual(escape('tab\there'), 'tab\there')

    def test_whitespace_only_text(self):
        self.assertEqual(escape(' '), '\\x20')
        self.assertEqual(escape('   '), '\\x20  ')
        self.assertEqual(escape('\t'), '\\x09')
        self.assertEqual(escape(' a '), ' a ')
        self.assertEqual(escape(''), '')

    def test_characters_outside_xml(self):
        self.assertEqual(escape('a\ud800b'), 'a\\uD800b')
        self.assertEqual(escape('\udfff\ufffe\uffff'), '\\uDFFF\\uFFFE\\uFFFF')
        self.assertEqual(escape('\U0001F600\x85'), '\U0001F600\x85')


class TestUnescape(unittest.TestCase):

    def test_basic_unescapes(self):
        self.assertEqual(unescape('foo\\nbar'), 'foo\nbar')
        self.assertEqual(unescape('\\\\'), '\\')
        self.assertEqual(unescape('\\f'), '\f')
        self.assertEqual(unescape('\\x20\\x41'), ' A')

    def test_invalid_sequences_pass_through(self):
        self.assertEqual(unescape('\\q'), '\\q')
        self.assertEqual(unescape('\\xZZ'), '\\xZZ')
        self.assertEqual(unescape('\\x4'), '\\x4')

    def test_trailing_backslash(self):
        self.assertEqual(unescape('abc\\'), 'abc\\')

    def test_unicode_escapes(self):
        self.assertEqual(unescape('a\\uD800b'), 'a\ud800b')
        self.assertEqual(unescape('\\uffff'), '\uffff')
        self.assertEqual(unescape('\\u12'), '\\u12')
        self.assertEqual(unescape('\\\\uD800'), '\\uD800')

    def test_round_trip(self):
        rng = random.Random(2006)
        alphabet = ['\\', '\n', '\f', ' ', '\t', '\r', 'x', 'u', '2', '0', 'D', 'a', 'n', '\u3042', '\x07',
                    '\ud800', '\uffff']
        samples = ['', ' ', '    ', '\\x20', '\\', 'a\\nb']
        for _ in range(1000):
            samples.append(''.join(rng.choice(alphabet) for _ in range(rng.randrange(12))))
        for s in samples:
            self.assertEqual(unescape(escape(s)), s, repr(s))


class TestBytes(unittest.TestCase):

    def test_bytes_round_trip(self):
        raw = bytes(range(256))
        self.assertEqual(unescape_bytes(escape_bytes(raw)), raw)

    def test_whitespace_is_ignored(self):
        self.assertEqual(unescape_bytes('\\x41\n\t\\x42 \\x00'), b'AB\0')

    def test_non_byte_characters(self):
        with self.assertRaises(ValueError):
            unescape_bytes('\u3042')


if __name__ == '__main__':
    unittest.main()
