# MST string table container
# for Sonic the Hedgehog (2006)
# Last updated: 2026-10-19
#
# Binary reading and writing live in mst_reader.py and mst_writer.py,
# the XML form lives in mst_xml.py.

from dataclasses import dataclass

MST_VERSION = '1'


class MstError(Exception):
    pass

class MstFormatError(MstError):
    pass

class InvalidHeaderError(MstFormatError):
    pass

class SizeError(MstFormatError):
    pass

class BoundsError(MstFormatError):
    pass

class EncodeError(MstError):
    pass

class EmptyTableError(EncodeError):
    def __init__(self, message='String table has no messages'):
        super().__init__(message)

class XmlSyntaxError(MstError):
    pass

class XmlSemanticError(MstError):
    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__('; '.join(self.errors) if self.errors else 'Invalid MST XML document')


@dataclass
class StringEntry:
    name: str = ''
    # Message text. Unpaired UTF-16 surrogates are kept as-is.
    text: str = ''


class StringTable:
    def __init__(self):
        self.name = ''
        self.version = MST_VERSION
        self.big_endian = True
        self.entries = []
        self.placeholders = {}
        self.name_index = {}
        # Raw differential offset table from the last binary load, if any
        self.diff_offset_table = None

    def clear(self):
        self.name = ''
        self.version = MST_VERSION
        self.big_endian = True
        self.entries.clear()
        self.placeholders.clear()
        self.name_index.clear()
        self.diff_offset_table = None

    def __len__(self):
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    @property
    def byteorder(self):
        return 'big' if self.big_endian else 'little'

    def rebuild_name_index(self):
        self.name_index.clear()
        for (i, entry) in enumerate(self.entries):
            if entry.name:
                self.name_index[entry.name] = i

    def find(self, name):
        return self.name_index.get(name)

    def text(self, key):
        """
        Message text by index or by name. Returns '' if there's no such message.
        """
        if isinstance(key, str):
            key = self.name_index.get(key)
            if key is None:
                return ''
        if key < 0 or key >= len(self.entries):
            return ''
        return self.entries[key].text

    def placeholder(self, index):
        # None if the message has no placeholder pointer, which differs from ""
        return self.placeholders.get(index)

    def append(self, name, text='', placeholder=None):
        index = len(self.entries)
        self.set(index, name, text, placeholder)
        return index

    def set(self, index, name, text='', placeholder=None):
        if index < 0:
            raise IndexError(f'Negative message index {index}')
        while len(self.entries) <= index:
            self.entries.append(StringEntry())

        old_name = self.entries[index].name
        if old_name and self.name_index.get(old_name) == index:
            del self.name_index[old_name]

        self.entries[index] = StringEntry(name, text)
        if name:
            self.name_index[name] = index

        if placeholder is not None:
            self.placeholders[index] = placeholder
        else:
            self.placeholders.pop(index, None)

    def dump(self, file=None):
        print(f'String table: {self.name}', file=file)
        for (i, entry) in enumerate(self.entries):
            line = f'* Message {i}: {entry.name} -> {entry.text}'
            placeholder = self.placeholder(i)
            if placeholder is not None:
                line += f' [{placeholder}]'
            print(line, file=file)
