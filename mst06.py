# Script to convert back and forth between MST string tables and XML
# for Sonic the Hedgehog (2006)
# Last updated: 2026-10-19

import logging
import os
import sys

from mst import MstError, XmlSemanticError
from mst_reader import load_mst
from mst_writer import save_mst
from mst_xml import load_xml, save_xml

FORMAT_XML = 'xml'
FORMAT_MST = 'mst'

def detect_format(filename):
    with open(filename, 'rb') as f:
        buf = f.read(32)
    if buf.startswith(b'\xEF\xBB\xBF'):
        buf = buf[3:]
    if buf.startswith(b'<?xml '):
        return FORMAT_XML
    if buf[0x18:0x1C] == b'BINA':
        return FORMAT_MST
    return None

def default_output_filename(filename, out_ext):
    # Replace the extension, or add one if there isn't any
    root, _ = os.path.splitext(filename)
    return root + out_ext

def load_any(filename, strict=False):
    fmt = detect_format(filename)
    if fmt == FORMAT_XML:
        return fmt, load_xml(filename)
    elif fmt == FORMAT_MST:
        return fmt, load_mst(filename, strict=strict)
    raise MstError(f'File {filename} is not recognized.')

def print_usage(args):
    print(f'Syntax: {args[0]} [--strict] [filenames]', file=sys.stderr)
    print('', file=sys.stderr)
    print(f'- Convert MST to XML: {args[0]} mst_file.mst [mst_file.xml]', file=sys.stderr)
    print(f'- Convert XML to MST: {args[0]} mst_file.xml [mst_file.mst]', file=sys.stderr)
    print(f'- Print a string table: {args[0]} dump mst_file.mst', file=sys.stderr)
    print('', file=sys.stderr)
    print('Default output filename replaces the file extension on the', file=sys.stderr)
    print('input file with .xml or .mst, depending on operation.', file=sys.stderr)
    print('--strict makes a damaged message in an MST file an error', file=sys.stderr)
    print('instead of a warning.', file=sys.stderr)

def main(args):
    logging.basicConfig(stream=sys.stderr, format='*** %(levelname)s: %(message)s')

    strict = '--strict' in args[1:]
    args = [a for a in args if a != '--strict']

    dump = len(args) >= 2 and args[1] == 'dump'
    if dump:
        args = args[:1] + args[2:]
    if len(args) != 2 and (dump or len(args) != 3):
        print_usage(args)
        return 1

    in_filename = args[1]
    try:
        fmt, table = load_any(in_filename, strict)
    except XmlSemanticError as e:
        # Each problem has already been logged
        print(f'*** ERROR loading {in_filename}: {len(e.errors)} error(s) in the XML document', file=sys.stderr)
        return 1
    except (MstError, OSError) as e:
        print(f'*** ERROR loading {in_filename}: {e}', file=sys.stderr)
        return 1

    if dump:
        table.dump()
        return 0

    out_ext = '.mst' if fmt == FORMAT_XML else '.xml'
    if len(args) == 3:
        out_filename = args[2]
    else:
        out_filename = default_output_filename(in_filename, out_ext)

    try:
        if fmt == FORMAT_XML:
            save_mst(table, out_filename)
        else:
            save_xml(table, out_filename)
    except (MstError, OSError) as e:
        print(f'*** ERROR saving {out_filename}: {e}', file=sys.stderr)
        return 1

    print(f'Wrote {len(table)} messages to {out_filename}')
    return 0

def run():
    sys.exit(main(sys.argv))

if __name__ == '__main__':
    run()
