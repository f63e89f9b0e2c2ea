#!/usr/bin/env python3
"""
BDF font to C source converter.

Usage:
    bdf2c -i font.bdf -o font.c [-n NAME] [-O] [-p proof.png]
    bdf2c -C font.h
    bdf2c < font.bdf > font.c

The generated source includes "font.h", which -c / -C write out.
"""

import argparse
import logging
import os
import sys

from . import VERSION
from .bdf import convert_font
from .errors import BdfError
from .preview import ProofSheet
from .writer import write_font_header, write_font_source

log = logging.getLogger(__name__)


def build_parser():
    parser = argparse.ArgumentParser(prog='bdf2c', description='BDF font to C source converter.')
    parser.add_argument('-i', '--input', dest='input_path', help='BDF font file (default: stdin).')
    parser.add_argument('-o', '--output', dest='output_path', help='C source file to write (default: stdout).')
    parser.add_argument('-p', '--proof', dest='proof_path',
                        help='Write a proof sheet image of the font, format from the extension (e.g. out.ppm).')
    parser.add_argument('-n', '--name', default='font', help='Name of the C font variable (default: font).')
    parser.add_argument('-O', '--outline', action='store_true', help='Create an outline of the font.')
    parser.add_argument('-c', dest='print_header', action='store_true', help='Print font.h on stdout and exit.')
    parser.add_argument('-C', dest='header_path', help='Write font.h to this file.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Show debug messages.')
    parser.add_argument('--version', action='version', version=f'bdf2c {VERSION}')
    return parser


def read_lines(path):
    if path is None:
        return sys.stdin.buffer.read().decode('latin-1').splitlines(keepends=True)
    with open(path, 'r', encoding='latin-1') as f:
        return f.readlines()


def run(args):
    if args.print_header:
        write_font_header(sys.stdout)
        return
    if args.header_path:
        with open(args.header_path, 'w') as f:
            write_font_header(f)
        print(f"Header saved to {args.header_path}", file=sys.stderr)

    lines = read_lines(args.input_path)
    proof = ProofSheet(args.proof_path) if args.proof_path else None
    tables = convert_font(lines, outline=args.outline, proof=proof)

    source = os.path.basename(args.input_path) if args.input_path else None
    if args.output_path:
        with open(args.output_path, 'w') as f:
            write_font_source(f, tables, args.name, source)
        print(f"Font '{args.name}' saved to {args.output_path}", file=sys.stderr)
    else:
        write_font_source(sys.stdout, tables, args.name, source)

    if proof is not None:
        proof.save()
        print(f"Preview saved to {args.proof_path}", file=sys.stderr)


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s: %(message)s')
    try:
        run(args)
    except BdfError as e:
        log.error("%s", e)
        sys.exit(1)
    except OSError as e:
        log.error("%s: %s", e.filename or '', e.strerror or e)
        sys.exit(1)


if __name__ == '__main__':
    main()
