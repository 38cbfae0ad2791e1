# Huffman bit counting
# count_bits.py
# 10/17/26

"""
Count the bits needed to Huffman-encode a text file with a code learned from that same file.

How to run:
  python count_bits.py input.txt
  python count_bits.py input.txt --show-codes
  python count_bits.py data.bin --bytes --table dense --show-bits
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

import huffman as huff
from lookup import build_lookup_table


def read_input(path: Path, as_bytes: bool, encoding: str):
    if as_bytes:
        return path.read_bytes()
    # newline="" keeps \r\n as two symbols instead of folding it into \n
    with path.open(encoding=encoding, newline="") as f:
        return f.read()

def build_table(text, table: str = "auto"):
    ft = huff.freq_table(text)
    root = huff.build_huffman_tree(ft)
    codes = huff.generate_huffman_codes(root)
    dense = {"auto": None, "hash": False, "dense": True}[table]
    return ft, build_lookup_table(codes, dense=dense)

def print_codes(ft, code_table) -> None:
    # most frequent first, same order as a frequency report
    for symbol, count in sorted(ft.items(), key=lambda item: (-item[1], str(item[0]))):
        code = code_table[symbol]
        print(f"{symbol!r:>8} {count:>10} {len(code):>4}  {code}")


def main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Report the Huffman-encoded size of a file in bits.")
    ap.add_argument("path", type=str, help="File whose text is used both to learn the code and to encode")
    ap.add_argument("--bytes", action="store_true", help="Treat the file as raw bytes instead of text")
    ap.add_argument("--encoding", type=str, default="utf-8", help="Text encoding (ignored with --bytes)")
    ap.add_argument("--table", choices=("auto", "hash", "dense"), default="auto",
                    help="Lookup table form used for encoding")
    ap.add_argument("--show-codes", action="store_true", help="Print the code assigned to each symbol")
    ap.add_argument("--show-bits", action="store_true", help="Print the encoded bit string")
    args = ap.parse_args(argv)

    try:
        text = read_input(Path(args.path), args.bytes, args.encoding)
        ft, code_table = build_table(text, args.table)
        bits = huff.huffman_encode(text, code_table)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"Failed to read file: {exc}", file=sys.stderr)
        return 1
    except huff.InsufficientNodes as exc:
        print(f"Failed to build Huffman tree: {exc}", file=sys.stderr)
        return 1
    except (huff.HuffmanError, ValueError) as exc:
        print(f"Failed to encode message: {exc}", file=sys.stderr)
        return 1

    if args.show_codes:
        print_codes(ft, code_table)
    if args.show_bits:
        print(bits)

    num_bits = len(bits)
    print(f"{num_bits} bits")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
