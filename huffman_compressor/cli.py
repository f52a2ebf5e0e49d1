# filename: cli.py

import argparse
import sys

from .errors import HuffmanError
from .huffman_service import compress, uncompress

COMMANDS = {
    "compress": (compress, "Compressing", "compressed"),
    "uncompress": (uncompress, "Uncompressing", "uncompressed"),
}


def build_parser():
    parser = argparse.ArgumentParser(
        prog="huffman-compressor",
        description="Compress or uncompress a file with Huffman coding",
    )
    parser.add_argument("-i", "--input", required=True, help="Input file")
    parser.add_argument("-o", "--output", required=True, help="Output file")
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Print input/output sizes and the compression ratio",
    )
    parser.add_argument("command", choices=sorted(COMMANDS))
    return parser


def print_ratios(input_size, output_size):
    ratio = 100 - int((output_size * 100) / max(input_size, 1))
    print(f"Input bytes:             {input_size}")
    print(f"Output bytes:            {output_size}")
    print(f"Compression ratio:       {ratio}%")


def main(argv=None):
    args = build_parser().parse_args(argv)
    func, verb, adjective = COMMANDS[args.command]

    print(f"{verb} {args.input}...")
    try:
        with open(args.input, "rb") as f:
            contents = f.read()
    except OSError as e:
        print(f"Error: cannot read input file '{args.input}': {e.strerror}", file=sys.stderr)
        return 1

    try:
        result = func(contents)
    except HuffmanError as e:
        print(f"Error: {args.input}: {e}", file=sys.stderr)
        return 1

    print(f"Writing {adjective} file {args.output}...")
    try:
        with open(args.output, "wb") as f:
            f.write(result)
    except OSError as e:
        print(f"Error: cannot write output file '{args.output}': {e.strerror}", file=sys.stderr)
        return 1

    if args.stats:
        print_ratios(len(contents), len(result))
    return 0


if __name__ == "__main__":
    sys.exit(main())
