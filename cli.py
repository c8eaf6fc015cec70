"""
Command-line front end.

    debloat [-c | -d] [-a ALGORITHM] [-f FORMAT] [-v] [input] [output]

A missing file name, or "-", means standard input / standard output.
"""

import argparse
import sys
from contextlib import ExitStack
from typing import BinaryIO, List, Optional

from compressor_ABC import size_report
from exceptions import CompressionError
from registry import ALGORITHMS, CODECS, DEFAULT_ALGORITHM, DEFAULT_CODEC


class CountingStream:
    """Wraps a binary stream and counts the bytes that go through it."""

    def __init__(self, stream: BinaryIO):
        self.stream = stream
        self.count = 0

    def read(self, size: int = -1) -> bytes:
        data = self.stream.read(size)
        self.count += len(data)
        return data

    def readinto(self, buffer) -> int:
        n = self.stream.readinto(buffer) or 0
        self.count += n
        return n

    def write(self, data) -> int:
        n = self.stream.write(data)
        self.count += len(data)
        return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="debloat", description="Lossless compression with LZ77 and LZW"
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-c", "--compress", dest="decompress", action="store_false",
        help="compress (default)",
    )
    mode.add_argument(
        "-d", "--decompress", dest="decompress", action="store_true",
        help="decompress",
    )
    parser.add_argument(
        "-a", "--algorithm", default=DEFAULT_ALGORITHM, choices=ALGORITHMS.names(),
        help=f"compression algorithm (default: {DEFAULT_ALGORITHM})",
    )
    parser.add_argument(
        "-f", "--format", default=DEFAULT_CODEC, choices=CODECS.names(),
        help=f"format of the compressed data (default: {DEFAULT_CODEC})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="report sizes on stderr")
    parser.add_argument("input", nargs="?", default="-")
    parser.add_argument("output", nargs="?", default="-")
    parser.set_defaults(decompress=False)
    return parser


def run(
    args: argparse.Namespace,
    stdin: BinaryIO,
    stdout: BinaryIO,
    stderr=None,
) -> None:
    stderr = stderr if stderr is not None else sys.stderr
    codec = CODECS.get(args.format)

    with ExitStack() as stack:
        if args.input == "-":
            source = stdin
        else:
            source = stack.enter_context(open(args.input, "rb"))
        if args.output == "-":
            sink = stdout
        else:
            sink = stack.enter_context(open(args.output, "wb"))
        source = CountingStream(source)
        sink = CountingStream(sink)

        if args.decompress:
            decoder = codec.get_decoder(source)
            algorithm = ALGORITHMS.get_for_decoder(decoder)
            if args.verbose:
                print(f"Decompressing {algorithm.name}/{codec.name} data", file=stderr)
            algorithm.decompress(decoder, sink)
            report = size_report(sink.count, source.count)
        else:
            algorithm = ALGORITHMS.get(args.algorithm)
            if args.verbose:
                print(f"Compressing with {algorithm.name}/{codec.name}", file=stderr)
            algorithm.compress(source, codec.get_encoder(sink))
            report = size_report(source.count, sink.count)

        if hasattr(sink.stream, "flush"):
            sink.stream.flush()

    if args.verbose:
        print(report, file=stderr)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        run(args, sys.stdin.buffer, sys.stdout.buffer)
    except (CompressionError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
