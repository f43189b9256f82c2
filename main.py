import argparse
import sys

from typing import Optional

import storage
from bitops import pack_bit_string, unpack_bit_string
from coder import Coder
from errors import HuffmanError

TREE_SUFFIX = ".tree"  #: Default suffix of the serialized tree file
DEMO_TEXT = "AABBCDCAASDBSAAABB"  #: Sample string used by ``demo``


def get_parser():
    """Create and configure the CLI argument parser.

    :returns: Configured argument parser.
    :rtype: argparse.ArgumentParser
    """
    parser = argparse.ArgumentParser(
        description="Huffman coder for text files with a persisted code tree"
    )
    subparsers = parser.add_subparsers(
        title="subcommands", dest="cmd", required=True
    )

    compress = subparsers.add_parser(
        "compress", aliases=["c"], help="Encode a text file"
    )
    compress.add_argument("input", help="Text file to encode")
    compress.add_argument(
        "-o", "--output", required=True, help="Encoded payload file path"
    )
    compress.add_argument(
        "-t",
        "--tree",
        default=None,
        help=f"Serialized tree file path (default: OUTPUT{TREE_SUFFIX})",
    )
    compress.add_argument(
        "--packed",
        action="store_true",
        help="Pack bits into bytes instead of writing '0'/'1' text",
    )
    compress.add_argument(
        "-P",
        "--no-progress",
        action="store_true",
        help="Hide progress output",
    )

    decompress = subparsers.add_parser(
        "decompress", aliases=["d"], help="Decode an encoded payload"
    )
    decompress.add_argument("input", help="Encoded payload file")
    decompress.add_argument(
        "-o", "--output", required=True, help="Decoded text file path"
    )
    decompress.add_argument(
        "-t",
        "--tree",
        default=None,
        help=f"Serialized tree file path (default: INPUT{TREE_SUFFIX})",
    )
    decompress.add_argument(
        "--packed",
        action="store_true",
        help="Input was written with --packed",
    )
    decompress.add_argument(
        "-P",
        "--no-progress",
        action="store_true",
        help="Hide progress output",
    )

    demo = subparsers.add_parser(
        "demo", help="Compress and decompress a sample string"
    )
    demo.add_argument(
        "text",
        nargs="?",
        default=DEMO_TEXT,
        help=f"String to run through the coder (default: {DEMO_TEXT})",
    )

    return parser


def _print_progress(line: str) -> None:
    """Render and flush a single progress line in-place (carriage return).

    :param line: The textual progress line to display.
    :type line: str
    :returns: None
    :rtype: None
    """
    sys.stdout.write("\r" + line)
    sys.stdout.flush()


def _fmt_pct(done: int, total: int) -> str:
    """Format a completion percentage string like ``12.34%``.

    :param done: Units completed.
    :type done: int
    :param total: Total units to complete.
    :type total: int
    :returns: Percentage.
    :rtype: str
    """
    if total <= 0:
        return "0%"
    pct = 100.0 * (done / float(total))
    return f"{pct:6.2f}%"


def _fmt_bytes(n: int) -> str:
    """Format a byte count into a human-readable string.

    :param n: Number of bytes.
    :type n: int
    :returns: Human-readable string.
    :rtype: str
    """
    for unit in ['', 'Ki', 'Mi', 'Gi', 'Ti']:
        if abs(n) < 1024:
            return f"{n:.2f} {unit}B"
        n /= 1024
    return f"{n:.2f} PiB"


class ProgressLine:
    """Callable progress reporter redrawn once per percent.

    :ivar label: Action label (e.g., "Encoding" or "Decoding").
    :type label: str
    :ivar path: File path displayed next to the percentage.
    :type path: str
    """

    def __init__(self, label: str, path: str) -> None:
        """Initialize the progress reporter.

        :param label: Action label.
        :type label: str
        :param path: File path to display.
        :type path: str
        :returns: None
        :rtype: None
        """
        self.label = label
        self.path = path
        self._last_reported = -1

    def __call__(self, done: int, total: int) -> None:
        """Update the progress display.

        :param done: Units processed so far.
        :type done: int
        :param total: Total units.
        :type total: int
        :returns: None
        :rtype: None
        """
        if total <= 0:
            return
        percent_bucket = int((done * 100) / total)
        if percent_bucket == self._last_reported:
            return
        self._last_reported = percent_bucket
        _print_progress(f"{self.label} {self.path}  {_fmt_pct(done, total)}")

    @property
    def drawn(self) -> bool:
        """Whether a progress line has been rendered."""
        return self._last_reported != -1


def _end_progress(progress: Optional[ProgressLine]) -> None:
    """Terminate the in-place progress line, if one was drawn."""
    if progress is not None and progress.drawn:
        sys.stdout.write("\n")
        sys.stdout.flush()


def compress_file(
    input_path: str,
    output_path: str,
    tree_path: Optional[str] = None,
    packed: bool = False,
    hide_progress: bool = False,
) -> int:
    """Encode a text file and write the payload and the serialized tree.

    :param input_path: Text file to encode.
    :type input_path: str
    :param output_path: Destination of the encoded payload.
    :type output_path: str
    :param tree_path: Destination of the serialized tree;
        ``output_path + ".tree"`` when omitted.
    :type tree_path: str | None
    :param packed: Write a packed binary payload instead of bit text.
    :type packed: bool
    :param hide_progress: Whether to hide progress output.
    :type hide_progress: bool
    :returns: Process exit status.
    :rtype: int
    """
    tree_path = tree_path or output_path + TREE_SUFFIX
    try:
        text = storage.load_text(input_path)
    except FileNotFoundError:
        print(f"[!] Input file not found: {input_path}")
        return 1
    except UnicodeDecodeError:
        print(f"[!] Input file is not UTF-8 text: {input_path}")
        return 1

    on_prog = None if hide_progress else ProgressLine("Encoding", input_path)
    bits = Coder().compress_to(text, tree_path, on_progress=on_prog)
    _end_progress(on_prog)

    if packed:
        payload = pack_bit_string(bits)
        storage.save_bytes(output_path, payload)
        size_after = len(payload)
    else:
        storage.save_text(output_path, bits)
        size_after = len(bits)

    size_before = len(text.encode(storage.ENCODING))
    print("Encoded bits: ", len(bits))
    print("Size before compression: ", _fmt_bytes(size_before))
    print("Size after compression: ", _fmt_bytes(size_after))
    if size_after > 0:
        print(f"Compression ratio: {size_before / size_after:.2f}")
    return 0


def decompress_file(
    input_path: str,
    output_path: str,
    tree_path: Optional[str] = None,
    packed: bool = False,
    hide_progress: bool = False,
) -> int:
    """Decode a payload written by :func:`compress_file`.

    :param input_path: Encoded payload file.
    :type input_path: str
    :param output_path: Destination of the decoded text.
    :type output_path: str
    :param tree_path: Serialized tree file; ``input_path + ".tree"`` when
        omitted.
    :type tree_path: str | None
    :param packed: Whether the payload is packed binary.
    :type packed: bool
    :param hide_progress: Whether to hide progress output.
    :type hide_progress: bool
    :returns: Process exit status.
    :rtype: int
    :raises ValueError: If a packed payload header is invalid.
    """
    tree_path = tree_path or input_path + TREE_SUFFIX
    on_prog = None if hide_progress else ProgressLine("Decoding", input_path)
    try:
        if packed:
            bits = unpack_bit_string(storage.load_bytes(input_path))
        else:
            bits = storage.load_text(input_path)
        text = Coder().decompress_from(bits, tree_path, on_progress=on_prog)
    except FileNotFoundError as e:
        _end_progress(on_prog)
        print(f"[!] File not found: {e.filename}")
        return 1
    except UnicodeDecodeError:
        _end_progress(on_prog)
        print(f"[!] Payload or tree file is not UTF-8 text: {input_path}, {tree_path}")
        return 1
    except EOFError:
        _end_progress(on_prog)
        print(f"[!] Packed payload is truncated: {input_path}")
        return 1
    except HuffmanError as e:
        _end_progress(on_prog)
        print(f"[!] Cannot decode {input_path}: {e}")
        return 1
    _end_progress(on_prog)

    storage.save_text(output_path, text)
    print("Decoded symbols: ", len(text))
    return 0


def run_demo(text: str = DEMO_TEXT) -> int:
    """Run ``text`` through the coder and print every intermediate result.

    :param text: String to compress and decompress.
    :type text: str
    :returns: ``0`` if the decoded string matches ``text``, ``1`` otherwise.
    :rtype: int
    """
    coder = Coder()
    bits, tree = coder.compress(text)
    if tree is not None:
        for symbol, code in tree.code_table().items():
            print(symbol, code)
    print("Compressed string: " + bits)
    decoded = coder.decompress(bits, tree)
    print("Decompressed string: " + decoded)
    if decoded != text:
        print("[!] Round trip mismatch")
        return 1
    return 0


def main(argv=None) -> int:
    """Entry point for the CLI tool.

    :param argv: Argument list; ``sys.argv[1:]`` when ``None``.
    :returns: Process exit status.
    :rtype: int
    """
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.cmd in ["compress", "c"]:
        return compress_file(
            args.input,
            args.output,
            args.tree,
            args.packed,
            getattr(args, "no_progress", False),
        )
    if args.cmd in ["decompress", "d"]:
        return decompress_file(
            args.input,
            args.output,
            args.tree,
            args.packed,
            getattr(args, "no_progress", False),
        )
    return run_demo(args.text)


if __name__ == "__main__":
    sys.exit(main())
