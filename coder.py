from typing import Callable, Dict, List, Optional, Tuple

import storage
from errors import MalformedBitStringError, UnknownSymbolError
from frequency import build_frequency_table
from huffman import HuffmanTree, Leaf, build_tree_and_codes
from treecodec import load_tree, serialize_tree

ProgressCallback = Callable[[int, int], None]


class Coder:
    """Huffman coder working on logical ``'0'``/``'1'`` bit strings.

    A fresh frequency table, tree and code table are built for every
    :meth:`compress` call; the tree is handed back to the caller, who passes
    it to :meth:`decompress` directly or persists it with :meth:`compress_to`.
    """

    def compress(
        self,
        text: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> Tuple[str, Optional[HuffmanTree]]:
        """Encode ``text`` with a Huffman code built from its own frequencies.

        :param text: Input string.
        :type text: str
        :param on_progress: Optional callback ``on_progress(done, total)``
                            reporting encoded input symbols.
        :type on_progress: Optional[Callable[[int, int], None]]
        :returns: Tuple ``(bits, tree)``. For empty input returns ``("", None)``.
        :rtype: Tuple[str, HuffmanTree | None]
        """
        tree, codes = build_tree_and_codes(build_frequency_table(text))
        bits = self.encode(text, codes, on_progress=on_progress)
        return bits, tree

    @staticmethod
    def encode(
        text: str,
        codes: Dict[str, str],
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """Concatenate the codes of every symbol of ``text`` in input order.

        :param text: Input string.
        :type text: str
        :param codes: Code table to look symbols up in.
        :type codes: Dict[str, str]
        :param on_progress: Optional progress callback.
        :type on_progress: Optional[Callable[[int, int], None]]
        :returns: Encoded bit string.
        :rtype: str
        :raises UnknownSymbolError: If a symbol has no code.
        """
        total = len(text)
        out: List[str] = []
        for done, symbol in enumerate(text, 1):
            try:
                out.append(codes[symbol])
            except KeyError:
                raise UnknownSymbolError(symbol) from None
            if on_progress is not None:
                on_progress(done, total)
        if on_progress is not None and total == 0:
            on_progress(0, 0)
        return "".join(out)

    def decompress(
        self,
        bits: str,
        tree: Optional[HuffmanTree],
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """Decode ``bits`` by walking ``tree`` one bit at a time.

        ``'0'`` moves to the left child and ``'1'`` to the right one; reaching
        a leaf emits its symbol and restarts from the root. A tree whose root
        is a single leaf decodes every ``'0'`` to that symbol.

        :param bits: Encoded bit string.
        :type bits: str
        :param tree: Tree the bits were encoded with; ``None`` only for
            empty input.
        :type tree: HuffmanTree | None
        :param on_progress: Optional callback ``on_progress(done, total)``
                            reporting consumed bits.
        :type on_progress: Optional[Callable[[int, int], None]]
        :returns: Decoded string.
        :rtype: str
        :raises MalformedBitStringError: If a character is not a bit, the
            tree cannot follow a bit, or the bits end in the middle of a code.
        """
        total = len(bits)
        if tree is None:
            if bits:
                raise MalformedBitStringError(
                    "Cannot decode bits without a tree", 0
                )
            if on_progress is not None:
                on_progress(0, 0)
            return ""

        if tree.is_degenerate():
            out = self._decode_degenerate(bits, tree.root.symbol)
            if on_progress is not None:
                on_progress(total, total)
            return out

        root = tree.root
        node = root
        out_chars: List[str] = []
        for i, bit in enumerate(bits):
            if bit == "0":
                node = node.left
            elif bit == "1":
                node = node.right
            else:
                raise MalformedBitStringError(f"Invalid bit {bit!r}", i)
            if isinstance(node, Leaf):
                out_chars.append(node.symbol)
                node = root
            if on_progress is not None:
                on_progress(i + 1, total)

        if node is not root:
            raise MalformedBitStringError(
                "Bit string ends in the middle of a code", total
            )
        if on_progress is not None and total == 0:
            on_progress(0, 0)
        return "".join(out_chars)

    @staticmethod
    def _decode_degenerate(bits: str, symbol: str) -> str:
        """Decode bits for a tree that holds a single symbol coded as ``"0"``.

        :param bits: Encoded bit string.
        :type bits: str
        :param symbol: The only symbol of the alphabet.
        :type symbol: str
        :returns: ``symbol`` repeated once per bit.
        :rtype: str
        :raises MalformedBitStringError: If any bit is not ``'0'``.
        """
        for i, bit in enumerate(bits):
            if bit != "0":
                raise MalformedBitStringError(
                    f"Invalid bit {bit!r} for a single-symbol tree", i
                )
        return symbol * len(bits)

    def compress_to(
        self,
        text: str,
        tree_path: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """Compress ``text`` and save the serialized tree to ``tree_path``.

        :param str text: Input string.
        :param str tree_path: File to write the serialized tree to.
        :param on_progress: Optional progress callback.
        :type on_progress: Optional[Callable[[int, int], None]]
        :returns: Encoded bit string.
        :rtype: str
        :raises OSError: If the tree cannot be written.
        """
        bits, tree = self.compress(text, on_progress=on_progress)
        storage.save_text(tree_path, serialize_tree(tree))
        return bits

    def decompress_from(
        self,
        bits: str,
        tree_path: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> str:
        """Decode ``bits`` with the tree saved by :meth:`compress_to`.

        :param str bits: Encoded bit string.
        :param str tree_path: File holding the serialized tree.
        :param on_progress: Optional progress callback.
        :type on_progress: Optional[Callable[[int, int], None]]
        :returns: Decoded string.
        :rtype: str
        :raises OSError: If the tree cannot be read.
        :raises MalformedTreeError: If the saved tree is malformed.
        :raises MalformedBitStringError: If ``bits`` cannot be decoded.
        """
        tree = load_tree(storage.load_text(tree_path))
        return self.decompress(bits, tree, on_progress=on_progress)
