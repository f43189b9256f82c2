from typing import List, Optional, Tuple

from errors import MalformedTreeError
from huffman import HuffmanTree, Internal, Leaf, Node

LEAF_MARKER = "1"
INTERNAL_MARKER = "0"


def serialize_tree(tree: Optional[HuffmanTree]) -> str:
    """Serialize ``tree`` into the preorder token text.

    A leaf is ``'1'`` followed by its raw symbol character. An internal node
    is ``'0'`` followed by its left subtree and then its right subtree. The
    full binary shape marks where every subtree ends, so no lengths or
    frequencies are stored.

    :param tree: Tree to serialize; ``None`` stands for the empty tree.
    :type tree: HuffmanTree | None
    :returns: Serialized tree; empty string for ``None``.
    :rtype: str
    """
    if tree is None:
        return ""
    out: List[str] = []
    stack: List[Node] = [tree.root]
    while stack:
        node = stack.pop()
        if isinstance(node, Leaf):
            out.append(LEAF_MARKER)
            out.append(node.symbol)
        else:
            out.append(INTERNAL_MARKER)
            stack.append(node.right)
            stack.append(node.left)
    return "".join(out)


def _parse(stream: str) -> Tuple[Node, int]:
    """Parse one complete subtree from the start of ``stream``.

    :param stream: Serialized tree text.
    :type stream: str
    :returns: Tuple ``(root, consumed)``.
    :rtype: Tuple[Leaf | Internal, int]
    :raises MalformedTreeError: If the stream ends while a token is still
        required, or an unknown marker is found.
    """
    pos = 0
    # Each entry holds the children collected so far for an open internal node.
    pending: List[List[Node]] = []
    while True:
        if pos >= len(stream):
            raise MalformedTreeError(
                "Serialized tree ended while a node was expected", pos
            )
        marker = stream[pos]
        pos += 1
        if marker == INTERNAL_MARKER:
            pending.append([])
            continue
        if marker != LEAF_MARKER:
            raise MalformedTreeError(
                f"Unknown marker {marker!r} in serialized tree", pos - 1
            )
        if pos >= len(stream):
            raise MalformedTreeError(
                "Serialized tree ended after a leaf marker", pos
            )
        node: Node = Leaf(stream[pos])
        pos += 1

        while True:
            if not pending:
                return node, pos
            pending[-1].append(node)
            if len(pending[-1]) < 2:
                break
            left, right = pending.pop()
            node = Internal(left, right, freq=0)


def load_tree(stream: str) -> Optional[HuffmanTree]:
    """Rebuild a tree from its serialized text, rejecting malformed input.

    :param stream: Serialized tree text.
    :type stream: str
    :returns: The tree, or ``None`` for an empty stream (empty input was
        compressed).
    :rtype: HuffmanTree | None
    :raises MalformedTreeError: If the stream is truncated, contains an
        unknown marker, or has characters left after the root subtree.
    """
    if not stream:
        return None
    root, consumed = _parse(stream)
    if consumed != len(stream):
        raise MalformedTreeError(
            f"{len(stream) - consumed} trailing character(s) after serialized tree",
            consumed,
        )
    return HuffmanTree(root)


def deserialize_tree(stream: str) -> Optional[HuffmanTree]:
    """Rebuild a tree from its serialized text.

    Malformed input yields ``None`` rather than a partial tree; callers must
    treat that as a decode failure.

    :param stream: Serialized tree text.
    :type stream: str
    :returns: The tree, or ``None`` if ``stream`` is empty or malformed.
    :rtype: HuffmanTree | None
    """
    try:
        return load_tree(stream)
    except MalformedTreeError:
        return None
