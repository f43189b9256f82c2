import heapq
import itertools
from typing import Dict, List, Optional, Tuple, Union

#: Order key used for internal nodes when breaking frequency ties.
INTERNAL_ORDER_KEY = "$"


class Leaf:
    """Leaf of a Huffman tree.

    :ivar symbol: The symbol stored at this leaf.
    :type symbol: str
    :ivar freq: Frequency (weight) of the symbol. Trees rebuilt from a
        serialized form use ``0`` here.
    :type freq: int
    """

    def __init__(self, symbol: str, freq: int = 0):
        """Create a leaf node.

        :param str symbol: Symbol held by the leaf.
        :param int freq: Frequency of the symbol.
        :returns: None
        :rtype: None
        """
        self.symbol = symbol
        self.freq = freq

    def __repr__(self):
        return f"Leaf({self.symbol!r}, {self.freq})"


class Internal:
    """Internal node of a Huffman tree; always has exactly two children.

    :ivar freq: Combined frequency of both subtrees.
    :type freq: int
    :ivar left: Child reached with bit ``'0'``.
    :type left: Leaf | Internal
    :ivar right: Child reached with bit ``'1'``.
    :type right: Leaf | Internal
    """

    def __init__(self, left: "Node", right: "Node", freq: Optional[int] = None):
        """Create an internal node.

        :param left: Left child node.
        :type left: Leaf | Internal
        :param right: Right child node.
        :type right: Leaf | Internal
        :param freq: Frequency of the node; the sum of the children's
            frequencies when omitted.
        :type freq: int | None
        :returns: None
        :rtype: None
        :raises ValueError: If either child is missing.
        """
        if left is None or right is None:
            raise ValueError("Internal node requires two children")
        self.left = left
        self.right = right
        self.freq = left.freq + right.freq if freq is None else freq

    def __repr__(self):
        return f"Internal({self.left!r}, {self.right!r})"


Node = Union[Leaf, Internal]


class HuffmanTree:
    """Huffman coding tree built from a symbol frequency table.

    The tree is a full binary tree. When the input has a single distinct
    symbol the root is a :class:`Leaf` and that symbol is coded as ``"0"``.

    :ivar root: Root node of the tree.
    :type root: Leaf | Internal
    """

    def __init__(self, root: Node):
        """Wrap an existing node graph.

        :param root: Root node.
        :type root: Leaf | Internal
        :returns: None
        :rtype: None
        """
        self.root = root

    @classmethod
    def build(cls, frequencies: Dict[str, int]) -> Optional["HuffmanTree"]:
        """Build a Huffman tree from a symbol frequency table.

        Nodes are ordered by ascending frequency, then by ascending symbol
        (internal nodes sort with :data:`INTERNAL_ORDER_KEY`), then by the
        order in which they entered the heap. The two lowest nodes are
        merged, the first popped becoming the left child.

        :param frequencies: Mapping from symbol to observed frequency.
        :type frequencies: Dict[str, int]
        :returns: The tree, or ``None`` for an empty table.
        :rtype: HuffmanTree | None
        """
        if not frequencies:
            return None

        counter = itertools.count()
        heap: List[Tuple[int, str, int, Node]] = [
            (freq, symbol, next(counter), Leaf(symbol, freq))
            for symbol, freq in frequencies.items()
        ]
        heapq.heapify(heap)

        while len(heap) > 1:
            left = heapq.heappop(heap)[3]
            right = heapq.heappop(heap)[3]
            merged = Internal(left, right)
            heapq.heappush(
                heap, (merged.freq, INTERNAL_ORDER_KEY, next(counter), merged)
            )

        return cls(heap[0][3])

    def code_table(self) -> Dict[str, str]:
        """Derive the code of every symbol by walking the tree.

        Left edges contribute ``'0'`` and right edges ``'1'``. Symbols are
        listed in depth-first order, left subtree first.

        :returns: Mapping from symbol to its code string.
        :rtype: Dict[str, str]
        """
        if isinstance(self.root, Leaf):
            return {self.root.symbol: "0"}

        codes: Dict[str, str] = {}
        stack: List[Tuple[Node, str]] = [(self.root, "")]
        while stack:
            node, path = stack.pop()
            if isinstance(node, Leaf):
                codes[node.symbol] = path
            else:
                stack.append((node.right, path + "1"))
                stack.append((node.left, path + "0"))
        return codes

    def is_degenerate(self) -> bool:
        """Return ``True`` when the root is a lone leaf."""
        return isinstance(self.root, Leaf)

    def structure(self):
        """Return the tree shape as nested tuples of leaf symbols.

        Frequencies are ignored, so a tree and its deserialized copy have the
        same structure.
        """
        built: list = []
        stack: List[Tuple[Node, bool]] = [(self.root, False)]
        while stack:
            node, children_done = stack.pop()
            if isinstance(node, Leaf):
                built.append(node.symbol)
            elif children_done:
                right = built.pop()
                left = built.pop()
                built.append((left, right))
            else:
                stack.append((node, True))
                stack.append((node.right, False))
                stack.append((node.left, False))
        return built[0]

    def _preorder(self) -> List[Optional[str]]:
        # Leaf symbols in preorder, None for internal nodes.
        out: List[Optional[str]] = []
        stack: List[Node] = [self.root]
        while stack:
            node = stack.pop()
            if isinstance(node, Leaf):
                out.append(node.symbol)
            else:
                out.append(None)
                stack.append(node.right)
                stack.append(node.left)
        return out

    def __eq__(self, other):
        if not isinstance(other, HuffmanTree):
            return NotImplemented
        return self._preorder() == other._preorder()

    def __repr__(self):
        return f"HuffmanTree({self.root!r})"


def build_tree_and_codes(
    frequencies: Dict[str, int]
) -> Tuple[Optional[HuffmanTree], Dict[str, str]]:
    """Build a tree and its code table in one step.

    :param frequencies: Mapping from symbol to observed frequency.
    :type frequencies: Dict[str, int]
    :returns: ``(tree, codes)``; ``(None, {})`` for an empty table.
    :rtype: Tuple[HuffmanTree | None, Dict[str, str]]
    """
    tree = HuffmanTree.build(frequencies)
    if tree is None:
        return None, {}
    return tree, tree.code_table()
