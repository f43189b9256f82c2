class HuffmanError(ValueError):
    """Base error for the Huffman coder."""


class MalformedTreeError(HuffmanError):
    """A serialized tree is truncated, has trailing data or an unknown marker.

    :ivar position: Index in the serialized stream where parsing gave up.
    :type position: int
    """

    def __init__(self, message: str, position: int = -1):
        super().__init__(message)
        self.position = position


class MalformedBitStringError(HuffmanError):
    """An encoded bit string cannot be decoded with the given tree.

    :ivar position: Index of the offending bit, or the length of the bit
        string when it ends in the middle of a code.
    :type position: int
    """

    def __init__(self, message: str, position: int = -1):
        super().__init__(message)
        self.position = position


class UnknownSymbolError(HuffmanError, KeyError):
    """A symbol to encode has no entry in the code table."""

    def __init__(self, symbol: str):
        super().__init__(f"Symbol {symbol!r} is not in the code table")
        self.symbol = symbol

    def __str__(self):
        return self.args[0]
