import struct

MAGIC = b"HUF1"  #: Packed payload magic number
VERSION = 1  #: Current packed payload version
_HEADER = struct.Struct("<4sBI")


class BitWriter:
    """Packs logical bits into bytes, most significant bit first.

    :ivar buffer: Fully written bytes.
    :type buffer: bytearray
    :ivar bit_buffer: Scratch register for the byte being filled.
    :type bit_buffer: int
    :ivar bit_count: Number of bits pending in ``bit_buffer`` (0-7).
    :type bit_count: int
    :ivar total_bits: Number of bits written so far.
    :type total_bits: int
    """

    def __init__(self):
        """Initialize an empty bit writer.

        :returns: None
        :rtype: None
        """
        self.buffer = bytearray()
        self.bit_buffer = 0
        self.bit_count = 0
        self.total_bits = 0

    def write_bit(self, bit: int):
        """Append a single bit.

        :param bit: ``0`` or ``1``.
        :type bit: int
        :returns: None
        :rtype: None
        """
        self.bit_buffer = (self.bit_buffer << 1) | (bit & 1)
        self.bit_count += 1
        self.total_bits += 1
        if self.bit_count == 8:
            self.buffer.append(self.bit_buffer)
            self.bit_buffer = 0
            self.bit_count = 0

    def write_bit_string(self, bits: str):
        """Append every bit of a ``'0'``/``'1'`` string.

        :param bits: Logical bit string.
        :type bits: str
        :returns: None
        :rtype: None
        :raises ValueError: If ``bits`` contains anything but ``'0'`` and ``'1'``.
        """
        for i, ch in enumerate(bits):
            if ch == "0":
                self.write_bit(0)
            elif ch == "1":
                self.write_bit(1)
            else:
                raise ValueError(f"Invalid bit {ch!r} at position {i}")

    def flush(self) -> bytes:
        """Return the written bytes, zero-padding the last partial byte.

        :returns: The accumulated bytes.
        :rtype: bytes
        """
        if self.bit_count > 0:
            self.buffer.append(self.bit_buffer << (8 - self.bit_count))
            self.bit_buffer = 0
            self.bit_count = 0
        return bytes(self.buffer)


class BitReader:
    """Reads bits, most significant bit first, from a bytes-like object.

    :ivar data: Source data.
    :type data: bytes
    :ivar pos: Index of the next byte to load.
    :type pos: int
    :ivar bit_buffer: Current source byte.
    :type bit_buffer: int
    :ivar bit_count: Unread bits remaining in ``bit_buffer`` (0-8).
    :type bit_count: int
    """

    def __init__(self, data: bytes):
        """Create a bit reader over ``data``.

        :param data: Source data to read from.
        :type data: bytes
        :returns: None
        :rtype: None
        """
        self.data = data
        self.pos = 0
        self.bit_buffer = 0
        self.bit_count = 0

    def read_bit(self) -> int:
        """Read the next bit.

        :returns: ``0`` or ``1``.
        :rtype: int
        :raises EOFError: If no bits are left.
        """
        if self.bit_count == 0:
            if self.pos >= len(self.data):
                raise EOFError("Unexpected end of data")
            self.bit_buffer = self.data[self.pos]
            self.pos += 1
            self.bit_count = 8
        self.bit_count -= 1
        return (self.bit_buffer >> self.bit_count) & 1

    def read_bit_string(self, nbits: int) -> str:
        """Read ``nbits`` bits as a ``'0'``/``'1'`` string.

        :param nbits: Number of bits to read.
        :type nbits: int
        :returns: Logical bit string of length ``nbits``.
        :rtype: str
        :raises EOFError: If the data ends before ``nbits`` bits were read.
        """
        return "".join("1" if self.read_bit() else "0" for _ in range(nbits))


def pack_bit_string(bits: str) -> bytes:
    """Pack a logical bit string into the framed binary payload.

    Layout (little-endian header):
    - Magic: ``HUF1`` (4 bytes)
    - Version: uint8
    - Bit count: uint32
    - Bits, MSB first, last byte zero-padded

    :param bits: Logical bit string of ``'0'``/``'1'`` characters.
    :type bits: str
    :returns: Packed payload.
    :rtype: bytes
    :raises ValueError: If ``bits`` is not a bit string.
    """
    writer = BitWriter()
    writer.write_bit_string(bits)
    return _HEADER.pack(MAGIC, VERSION, writer.total_bits) + writer.flush()


def unpack_bit_string(data: bytes) -> str:
    """Recover the logical bit string from a payload built by :func:`pack_bit_string`.

    :param data: Packed payload.
    :type data: bytes
    :returns: Logical bit string.
    :rtype: str
    :raises ValueError: If the header is invalid or the version unsupported.
    :raises EOFError: If the payload is shorter than its declared bit count.
    """
    if len(data) < _HEADER.size:
        raise ValueError("Invalid packed payload (header too short)")
    magic, version, nbits = _HEADER.unpack_from(data)
    if magic != MAGIC:
        raise ValueError("Invalid packed payload (bad magic)")
    if version != VERSION:
        raise ValueError(f"Unsupported packed payload version: {version}")
    return BitReader(data[_HEADER.size:]).read_bit_string(nbits)
