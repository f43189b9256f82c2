import struct

import pytest

from bitops import (
    MAGIC,
    VERSION,
    BitReader,
    BitWriter,
    pack_bit_string,
    unpack_bit_string,
)


def test_bitwriter_packs_msb_first_and_pads():
    bw = BitWriter()
    bw.write_bit_string("1010")
    bw.write_bit_string("11110000")
    out = bw.flush()
    assert bw.total_bits == 12
    assert out == bytes([0b10101111, 0b00000000])


def test_bitwriter_rejects_non_bits():
    bw = BitWriter()
    with pytest.raises(ValueError):
        bw.write_bit_string("01a")


def test_bitreader_reads_bits_in_order():
    br = BitReader(bytes([0b11001010, 0xFF]))
    assert br.read_bit_string(3) == "110"
    assert br.read_bit() == 0
    assert br.read_bit_string(6) == "101011"


def test_bitreader_eoferror_on_insufficient_bits():
    br = BitReader(b"\xF0")
    with pytest.raises(EOFError):
        _ = br.read_bit_string(9)


def test_pack_layout():
    payload = pack_bit_string("1010")
    assert payload[:4] == MAGIC
    assert payload == struct.pack("<4sBI", MAGIC, VERSION, 4) + bytes([0b10100000])


def test_pack_unpack_keeps_exact_bit_count():
    for bits in ["", "0", "0000", "01100101", "011001011"]:
        assert unpack_bit_string(pack_bit_string(bits)) == bits


def test_unpack_bad_header():
    with pytest.raises(ValueError):
        unpack_bit_string(b"HUF")
    with pytest.raises(ValueError):
        unpack_bit_string(struct.pack("<4sBI", b"BAD!", VERSION, 0))
    with pytest.raises(ValueError):
        unpack_bit_string(struct.pack("<4sBI", MAGIC, 99, 0))


def test_unpack_truncated_body():
    data = struct.pack("<4sBI", MAGIC, VERSION, 16) + b"\x00"
    with pytest.raises(EOFError):
        unpack_bit_string(data)
