import pytest

from errors import MalformedTreeError
from frequency import build_frequency_table
from huffman import HuffmanTree, Internal, Leaf
from treecodec import deserialize_tree, load_tree, serialize_tree


def _tree(text):
    return HuffmanTree.build(build_frequency_table(text))


def test_serialize_three_leaf_tree():
    tree = _tree("AABC")
    stream = serialize_tree(tree)
    assert stream == "001B1C1A"

    restored = deserialize_tree(stream)
    assert restored.structure() == (("B", "C"), "A")
    assert restored == tree
    assert restored.code_table() == tree.code_table()


def test_serialize_two_leaf_and_single_leaf_trees():
    assert serialize_tree(_tree("AABB")) == "01A1B"
    assert serialize_tree(_tree("AAAA")) == "1A"
    restored = deserialize_tree("1A")
    assert isinstance(restored.root, Leaf)
    assert restored.root.symbol == "A"


def test_empty_tree_serializes_to_empty_stream():
    assert serialize_tree(None) == ""
    assert deserialize_tree("") is None
    assert load_tree("") is None


@pytest.mark.parametrize(
    "text",
    ["AABBCDCAASDBSAAABB", "hello world", "0011$$10", "line one\nline two\r\n"],
)
def test_tree_round_trip_keeps_code_table(text):
    tree = _tree(text)
    restored = deserialize_tree(serialize_tree(tree))
    assert restored == tree
    assert restored.code_table() == tree.code_table()


def test_marker_characters_are_valid_symbols():
    tree = HuffmanTree(Internal(Leaf("0"), Internal(Leaf("1"), Leaf("$"))))
    stream = serialize_tree(tree)
    assert stream == "0100111$"
    assert deserialize_tree(stream) == tree


def test_restored_nodes_use_placeholder_frequency():
    restored = deserialize_tree("01A1B")
    assert restored.root.freq == 0
    assert restored.root.left.freq == 0


@pytest.mark.parametrize(
    "stream", ["0", "1", "01A", "001A1B", "1AB", "2A", "01A1B0"]
)
def test_malformed_stream_yields_none(stream):
    assert deserialize_tree(stream) is None


def test_load_tree_reports_position():
    with pytest.raises(MalformedTreeError) as exc_info:
        load_tree("01A")
    assert exc_info.value.position == 3

    with pytest.raises(MalformedTreeError) as exc_info:
        load_tree("1AB")
    assert exc_info.value.position == 2

    with pytest.raises(MalformedTreeError) as exc_info:
        load_tree("x")
    assert exc_info.value.position == 0


def test_deep_stream_does_not_recurse():
    depth = 5000
    symbols = [chr(0x4E00 + i) for i in range(depth)]
    stream = "".join("01" + s for s in symbols) + "1y"
    tree = load_tree(stream)
    assert serialize_tree(tree) == stream


def test_deep_trees_compare_without_recursion():
    depth = 5000
    stream = "".join("01" + chr(0x4E00 + i) for i in range(depth)) + "1y"
    tree = load_tree(stream)
    assert tree == load_tree(stream)
    assert tree != load_tree(stream[:-1] + "z")
    shape = tree.structure()
    assert shape[0] == chr(0x4E00)
