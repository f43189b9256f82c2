from frequency import build_frequency_table


def test_counts_and_first_seen_order():
    table = build_frequency_table("abracadabra")
    assert table == {"a": 5, "b": 2, "r": 2, "c": 1, "d": 1}
    assert list(table) == ["a", "b", "r", "c", "d"]


def test_empty_input_gives_empty_table():
    assert build_frequency_table("") == {}


def test_counts_sum_to_input_length():
    for text in ["A", "AABB", "hello, world\n", "$$01$10\téé"]:
        assert sum(build_frequency_table(text).values()) == len(text)
