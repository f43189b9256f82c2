from typing import Dict, Iterable


def build_frequency_table(text: Iterable[str]) -> Dict[str, int]:
    """Count how often every symbol occurs in ``text``.

    The returned mapping keeps the order in which symbols were first seen,
    which keeps tree construction deterministic for a given input.

    :param text: Input symbols (usually a ``str``).
    :type text: Iterable[str]
    :returns: Mapping from symbol to its occurrence count; empty for empty input.
    :rtype: Dict[str, int]
    """
    table: Dict[str, int] = {}
    for symbol in text:
        if symbol in table:
            table[symbol] += 1
        else:
            table[symbol] = 1
    return table
