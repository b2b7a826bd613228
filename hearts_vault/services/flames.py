"""
FLAMES name-compatibility calculator.

Both names are lowercased and stripped of whitespace, the letters they share
are crossed out one-for-one, and the number of letters left over picks one
of the six FLAMES labels.
"""
from collections import Counter

FLAMES_RESULTS = ("Friends", "Love", "Affection", "Marriage", "Enemies", "Siblings")


def normalize_name(name: str) -> str:
    return "".join(name.lower().split())


def leftover_count(name_a: str, name_b: str) -> int:
    """Number of letters that cannot be paired between the two names."""
    freq_a = Counter(normalize_name(name_a))
    freq_b = Counter(normalize_name(name_b))

    remaining = 0
    for char, count in freq_a.items():
        remaining += count - min(count, freq_b.get(char, 0))
    for char, count in freq_b.items():
        remaining += count - min(count, freq_a.get(char, 0))
    return remaining


def compute(name_a: str, name_b: str) -> str:
    remaining = leftover_count(name_a, name_b)

    # Every letter crossed out
    if remaining == 0:
        return "Love"

    return FLAMES_RESULTS[(remaining - 1) % len(FLAMES_RESULTS)]
