"""
String similarity for brand matching.

similarity() returns a [0, 1] score:
  1.0  identical (case-insensitive)
  0.8  one string contains the other
  else normalized Levenshtein: (max_len - distance) / max_len
"""
from __future__ import annotations

EXACT_MATCH_SCORE: float = 1.0
CONTAINS_MATCH_SCORE: float = 0.8


def levenshtein_distance(a: str, b: str) -> int:
    """Classic edit distance (insert/delete/substitute, unit cost)."""
    if len(a) < len(b):
        a, b = b, a
    # Two rolling rows over the shorter string
    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            if ca == cb:
                current.append(previous[j - 1])
            else:
                current.append(1 + min(previous[j - 1], previous[j], current[j - 1]))
        previous = current
    return previous[-1]


def similarity(a: str | None, b: str | None) -> float:
    if not a or not b:
        return 0.0

    s1 = a.lower()
    s2 = b.lower()

    if s1 == s2:
        return EXACT_MATCH_SCORE
    if s1 in s2 or s2 in s1:
        return CONTAINS_MATCH_SCORE

    max_len = max(len(s1), len(s2))
    return (max_len - levenshtein_distance(s1, s2)) / max_len
