"""Lexical similarity between header strings (Dice's coefficient over bigrams)."""

from __future__ import annotations

from collections import Counter


def normalize_text(value: str) -> str:
    """Lower-case, trim, and collapse internal whitespace runs to one space."""
    return " ".join(value.lower().split())


def bigram_counts(value: str) -> Counter:
    """
    Multiset of overlapping 2-character windows of the normalized string.

    Strings shorter than 2 normalized characters yield an empty Counter;
    callers treat that as "not comparable".
    """
    text = normalize_text(value)
    return Counter(text[i : i + 2] for i in range(len(text) - 1))


def similarity(a: str, b: str) -> float:
    """Return a symmetric score in [0, 1]; 1.0 means the normalized strings are equal."""
    s1 = normalize_text(a)
    s2 = normalize_text(b)

    if s1 == s2:
        return 1.0
    if len(s1) < 2 or len(s2) < 2:
        return 0.0

    bigrams1 = bigram_counts(s1)
    bigrams2 = bigram_counts(s2)
    overlap = sum((bigrams1 & bigrams2).values())
    total = (len(s1) - 1) + (len(s2) - 1)
    return (2 * overlap) / total
