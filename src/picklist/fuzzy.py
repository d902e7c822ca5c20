"""Scoring providers for ranking items against a query."""

from typing import Callable, Optional

from thefuzz import fuzz

Scorer = Callable[[str, str], float]

# Contiguity must outweigh any start-position bonus.
CONTIGUITY_WEIGHT = 10.0
START_WEIGHT = 9.0


def is_subsequence(query: str, text: str) -> bool:
    """Check if query is a subsequence of text (chars in order, not necessarily adjacent)."""
    it = iter(text)
    return all(char in it for char in query)


def _adjacent_pairs(text: str, query: str, start: int) -> Optional[int]:
    """Greedily align query in text from start, counting adjacent matched pairs."""
    prev = start
    pairs = 0
    for char in query[1:]:
        idx = text.find(char, prev + 1)
        if idx == -1:
            return None
        if idx == prev + 1:
            pairs += 1
        prev = idx
    return pairs


def score(target: str, query: str) -> float:
    """
    Score target against query as a case-insensitive subsequence match.

    Every occurrence of the first query character is tried as a start; the
    alignment with the most adjacent pairs wins, earlier starts break ties.
    Returns 0 when query is not a subsequence of target.
    """
    if not query or not target:
        return 0.0

    text = target.lower()
    query_lower = query.lower()

    best: Optional[tuple[int, int]] = None
    start = text.find(query_lower[0])
    while start != -1:
        pairs = _adjacent_pairs(text, query_lower, start)
        if pairs is None:
            # Later starts can only match less
            break
        if best is None or pairs > best[0]:
            best = (pairs, start)
        start = text.find(query_lower[0], start + 1)

    if best is None:
        return 0.0

    pairs, start = best
    return 1.0 + CONTIGUITY_WEIGHT * pairs + START_WEIGHT / (1 + start)


def tolerant_score(target: str, query: str, threshold: int = 80) -> float:
    """
    Typo-tolerant scorer.

    Exact substring scores 100, a subsequence 95, anything else the best of
    thefuzz partial and token-sort ratios when it reaches threshold.
    """
    if not query or not target:
        return 0.0

    query_lower = query.lower()
    text = target.lower()

    if query_lower in text:
        return 100.0

    if is_subsequence(query_lower, text):
        return 95.0

    ratio = max(
        fuzz.partial_ratio(query_lower, text),
        fuzz.token_sort_ratio(query_lower, text),
    )
    if ratio >= threshold:
        return float(ratio)
    return 0.0


SCORERS = {
    "subsequence": score,
    "tolerant": tolerant_score,
}


def get_scorer(name: str, threshold: Optional[int] = None) -> Scorer:
    """Resolve a scorer by name."""
    if name not in SCORERS:
        raise ValueError(f"Unknown scorer '{name}' (choose from: {', '.join(SCORERS)})")
    if name == "tolerant" and threshold is not None:
        return lambda target, query: tolerant_score(target, query, threshold)
    return SCORERS[name]
