"""Filter engine: turns (items, query) into a ranked, capped view."""

from dataclasses import dataclass
from typing import Any, Callable, Optional, Sequence

from .fuzzy import Scorer, score

CustomFilter = Callable[[list, str], Sequence[Any]]


class FilterError(RuntimeError):
    """Raised when a scorer, filter key or custom filter fails."""


@dataclass
class FilterOptions:
    """How items are matched against a query."""

    filter_key: Optional[Callable[[Any], str]] = None
    custom_filter: Optional[CustomFilter] = None
    max_results: Optional[int] = None  # None = unbounded
    scorer: Scorer = score


@dataclass
class ScoredItem:
    item: Any
    score: float


def _key(options: FilterOptions, item: Any) -> str:
    if options.filter_key is not None:
        return options.filter_key(item)
    return item if isinstance(item, str) else str(item)


def cap(items: Sequence[Any], max_results: Optional[int]) -> list:
    """Truncate items to max_results (None keeps everything)."""
    if max_results is None:
        return list(items)
    return list(items[: max(max_results, 0)])


def score_items(items: Sequence[Any], query: str, options: FilterOptions) -> list[ScoredItem]:
    """
    Score and rank items, best first.

    Only items scoring above zero are kept; equal scores keep their input order.
    Raises FilterError if the filter key or the scorer fails.
    """
    scored = []
    for item in items:
        try:
            value = options.scorer(_key(options, item), query)
        except Exception as e:
            raise FilterError(f"Scoring failed for {item!r}: {e}") from e
        if value > 0:
            scored.append(ScoredItem(item, value))

    # list.sort is stable, so ties keep input order
    scored.sort(key=lambda s: -s.score)
    return scored


def filter_items(items: Sequence[Any], query: str, options: Optional[FilterOptions] = None) -> list:
    """
    Compute the filtered view of items for query.

    A custom filter replaces scoring entirely; only the cap is applied to its
    result. Otherwise an empty query keeps every item in order.
    """
    options = options or FilterOptions()

    if options.custom_filter is not None:
        try:
            result = options.custom_filter(list(items), query)
        except Exception as e:
            raise FilterError(f"Custom filter failed: {e}") from e
        return cap(list(result), options.max_results)

    if not query:
        return cap(items, options.max_results)

    ranked = [s.item for s in score_items(items, query, options)]
    return cap(ranked, options.max_results)
