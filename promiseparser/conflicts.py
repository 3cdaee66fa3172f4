"""
Conflict Resolver

Reconciles the raw candidates of all rules into the final output list:

1. drop candidates whose span lies inside another candidate's span
2. ADJACENT for candidates separated only by " " or " of "
3. DUPLICATE_SPAN for candidates on the same span with different ranges
4. PARTIAL_OVERLAP for candidates whose spans cross
5. drop hidden candidates without alerts
6. sort by start offset, ties in insertion order

Candidates are compared by identity: two equal-looking candidates produced by
different rules are still two candidates.
"""

import logging
from itertools import combinations, permutations
from typing import List

from .promise import AlertType, ExtractedDate

logger = logging.getLogger(__name__)

ADJACENCY_SEPARATORS = (" ", " of ")


# =============================================================================
# Span relations
# =============================================================================

def is_contained(inner: ExtractedDate, outer: ExtractedDate) -> bool:
    """True if `inner` lies inside `outer` without covering the same span."""
    if inner.span == outer.span:
        return False
    return inner.start >= outer.start and inner.end <= outer.end


def is_adjacent(first: ExtractedDate, second: ExtractedDate, text: str) -> bool:
    """True if only " " or " of " separates `first` from the following `second`."""
    gap = text[first.end:second.start]
    return first.end <= second.start and gap in ADJACENCY_SEPARATORS


def is_partial_overlap(first: ExtractedDate, second: ExtractedDate) -> bool:
    """True if `second` starts inside `first` and ends after it."""
    return first.start < second.start < first.end < second.end


def _reportable(candidate: ExtractedDate) -> bool:
    return bool(candidate.text) and (candidate.resolved or bool(candidate.alerts))


# =============================================================================
# Steps
# =============================================================================

def eliminate_contained(candidates: List[ExtractedDate]) -> List[ExtractedDate]:
    """Remove every candidate nested inside a broader one."""
    removed = set()
    for inner, outer in permutations(candidates, 2):
        if is_contained(inner, outer):
            removed.add(id(inner))

    kept = [c for c in candidates if id(c) not in removed]
    if len(kept) != len(candidates):
        logger.debug(f"Dropped {len(candidates) - len(kept)} nested candidates")
    return kept


def mark_adjacent(candidates: List[ExtractedDate], text: str) -> None:
    for first, second in permutations(candidates, 2):
        if _reportable(first) and _reportable(second) and is_adjacent(first, second, text):
            first.add_alert(AlertType.ADJACENT)
            second.add_alert(AlertType.ADJACENT)


def mark_duplicate_spans(candidates: List[ExtractedDate]) -> None:
    for first, second in combinations(candidates, 2):
        if first.span != second.span or not (first.resolved and second.resolved):
            continue
        if (first.date_from, first.date_to) != (second.date_from, second.date_to):
            first.add_alert(AlertType.DUPLICATE_SPAN)
            second.add_alert(AlertType.DUPLICATE_SPAN)


def mark_partial_overlaps(candidates: List[ExtractedDate]) -> None:
    for first, second in permutations(candidates, 2):
        if is_partial_overlap(first, second):
            first.add_alert(AlertType.PARTIAL_OVERLAP)
            second.add_alert(AlertType.PARTIAL_OVERLAP)


def drop_suppressed(candidates: List[ExtractedDate]) -> List[ExtractedDate]:
    return [c for c in candidates if c.visible or c.alerts]


# =============================================================================
# Entry point
# =============================================================================

def reconcile(candidates: List[ExtractedDate], text: str) -> List[ExtractedDate]:
    """
    Turn the raw candidates of one text into the final output list.

    Args:
        candidates: Candidates of all rules, in rule order
        text: The text the candidates were extracted from

    Returns:
        Surviving candidates sorted by start offset
    """
    candidates = eliminate_contained(candidates)
    mark_adjacent(candidates, text)
    mark_duplicate_spans(candidates)
    mark_partial_overlaps(candidates)
    candidates = drop_suppressed(candidates)
    return sorted(candidates, key=lambda c: c.start)
