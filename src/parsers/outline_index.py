"""
Heading lookup for line numbers.

The task parser calls find_enclosing_heading once per task, so the lookup
is a binary search over the (already sorted) heading list rather than a
linear scan.
"""

from typing import Optional, Sequence

from models.outline import HeadingInfo


def find_enclosing_heading(
    line: int, headings: Sequence[HeadingInfo]
) -> Optional[HeadingInfo]:
    """
    Return the heading with the greatest start_line <= line.

    Args:
        line: Zero-based line number to look up
        headings: Headings sorted by start_line ascending

    Returns:
        The enclosing HeadingInfo, or None if the line precedes every
        heading (or there are no headings)
    """
    if not headings or headings[0].start_line > line:
        return None

    # Invariant: headings[lo].start_line <= line
    lo, hi = 0, len(headings) - 1
    while lo < hi:
        mid = (lo + hi + 1) // 2
        if headings[mid].start_line <= line:
            lo = mid
        else:
            hi = mid - 1

    return headings[lo]
