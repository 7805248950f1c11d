"""Reading-order reconstruction from fragment geometry."""

from collections.abc import Iterable

from myprice.domain.receipt import Fragment


def _reading_order_key(fragment: Fragment) -> tuple[float, float]:
    return (fragment.top, fragment.left)


def order_fragments(fragments: Iterable[Fragment], row_tolerance: float = 0.0) -> tuple[Fragment, ...]:
    """
    Sort fragments into reading order: top to bottom, then left to right.

    With the default row_tolerance of 0 this is a plain (top, left) sort, so
    fragments on a slightly skewed row stay in strict numeric order. A
    positive row_tolerance groups fragments whose top lies within the
    tolerance of the first fragment of the current row, and orders each row
    by left.

    The sort is stable: fragments identical in both coordinates keep their
    input order.
    """
    ordered = sorted(fragments, key=_reading_order_key)
    if row_tolerance <= 0 or len(ordered) < 2:
        return tuple(ordered)

    rows: list[list[Fragment]] = []
    row_top = None
    for fragment in ordered:
        if row_top is None or fragment.top - row_top > row_tolerance:
            rows.append([fragment])
            row_top = fragment.top
        else:
            rows[-1].append(fragment)

    result: list[Fragment] = []
    for row in rows:
        row.sort(key=lambda f: f.left)
        result.extend(row)
    return tuple(result)
