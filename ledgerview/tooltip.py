"""
Hover text for chart segments.

Rows are lists of cells. A cell is either plain text or a ``(text, style)``
pair where style is one of the CSS-ish hints used by the chart modules
(``bold``, ``right``, ``clipped``). Output uses the HTML subset Plotly
understands in hover labels.
"""

import html
from collections import defaultdict
from decimal import Decimal
from typing import Callable, Iterable, List, Optional, Sequence, Tuple, Union

from .currency import format_currency
from .models import Posting

Cell = Union[str, Tuple[str, str]]
Row = Sequence[Cell]

BOLD = "bold"
RIGHT = "right"
CLIPPED = "clipped"
AMOUNT = "bold right"

CLIP_LENGTH = 32


def _cell(cell: Cell) -> str:
    if isinstance(cell, tuple):
        text, style = cell
    else:
        text, style = cell, ""
    if CLIPPED in style and len(text) > CLIP_LENGTH:
        text = text[:CLIP_LENGTH - 1] + "…"
    text = html.escape(text)
    if BOLD in style:
        text = f"<b>{text}</b>"
    return text


def tooltip(rows: Iterable[Row], total: Optional[str] = None,
            header: Optional[str] = None) -> str:
    lines = []
    if header:
        lines.append(f"<b>{html.escape(header)}</b>")
    for row in rows:
        cells = [_cell(cell) for cell in row]
        lines.append("  ".join(cell for cell in cells if cell))
    if total is not None:
        lines.append(f"Total  <b>{html.escape(total)}</b>")
    return "<br>".join(lines)


def truncation_row(remaining: int) -> Row:
    return [f"... and {remaining} more categories"]


def create_tooltip_content(
    postings: Iterable[Posting],
    get_amount: Callable[[Posting], Decimal],
    get_label: Callable[[Posting], str],
    filter_condition: Callable[[Posting], bool] = lambda p: True,
    max_entries: int = 20,
    header: Optional[str] = None,
) -> str:
    """
    Aggregate postings by label and render the largest first.

    Postings rejected by `filter_condition` are ignored. When there are more
    labels than `max_entries` the rest is summarised in a final row; the
    total always covers every label.
    """
    totals = defaultdict(lambda: Decimal('0'))
    for posting in postings:
        if filter_condition(posting):
            totals[get_label(posting)] += get_amount(posting)

    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    grand_total = sum(totals.values(), Decimal('0'))

    rows: List[Row] = [
        [label, (format_currency(amount), AMOUNT)]
        for label, amount in ordered[:max_entries]
    ]
    if len(ordered) > max_entries:
        rows.append(truncation_row(len(ordered) - max_entries))

    return tooltip(rows, total=format_currency(grand_total), header=header)
