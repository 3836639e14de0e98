"""Fixed-width table layout for todo records.

Everything here returns strings or cell tuples; printing (and colour) is
left to the caller. Column widths are constants. Values wider than their
column are padded, not truncated, so they push the row out of line.
"""
import textwrap
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from todo_models import Record

COLUMNS: Tuple[Tuple[str, int], ...] = (
    ("ID", 3),
    ("Project", 15),
    ("Description", 28),
    ("Completed", 11),
    ("Date Added", 12),
    ("Date Completed", 15),
)
WIDTHS: Tuple[int, ...] = tuple(width for _, width in COLUMNS)
DESC_WIDTH = WIDTHS[2]
SEP = " | "
DATE_FORMAT = "%Y-%m-%d"

Cells = Tuple[str, ...]
# paint(kind, line) -> line; kind is one of "rule", "header", "done", "pending"
Painter = Callable[[str, str], str]


def _format_date(value: Optional[datetime]) -> str:
    return value.strftime(DATE_FORMAT) if value is not None else ''


def wrap_description(text: str, width: int = DESC_WIDTH) -> List[str]:
    """Word-wrap text into chunks no wider than width (long words are split)."""
    return textwrap.wrap(text, width) or ['']


def layout_record(record: Record, widths: Sequence[int] = WIDTHS) -> List[Cells]:
    """Cells for every line of one record.

    The first line carries all columns; continuation lines only carry the
    next description chunk.
    """
    chunks = wrap_description(record.description, widths[2])
    lines: List[Cells] = [(
        str(record.id),
        record.project,
        chunks[0],
        'true' if record.completed else 'false',
        _format_date(record.date_added),
        _format_date(record.date_completed),
    )]
    for chunk in chunks[1:]:
        lines.append(('', '', chunk, '', '', ''))
    return lines


def format_row(cells: Cells, widths: Sequence[int] = WIDTHS) -> str:
    padded = [cell.ljust(width) for cell, width in zip(cells, widths)]
    return "| " + SEP.join(padded) + " |"


def rule(widths: Sequence[int] = WIDTHS) -> str:
    return '-' * len(format_row(tuple('' for _ in widths), widths))


def header_row() -> str:
    return format_row(tuple(title for title, _ in COLUMNS))


def is_visible(record: Record, verbose: bool) -> bool:
    return verbose or not record.completed


def _plain(kind: str, line: str) -> str:
    return line


def render_lines(records: Iterable[Record], verbose: bool = False,
                 paint: Painter = _plain) -> List[str]:
    """Full table: header block, then each visible record followed by a rule."""
    sep_line = paint("rule", rule())
    out = [sep_line, paint("header", header_row()), sep_line]
    for record in records:
        if not is_visible(record, verbose):
            continue
        kind = "done" if record.completed else "pending"
        out.extend(paint(kind, format_row(cells)) for cells in layout_record(record))
        out.append(sep_line)
    return out
