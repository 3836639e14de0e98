"""Data models for the terminal todo list.

Exposes the Record dataclass plus the row codec used by the CSV store.
Timestamps are kept as timezone-aware UTC datetimes with whole seconds and
are written to disk as integer seconds since the epoch. An absent completion
date is written as an empty field.
"""
from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

HEADER: Tuple[str, ...] = ("id", "project", "desc", "completed", "date_added", "date_completed")
DEFAULT_PROJECT = "General"


def utc_now() -> datetime:
    """Current time in canonical form (UTC, microseconds dropped)."""
    return datetime.now(timezone.utc).replace(microsecond=0)


class DecodeError(ValueError):
    """A single store row that could not be turned into a Record."""

    def __init__(self, position: int, message: str, line: Optional[int] = None):
        self.position = position
        self.line = line
        self.message = message
        super().__init__(f"row {position}: {message}")

    def describe(self) -> str:
        where = f"row {self.position}"
        if self.line is not None:
            where += f", line {self.line}"
        return f"{self.message} (pos: {where})"


@dataclass
class Record:
    """A single todo entry.

    Fields:
        id: Positive integer assigned at append time; never changes.
        project: Free-text label.
        description: Task body, wrapped at render time.
        completed: Completion flag.
        date_added: Creation timestamp (UTC).
        date_completed: Completion timestamp; set only while completed.
    """
    id: int
    project: str
    description: str
    completed: bool = False
    date_added: datetime = field(default_factory=utc_now)
    date_completed: Optional[datetime] = None

    def toggle(self, now: Optional[datetime] = None) -> None:
        """Flip completion and keep date_completed in step with it."""
        self.completed = not self.completed
        self.date_completed = (now or utc_now()) if self.completed else None


# -------------------- timestamp codec --------------------
def encode_timestamp(value: Optional[datetime]) -> str:
    if value is None:
        return ""
    return str(int(value.timestamp()))


def decode_timestamp(raw: str) -> datetime:
    seconds = int(raw)  # ValueError on garbage
    try:
        return datetime.fromtimestamp(seconds, tz=timezone.utc)
    except (OverflowError, OSError) as exc:
        raise ValueError(f"timestamp out of range: {raw}") from exc


def _decode_bool(raw: str) -> bool:
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    raise ValueError(f"invalid completed flag: {raw!r}")


# -------------------- row codec --------------------
def encode_row(record: Record) -> List[str]:
    return [
        str(record.id),
        record.project,
        record.description,
        "true" if record.completed else "false",
        encode_timestamp(record.date_added),
        encode_timestamp(record.date_completed),
    ]


def decode_row(row: Sequence[str], position: int, line: Optional[int] = None) -> Record:
    """Build a Record from one trimmed data row.

    Raises DecodeError (tagged with the row position) for a wrong column
    count, undecodable bytes, a bad id, flag or timestamp, or a completion
    flag that disagrees with the presence of date_completed.
    """
    if len(row) != len(HEADER):
        raise DecodeError(position, f"expected {len(HEADER)} fields, found {len(row)}", line)
    for name, cell in zip(HEADER, row):
        # undecodable bytes arrive as lone surrogates (surrogateescape)
        try:
            cell.encode('utf-8')
        except UnicodeEncodeError as exc:
            raise DecodeError(position, f"invalid UTF-8 in {name}", line) from exc
    raw_id, project, desc, raw_completed, raw_added, raw_completed_at = row
    try:
        record_id = int(raw_id)
        if record_id <= 0:
            raise ValueError(f"id must be positive: {raw_id}")
        completed = _decode_bool(raw_completed)
        date_added = decode_timestamp(raw_added)
        date_completed = decode_timestamp(raw_completed_at) if raw_completed_at else None
    except ValueError as exc:
        raise DecodeError(position, str(exc), line) from exc
    if completed != (date_completed is not None):
        raise DecodeError(position, "completed flag and date_completed disagree", line)
    return Record(
        id=record_id,
        project=project,
        description=desc,
        completed=completed,
        date_added=date_added,
        date_completed=date_completed,
    )
