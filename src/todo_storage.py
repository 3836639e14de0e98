"""Persistence helpers (append/rewrite/read) for the CSV todo store.

The store is one header row followed by one row per record. Two write
shapes exist: append (used when adding a single record) and a full
truncating rewrite (used after toggling). Every invocation re-reads the
file; nothing is cached between calls and no file locking is attempted, so
two processes interleaving on the same file can lose updates.
"""
import csv
import logging
import sys
from pathlib import Path
from typing import Iterable, Iterator, List, Union

from todo_models import HEADER, DecodeError, Record, decode_row, encode_row

logger = logging.getLogger(__name__)

RowResult = Union[Record, DecodeError]
# csv caps fields at 128 KiB by default; descriptions may be longer
FIELD_SIZE_LIMIT = min(sys.maxsize, 2**31 - 1)
csv.field_size_limit(FIELD_SIZE_LIMIT)


def _decode(row: List[str], position: int, line: int) -> RowResult:
    try:
        return decode_row([cell.strip() for cell in row], position, line)
    except DecodeError as err:
        return err


class Storage:
    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def __repr__(self) -> str:  # pragma: no cover - convenience only
        return f"Storage({str(self.path)!r})"

    # -------------------- writing --------------------
    def _needs_header(self) -> bool:
        try:
            return self.path.stat().st_size == 0
        except FileNotFoundError:
            return True

    def touch(self) -> None:
        """Create the store (and its directory) if missing, leaving content alone."""
        self.append_records([])

    def append_records(self, records: Iterable[Record]) -> None:
        """Append rows; header goes first only when the file is new or empty.

        The header is written lazily with the first row, so an append of
        nothing just creates an empty file.
        """
        needs_header = self._needs_header()
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'a', newline='', encoding='utf-8', errors='surrogateescape') as f:
            writer = csv.writer(f)
            for record in records:
                if needs_header:
                    writer.writerow(HEADER)
                    needs_header = False
                writer.writerow(encode_row(record))

    def save_records(self, records: Iterable[Record]) -> None:
        """Truncate the store and write header plus every record in order."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, 'w', newline='', encoding='utf-8', errors='surrogateescape') as f:
            writer = csv.writer(f)
            writer.writerow(HEADER)
            writer.writerows(encode_row(record) for record in records)

    # -------------------- reading --------------------
    def iter_rows(self) -> Iterator[RowResult]:
        """Lazily yield a Record or a DecodeError for every data row.

        Blank lines are skipped and fields are stripped. Ragged rows, rows
        the csv parser rejects and rows with undecodable bytes are reported
        rather than aborting the read. Raises OSError only when
        the file itself cannot be opened.
        """
        with open(self.path, 'r', newline='', encoding='utf-8', errors='surrogateescape') as f:
            reader = csv.reader(f)
            header_seen = False
            position = 0
            while True:
                try:
                    row = next(reader)
                except StopIteration:
                    break
                except csv.Error as exc:
                    # the reader drops the rest of the offending line and carries on
                    if not header_seen:
                        header_seen = True
                        continue
                    position += 1
                    yield DecodeError(position, str(exc), reader.line_num)
                    continue
                if not row or not any(cell.strip() for cell in row):
                    continue
                if not header_seen:
                    header_seen = True
                    continue
                position += 1
                yield _decode(row, position, reader.line_num)

    def load_records(self) -> List[Record]:
        """Read every good record; bad rows are logged and skipped.

        Missing file -> empty store.
        """
        records: List[Record] = []
        try:
            for result in self.iter_rows():
                if isinstance(result, DecodeError):
                    logger.warning("Skipping bad row: %s", result.describe())
                    continue
                records.append(result)
        except FileNotFoundError:
            logger.debug("Store %s does not exist yet; treating as empty", self.path)
            return []
        return records

    def count_rows(self) -> int:
        """Number of data rows on disk, readable or not."""
        try:
            return sum(1 for _ in self.iter_rows())
        except FileNotFoundError:
            return 0
