"""Todo list logic: id assignment and the two mutation transactions.

Each mutation re-reads the store, so a TodoList holds no records of its own
between calls:
- add: count existing rows, build the next record, append it.
- toggle: load everything, flip the first matching id, rewrite the file.

Ids come from a row count rather than an atomic counter. Two invocations
racing on the same file can hand out the same id; this is left as is.
"""
import logging
from datetime import datetime
from typing import List, Optional

from todo_models import DEFAULT_PROJECT, Record, utc_now
from todo_storage import Storage

logger = logging.getLogger(__name__)


class TodoList:
    def __init__(self, storage: Storage, default_project: str = DEFAULT_PROJECT):
        self.storage = storage
        self.default_project = default_project

    # -------------------- queries --------------------
    def load(self) -> List[Record]:
        return self.storage.load_records()

    # -------------------- id management --------------------
    def _allocate_id(self) -> int:
        # every data row counts, including ones that fail to decode
        return self.storage.count_rows() + 1

    # -------------------- task operations --------------------
    def add(self, description: str, project: Optional[str] = None,
            now: Optional[datetime] = None) -> Record:
        """Append a new, incomplete record and return it."""
        record = Record(
            id=self._allocate_id(),
            project=(project or '').strip() or self.default_project,
            description=description,
            completed=False,
            date_added=now or utc_now(),
            date_completed=None,
        )
        self.storage.append_records([record])
        logger.info("Added record %d to %s", record.id, self.storage.path)
        return record

    def toggle(self, record_id: int, now: Optional[datetime] = None) -> Optional[Record]:
        """Flip completion of the first record with record_id.

        The whole store is rewritten even when nothing matches. Calling this
        twice with the same id restores the previous completion state.
        """
        records = self.load()
        found: Optional[Record] = None
        for record in records:
            if record.id == record_id:
                record.toggle(now or utc_now())
                found = record
                break
        self.storage.save_records(records)
        if found is None:
            logger.info("Record id %d not found; store rewritten unchanged", record_id)
        else:
            logger.info("Record %d marked %s", record_id,
                        'complete' if found.completed else 'incomplete')
        return found

    def __str__(self) -> str:
        return f'TodoList({self.storage.path})'
