"""
=================
Query slot store.
=================

Holds independently-built, not-yet-executed query descriptors indexed by an
integer slot id, plus the id of the active slot. Slot 0 exists from
construction; start() allocates the next id and makes it active.

The store also keeps the execution record: a per-slot rows-affected value
(what get_total_rows reports) and an append-only history of every
successful execution.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from core.exceptions import InvalidSlotError
from sql.descriptor import Operation, QueryDescriptor

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutionRecord:
    """One successful execution: which slot ran what, and how many rows it touched."""

    slot_id: int
    operation: Operation
    rows_affected: int


class QuerySlotStore:
    """Mapping of slot id to descriptor with an active-slot pointer.

    Attributes:
        active: Id of the slot builder calls currently target
    """

    def __init__(self):
        self._descriptors: Dict[int, QueryDescriptor] = {0: QueryDescriptor()}
        self._counter = 0
        self.active = 0

        self._last_rows: Dict[int, int] = {}
        self._history: List[ExecutionRecord] = []

    def start(self) -> int:
        """Allocate an empty descriptor at the next id and make it active."""
        self._counter += 1
        self._descriptors[self._counter] = QueryDescriptor()
        self.active = self._counter
        logger.debug(f"Started query slot {self.active}")
        return self.active

    def set_active(self, slot_id: int) -> int:
        """Switch to slot_id if it exists; unknown ids keep the current slot."""
        if slot_id in self._descriptors:
            self.active = slot_id
            logger.debug(f"Switched to query slot {slot_id}")
        else:
            logger.debug(f"Ignoring switch to unknown query slot {slot_id}; slot {self.active} stays active")
        return self.active

    def __contains__(self, slot_id: int) -> bool:
        return slot_id in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    @property
    def slot_ids(self) -> Tuple[int, ...]:
        return tuple(sorted(self._descriptors))

    @property
    def active_descriptor(self) -> QueryDescriptor:
        return self._descriptors[self.active]

    def descriptor(self, slot_id: int) -> QueryDescriptor:
        try:
            return self._descriptors[slot_id]
        except KeyError:
            raise InvalidSlotError(slot_id) from None

    def reset(self, slot_id: int) -> None:
        """Clear a slot's descriptor; the slot id itself persists."""
        if slot_id not in self._descriptors:
            raise InvalidSlotError(slot_id)
        self._descriptors[slot_id] = QueryDescriptor()

    def record(self, slot_id: int, operation: Operation, rows_affected: int) -> ExecutionRecord:
        record = ExecutionRecord(slot_id=slot_id, operation=operation, rows_affected=rows_affected)
        self._history.append(record)
        self._last_rows[slot_id] = rows_affected
        return record

    def total_rows(self, slot_id: Optional[int] = None) -> int:
        """
        Return the rows affected by the most recent execution of a slot.

        Args:
            slot_id: Slot to look up; defaults to the active slot

        Raises:
            InvalidSlotError: If the slot was never allocated or never executed
        """
        if slot_id is None:
            slot_id = self.active
        if slot_id not in self._descriptors:
            raise InvalidSlotError(slot_id)
        if slot_id not in self._last_rows:
            raise InvalidSlotError(slot_id, reason='has not been executed')
        return self._last_rows[slot_id]

    @property
    def history(self) -> Tuple[ExecutionRecord, ...]:
        return tuple(self._history)
