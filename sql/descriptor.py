"""
=============================================
Query descriptor data model.
=============================================

A QueryDescriptor is the structured, pre-render representation of one SQL
statement under construction. The builder mutates descriptors in place; the
renderers in sql.query_builder and sql.dml only read them.

Classes:
- Operation: The statement verb (select, insert, update, delete)
- Join: One JOIN entry (table, left operand, right operand, join type)
- Condition: One WHERE/HAVING entry (field, value, connective)
- Sort: Parallel ORDER BY fields and directions
- Limit: LIMIT count and optional offset
- QueryDescriptor: Everything above for a single statement
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional, Tuple

WILDCARD = '*'


class Operation(str, Enum):
    """Statement verbs a descriptor can render."""

    SELECT = 'select'
    INSERT = 'insert'
    UPDATE = 'update'
    DELETE = 'delete'


@dataclass(frozen=True)
class Join:
    """A JOIN entry: `<join_type> JOIN <table> ON <left> = <right>`."""

    table: str
    left: str
    right: str
    join_type: str = 'INNER'


@dataclass(frozen=True)
class Condition:
    """A WHERE/HAVING entry. A value of None renders as an IS NULL predicate."""

    field: str
    value: Any = None
    logic: str = 'AND'

    @property
    def is_null(self) -> bool:
        return self.value is None


@dataclass(frozen=True)
class Sort:
    """ORDER BY fields and their directions, positionally aligned."""

    fields: Tuple[str, ...]
    directions: Tuple[str, ...]

    def pairs(self) -> List[Tuple[str, str]]:
        return list(zip(self.fields, self.directions))


@dataclass(frozen=True)
class Limit:
    count: int
    offset: Optional[int] = None


@dataclass
class QueryDescriptor:
    """Mutable description of a single statement held by a query slot.

    Attributes:
        operation: Statement verb, None until the first verb call
        table: Unprefixed table name
        fields: Selected columns (or the wildcard) / target columns for insert and update
        data: Values aligned with fields for insert and update
        joins: JOIN entries in call order
        where: WHERE conditions in call order
        having: HAVING conditions in call order
        sort: ORDER BY specification
        group: GROUP BY fields
        limit: LIMIT specification
    """

    operation: Optional[Operation] = None
    table: Optional[str] = None
    fields: List[str] = field(default_factory=list)
    data: List[Any] = field(default_factory=list)
    joins: List[Join] = field(default_factory=list)
    where: List[Condition] = field(default_factory=list)
    having: List[Condition] = field(default_factory=list)
    sort: Optional[Sort] = None
    group: List[str] = field(default_factory=list)
    limit: Optional[Limit] = None

    @property
    def is_wildcard(self) -> bool:
        """True when a select descriptor selects every column."""
        return not self.fields or self.fields == [WILDCARD]

    @property
    def is_empty(self) -> bool:
        return self == QueryDescriptor()

    def assignments(self) -> List[Tuple[str, Any]]:
        """Return the (field, value) pairs of an insert/update descriptor."""
        return list(zip(self.fields, self.data))

    def conditions(self, clause: str) -> List[Condition]:
        """Return the WHERE or HAVING conditions by clause name."""
        if clause == 'where':
            return self.where
        if clause == 'having':
            return self.having
        raise ValueError(f"Unknown condition clause: {clause!r}")
