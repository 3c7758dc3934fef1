"""
================================================
Fluent query builder bound to a database connection.
================================================

Database lets calling code assemble SELECT, INSERT, UPDATE and DELETE
statements through chained method calls, then executes them with named
parameter binding. Several queries can be built side by side in separate
query slots on the same connection handle.

Every builder method mutates the active slot's descriptor in place and
returns the same Database instance. It is not a value type: keep one
instance per unit of work and do not share it across threads without
external locking.

Example:
    >>> from builder.database import Database
    >>> from utils.database_utils import SQLAlchemyConnection, create_sqlalchemy_engine
    >>>
    >>> db = Database(SQLAlchemyConnection(create_sqlalchemy_engine()), prefix='adopts_')
    >>> rows = (db.select('id, name', 'users')
    ...           .where('users.active', 1)
    ...           .order_by({'users.name': 'DESC'})
    ...           .limit(10)
    ...           .run()
    ...           .fetchall())
    >>>
    >>> # Build a second query without disturbing the first
    >>> db.start_query().update('users', {'active': 0}).where('users.id', 7)
    >>> db.set_active(0)
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional, Sequence, Tuple, Union

from builder.slots import ExecutionRecord, QuerySlotStore
from core.config import config
from core.exceptions import MalformedClauseError, OperationNotSetError, QueryExecutionError
from sql.bindings import bind_statement, collect_bindings
from sql.descriptor import WILDCARD, Condition, Join, Limit, Operation, QueryDescriptor
from sql.dml import render_statement
from sql.fields import (
    DEFAULT_DIRECTION,
    build_sort,
    check_limit_value,
    normalize_connective,
    normalize_fields,
    normalize_join_type,
    parse_join_condition,
    placeholder_name,
    qualify,
)

logger = logging.getLogger(__name__)


class Database:
    """Chainable SQL builder with multiple query slots.

    Attributes:
        connection: Connection collaborator exposing prepare(sql)
        prefix: Table prefix inserted before the first segment of prefixed identifiers

    Example:
        >>> db = Database(connection, prefix='')
        >>> db.insert('users', {'name': 'ada', 'age': 36}).run()
        >>> db.get_total_rows()
        1
    """

    def __init__(self, connection: Any, prefix: Optional[str] = None):
        """Initialize the builder with slot 0 active.

        Args:
            connection: Object with prepare(sql) returning a prepared statement
            prefix: Table prefix; defaults to config.table_prefix
        """
        self.connection = connection
        self.prefix = config.table_prefix if prefix is None else prefix
        self._slots = QuerySlotStore()

    # ------------------------------------------------------------------
    # Query slots
    # ------------------------------------------------------------------

    @property
    def slots(self) -> QuerySlotStore:
        return self._slots

    @property
    def active_slot(self) -> int:
        return self._slots.active

    @property
    def history(self) -> Tuple[ExecutionRecord, ...]:
        return self._slots.history

    def start_query(self) -> 'Database':
        """Start a new query slot and make it the active one."""
        self._slots.start()
        return self

    def set_active(self, slot_id: int) -> 'Database':
        """Switch the active slot; an unknown id leaves the current slot active."""
        self._slots.set_active(slot_id)
        return self

    def get_total_rows(self, slot_id: Optional[int] = None) -> int:
        """
        Get the rows affected by a slot's most recent execution.

        Args:
            slot_id: Slot to look up; defaults to the active slot

        Raises:
            InvalidSlotError: If the slot never executed
        """
        return self._slots.total_rows(slot_id)

    @property
    def _query(self) -> QueryDescriptor:
        return self._slots.active_descriptor

    # ------------------------------------------------------------------
    # Verbs
    # ------------------------------------------------------------------

    def select(self, fields: Any = WILDCARD, table: Optional[str] = None) -> 'Database':
        """
        Select rows from a table.

        Args:
            fields: '*' or empty for every column, a comma-delimited string,
                a sequence of names or a FieldSpec. Unqualified fields are
                prefixed with the table name.
            table: Table name

        Returns:
            self
        """
        table = self._require_table(table, Operation.SELECT)

        if fields is None or fields == WILDCARD:
            names = []
        else:
            names = normalize_fields(fields)
        if names == [WILDCARD]:
            names = []

        query = self._query
        query.operation = Operation.SELECT
        query.fields = [qualify(name, table) for name in names] or [WILDCARD]
        query.table = table
        return self

    def insert(self, table: str, data: Mapping) -> 'Database':
        """
        Insert a new row into a table.

        Args:
            table: Table name
            data: Mapping whose keys are the table's fields

        Returns:
            self
        """
        table = self._require_table(table, Operation.INSERT)
        fields, values = self._split_data(data, Operation.INSERT)

        query = self._query
        query.operation = Operation.INSERT
        query.fields = fields
        query.data = values
        query.table = table
        return self

    def update(self, table: str, data: Mapping) -> 'Database':
        """
        Update rows of a table.

        Unqualified fields are prefixed with the table name, so the SET
        placeholders read like ':users_name'.

        Args:
            table: Table name
            data: Mapping whose keys are the table's fields

        Returns:
            self
        """
        table = self._require_table(table, Operation.UPDATE)
        fields, values = self._split_data(data, Operation.UPDATE)
        fields = [qualify(name, table) for name in fields]
        self._check_unique_placeholders(fields, Operation.UPDATE)

        query = self._query
        query.operation = Operation.UPDATE
        query.fields = fields
        query.data = values
        query.table = table
        return self

    def delete(self, table: str) -> 'Database':
        """Delete rows from a table."""
        table = self._require_table(table, Operation.DELETE)

        query = self._query
        query.operation = Operation.DELETE
        query.table = table
        return self

    # ------------------------------------------------------------------
    # Clauses
    # ------------------------------------------------------------------

    def join(self, table: str, condition: str, join_type: str = 'INNER') -> 'Database':
        """
        Join a table.

        Args:
            table: Table to join
            condition: 'leftField=rightField'
            join_type: INNER, LEFT, RIGHT, ...

        Returns:
            self
        """
        left, right = parse_join_condition(condition)
        self._query.joins.append(Join(
            table=self._require_table(table, 'JOIN'),
            left=left,
            right=right,
            join_type=normalize_join_type(join_type)
        ))
        return self

    def where(self, field: Union[str, Mapping], value: Any = None, logic: str = 'AND') -> 'Database':
        """
        Add a WHERE constraint.

        Args:
            field: Field name, or a field -> value mapping for several constraints
            value: Value to compare with; None renders IS NULL
            logic: Connective joining this constraint to the previous one

        Returns:
            self
        """
        return self._add_conditions('where', field, value, logic)

    def having(self, field: Union[str, Mapping], value: Any = None, logic: str = 'AND') -> 'Database':
        """Add a HAVING constraint; same arguments as where()."""
        return self._add_conditions('having', field, value, logic)

    def order_by(self, fields: Any, order: Union[str, Sequence[str]] = DEFAULT_DIRECTION) -> 'Database':
        """
        Order the result.

        Args:
            fields: Delimited string, sequence, or field -> direction mapping
            order: One direction (applied to the first field, the rest ASC)
                or a sequence with one direction per field

        Returns:
            self
        """
        self._query.sort = build_sort(fields, order)
        return self

    def group_by(self, fields: Any) -> 'Database':
        """Group the result by a delimited string or sequence of fields."""
        names = normalize_fields(fields)
        if not names:
            raise MalformedClauseError("GROUP BY needs at least one field")
        self._query.group = names
        return self

    def limit(self, count: int, offset: Optional[int] = None) -> 'Database':
        """Limit the rows returned, optionally skipping offset rows first."""
        self._query.limit = Limit(
            count=check_limit_value(count, 'count'),
            offset=None if offset is None else check_limit_value(offset, 'offset')
        )
        return self

    # ------------------------------------------------------------------
    # Rendering and execution
    # ------------------------------------------------------------------

    def compile(self) -> Tuple[str, Dict[str, Any]]:
        """
        Render the active query without executing it.

        Returns:
            Tuple of (sql, bindings) where bindings maps placeholder names to values

        Raises:
            OperationNotSetError: If no verb was called on the active slot
        """
        query = self._query
        if query.operation is None:
            raise OperationNotSetError(self._slots.active)

        sql = render_statement(query, self.prefix)
        return sql, collect_bindings(query)

    def run(self, keep_query: bool = False) -> Any:
        """
        Execute the active query.

        The rows-affected count is recorded against the active slot. The
        slot's descriptor is cleared afterwards unless keep_query is set; a
        failed execution leaves it untouched.

        Args:
            keep_query: Keep the descriptor for re-execution

        Returns:
            The executed statement handle

        Raises:
            OperationNotSetError: If no verb was called on the active slot
            QueryExecutionError: If the statement fails to execute
        """
        slot_id = self._slots.active
        operation = self._query.operation
        sql, bindings = self.compile()
        logger.debug(f"Slot {slot_id} SQL: {sql} | params: {list(bindings)}")

        statement = self.connection.prepare(sql)
        bind_statement(statement, bindings)

        if not statement.execute():
            code, message = statement.error_info()
            logger.error(f"❌ {operation.value.upper()} in slot {slot_id} failed: {code} - {message}")
            raise QueryExecutionError(code, message, sql=sql)

        rows_affected = statement.rowcount
        self._slots.record(slot_id, operation, rows_affected)
        logger.info(f"✅ {operation.value.upper()} in slot {slot_id} affected {rows_affected} row(s)")

        if not keep_query:
            self._slots.reset(slot_id)

        return statement

    def close(self) -> None:
        """Release the underlying connection collaborator."""
        close = getattr(self.connection, 'close', None)
        if close is not None:
            close()

    def __enter__(self) -> 'Database':
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _require_table(table: Optional[str], verb: Union[Operation, str]) -> str:
        name = verb.value.upper() if isinstance(verb, Operation) else verb
        if not isinstance(table, str) or not table.strip():
            raise MalformedClauseError(f"{name} needs a table name")
        return table.strip()

    @staticmethod
    def _check_unique_placeholders(fields, operation: Operation) -> None:
        seen = set()
        for name in fields:
            placeholder = placeholder_name(name)
            if placeholder in seen:
                raise MalformedClauseError(
                    f"{operation.value.upper()} binds placeholder :{placeholder} more than once"
                )
            seen.add(placeholder)

    def _split_data(self, data: Mapping, operation: Operation):
        if not isinstance(data, Mapping):
            raise TypeError(f"{operation.value} data must be a mapping, got {type(data).__name__}")
        if not data:
            raise MalformedClauseError(f"{operation.value.upper()} needs at least one field")

        fields = [str(key).strip() for key in data.keys()]
        self._check_unique_placeholders(fields, operation)
        return fields, list(data.values())

    def _add_conditions(self, clause: str, field: Union[str, Mapping], value: Any, logic: str) -> 'Database':
        connective = normalize_connective(logic)
        pairs = field.items() if isinstance(field, Mapping) else [(field, value)]

        conditions = self._query.conditions(clause)
        bound = {
            placeholder_name(condition.field, clause)
            for condition in conditions if not condition.is_null
        }

        new_conditions = []
        for name, condition_value in pairs:
            name = str(name).strip()
            if not name:
                raise MalformedClauseError(f"{clause.upper()} needs a field name")
            placeholder = placeholder_name(name, clause)
            if condition_value is not None:
                if placeholder in bound:
                    raise MalformedClauseError(
                        f"{clause.upper()} already binds :{placeholder}; "
                        f"use a distinct field spelling or a separate query"
                    )
                bound.add(placeholder)
            new_conditions.append(Condition(field=name, value=condition_value, logic=connective))

        # Nothing is appended unless every entry was valid
        conditions.extend(new_conditions)
        return self
