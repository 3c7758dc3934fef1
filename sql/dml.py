"""
===========================================
Data Manipulation Language (DML) Utilities.
===========================================

This module renders INSERT, UPDATE and DELETE descriptors into SQL with
named placeholders. Identifier quoting and the shared clauses (WHERE,
ORDER BY, LIMIT) come from sql.query_builder.

Functions:
- insert_builder: INSERT INTO <table> (<fields>) VALUES (:<f1>, :<f2>, ...)
- update_builder: UPDATE <table> SET <field> = :<placeholder>, ... <where> <order> <limit>
- delete_builder: DELETE FROM <table> <where> <order> <limit>
- render_statement: Dispatch on the descriptor's operation

Usage:
    from sql.dml import render_statement

    sql = render_statement(descriptor, prefix='adopts_')
"""

from core.exceptions import MalformedClauseError
from sql.descriptor import Operation, QueryDescriptor
from sql.fields import placeholder_name
from sql.query_builder import (
    assemble,
    identifier_list_builder,
    limit_builder,
    order_by_builder,
    prepare_identifier,
    select_builder,
    where_builder,
)


def _check_assignments(descriptor: QueryDescriptor) -> None:
    if not descriptor.fields:
        raise MalformedClauseError(f"{descriptor.operation.value.upper()} needs at least one field")
    if len(descriptor.fields) != len(descriptor.data):
        raise MalformedClauseError(
            f"{len(descriptor.fields)} field(s) but {len(descriptor.data)} value(s)"
        )


def insert_builder(descriptor: QueryDescriptor, prefix: str = '') -> str:
    """
    Generate an INSERT statement.

    The column list is rendered without the table prefix; placeholders are
    the field names with dots replaced by underscores.

    Args:
        descriptor: Insert descriptor
        prefix: Table prefix (applied to the table name only)

    Returns:
        SQL INSERT statement
    """
    _check_assignments(descriptor)

    column_list = identifier_list_builder(descriptor.fields, add_prefix=False)
    placeholder_list = ', '.join(f":{placeholder_name(field)}" for field in descriptor.fields)

    return (
        f"INSERT INTO {prepare_identifier(descriptor.table, prefix)} "
        f"({column_list}) VALUES ({placeholder_list})"
    )


def update_builder(descriptor: QueryDescriptor, prefix: str = '') -> str:
    """
    Generate an UPDATE statement.

    Args:
        descriptor: Update descriptor (fields are already table-qualified)
        prefix: Table prefix

    Returns:
        SQL UPDATE statement
    """
    _check_assignments(descriptor)

    set_clause = ', '.join(
        f"{prepare_identifier(field, prefix)} = :{placeholder_name(field)}"
        for field in descriptor.fields
    )

    return assemble([
        f"UPDATE {prepare_identifier(descriptor.table, prefix)} SET {set_clause}",
        where_builder(descriptor.where, prefix),
        order_by_builder(descriptor.sort, prefix),
        limit_builder(descriptor.limit),
    ])


def delete_builder(descriptor: QueryDescriptor, prefix: str = '') -> str:
    """Generate a DELETE statement."""
    return assemble([
        f"DELETE FROM {prepare_identifier(descriptor.table, prefix)}",
        where_builder(descriptor.where, prefix),
        order_by_builder(descriptor.sort, prefix),
        limit_builder(descriptor.limit),
    ])


STATEMENT_BUILDERS = {
    Operation.SELECT: select_builder,
    Operation.INSERT: insert_builder,
    Operation.UPDATE: update_builder,
    Operation.DELETE: delete_builder,
}


def render_statement(descriptor: QueryDescriptor, prefix: str = '') -> str:
    """
    Render a descriptor with the builder matching its operation.

    Raises:
        ValueError: If the descriptor has no operation
    """
    if descriptor.operation is None:
        raise ValueError("Descriptor has no operation to render")
    return STATEMENT_BUILDERS[descriptor.operation](descriptor, prefix)
