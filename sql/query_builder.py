"""
============================
SQL Query Builder Utilities.
============================

This module provides the low-level building blocks that render a query
descriptor into SQL. All builders follow the _builder naming convention and
are pure functions: rendering the same descriptor twice yields byte-identical
SQL and never mutates the descriptor.

Identifier Rendering:
- prepare_identifier: Backtick-quote a (dotted) identifier, optionally table-prefixed
- identifier_list_builder: Render a comma-separated identifier list

Clause Builders:
- join_builder: JOIN clauses in call order
- where_builder / having_builder: Condition clauses with named placeholders
- group_by_builder: GROUP BY clause
- order_by_builder: ORDER BY clause
- limit_builder: LIMIT clause ('LIMIT <offset>, <count>' when an offset is set)

Statement Builders:
- select_builder: Full SELECT statement
- (INSERT/UPDATE/DELETE live in sql.dml)

Usage:
    from sql.query_builder import prepare_identifier, select_builder

    prepare_identifier('users.name', prefix='adopts_')
    # '`adopts_users`.`name`'

    sql = select_builder(descriptor, prefix='adopts_')
"""

from typing import Iterable, List, Optional, Sequence

from core.exceptions import MalformedClauseError
from sql.descriptor import WILDCARD, Condition, Join, Limit, QueryDescriptor, Sort
from sql.fields import placeholder_name


def assemble(parts: Iterable[str]) -> str:
    """Join SQL fragments with single spaces, skipping empty ones."""
    return ' '.join(part for part in parts if part)


def _quote_segment(segment: str) -> str:
    if segment == WILDCARD:
        return WILDCARD
    return '`' + segment.replace('`', '``') + '`'


def prepare_identifier(identifier: str, prefix: str = '', add_prefix: bool = True) -> str:
    """
    Render an identifier for the query.

    The identifier is split on '.', each segment is quoted with backticks and
    the segments are rejoined with '.'. When add_prefix is set the table
    prefix is inserted before the first segment.

    Args:
        identifier: Table or field name, optionally dotted ('table.field')
        prefix: Table prefix string
        add_prefix: Whether to insert the prefix before the first segment

    Returns:
        Quoted identifier, e.g. '`adopts_users`.`id`'
    """
    segments = identifier.strip().split('.')
    if add_prefix and prefix:
        segments[0] = prefix + segments[0]
    return '.'.join(_quote_segment(segment) for segment in segments)


def identifier_list_builder(
    identifiers: Sequence[str],
    prefix: str = '',
    add_prefix: bool = True
) -> str:
    """Render several identifiers as a comma-separated list."""
    return ', '.join(prepare_identifier(identifier, prefix, add_prefix) for identifier in identifiers)


def join_builder(joins: Sequence[Join], prefix: str = '') -> str:
    """
    Build the JOIN clauses.

    Args:
        joins: Join entries in call order

    Returns:
        Space-separated '<TYPE> JOIN <table> ON <left> = <right>' clauses
    """
    clauses = []
    for join in joins:
        clauses.append(
            f"{join.join_type} JOIN {prepare_identifier(join.table, prefix)}"
            f" ON {prepare_identifier(join.left, prefix)} = {prepare_identifier(join.right, prefix)}"
        )
    return ' '.join(clauses)


def _condition_builder(conditions: Sequence[Condition], clause: str, prefix: str) -> str:
    if not conditions:
        return ''

    parts: List[str] = [clause.upper()]
    for index, condition in enumerate(conditions):
        # The first entry never carries a connective
        if index:
            parts.append(condition.logic)
        parts.append(prepare_identifier(condition.field, prefix))
        if condition.is_null:
            parts.append('IS NULL')
        else:
            parts.append(f"= :{placeholder_name(condition.field, clause)}")
    return ' '.join(parts)


def where_builder(conditions: Sequence[Condition], prefix: str = '') -> str:
    """Build the WHERE clause, or '' when there are no conditions."""
    return _condition_builder(conditions, 'where', prefix)


def having_builder(conditions: Sequence[Condition], prefix: str = '') -> str:
    """Build the HAVING clause, or '' when there are no conditions."""
    return _condition_builder(conditions, 'having', prefix)


def group_by_builder(group: Sequence[str], prefix: str = '') -> str:
    if not group:
        return ''
    return f"GROUP BY {identifier_list_builder(group, prefix)}"


def order_by_builder(sort: Optional[Sort], prefix: str = '') -> str:
    """
    Build the ORDER BY clause.

    Raises:
        MalformedClauseError: If the fields and directions differ in length
    """
    if sort is None:
        return ''
    if len(sort.fields) != len(sort.directions):
        raise MalformedClauseError(
            f"ORDER BY has {len(sort.fields)} field(s) but {len(sort.directions)} direction(s)"
        )

    order_clause = ', '.join(
        f"{prepare_identifier(field_name, prefix)} {direction}"
        for field_name, direction in sort.pairs()
    )
    return f"ORDER BY {order_clause}"


def limit_builder(limit: Optional[Limit]) -> str:
    if limit is None:
        return ''
    if limit.offset is not None:
        return f"LIMIT {limit.offset}, {limit.count}"
    return f"LIMIT {limit.count}"


def select_builder(descriptor: QueryDescriptor, prefix: str = '') -> str:
    """
    Build a SELECT statement from a descriptor.

    Clause order: fields, FROM, joins, WHERE, GROUP BY, HAVING, ORDER BY, LIMIT.

    Args:
        descriptor: Select descriptor
        prefix: Table prefix

    Returns:
        SQL SELECT statement
    """
    fields_clause = (
        WILDCARD if descriptor.is_wildcard
        else identifier_list_builder(descriptor.fields, prefix)
    )

    return assemble([
        f"SELECT {fields_clause} FROM {prepare_identifier(descriptor.table, prefix)}",
        join_builder(descriptor.joins, prefix),
        where_builder(descriptor.where, prefix),
        group_by_builder(descriptor.group, prefix),
        having_builder(descriptor.having, prefix),
        order_by_builder(descriptor.sort, prefix),
        limit_builder(descriptor.limit),
    ])
