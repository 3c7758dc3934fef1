"""
====================================================
SQL rendering package for the fluent query builder.
====================================================

This package turns query descriptors into parameterized SQL. Everything here
is a pure function of its inputs; the stateful, chainable API lives in the
builder package.

The package follows a clear organization:
    - descriptor.py: Query descriptor data model (Operation, Join, Condition, Sort, Limit)
    - fields.py: Field-argument variants, validation and placeholder naming
    - query_builder.py: Identifier quoting, clause builders and SELECT (_builder suffix)
    - dml.py: INSERT/UPDATE/DELETE builders and operation dispatch
    - bindings.py: Placeholder -> value bindings matching the rendered SQL

Example:
    >>> from sql.descriptor import Operation, QueryDescriptor
    >>> from sql.dml import render_statement
    >>> from sql.bindings import collect_bindings
    >>>
    >>> descriptor = QueryDescriptor(operation=Operation.DELETE, table='users')
    >>> render_statement(descriptor, prefix='adopts_')
    'DELETE FROM `adopts_users`'
"""

__version__ = "1.0.0"
__all__ = [
    # Data model
    'Operation', 'QueryDescriptor', 'Join', 'Condition', 'Sort', 'Limit',
    # Field specifications
    'DelimitedString', 'FieldList', 'KeyedDirections', 'to_field_spec',
    # Rendering
    'prepare_identifier', 'select_builder', 'insert_builder', 'update_builder',
    'delete_builder', 'render_statement',
    # Binding
    'collect_bindings', 'bind_statement',
]

from .bindings import bind_statement, collect_bindings
from .descriptor import Condition, Join, Limit, Operation, QueryDescriptor, Sort
from .dml import delete_builder, insert_builder, render_statement, update_builder
from .fields import DelimitedString, FieldList, KeyedDirections, to_field_spec
from .query_builder import prepare_identifier, select_builder
