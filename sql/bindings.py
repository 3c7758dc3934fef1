"""
=====================================
Placeholder bindings for descriptors.
=====================================

Walks a descriptor the same way the renderers do and produces the
placeholder -> value mapping for exactly the placeholders the rendered SQL
contains:

1. insert/update: every field/value pair under its dot-replaced field name
2. select/update/delete: every non-null WHERE value under 'where_<field>'
3. select: every non-null HAVING value under 'having_<field>'

Null-valued conditions render as IS NULL and are never bound.
"""

from collections import OrderedDict
from typing import Any, Dict

from core.exceptions import MalformedClauseError
from sql.descriptor import Operation, QueryDescriptor
from sql.fields import placeholder_name

# Which condition clauses each operation renders
CONDITION_CLAUSES = {
    Operation.SELECT: ('where', 'having'),
    Operation.INSERT: (),
    Operation.UPDATE: ('where',),
    Operation.DELETE: ('where',),
}


def collect_bindings(descriptor: QueryDescriptor) -> Dict[str, Any]:
    """
    Collect the bind values for a descriptor.

    Args:
        descriptor: Descriptor with an operation set

    Returns:
        Ordered mapping of placeholder name (without colon) to value

    Raises:
        MalformedClauseError: If two values would share one placeholder, e.g.
            a SET field qualified by a table named "where" and a WHERE
            condition on the same column
    """
    bindings: Dict[str, Any] = OrderedDict()

    def add(name: str, value: Any) -> None:
        if name in bindings:
            raise MalformedClauseError(
                f"{descriptor.operation.value.upper()} binds placeholder :{name} more than once"
            )
        bindings[name] = value

    if descriptor.operation in (Operation.INSERT, Operation.UPDATE):
        for field_name, value in descriptor.assignments():
            add(placeholder_name(field_name), value)

    for clause in CONDITION_CLAUSES.get(descriptor.operation, ()):
        for condition in descriptor.conditions(clause):
            if not condition.is_null:
                add(placeholder_name(condition.field, clause), condition.value)

    return bindings


def bind_statement(statement: Any, bindings: Dict[str, Any]) -> Any:
    """Attach every binding to a prepared statement and return the statement."""
    for name, value in bindings.items():
        statement.bind(name, value)
    return statement
