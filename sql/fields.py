"""
==========================================
Field specifications and clause arguments.
==========================================

Builder methods accept field arguments in several shapes. They are converted
to one of three tagged variants at the API boundary and then normalized to a
plain list of trimmed field names:

- DelimitedString: 'a, b ,c' split on commas
- FieldList: an explicit sequence of names
- KeyedDirections: a field -> direction mapping (ORDER BY only uses the directions)

The module also validates the small vocabularies that are rendered verbatim
into SQL (connectives, sort directions, join types) and derives placeholder
names, rejecting anything that could not be rendered safely.

Usage:
    from sql.fields import to_field_spec, qualify, placeholder_name

    fields = to_field_spec('id, name').fields()        # ['id', 'name']
    qualify('name', 'users')                           # 'users.name'
    placeholder_name('users.name', clause='where')     # 'where_users_name'
"""

import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple, Union

from core.exceptions import MalformedClauseError
from sql.descriptor import Sort

CONNECTIVES = ('AND', 'OR')
DIRECTIONS = ('ASC', 'DESC')
DEFAULT_DIRECTION = 'ASC'
JOIN_TYPES = (
    'INNER', 'CROSS', 'NATURAL',
    'LEFT', 'LEFT OUTER', 'RIGHT', 'RIGHT OUTER', 'FULL', 'FULL OUTER',
)

_PLACEHOLDER_RE = re.compile(r'^\w+$')


@dataclass(frozen=True)
class DelimitedString:
    """A comma-delimited list of field names."""

    value: str

    def fields(self) -> List[str]:
        return [part.strip() for part in self.value.split(',') if part.strip()]


@dataclass(frozen=True)
class FieldList:
    """An explicit sequence of field names."""

    values: Tuple[str, ...]

    def fields(self) -> List[str]:
        return [str(value).strip() for value in self.values if str(value).strip()]


@dataclass(frozen=True)
class KeyedDirections:
    """Field names paired with a sort direction each."""

    items: Tuple[Tuple[str, str], ...]

    @classmethod
    def from_mapping(cls, mapping: Mapping) -> 'KeyedDirections':
        return cls(tuple((str(key), str(value)) for key, value in mapping.items()))

    def fields(self) -> List[str]:
        return [key.strip() for key, _ in self.items]

    def directions(self) -> List[str]:
        return [value for _, value in self.items]


FieldSpec = Union[DelimitedString, FieldList, KeyedDirections]


def to_field_spec(raw: Any) -> FieldSpec:
    """
    Convert a loosely-typed field argument into a FieldSpec variant.

    Args:
        raw: A FieldSpec, a delimited string, a mapping or an iterable of names

    Returns:
        The matching FieldSpec variant

    Raises:
        TypeError: If the argument is none of the supported shapes
    """
    if isinstance(raw, (DelimitedString, FieldList, KeyedDirections)):
        return raw
    if isinstance(raw, str):
        return DelimitedString(raw)
    if isinstance(raw, Mapping):
        return KeyedDirections.from_mapping(raw)
    if isinstance(raw, Iterable):
        return FieldList(tuple(raw))
    raise TypeError(f"Unsupported field specification: {type(raw).__name__}")


def normalize_fields(raw: Any) -> List[str]:
    """Return the trimmed field names of any supported field argument."""
    return to_field_spec(raw).fields()


def qualify(field_name: str, table: str) -> str:
    """Prepend the table name to a field that has no qualifier."""
    field_name = field_name.strip()
    if '.' in field_name:
        return field_name
    return f"{table}.{field_name}"


def placeholder_name(field_name: str, clause: Optional[str] = None) -> str:
    """
    Derive the bind placeholder name for a field.

    Dots become underscores and WHERE/HAVING placeholders are prefixed with
    the clause name, e.g. 'users.id' in a WHERE clause -> 'where_users_id'.

    Args:
        field_name: Field name, optionally table-qualified
        clause: 'where' or 'having' for condition placeholders, None otherwise

    Returns:
        Placeholder name without the leading colon

    Raises:
        MalformedClauseError: If the result is not a plain word identifier
    """
    name = field_name.strip().replace('.', '_')
    if clause:
        name = f"{clause}_{name}"
    if not _PLACEHOLDER_RE.match(name):
        raise MalformedClauseError(
            f"Field {field_name!r} cannot be used as a bind placeholder"
        )
    return name


def normalize_connective(logic: str) -> str:
    connective = str(logic).strip().upper()
    if connective not in CONNECTIVES:
        raise MalformedClauseError(f"Unknown logic connective: {logic!r}")
    return connective


def normalize_direction(direction: str) -> str:
    normalized = str(direction).strip().upper()
    if normalized not in DIRECTIONS:
        raise MalformedClauseError(f"Unknown sort direction: {direction!r}")
    return normalized


def normalize_join_type(join_type: str) -> str:
    normalized = ' '.join(str(join_type).upper().split())
    if normalized not in JOIN_TYPES:
        raise MalformedClauseError(f"Unknown join type: {join_type!r}")
    return normalized


def parse_join_condition(condition: str) -> Tuple[str, str]:
    """
    Split a 'left=right' join condition into its two operands.

    Raises:
        MalformedClauseError: Unless the condition has exactly one '=' and
            two non-empty operands
    """
    parts = str(condition).split('=')
    if len(parts) != 2 or not all(part.strip() for part in parts):
        raise MalformedClauseError(
            f"Join condition must look like 'left=right', got {condition!r}"
        )
    return parts[0].strip(), parts[1].strip()


def build_sort(raw_fields: Any, order: Union[str, Sequence[str]] = DEFAULT_DIRECTION) -> Sort:
    """
    Build the ORDER BY specification from builder arguments.

    A mapping supplies one direction per field. Otherwise a single direction
    string applies to the first field and the remaining fields are padded
    with ASC; a sequence of directions must match the field count.

    Raises:
        MalformedClauseError: On an empty field list, a blank mapping key, a length
            mismatch or an unknown direction
    """
    spec = to_field_spec(raw_fields)
    fields = spec.fields()
    if not fields:
        raise MalformedClauseError("ORDER BY needs at least one field")

    if isinstance(spec, KeyedDirections):
        # Dropping a blank key would shift the remaining directions
        if not all(fields):
            raise MalformedClauseError("ORDER BY field names must not be blank")
        directions = spec.directions()
    elif isinstance(order, str):
        directions = [order] + [DEFAULT_DIRECTION] * (len(fields) - 1)
    else:
        directions = list(order)

    if len(directions) != len(fields):
        raise MalformedClauseError(
            f"ORDER BY has {len(fields)} field(s) but {len(directions)} direction(s)"
        )

    return Sort(
        fields=tuple(fields),
        directions=tuple(normalize_direction(direction) for direction in directions)
    )


def check_limit_value(value: Any, name: str) -> int:
    """Coerce a LIMIT count/offset (int or digit string) to a non-negative int."""
    if isinstance(value, bool) or not isinstance(value, (int, str)):
        raise MalformedClauseError(f"LIMIT {name} must be an integer, got {value!r}")
    try:
        number = int(value)
    except ValueError:
        raise MalformedClauseError(f"LIMIT {name} must be an integer, got {value!r}") from None
    if number < 0:
        raise MalformedClauseError(f"LIMIT {name} must not be negative, got {value!r}")
    return number
