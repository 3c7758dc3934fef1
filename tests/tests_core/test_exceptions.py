"""
Test suite for core.exceptions module.
"""

import pytest

from core.exceptions import (
    InvalidSlotError,
    MalformedClauseError,
    OperationNotSetError,
    QueryBuilderError,
    QueryExecutionError,
)


@pytest.mark.unit
@pytest.mark.parametrize('error', [
    InvalidSlotError(3),
    MalformedClauseError('bad'),
    OperationNotSetError(0),
    QueryExecutionError(1064, 'syntax error'),
])
def test_all_errors_share_base(error):
    assert isinstance(error, QueryBuilderError)


@pytest.mark.unit
def test_invalid_slot_error_is_lookup_error():
    error = InvalidSlotError(4, 'has not been executed')

    assert isinstance(error, LookupError)
    assert error.slot_id == 4
    assert str(error) == 'Query slot 4 has not been executed'


@pytest.mark.unit
def test_malformed_clause_error_is_value_error():
    with pytest.raises(ValueError):
        raise MalformedClauseError('Unknown join type')


@pytest.mark.unit
def test_query_execution_error_fields():
    error = QueryExecutionError(1064, 'syntax error', sql='SELECT')

    assert (error.code, error.message, error.sql) == (1064, 'syntax error', 'SELECT')
    assert str(error) == 'Database error 1064 - syntax error'


@pytest.mark.edge_case
def test_query_execution_error_without_code():
    assert str(QueryExecutionError(None, 'gone')) == 'Database error None - gone'
