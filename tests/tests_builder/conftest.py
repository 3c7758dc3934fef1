"""
Shared fixtures and fake collaborators for builder tests.

Key fixtures:
- fake_connection: a connection recording every prepared statement.
- db: a Database with an empty prefix wired to fake_connection.
- prefixed_db: same, with the 'adopts_' prefix.
"""

import pytest

from builder.database import Database


class FakeStatement:
    """Mock prepared statement recording bindings."""

    def __init__(self, sql, succeed=True, rowcount=1, error=(None, None)):
        self.sql = sql
        self.succeed = succeed
        self.rowcount = rowcount
        self.error = error
        self.bound = {}
        self.executed = False

    def bind(self, name, value):
        self.bound[name] = value

    def execute(self):
        self.executed = True
        return self.succeed

    def error_info(self):
        return self.error


class FakeConnection:
    """Mock connection handing out FakeStatements.

    Set `fail_with` to a (code, message) tuple to make the next statements fail.
    """

    def __init__(self, rowcount=1):
        self.rowcount = rowcount
        self.fail_with = None
        self.statements = []
        self.closed = False

    def prepare(self, sql):
        if self.fail_with:
            statement = FakeStatement(sql, succeed=False, rowcount=-1, error=self.fail_with)
        else:
            statement = FakeStatement(sql, rowcount=self.rowcount)
        self.statements.append(statement)
        return statement

    def close(self):
        self.closed = True

    @property
    def last(self):
        return self.statements[-1]


@pytest.fixture
def fake_connection():
    """Provide a fresh fake connection."""
    return FakeConnection()


@pytest.fixture
def db(fake_connection):
    """Database with no table prefix."""
    return Database(fake_connection, prefix='')


@pytest.fixture
def prefixed_db(fake_connection):
    """Database using the default 'adopts_' prefix."""
    return Database(fake_connection, prefix='adopts_')
