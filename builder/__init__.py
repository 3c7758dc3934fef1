"""
==========================
Fluent query builder package.
==========================

Stateful, chainable query construction on top of the pure renderers in the
sql package.

Modules:
    slots: Query slot store and execution record
    database: Database, the chainable builder bound to a connection

Example:
    >>> from builder import Database
    >>> db = Database(connection, prefix='adopts_')
    >>> db.select('id, name', 'users').where('users.id', 3).run()
"""

__version__ = "0.1.0"
__all__ = ['Database', 'QuerySlotStore', 'ExecutionRecord']

from .database import Database
from .slots import ExecutionRecord, QuerySlotStore
