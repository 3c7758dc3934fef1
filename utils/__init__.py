"""
==========================
Utility Functions Package.
==========================

Database connectivity helpers and the SQLAlchemy-backed connection
collaborator used by the query builder.

Modules:
    database_utils: Connection adapters, engine creation and availability checks
"""

__version__ = "1.0.0"
__all__ = [
    'DatabaseConnectionError',
    'SQLAlchemyConnection',
    'SQLAlchemyStatement',
    'check_database_available',
    'connect',
    'create_sqlalchemy_engine',
    'get_connection_string',
    'wait_for_database',
]

from .database_utils import (
    DatabaseConnectionError,
    SQLAlchemyConnection,
    SQLAlchemyStatement,
    check_database_available,
    connect,
    create_sqlalchemy_engine,
    get_connection_string,
    wait_for_database,
)
