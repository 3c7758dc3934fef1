"""
===================================================
Core infrastructure package for the query builder.
===================================================

This package provides centralized configuration management, logging
infrastructure and the exception hierarchy used throughout the project.

Modules:
    config: Configuration management from environment variables
    logger: Centralized logging configuration and utilities
    exceptions: Error kinds raised by the builder

Example:
    >>> from core.config import config
    >>> from core.logger import get_logger
    >>>
    >>> logger = get_logger(__name__)
    >>> logger.info(f"Using table prefix {config.table_prefix!r}")
"""

__version__ = "0.1.0"
__all__ = [
    'get_logger', 'setup_logging', 'get_module_logger', 'config', 'Config',
    'QueryBuilderError', 'InvalidSlotError', 'MalformedClauseError',
    'OperationNotSetError', 'QueryExecutionError'
]

from core.config import Config, config
from core.exceptions import (
    InvalidSlotError,
    MalformedClauseError,
    OperationNotSetError,
    QueryBuilderError,
    QueryExecutionError,
)
from core.logger import get_logger, get_module_logger, setup_logging
