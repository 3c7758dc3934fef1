"""
===================================================
Configuration management for the query builder.
===================================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration system covers:
- Database connection settings used to build SQLAlchemy engines
- The table prefix applied by the renderer to every prefixed identifier
- Logging level, optional log file and console colors

Example:
    >>> from core.config import config
    >>>
    >>> # Database connection
    >>> engine_url = config.get_connection_string()
    >>>
    >>> # Access individual settings
    >>> print(f"Prefix: {config.table_prefix}, Host: {config.db_host}")
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import quote_plus

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)

DEFAULT_TABLE_PREFIX = 'adopts_'


def _read_bool(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment ('1', 'true', 'yes', 'on')."""
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ('1', 'true', 'yes', 'on')


@dataclass
class DatabaseConfig:
    """Database configuration settings.

    Attributes:
        driver: SQLAlchemy driver name (e.g. 'mysql+pymysql', 'sqlite')
        host: Database server hostname or IP address
        port: Database server port number
        user: Database username
        password: Database password
        database: Database name
        table_prefix: String prepended to the first segment of prefixed identifiers
    """

    driver: str
    host: str
    port: int
    user: str
    password: str
    database: str
    table_prefix: str = DEFAULT_TABLE_PREFIX

    def get_connection_string(self) -> str:
        """Get a SQLAlchemy-compatible connection string.

        Returns:
            Connection string in '<driver>://user:password@host:port/database' form,
            with the password URL-encoded
        """
        return f"{self.driver}://{self.user}:{quote_plus(self.password)}@{self.host}:{self.port}/{self.database}"

    def get_connection_params(self) -> dict:
        """Get connection parameters as dictionary.

        Returns:
            Dictionary with keys: driver, host, port, user, password, database
        """
        return {
            'driver': self.driver,
            'host': self.host,
            'port': self.port,
            'user': self.user,
            'password': self.password,
            'database': self.database
        }


@dataclass
class LoggingConfig:
    """Logging configuration settings.

    Attributes:
        level: Logging level name (DEBUG/INFO/WARNING/ERROR/CRITICAL)
        log_file: Optional log file name
        use_colors: Whether console output uses ANSI colors
        query_level: Optional level for the builder and connection loggers
    """

    level: str = 'INFO'
    log_file: Optional[str] = None
    use_colors: bool = True
    query_level: Optional[str] = None


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        db: DatabaseConfig instance with database connection settings
        logging: LoggingConfig instance with logging settings

    Properties:
        db_driver: SQLAlchemy driver name
        db_host: Database server hostname
        db_port: Database server port
        db_user: Database username
        db_password: Database password
        db_name: Database name
        table_prefix: Table prefix used by the renderer
        log_level: Logging level name

    Example:
        >>> config = Config()
        >>> conn_str = config.get_connection_string()
        >>> print(f"Connecting to {config.db_host}:{config.db_port}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            driver=os.getenv('DB_DRIVER', 'mysql+pymysql'),
            host=os.getenv('DB_HOST', 'localhost'),
            port=int(os.getenv('DB_PORT', '3306')),
            user=os.getenv('DB_USER', 'root'),
            password=os.getenv('DB_PASSWORD', ''),
            database=os.getenv('DB_NAME', 'mysidia'),
            table_prefix=os.getenv('DB_TABLE_PREFIX', DEFAULT_TABLE_PREFIX)
        )

        self.logging = LoggingConfig(
            level=os.getenv('LOG_LEVEL', 'INFO'),
            log_file=os.getenv('LOG_FILE') or None,
            use_colors=_read_bool('LOG_COLORS', True),
            query_level=os.getenv('LOG_QUERY_LEVEL') or None
        )

    @property
    def db_driver(self) -> str:
        """Get SQLAlchemy driver name."""
        return self.db.driver

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_user(self) -> str:
        """Get database username."""
        return self.db.user

    @property
    def db_password(self) -> str:
        """Get database password."""
        return self.db.password

    @property
    def db_name(self) -> str:
        """Get database name."""
        return self.db.database

    @property
    def table_prefix(self) -> str:
        """Get the table prefix applied to prefixed identifiers."""
        return self.db.table_prefix

    @property
    def log_level(self) -> str:
        """Get the configured logging level name."""
        return self.logging.level

    def get_connection_string(self) -> str:
        """Get database connection string.

        Returns:
            SQLAlchemy-compatible connection string
        """
        return self.db.get_connection_string()

    def get_connection_params(self) -> dict:
        """Get database connection parameters.

        Returns:
            Dictionary with keys: driver, host, port, user, password, database
        """
        return self.db.get_connection_params()


# Global configuration instance
config = Config()
