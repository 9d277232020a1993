"""Database access: asyncpg pool, data provider, query cache and data context."""

from shopadmin.database.connection import (
    check_database_health,
    close_database_pool,
    get_database_pool,
    init_database_pool,
)
from shopadmin.database.context import DataContext
from shopadmin.database.providers import (
    DataProvider,
    DataProviderError,
    PostgresDataProvider,
)
from shopadmin.database.query_cache import QueryCache


__all__ = [
    "DataContext",
    "DataProvider",
    "DataProviderError",
    "PostgresDataProvider",
    "QueryCache",
    "check_database_health",
    "close_database_pool",
    "get_database_pool",
    "init_database_pool",
]
