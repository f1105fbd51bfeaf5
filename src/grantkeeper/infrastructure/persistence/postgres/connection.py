"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

APPLICATION_NAME = "grantkeeper"


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool for the grant and group stores.

    Created with open=False; PoolLifespanMiddleware opens it on ASGI startup.
    Connections are checked before being handed out so a restarted database
    does not surface as a failed access check.
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        name=APPLICATION_NAME,
        kwargs={"application_name": APPLICATION_NAME},
        check=AsyncConnectionPool.check_connection,
        open=False,
    )
