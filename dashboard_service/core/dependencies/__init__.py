"""FastAPI dependencies for route handlers.

Re-exports the dependencies features use so routers import from one place:

    from dashboard_service.core.dependencies import DBSessionDep, SessionFactoryDep
"""

from .database import DBSessionDep, SessionFactoryDep, get_db_session, get_session_factory
from .pagination import PaginationSettingsDep, get_pagination_config

__all__ = [
    "DBSessionDep",
    "PaginationSettingsDep",
    "SessionFactoryDep",
    "get_db_session",
    "get_pagination_config",
    "get_session_factory",
]
