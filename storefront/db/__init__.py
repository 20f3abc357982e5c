# Database Connection and Base Models

from storefront.db.base import Base
from storefront.db.session import get_async_engine, get_async_session_maker

__all__ = ["Base", "get_async_engine", "get_async_session_maker"]
