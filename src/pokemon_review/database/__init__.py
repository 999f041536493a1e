from .base import Base, INT32_MIN, INT32_MAX, fits_integer_column
from .session import get_engine, get_session_maker, get_async_session, create_all

__all__ = ["Base", "INT32_MIN", "INT32_MAX", "fits_integer_column", "get_engine", "get_session_maker", "get_async_session", "create_all"]
