"""
Session cookie module.

Provides the cookie store for the target origin and the backends that
persist its snapshot between runs.
"""
from .protocols import CookieStorage
from .models import CookieRecord
from .json_session import JSONSession
from .memory_session import MemorySession
from .cookie_store import CookieStore

__all__ = [
    'CookieStorage',
    'CookieRecord',
    'JSONSession',
    'MemorySession',
    'CookieStore',
]
