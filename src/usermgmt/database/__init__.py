"""
Database module for the usermgmt backend
"""

from .connection import Database, to_async_url

__all__ = ["Database", "to_async_url"]
