"""
Core Database Components

This package provides reusable database components for HireLink:
- models: Abstract base classes with timestamps and version counters
- exceptions: Errors raised when an optimistic lock is lost
"""

from core.db.exceptions import ConcurrentModificationError

__all__ = [
    'ConcurrentModificationError',
]
