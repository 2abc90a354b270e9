"""
Core - Shared Database Infrastructure for HireLink

This package provides foundational database components:
- Abstract base models with UUIDs, timestamps and optimistic locking
- Concurrency exceptions raised by versioned writes
"""
