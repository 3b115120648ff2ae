"""
Module: storage

Purpose:
    Injected record storage for the roster and marks. The grading engine
    never imports this package; controllers pass it snapshots.

Key Classes:
    - RecordStore: Abstract interface
    - InMemoryStore: Dict-backed backend
    - JsonFileStore: JSON file backend with file locking
    - StudentFilter: Roster filter
"""

from .base import DuplicateRollError, RecordStore, StoreError, StudentFilter
from .memory import InMemoryStore
from .json_store import JsonFileStore

__all__ = [
    "RecordStore",
    "InMemoryStore",
    "JsonFileStore",
    "StudentFilter",
    "StoreError",
    "DuplicateRollError",
]
