"""MongoDB persistence layer.

This module provides:
- Client lifecycle management and index creation
- Record models and identifier helpers
- Repository classes implementing the store interfaces
"""

from restaurant_reviews.database.connection import (
    check_database_health,
    close_database_client,
    ensure_indexes,
    get_database,
    init_database_client,
)
from restaurant_reviews.database.exceptions import DatabaseError, DuplicateRecordError


__all__ = [
    "DatabaseError",
    "DuplicateRecordError",
    "check_database_health",
    "close_database_client",
    "ensure_indexes",
    "get_database",
    "init_database_client",
]
