"""
Core module - Exceptions and logging setup.
"""
from docdb_identity.core.exceptions import (
    IdentityStoreError,
    InvalidArgumentError,
    InvalidOperationError,
    ObjectDisposedError,
)
from docdb_identity.core.log import configure_logging

__all__ = [
    "IdentityStoreError",
    "InvalidArgumentError",
    "InvalidOperationError",
    "ObjectDisposedError",
    "configure_logging",
]
