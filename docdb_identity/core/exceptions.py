"""
Exceptions raised by the identity store.

Driver errors from pymongo are not wrapped; they reach the caller unchanged.
"""


class IdentityStoreError(Exception):
    """Base class for identity store errors."""


class InvalidArgumentError(IdentityStoreError, ValueError):
    """A required argument was missing."""
    
    def __init__(self, argument: str):
        self.argument = argument
        super().__init__(f"Argument '{argument}' must not be None")


class InvalidOperationError(IdentityStoreError, RuntimeError):
    """The operation is not valid for the current state of the record or store."""


class ObjectDisposedError(InvalidOperationError):
    """The store was used after it was disposed."""
    
    def __init__(self, object_name: str):
        self.object_name = object_name
        super().__init__(f"Cannot access a disposed object: {object_name}")
