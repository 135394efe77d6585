"""Shared error types"""


class PersistenceError(Exception):
    """The backing store rejected or failed a read/write.

    Raised after the session has been rolled back; the caller's in-memory
    objects are left as they were so the operation can be retried.
    """

    def __init__(self, operation: str, reason: str):
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to {operation}: {reason}")
