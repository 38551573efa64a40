"""
Failure taxonomy shared by the services and the outer shells.

ValidationError is raised before any transaction is opened. RejectedError
and every PersistenceError are raised only after the business transaction
has been rolled back.
"""


class SoundgoodError(Exception):
    """Base class for every failure surfaced by a service operation."""


class ValidationError(SoundgoodError, ValueError):
    """Malformed or missing input."""


class RejectedError(SoundgoodError):
    """A domain rule declined the operation."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class PersistenceError(SoundgoodError):
    """The store failed. The underlying error is chained as __cause__."""


class LockTimeout(PersistenceError):
    """A row lock could not be acquired within the configured lock timeout."""


class NotFoundError(PersistenceError):
    """An operation that requires an existing row affected none."""
