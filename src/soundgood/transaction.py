"""
Business transactions.

Every service operation runs inside business_transaction(). The block
either completes and commits, or raises and is rolled back before the
exception leaves this module, so a caller never observes an open
transaction or a held row lock:

    Idle -> LocksAcquired -> Decided(admit | reject) -> Committed | RolledBack

Store failures are translated into the PersistenceError family with the
psycopg error chained as __cause__. Domain failures (RejectedError and the
rest of the SoundgoodError family) pass through unchanged.
"""

import logging
from contextlib import contextmanager

import psycopg
from psycopg import errors as pg_errors

from soundgood import db
from soundgood.errors import LockTimeout, PersistenceError, RejectedError, SoundgoodError

logger = logging.getLogger(__name__)


@contextmanager
def business_transaction(operation: str, failure_msg: str, **context):
    """
    Run the enclosed block as one atomic business transaction.

    Args:
        operation: Name of the service operation, for logging
        failure_msg: Message for the PersistenceError raised on store failure
        **context: Identifiers logged with the outcome (acct_no, instrument_id, ...)
    """
    extra = {"operation": operation, **context}
    try:
        with db.transaction() as conn:
            yield conn
    except RejectedError as e:
        logger.info("Rolled back: %s", e.reason, extra=extra)
        raise
    except SoundgoodError:
        logger.warning("Rolled back: %s", failure_msg, extra=extra)
        raise
    except pg_errors.LockNotAvailable as e:
        logger.error("Rolled back on lock timeout: %s", failure_msg, extra=extra, exc_info=True)
        raise LockTimeout(f"{failure_msg}: timed out waiting for a row lock") from e
    except psycopg.Error as e:
        logger.error("Rolled back on store failure: %s", failure_msg, extra=extra, exc_info=True)
        raise PersistenceError(failure_msg) from e
    logger.info("Committed", extra=extra)
