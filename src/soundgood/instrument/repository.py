from decimal import Decimal
from typing import List, Optional

from psycopg.rows import class_row

from soundgood import db
from soundgood.models import Instrument

_SELECT_INSTRUMENT = """
    SELECT ri.rental_instrument_id AS instrument_id,
           ri.instrument AS instrument_type,
           ri.brand,
           ri.category,
           f.fee
    FROM rental_instrument ri
    LEFT JOIN instrument_fee f USING (rental_instrument_id)
"""

_NOT_RENTED = """
    NOT EXISTS (
        SELECT 1 FROM rental_agreement ra
        WHERE ra.rental_instrument_id = ri.rental_instrument_id
          AND ra.date_returned IS NULL
    )
"""


class InstrumentRepository:
    """
    Repository for rental instrument data access.
    Encapsulates all SQL and queries for the rental_instrument and
    instrument_fee tables.
    """

    def get_by_id(self, instrument_id: int, exclusive: bool = False) -> Optional[Instrument]:
        """
        Get instrument by ID.

        With exclusive=True the instrument row stays locked until the
        enclosing transaction ends. The fee row is on the nullable side of
        the join and is never locked.
        """
        query = _SELECT_INSTRUMENT + " WHERE ri.rental_instrument_id = %s"
        if exclusive:
            query += " FOR UPDATE OF ri"
        return db.fetch_one(query, (instrument_id,), row_factory=class_row(Instrument))

    def list(self, instrument_type: str = None, available_only: bool = True) -> List[Instrument]:
        """
        List instruments, optionally filtered by type (case-insensitive).

        By default only instruments without an unreturned agreement are listed.
        """
        conditions = []
        params = []

        if instrument_type is not None:
            conditions.append("lower(ri.instrument) = lower(%s)")
            params.append(instrument_type)
        if available_only:
            conditions.append(_NOT_RENTED)

        query = _SELECT_INSTRUMENT
        if conditions:
            query += " WHERE " + " AND ".join(conditions)
        query += " ORDER BY ri.instrument, ri.rental_instrument_id"

        return db.fetch_all(query, tuple(params), row_factory=class_row(Instrument))

    def create(
        self,
        instrument_type: str,
        brand: str = None,
        category: str = None,
        fee: Decimal = None,
    ) -> Instrument:
        """Create a new instrument, with its fee when one is given."""
        row = db.fetch_one(
            """
            INSERT INTO rental_instrument (instrument, brand, category)
            VALUES (%s, %s, %s)
            RETURNING rental_instrument_id
            """,
            (instrument_type, brand, category),
        )
        instrument_id = row["rental_instrument_id"]
        if fee is not None:
            db.execute(
                "INSERT INTO instrument_fee (rental_instrument_id, fee) VALUES (%s, %s)",
                (instrument_id, fee),
            )
        return self.get_by_id(instrument_id)
