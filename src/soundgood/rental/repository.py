from datetime import date
from typing import List, Optional

from psycopg.rows import class_row

from soundgood import db
from soundgood.models import RentalAgreement

_SELECT_AGREEMENT = """
    SELECT rental_agreement_id,
           rental_instrument_id AS instrument_id,
           student_id,
           date_rented,
           date_returned
    FROM rental_agreement
"""


class RentalRepository:
    """
    Repository for rental agreement data access.
    Encapsulates all SQL and queries for the rental_agreement table.
    """

    def get_active_for_student(self, student_id: int, exclusive: bool = False) -> List[RentalAgreement]:
        """Get the student's unreturned agreements, optionally locking them."""
        query = _SELECT_AGREEMENT + """
            WHERE student_id = %s AND date_returned IS NULL
            ORDER BY date_rented, rental_agreement_id
        """
        if exclusive:
            query += " FOR UPDATE"
        return db.fetch_all(query, (student_id,), row_factory=class_row(RentalAgreement))

    def get_active_for_instrument(self, instrument_id: int, exclusive: bool = False) -> Optional[RentalAgreement]:
        """Get the instrument's unreturned agreement, if any."""
        query = _SELECT_AGREEMENT + " WHERE rental_instrument_id = %s AND date_returned IS NULL"
        if exclusive:
            query += " FOR UPDATE"
        return db.fetch_one(query, (instrument_id,), row_factory=class_row(RentalAgreement))

    def create(
        self,
        instrument_id: int,
        student_id: int,
        date_rented: date,
        date_returned: date = None,
    ) -> RentalAgreement:
        """Create a new rental agreement."""
        return db.fetch_one(
            """
            INSERT INTO rental_agreement (rental_instrument_id, student_id, date_rented, date_returned)
            VALUES (%s, %s, %s, %s)
            RETURNING rental_agreement_id,
                      rental_instrument_id AS instrument_id,
                      student_id,
                      date_rented,
                      date_returned
            """,
            (instrument_id, student_id, date_rented, date_returned),
            row_factory=class_row(RentalAgreement),
        )

    def mark_returned(self, rental_agreement_id: int, date_returned: date) -> int:
        """
        Set the return date of an active agreement.

        A return date that is already set is never overwritten; the row
        count is 0 in that case.
        """
        return db.execute(
            """
            UPDATE rental_agreement SET date_returned = %s
            WHERE rental_agreement_id = %s AND date_returned IS NULL
            """,
            (date_returned, rental_agreement_id),
        )
