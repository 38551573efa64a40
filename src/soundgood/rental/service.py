import logging
from datetime import date

from soundgood.decision import Rejection
from soundgood.errors import PersistenceError, RejectedError, ValidationError
from soundgood.instrument.repository import InstrumentRepository
from soundgood.models import RentalAgreement
from soundgood.rental import eligibility
from soundgood.rental.repository import RentalRepository
from soundgood.student.repository import StudentRepository
from soundgood.transaction import business_transaction

logger = logging.getLogger(__name__)


def _require_id(value, name: str, failure_msg: str) -> int:
    if value is None or isinstance(value, bool):
        raise ValidationError(f"{failure_msg}: {name} is required")
    # int() would truncate 1.9 to 1 and act on a different row.
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{failure_msg}: {name} must be an integer")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{failure_msg}: {name} must be an integer") from None


class RentalService:
    """Rents instruments to students and takes them back."""

    def __init__(self):
        self.repository = RentalRepository()
        self.instruments = InstrumentRepository()
        self.students = StudentRepository()

    def rent(self, instrument_id: int, student_id: int, today: date = None) -> RentalAgreement:
        """
        Rent an instrument to a student.

        Locks are always taken in the same order (student, the student's
        active agreements, instrument) so two rentals never deadlock on
        each other. Everything is re-read under those locks before deciding.
        """
        failure_msg = f"Could not rent instrument: {instrument_id}"
        instrument_id = _require_id(instrument_id, "instrument id", failure_msg)
        student_id = _require_id(student_id, "student id", failure_msg)

        with business_transaction(
            "rent", failure_msg, instrument_id=instrument_id, student_id=student_id
        ):
            student = self.students.get_by_id(student_id, exclusive=True)
            if student is None:
                raise RejectedError("student not found")
            student.add_rentals(self.repository.get_active_for_student(student_id, exclusive=True))

            instrument = self.instruments.get_by_id(instrument_id, exclusive=True)
            if instrument is None:
                raise RejectedError("instrument not found")
            current = self.repository.get_active_for_instrument(instrument_id)

            decision = eligibility.can_rent(student.active_rental_count, current is not None)
            if isinstance(decision, Rejection):
                raise RejectedError(decision.reason)

            agreement = eligibility.new_agreement(instrument_id, student_id, today)
            created = self.repository.create(
                agreement.instrument_id,
                agreement.student_id,
                agreement.date_rented,
                agreement.date_returned,
            )
            if created is None:
                raise PersistenceError(f"{failure_msg}: agreement was not stored")

        logger.info(
            "Rented instrument %s to student %s",
            instrument_id,
            student_id,
            extra={"instrument_id": instrument_id, "student_id": student_id},
        )
        return created

    def return_instrument(self, instrument_id: int, today: date = None) -> RentalAgreement:
        """End the instrument's active rental as of today."""
        failure_msg = f"Could not return instrument: {instrument_id}"
        instrument_id = _require_id(instrument_id, "instrument id", failure_msg)
        returned_on = today or date.today()

        with business_transaction("return_instrument", failure_msg, instrument_id=instrument_id):
            agreement = self.repository.get_active_for_instrument(instrument_id, exclusive=True)
            if agreement is None:
                raise RejectedError("no active rental for instrument")
            if returned_on < agreement.date_rented:
                raise RejectedError("return date precedes rental date")
            if self.repository.mark_returned(agreement.rental_agreement_id, returned_on) != 1:
                raise PersistenceError(f"{failure_msg}: agreement was not updated")

        return RentalAgreement(
            instrument_id=agreement.instrument_id,
            student_id=agreement.student_id,
            date_rented=agreement.date_rented,
            date_returned=returned_on,
            rental_agreement_id=agreement.rental_agreement_id,
        )

    def list_active_rentals(self, student_id: int) -> list[RentalAgreement]:
        """The student's unreturned agreements, without locking them."""
        failure_msg = f"Could not search for rentals of student: {student_id}"
        student_id = _require_id(student_id, "student id", failure_msg)
        with business_transaction("list_active_rentals", failure_msg, student_id=student_id):
            return self.repository.get_active_for_student(student_id)
