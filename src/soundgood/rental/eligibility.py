"""
Rental eligibility rules.

Decides whether a student may rent an instrument given what is already
active. The per-instrument check goes beyond the student-only check of the
first version of this system: an instrument with an unreturned agreement
is never rented out twice.
"""

from datetime import date

from soundgood.decision import ADMIT, Admit, Rejection
from soundgood.models import MAX_ACTIVE_RENTALS, RentalAgreement

RENTAL_LIMIT_REACHED = "student rental limit reached"
INSTRUMENT_UNAVAILABLE = "instrument unavailable"


def can_rent(active_rental_count: int, instrument_already_active: bool) -> Admit | Rejection:
    """Admit a new rental unless the student is at the cap or the instrument is out."""
    if active_rental_count >= MAX_ACTIVE_RENTALS:
        return Rejection(RENTAL_LIMIT_REACHED)
    if instrument_already_active:
        return Rejection(INSTRUMENT_UNAVAILABLE)
    return ADMIT


def new_agreement(instrument_id: int, student_id: int, today: date = None) -> RentalAgreement:
    """Build the agreement for an admitted rental, starting today and not yet returned."""
    return RentalAgreement(
        instrument_id=instrument_id,
        student_id=student_id,
        date_rented=today or date.today(),
        date_returned=None,
    )
