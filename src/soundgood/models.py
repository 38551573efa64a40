"""
Domain entities.

Rows are mapped straight into these dataclasses with psycopg's class_row,
so field names match the column aliases used by the repositories. Each
instance is a snapshot owned by the operation that loaded it.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

MAX_ACTIVE_RENTALS = 2


@dataclass
class Account:
    account_no: str
    holder_name: str
    balance: int

    def to_dict(self) -> dict:
        return {
            "account_no": self.account_no,
            "holder_name": self.holder_name,
            "balance": self.balance,
        }


@dataclass(frozen=True)
class Instrument:
    instrument_id: int
    instrument_type: str
    brand: Optional[str]
    category: Optional[str]
    fee: Optional[Decimal]

    def to_dict(self) -> dict:
        return {
            "instrument_id": self.instrument_id,
            "instrument_type": self.instrument_type,
            "brand": self.brand,
            "category": self.category,
            "fee": str(self.fee) if self.fee is not None else None,
        }


@dataclass(frozen=True)
class RentalAgreement:
    instrument_id: int
    student_id: int
    date_rented: date
    date_returned: Optional[date] = None
    rental_agreement_id: Optional[int] = None

    @property
    def is_active(self) -> bool:
        """An agreement is active until its return date is set."""
        return self.date_returned is None

    def to_dict(self) -> dict:
        return {
            "rental_agreement_id": self.rental_agreement_id,
            "instrument_id": self.instrument_id,
            "student_id": self.student_id,
            "date_rented": self.date_rented.isoformat(),
            "date_returned": self.date_returned.isoformat() if self.date_returned else None,
            "active": self.is_active,
        }


@dataclass
class Student:
    student_id: int
    name: str
    # Loaded on demand; never persisted on the student row.
    active_rentals: list[RentalAgreement] = field(default_factory=list)

    def add_rentals(self, rentals: list[RentalAgreement]) -> None:
        self.active_rentals.extend(r for r in rentals if r.is_active)

    @property
    def active_rental_count(self) -> int:
        return len(self.active_rentals)
