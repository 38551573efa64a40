"""Seed students and rental instruments into the database."""
from decimal import Decimal

from soundgood import db
from soundgood.instrument.repository import InstrumentRepository
from soundgood.student.repository import StudentRepository

INITIAL_STUDENTS = ["Ada Lovelace", "Clara Schumann", "Louis Armstrong"]

INITIAL_INSTRUMENTS = [
    {"instrument_type": "guitar", "brand": "Yamaha", "category": "string", "fee": Decimal("150.00")},
    {"instrument_type": "guitar", "brand": "Fender", "category": "string", "fee": Decimal("200.00")},
    {"instrument_type": "violin", "brand": "Stentor", "category": "string", "fee": Decimal("180.00")},
    {"instrument_type": "trumpet", "brand": "Bach", "category": "brass", "fee": Decimal("220.00")},
    {"instrument_type": "piano", "brand": "Kawai", "category": "keyboard", "fee": Decimal("400.00")},
]


def main():
    students_repo = StudentRepository()
    instruments_repo = InstrumentRepository()

    existing = {i.instrument_type for i in instruments_repo.list(available_only=False)}
    if existing:
        print(f"Skipping seed - instruments already present: {', '.join(sorted(existing))}")
        return

    with db.transaction():
        for name in INITIAL_STUDENTS:
            student = students_repo.create(name)
            print(f"Created student: {student.name} (id={student.student_id})")

        for instrument in INITIAL_INSTRUMENTS:
            result = instruments_repo.create(**instrument)
            print(f"Created: {result.instrument_type} {result.brand} (id={result.instrument_id})")


if __name__ == "__main__":
    main()
