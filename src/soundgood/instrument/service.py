from soundgood.instrument.repository import InstrumentRepository
from soundgood.models import Instrument
from soundgood.transaction import business_transaction


class InstrumentService:
    """Read-only queries over the rental instrument catalogue."""

    def __init__(self):
        self.repository = InstrumentRepository()

    def list_instruments(self, available_only: bool = True) -> list[Instrument]:
        """List instruments, by default only those that are not rented out."""
        with business_transaction("list_instruments", "Unable to list instruments."):
            return self.repository.list(available_only=available_only)

    def find_instruments_by_type(self, instrument_type: str) -> list[Instrument]:
        """List available instruments of one type, e.g. "guitar"."""
        if not isinstance(instrument_type, str) or not instrument_type.strip():
            return []
        with business_transaction(
            "find_instruments_by_type", "Could not search for instrument."
        ):
            return self.repository.list(instrument_type=instrument_type.strip())
