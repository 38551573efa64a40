"""
Instrument

This package provides classes for querying the rental instrument catalogue.
"""

from soundgood.instrument.repository import InstrumentRepository
from soundgood.instrument.service import InstrumentService

__all__ = ["InstrumentRepository", "InstrumentService"]
