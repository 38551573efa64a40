"""
Rental

This package provides the rental eligibility rules and the classes that
create and end rental agreements.
"""

from soundgood.rental.repository import RentalRepository
from soundgood.rental.service import RentalService

__all__ = ["RentalRepository", "RentalService"]
