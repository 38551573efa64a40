"""Soundgood music school: accounts and instrument rentals."""
