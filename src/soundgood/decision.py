"""Outcome values returned by the pure decision logic."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Rejection:
    """A business rule declined the request."""

    reason: str


@dataclass(frozen=True)
class Admit:
    """The request may proceed."""


ADMIT = Admit()
