"""
Account ledger rules.

Pure functions over a balance in minor currency units. They return the new
balance or a Rejection and never touch the store; persisting the result is
the caller's job.
"""

from soundgood.decision import Rejection

NON_POSITIVE_AMOUNT = "amount must be positive"
INSUFFICIENT_FUNDS = "insufficient funds"


def deposit(balance: int, amount: int) -> int | Rejection:
    """
    Return balance + amount, or a Rejection for a non-positive amount.

    There is no upper bound here. The account.balance column is BIGINT, so
    a result above 2**63 - 1 fails at write time as a PersistenceError.
    """
    if amount <= 0:
        return Rejection(NON_POSITIVE_AMOUNT)
    return balance + amount


def withdraw(balance: int, amount: int) -> int | Rejection:
    """Return balance - amount, or a Rejection if the amount is non-positive or exceeds the balance."""
    if amount <= 0:
        return Rejection(NON_POSITIVE_AMOUNT)
    if amount > balance:
        return Rejection(INSUFFICIENT_FUNDS)
    return balance - amount
