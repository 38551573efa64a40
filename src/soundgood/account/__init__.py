"""
Account

This package provides the account ledger rules and the classes that store
and move money in and out of accounts.
"""

from soundgood.account.repository import AccountRepository
from soundgood.account.service import AccountService

__all__ = ["AccountRepository", "AccountService"]
