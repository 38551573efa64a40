import logging
import secrets
from typing import Optional

from soundgood.account import ledger
from soundgood.account.repository import AccountRepository
from soundgood.decision import Rejection
from soundgood.errors import NotFoundError, PersistenceError, RejectedError, ValidationError
from soundgood.models import Account
from soundgood.transaction import business_transaction

logger = logging.getLogger(__name__)

ACCOUNT_NO_DIGITS = 10
ACCOUNT_NO_ATTEMPTS = 5


def generate_account_no() -> str:
    """Generate a random, zero-padded account number."""
    return str(secrets.randbelow(10**ACCOUNT_NO_DIGITS)).zfill(ACCOUNT_NO_DIGITS)


def _require_account_no(account_no: str, failure_msg: str) -> str:
    if account_no is None or not str(account_no).strip():
        raise ValidationError(f"{failure_msg}: account number is required")
    return str(account_no).strip()


def _require_amount(amount: int, failure_msg: str) -> int:
    # bool is an int subclass; True is not an amount.
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValidationError(f"{failure_msg}: amount must be an integer number of minor units")
    if amount <= 0:
        raise ValidationError(f"{failure_msg}: amount must be positive")
    return amount


class AccountService:
    """Creates, queries, and moves money in and out of accounts."""

    def __init__(self):
        self.repository = AccountRepository()

    def create_account(self, holder_name: str) -> Account:
        """
        Open an account with a zero balance for the named holder.

        The holder is reused if one with this name exists. A generated
        account number that is already taken is replaced with a fresh one.
        """
        failure_msg = f"Could not create account for: {holder_name}"
        if not isinstance(holder_name, str) or not holder_name.strip():
            raise ValidationError(f"{failure_msg}: holder name is required")
        holder_name = holder_name.strip()

        with business_transaction("create_account", failure_msg):
            holder_id = self.repository.find_or_create_holder(holder_name)
            for _ in range(ACCOUNT_NO_ATTEMPTS):
                account_no = generate_account_no()
                if self.repository.insert(account_no, 0, holder_id) == 1:
                    break
                logger.debug("Account number %s already taken, retrying", account_no)
            else:
                raise PersistenceError(f"{failure_msg}: no free account number found")

        logger.info("Created account %s for %s", account_no, holder_name)
        return Account(account_no=account_no, holder_name=holder_name, balance=0)

    def get_account(self, account_no: str) -> Optional[Account]:
        """Look up an account without locking it. None if there is no such account."""
        if account_no is None:
            return None
        with business_transaction("get_account", f"Could not search for account: {account_no}"):
            return self.repository.get(str(account_no).strip())

    def deposit(self, account_no: str, amount: int) -> Account:
        """Add amount to the account's balance. Returns the updated account."""
        return self._change_balance("deposit", ledger.deposit, account_no, amount)

    def withdraw(self, account_no: str, amount: int) -> Account:
        """Take amount from the account's balance. Returns the updated account."""
        return self._change_balance("withdraw", ledger.withdraw, account_no, amount)

    def delete_account(self, account_no: str) -> None:
        """Delete an account. Raises NotFoundError if it does not exist."""
        failure_msg = f"Could not delete account: {account_no}"
        account_no = _require_account_no(account_no, failure_msg)

        with business_transaction("delete_account", failure_msg, acct_no=account_no):
            if self.repository.delete(account_no) != 1:
                raise NotFoundError(f"{failure_msg}: no such account")

    def _change_balance(self, operation: str, rule, account_no: str, amount: int) -> Account:
        failure_msg = f"Could not {operation} account: {account_no}"
        account_no = _require_account_no(account_no, failure_msg)
        amount = _require_amount(amount, failure_msg)

        with business_transaction(operation, failure_msg, acct_no=account_no):
            account = self.repository.get(account_no, exclusive=True)
            if account is None:
                raise RejectedError("account not found")

            result = rule(account.balance, amount)
            if isinstance(result, Rejection):
                raise RejectedError(result.reason)

            if self.repository.update_balance(account_no, result) != 1:
                raise PersistenceError(f"{failure_msg}: balance update affected no row")
            account.balance = result

        return account
