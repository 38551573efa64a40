from typing import Optional

from psycopg.rows import class_row

from soundgood import db
from soundgood.models import Account


class AccountRepository:
    """
    Repository for account-related data access.
    Encapsulates all SQL and queries for the account and holder tables.
    """

    def get(self, account_no: str, exclusive: bool = False) -> Optional[Account]:
        """
        Get an account by number, with its holder's name.

        With exclusive=True the account row stays locked until the enclosing
        transaction ends. The holder row is not locked.
        """
        query = """
            SELECT a.account_no, h.name AS holder_name, a.balance
            FROM account a
            JOIN holder h USING (holder_id)
            WHERE a.account_no = %s
        """
        if exclusive:
            query += " FOR UPDATE OF a"
        return db.fetch_one(query, (account_no,), row_factory=class_row(Account))

    def find_or_create_holder(self, name: str) -> int:
        """
        Return the id of the holder with this name, creating it if absent.

        A single upsert, so two concurrent calls for a new name both get the
        same id instead of racing between lookup and insert.
        """
        row = db.fetch_one(
            """
            INSERT INTO holder (name) VALUES (%s)
            ON CONFLICT (name) DO UPDATE SET name = EXCLUDED.name
            RETURNING holder_id
            """,
            (name,),
        )
        return row["holder_id"]

    def insert(self, account_no: str, balance: int, holder_id: int) -> int:
        """Insert an account. Returns 0 when the account number is already taken."""
        return db.execute(
            """
            INSERT INTO account (account_no, balance, holder_id)
            VALUES (%s, %s, %s)
            ON CONFLICT (account_no) DO NOTHING
            """,
            (account_no, balance, holder_id),
        )

    def update_balance(self, account_no: str, balance: int) -> int:
        """Set an account's balance. Returns the number of rows updated."""
        return db.execute(
            "UPDATE account SET balance = %s WHERE account_no = %s",
            (balance, account_no),
        )

    def delete(self, account_no: str) -> int:
        """Delete an account. Returns the number of rows deleted."""
        return db.execute("DELETE FROM account WHERE account_no = %s", (account_no,))
