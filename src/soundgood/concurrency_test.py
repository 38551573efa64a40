"""
Concurrency tests: several threads, each with its own pooled connection,
contending for the same rows in a committed database.

Run with: SOUNDGOOD_ENV=test pytest src/soundgood/concurrency_test.py -v
"""
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from soundgood import db
from soundgood.account import AccountService
from soundgood.errors import RejectedError
from soundgood.instrument import InstrumentRepository
from soundgood.rental import RentalService
from soundgood.student import StudentRepository


def run_concurrently(calls: list) -> list:
    """
    Start every call at the same moment, one thread each.

    Returns one outcome per call: its return value or the exception it raised.
    """
    barrier = threading.Barrier(len(calls))

    def run(call):
        barrier.wait()
        try:
            return call()
        except Exception as e:
            return e

    with ThreadPoolExecutor(max_workers=len(calls)) as executor:
        return list(executor.map(run, calls))


def rejections(outcomes: list) -> list[RejectedError]:
    return [o for o in outcomes if isinstance(o, RejectedError)]


class TestConcurrentWithdrawals:

    def test_two_withdrawals_exceeding_balance(self, committed_db):
        service = AccountService()
        account = service.create_account("Ada")
        service.deposit(account.account_no, 100)

        outcomes = run_concurrently([
            lambda: AccountService().withdraw(account.account_no, 60),
            lambda: AccountService().withdraw(account.account_no, 60),
        ])

        assert len(rejections(outcomes)) == 1
        assert rejections(outcomes)[0].reason == "insufficient funds"
        assert service.get_account(account.account_no).balance == 40

    def test_deposits_are_not_lost(self, committed_db):
        service = AccountService()
        account = service.create_account("Ada")

        outcomes = run_concurrently([
            lambda: AccountService().deposit(account.account_no, 10) for _ in range(8)
        ])

        assert not [o for o in outcomes if isinstance(o, Exception)]
        assert service.get_account(account.account_no).balance == 80


class TestConcurrentAccountCreation:

    def test_same_new_holder_created_once(self, committed_db):
        outcomes = run_concurrently([
            lambda: AccountService().create_account("Grace") for _ in range(4)
        ])

        assert not [o for o in outcomes if isinstance(o, Exception)]
        assert len({o.account_no for o in outcomes}) == 4
        holders = db.fetch_all("SELECT holder_id FROM holder WHERE name = %s", ("Grace",))
        assert len(holders) == 1


class TestConcurrentRentals:

    @pytest.fixture
    def students(self, committed_db):
        repo = StudentRepository()
        return [repo.create(f"Student {i}") for i in range(4)]

    @pytest.fixture
    def instruments(self, committed_db):
        repo = InstrumentRepository()
        return [repo.create(instrument_type="guitar", brand=f"Brand {i}") for i in range(4)]

    def test_one_instrument_rented_once(self, students, instruments):
        instrument_id = instruments[0].instrument_id

        outcomes = run_concurrently([
            lambda s=s: RentalService().rent(instrument_id, s.student_id) for s in students
        ])

        assert len(rejections(outcomes)) == len(students) - 1
        assert {r.reason for r in rejections(outcomes)} == {"instrument unavailable"}
        active = db.fetch_all(
            "SELECT 1 FROM rental_agreement WHERE rental_instrument_id = %s AND date_returned IS NULL",
            (instrument_id,),
        )
        assert len(active) == 1

    def test_student_never_exceeds_cap(self, students, instruments):
        student_id = students[0].student_id

        outcomes = run_concurrently([
            lambda i=i: RentalService().rent(i.instrument_id, student_id) for i in instruments
        ])

        assert len(rejections(outcomes)) == len(instruments) - 2
        assert {r.reason for r in rejections(outcomes)} == {"student rental limit reached"}
        assert len(RentalService().list_active_rentals(student_id)) == 2
