#!/usr/bin/env python3
"""Soundgood CLI for account and rental operations."""

import argparse

import questionary
from rich.console import Console
from rich.table import Table

from soundgood.account import AccountService
from soundgood.errors import PersistenceError, RejectedError, ValidationError
from soundgood.instrument import InstrumentService
from soundgood.logging_config import setup_logging
from soundgood.models import Instrument
from soundgood.rental import RentalService

console = Console()


def select_instrument(instrument_type: str = None) -> Instrument | None:
    """Prompt the user to select one of the available instruments."""
    service = InstrumentService()
    if instrument_type:
        instruments = service.find_instruments_by_type(instrument_type)
    else:
        instruments = service.list_instruments()
    if not instruments:
        console.print("[red]No available instruments found.[/]")
        return None
    return questionary.select(
        "Select an instrument:",
        choices=[
            questionary.Choice(
                title=f"{i.instrument_id}: {i.instrument_type} ({i.brand or 'unknown brand'})",
                value=i,
            )
            for i in instruments
        ],
    ).ask()


def print_instruments(instruments: list[Instrument]) -> None:
    table = Table("ID", "Instrument", "Brand", "Category", "Fee")
    for i in instruments:
        table.add_row(
            str(i.instrument_id),
            i.instrument_type,
            i.brand or "",
            i.category or "",
            str(i.fee) if i.fee is not None else "",
        )
    console.print(table)


def create_account(args) -> None:
    account = AccountService().create_account(args.holder_name)
    console.print(f"[green]Created account {account.account_no} for {account.holder_name}.[/]")


def show_balance(args) -> None:
    account = AccountService().get_account(args.account_no)
    if account is None:
        console.print(f"[red]No account {args.account_no}.[/]")
        return
    console.print(f"{account.account_no} ({account.holder_name}): [bold]{account.balance}[/]")


def deposit(args) -> None:
    account = AccountService().deposit(args.account_no, args.amount)
    console.print(f"[green]Deposited {args.amount}. Balance: {account.balance}[/]")


def withdraw(args) -> None:
    account = AccountService().withdraw(args.account_no, args.amount)
    console.print(f"[green]Withdrew {args.amount}. Balance: {account.balance}[/]")


def delete_account(args) -> None:
    if not args.yes and not questionary.confirm(f"Delete account {args.account_no}?").ask():
        console.print("[dim]Cancelled.[/]")
        return
    AccountService().delete_account(args.account_no)
    console.print(f"[green]Deleted account {args.account_no}.[/]")


def list_instruments(args) -> None:
    service = InstrumentService()
    if args.type:
        instruments = service.find_instruments_by_type(args.type)
    else:
        instruments = service.list_instruments(available_only=not args.all)
    if not instruments:
        console.print("[red]No instruments found.[/]")
        return
    print_instruments(instruments)


def rent(args) -> None:
    instrument_id = args.instrument_id
    if instrument_id is None:
        instrument = select_instrument(args.type)
        # User pressed Ctrl+C or Escape
        if instrument is None:
            console.print("[dim]Cancelled.[/]")
            return
        instrument_id = instrument.instrument_id

    agreement = RentalService().rent(instrument_id, args.student_id)
    console.print(
        f"[green]Rented instrument {agreement.instrument_id} to student "
        f"{agreement.student_id} from {agreement.date_rented}.[/]"
    )


def return_instrument(args) -> None:
    agreement = RentalService().return_instrument(args.instrument_id)
    console.print(
        f"[green]Instrument {agreement.instrument_id} returned on {agreement.date_returned}.[/]"
    )


def list_rentals(args) -> None:
    rentals = RentalService().list_active_rentals(args.student_id)
    if not rentals:
        console.print(f"[dim]Student {args.student_id} has no active rentals.[/]")
        return
    table = Table("Agreement", "Instrument", "Rented")
    for r in rentals:
        table.add_row(str(r.rental_agreement_id), str(r.instrument_id), str(r.date_rented))
    console.print(table)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Soundgood CLI")
    subparsers = parser.add_subparsers(dest="command", required=True)

    p = subparsers.add_parser("create-account", help="Open an account for a holder")
    p.add_argument("holder_name")
    p.set_defaults(func=create_account)

    p = subparsers.add_parser("balance", help="Show an account's balance")
    p.add_argument("account_no")
    p.set_defaults(func=show_balance)

    p = subparsers.add_parser("deposit", help="Deposit into an account")
    p.add_argument("account_no")
    p.add_argument("amount", type=int)
    p.set_defaults(func=deposit)

    p = subparsers.add_parser("withdraw", help="Withdraw from an account")
    p.add_argument("account_no")
    p.add_argument("amount", type=int)
    p.set_defaults(func=withdraw)

    p = subparsers.add_parser("delete-account", help="Delete an account")
    p.add_argument("account_no")
    p.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")
    p.set_defaults(func=delete_account)

    p = subparsers.add_parser("instruments", help="List available instruments")
    p.add_argument("--type", help="Only instruments of this type")
    p.add_argument("--all", action="store_true", help="Include rented instruments")
    p.set_defaults(func=list_instruments)

    p = subparsers.add_parser("rent", help="Rent an instrument to a student")
    p.add_argument("student_id", type=int)
    p.add_argument("instrument_id", type=int, nargs="?", help="Prompt when omitted")
    p.add_argument("--type", help="Instrument type to choose from when prompting")
    p.set_defaults(func=rent)

    p = subparsers.add_parser("return", help="Return a rented instrument")
    p.add_argument("instrument_id", type=int)
    p.set_defaults(func=return_instrument)

    p = subparsers.add_parser("rentals", help="List a student's active rentals")
    p.add_argument("student_id", type=int)
    p.set_defaults(func=list_rentals)

    return parser


def main(argv: list[str] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging()

    try:
        args.func(args)
    except ValidationError as e:
        console.print(f"[red]Invalid input:[/] {e}")
        return 2
    except RejectedError as e:
        console.print(f"[yellow]Rejected:[/] {e.reason}")
        return 1
    except PersistenceError as e:
        console.print(f"[red]Operation failed:[/] {e}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
