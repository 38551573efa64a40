from flask import Blueprint, jsonify, request

from soundgood.account import AccountService

bp = Blueprint("accounts", __name__)

account_service = AccountService()


@bp.route("", methods=["POST"])
def create_account():
    """Open an account for a holder."""
    data = request.get_json(silent=True) or {}

    account = account_service.create_account(data.get("holder_name"))

    return jsonify(account.to_dict()), 201


@bp.route("/<account_no>", methods=["GET"])
def get_account(account_no: str):
    """Get account by number."""
    account = account_service.get_account(account_no)
    if not account:
        return jsonify({"error": "Account not found"}), 404
    return jsonify(account.to_dict())


@bp.route("/<account_no>/deposit", methods=["POST"])
def deposit(account_no: str):
    """Deposit an amount in minor units."""
    data = request.get_json(silent=True) or {}
    account = account_service.deposit(account_no, data.get("amount"))
    return jsonify(account.to_dict())


@bp.route("/<account_no>/withdraw", methods=["POST"])
def withdraw(account_no: str):
    """Withdraw an amount in minor units."""
    data = request.get_json(silent=True) or {}
    account = account_service.withdraw(account_no, data.get("amount"))
    return jsonify(account.to_dict())


@bp.route("/<account_no>", methods=["DELETE"])
def delete_account(account_no: str):
    """Delete an account."""
    account_service.delete_account(account_no)
    return "", 204
