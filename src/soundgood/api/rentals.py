from flask import Blueprint, jsonify, request

from soundgood.rental import RentalService

bp = Blueprint("rentals", __name__)

rental_service = RentalService()


@bp.route("/rentals", methods=["POST"])
def rent():
    """Rent an instrument to a student."""
    data = request.get_json(silent=True) or {}

    agreement = rental_service.rent(
        instrument_id=data.get("instrument_id"),
        student_id=data.get("student_id"),
    )

    return jsonify(agreement.to_dict()), 201


@bp.route("/rentals/return", methods=["POST"])
def return_instrument():
    """End the active rental of an instrument."""
    data = request.get_json(silent=True) or {}
    agreement = rental_service.return_instrument(data.get("instrument_id"))
    return jsonify(agreement.to_dict())


@bp.route("/students/<int:student_id>/rentals", methods=["GET"])
def list_active_rentals(student_id: int):
    """List a student's active rentals."""
    rentals = rental_service.list_active_rentals(student_id)
    return jsonify([r.to_dict() for r in rentals])
