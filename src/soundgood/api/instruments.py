from flask import Blueprint, jsonify, request

from soundgood.instrument import InstrumentService

bp = Blueprint("instruments", __name__)

instrument_service = InstrumentService()


@bp.route("", methods=["GET"])
def list_instruments():
    """List instruments, optionally of one type. Only available ones unless available=false."""
    instrument_type = request.args.get("type")
    if instrument_type:
        instruments = instrument_service.find_instruments_by_type(instrument_type)
    else:
        available_only = request.args.get("available", "true").lower() == "true"
        instruments = instrument_service.list_instruments(available_only=available_only)
    return jsonify([i.to_dict() for i in instruments])
