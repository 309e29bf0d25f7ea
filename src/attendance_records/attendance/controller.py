from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from ..container import Container
from ..core.exceptions import (
    DomainError,
    InternalError,
    InvalidArgumentError,
    NotFoundError,
    ResourceExhaustedError,
)
from .presenter import CHECKED_IN, CHECKED_OUT, RECORD_FOUND, RECORD_RETRIEVED

logger = logging.getLogger(__name__)

HTTP_STATUS = {
    InvalidArgumentError: 400,
    NotFoundError: 404,
    ResourceExhaustedError: 429,
    InternalError: 500,
}


def status_for(error: DomainError) -> int:
    for kind, status in HTTP_STATUS.items():
        if isinstance(error, kind):
            return status
    return 500


def _json_body() -> dict:
    data = request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


def _text_field(data: dict, name: str) -> str:
    # Missing fields read as empty strings; numbers are taken by their decimal form.
    value = data.get(name)
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    raise InvalidArgumentError(f"Invalid {name}")


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service
    presenter = container.presenter

    @app.errorhandler(DomainError)
    def handle_domain_error(error: DomainError):
        status = status_for(error)
        if status >= 500:
            logger.error("Request failed: %s", error)
        return jsonify({"code": error.code, "message": str(error)}), status

    @app.route("/v1/attendance/checkin", methods=["POST"], endpoint="checkin")
    def checkin():
        data = _json_body()
        user_id = _text_field(data, "user_id")
        username = _text_field(data, "username")
        logger.info("Received CheckIn request for user_id: %s", user_id)

        record = service.check_in(user_id, username)
        return jsonify(presenter.present(record, CHECKED_IN).to_dict()), 200

    @app.route("/v1/attendance/checkout", methods=["POST"], endpoint="checkout")
    def checkout():
        record_id = _text_field(_json_body(), "record_id")
        logger.info("Received CheckOut request for record_id: %s", record_id)

        record = service.check_out(record_id)
        return jsonify(presenter.present(record, CHECKED_OUT).to_dict()), 200

    @app.route("/v1/attendance/<user_id>", methods=["GET"], endpoint="get_attendance")
    def get_attendance(user_id: str):
        logger.info("Received GetAttendance request for user_id: %s", user_id)

        record = service.get_latest_for_user(user_id)
        return jsonify(presenter.present(record, RECORD_FOUND).to_dict()), 200

    @app.route("/v1/attendance", methods=["GET"], endpoint="get_all_attendance")
    def get_all_attendance():
        logger.info("Received GetAllAttendance request")

        records = [presenter.present(r, RECORD_RETRIEVED).to_dict() for r in service.list_all()]
        return jsonify({"records": records}), 200
