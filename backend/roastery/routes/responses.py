# Overview: JSON error responses shared by the blueprints.

from __future__ import annotations

from flask import jsonify

from ..errors import ErrorKind, StoreError

STATUS_BY_KIND = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.INSUFFICIENT_STOCK: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.CONFLICT: 409,
    ErrorKind.STORAGE: 500,
}


def error_response(exc: StoreError):
    return jsonify({"error": exc.message, "details": exc.details}), STATUS_BY_KIND.get(exc.kind, 500)


def internal_error():
    return jsonify({"error": "Internal server error"}), 500
