# Overview: Flask API routes for user accounts; parses input and returns JSON responses.

from flask import Blueprint, current_app, jsonify, request

from ..errors import StoreError
from ..services import users_service
from .responses import error_response, internal_error

users_bp = Blueprint("users", __name__, url_prefix="/api/users")


@users_bp.post("")
def register_route():
    """Self-service registration; role is limited to customer or guest."""
    data = request.get_json(silent=True) or {}
    try:
        user = users_service.register_user(data)
        return user.to_dict(), 201
    except StoreError as e:
        return error_response(e)
    except Exception:
        current_app.logger.exception("Failed to register user")
        return internal_error()


@users_bp.get("")
def list_users_route():
    try:
        users = users_service.list_users()
        return jsonify({"items": [u.to_dict() for u in users], "count": len(users)})
    except StoreError as e:
        return error_response(e)


@users_bp.get("/<user_id>")
def get_user_route(user_id):
    try:
        user = users_service.get_user_by_id(user_id)
    except StoreError as e:
        return error_response(e)
    if user is None:
        return {"error": "User not found"}, 404
    return user.to_dict()
