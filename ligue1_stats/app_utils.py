from typing import Any, Dict, Optional

from flask import jsonify

from .errors import DataSourceError


def _build_success_payload(data: Optional[Any], message: str) -> Dict[str, Any]:
    return {
        "status": "ok",
        "message": message,
        "data": data,
    }


def _build_error_payload(error: Any, message: str) -> Dict[str, Any]:
    return {
        "status": "error",
        "message": message,
        "error": error,
    }


def to_payload(value: Any) -> Any:
    """Convert domain records (and lists of them) into JSON-ready structures."""
    if isinstance(value, list):
        return [to_payload(item) for item in value]
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    return value


def make_ok(data: Optional[Any] = None, message: str = "success", status_code: int = 200):
    """Return a standardized success response."""
    payload = _build_success_payload(to_payload(data), message)
    response = jsonify(payload)
    return response, status_code


def make_error(error: Any, message: str = "An error occurred", status_code: int = 400):
    """Return a standardized error response."""
    if isinstance(error, DataSourceError):
        error = error.to_dict()

    payload = _build_error_payload(error, message)
    response = jsonify(payload)
    return response, status_code
