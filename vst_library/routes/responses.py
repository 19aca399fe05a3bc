"""Response envelope and request helpers shared by the blueprints."""
from typing import Any, Mapping, Optional

from flask import current_app, jsonify, request
from marshmallow import Schema, ValidationError

from vst_library.errors import InvalidArgumentError


def success(data: Any = None, status: int = 200, **extra):
    """Render ``{"success": true, "data": ...}`` plus any extra top-level keys."""
    body = {"success": True}
    if data is not None:
        body["data"] = data
    body.update(extra)
    return jsonify(body), status


def container():
    """The application's dependency injection container."""
    return current_app.container


def load_body(schema: Schema, default: Optional[Mapping] = None) -> dict:
    """
    Validate the JSON request body with ``schema``.

    Raises:
        InvalidArgumentError: Body is not an object or fails validation.
    """
    body = request.get_json(silent=True)
    if body is None:
        body = default if default is not None else {}
    if not isinstance(body, Mapping):
        raise InvalidArgumentError("Request body must be a JSON object")
    try:
        return schema.load(body)
    except ValidationError as err:
        raise InvalidArgumentError(str(err.messages)) from err
