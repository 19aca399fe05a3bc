"""Settings routes."""
from flask import Blueprint

from vst_library.routes.responses import container, load_body, success
from vst_library.schemas.request_schemas import SettingUpdateSchema, ValidatePathsSchema

settings_bp = Blueprint("settings", __name__, url_prefix="/api/v1/settings")

setting_update_schema = SettingUpdateSchema()
validate_paths_schema = ValidatePathsSchema()


@settings_bp.route("", methods=["GET"])
def get_settings():
    """
    Get all settings, creating the defaults on first access.

    Returns:
        200: { "success": true, "data": [...] }
    """
    settings = container().settings_service().get_all()
    return success([s.to_dict() for s in settings])


@settings_bp.route("/validate-paths", methods=["POST"])
def validate_paths():
    """
    Check that directories exist and are readable.

    Body:
        paths: list[str] (required)

    Returns:
        200: { "success": true, "data": [{"path": ..., "exists": bool, "error"?: str}] }
    """
    data = load_body(validate_paths_schema)
    results = container().settings_service().validate_paths(data["paths"])
    return success([r.to_dict() for r in results])


@settings_bp.route("/<key>", methods=["GET"])
def get_setting(key):
    """
    Get a setting by key.

    Returns:
        200: Setting
        404: Not found
    """
    setting = container().settings_service().get_by_key(key)
    return success(setting.to_dict())


@settings_bp.route("/<key>", methods=["PUT"])
def update_setting(key):
    """
    Create or update a setting.

    Body:
        value: str (required)
        description: str (optional)

    Returns:
        200: Updated setting
        400: Missing value
    """
    data = load_body(setting_update_schema)
    setting = container().settings_service().set(key, data["value"], data.get("description"))
    return success(setting.to_dict(), message="Setting updated successfully")
