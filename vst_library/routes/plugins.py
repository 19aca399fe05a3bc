"""Plugin library routes."""
from flask import Blueprint, request

from vst_library.routes.responses import container, load_body, success
from vst_library.schemas.request_schemas import PluginKeySchema

plugins_bp = Blueprint("plugins", __name__, url_prefix="/api/v1/plugins")

plugin_key_schema = PluginKeySchema()


@plugins_bp.route("", methods=["GET"])
def list_plugins():
    """
    List all plugins ordered by name.

    Returns:
        200: { "success": true, "data": [...], "count": n }
    """
    plugins = container().plugin_service().list()
    return success([p.to_dict() for p in plugins], count=len(plugins))


@plugins_bp.route("/search", methods=["GET"])
def search_plugins():
    """
    Search plugins by name, vendor or path.

    Query params:
        - q: str (required) - Case-insensitive substring

    Returns:
        200: { "success": true, "data": [...], "count": n, "query": "..." }
        400: Missing query
    """
    query = request.args.get("q", "")
    plugins = container().plugin_service().search(query)
    return success([p.to_dict() for p in plugins], count=len(plugins), query=query)


@plugins_bp.route("/stats", methods=["GET"])
def plugin_stats():
    """Library statistics."""
    return success(container().plugin_service().stats())


@plugins_bp.route("/delete-all", methods=["POST"])
def delete_all_plugins():
    """
    Delete every plugin.

    Returns:
        200: { "success": true, "data": {"deleted": n} }
    """
    deleted = container().plugin_service().delete_all()
    return success({"deleted": deleted}, message="All plugins deleted")


@plugins_bp.route("/<plugin_id:plugin_id>/key", methods=["POST"])
def save_plugin_key(plugin_id):
    """
    Save a license/activation key for a plugin.

    Body:
        key: str (required, may be empty to clear)

    Returns:
        200: Updated plugin
        400: Missing key
        404: Plugin not found
    """
    data = load_body(plugin_key_schema)
    plugin = container().plugin_service().save_key(plugin_id, data["key"])
    return success(plugin.to_dict(), message="Key saved successfully")


@plugins_bp.route("/<plugin_id:plugin_id>", methods=["GET"])
def get_plugin(plugin_id):
    """
    Get plugin detail.

    Returns:
        200: Plugin
        404: Not found
    """
    plugin = container().plugin_service().get_by_id(plugin_id)
    return success(plugin.to_dict())


@plugins_bp.route("/<plugin_id:plugin_id>", methods=["PUT"])
def update_plugin(plugin_id):
    """
    Update plugin fields.

    Body:
        Any of name, vendor, version, category, subCategories, sdkVersion,
        path, cid, cardinality, flags, isValid, error, key

    Returns:
        200: Updated plugin
        400: Empty or unknown fields
        404: Not found
    """
    body = request.get_json(silent=True)
    plugin = container().plugin_service().update(plugin_id, body)
    return success(plugin.to_dict(), message="Plugin updated successfully")


@plugins_bp.route("/<plugin_id:plugin_id>", methods=["DELETE"])
def delete_plugin(plugin_id):
    """
    Delete a plugin. Deleting an unknown id succeeds with ``deleted: false``.

    Returns:
        200: { "success": true, "data": {"id": "...", "deleted": bool} }
    """
    deleted = container().plugin_service().delete_one(plugin_id)
    return success({"id": plugin_id, "deleted": deleted}, message="Plugin deleted successfully")
