"""Library routes: scanning, sync, export and import."""
from flask import Blueprint, request

from vst_library.errors import MalformedPayloadError
from vst_library.routes.responses import container, load_body, success
from vst_library.schemas.request_schemas import ImportFileSchema, ScanRequestSchema

library_bp = Blueprint("library", __name__, url_prefix="/api/v1/vst")

scan_request_schema = ScanRequestSchema()
import_file_schema = ImportFileSchema()


@library_bp.route("/scan", methods=["POST"])
def scan_plugins():
    """
    Run the scanner over each directory and sync the results.

    Body (optional):
        directories: list[str] - defaults to the vst_paths setting

    Returns:
        200: { "success": true, "data": {"scannedDirectories": [...],
               "failedDirectories": {...}, "totalPlugins": n, "validPlugins": n,
               "insertedCount": n, "updatedCount": n, "processedCount": n} }
        400: No directories configured
    """
    data = load_body(scan_request_schema)
    summary = container().scan_service().scan(data.get("directories"))
    return success(summary.to_dict())


@library_bp.route("/sync", methods=["POST"])
def sync_plugins():
    """Re-import the existing scan-result file."""
    result = container().plugin_sync_service().sync_from_file()
    return success(result.to_dict())


@library_bp.route("/export", methods=["POST"])
def export_plugins():
    """
    Write the library to exported-plugins.json.

    Returns:
        200: { "success": true, "filePath": "..." }
    """
    file_path = container().transfer_service().export_plugins()
    return success(message="Plugins exported successfully", filePath=file_path)


@library_bp.route("/download", methods=["GET"])
def download_plugins():
    """Export data returned directly instead of written to disk."""
    plugins = container().transfer_service().export_data()
    return success(plugins, count=len(plugins))


@library_bp.route("/import", methods=["POST"])
def import_plugins():
    """
    Import a JSON plugin list.

    Accepts a multipart upload in ``file`` or a JSON body
    ``{"name": "plugins.json", "content": "<file text>"}``.

    Returns:
        200: { "success": true, "data": {"insertedCount": ..., ...}, "count": n }
        400: Not a JSON file, invalid JSON or no plugins list
    """
    upload = request.files.get("file")
    if upload is not None:
        name = upload.filename
        try:
            content = upload.read().decode("utf-8")
        except UnicodeDecodeError as err:
            raise MalformedPayloadError("File must be UTF-8 encoded JSON") from err
    else:
        data = load_body(import_file_schema)
        name, content = data["name"], data["content"]

    result = container().transfer_service().import_file(name, content)
    return success(
        result.to_dict(),
        count=result.processed_count,
        message=f"Successfully imported {result.processed_count} plugins",
    )
