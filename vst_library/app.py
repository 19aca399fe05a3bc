"""Flask application factory."""
import atexit
import logging
from typing import Any, Dict, Optional

from flask import Flask, jsonify

from vst_library import __version__
from vst_library.errors import VstLibraryError

logger = logging.getLogger(__name__)


def create_app(config: Optional[Dict[str, Any]] = None) -> Flask:
    """
    Create and configure Flask application.

    Args:
        config: Optional configuration dictionary to override defaults.

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Load configuration
    from vst_library.config import get_config
    app.config.from_object(get_config())
    if config:
        app.config.update(config)

    logging.getLogger("vst_library").setLevel(str(app.config.get("LOG_LEVEL") or "INFO").upper())

    # Initialize DI container
    from vst_library.container import Container
    from vst_library.paths import paths_from_config

    container = Container()
    container.paths.override(paths_from_config(app.config))
    container.config.from_dict(
        {
            "database_url": app.config.get("DATABASE_URL"),
            "scanner_timeout": app.config.get("SCANNER_TIMEOUT_SECONDS"),
        }
    )
    app.container = container

    # A fresh database picks up scan results written before it existed
    database = container.database()
    database.add_bootstrap_hook(lambda: container.plugin_sync_service().sync_from_file())
    atexit.register(database.close)

    # Plugin ids are often absolute paths ("/Library/Audio/...")
    from vst_library.routes.converters import PluginIdConverter
    app.url_map.merge_slashes = False
    app.url_map.converters["plugin_id"] = PluginIdConverter

    # Register blueprints
    from vst_library.routes.plugins import plugins_bp
    from vst_library.routes.settings import settings_bp
    from vst_library.routes.library import library_bp
    app.register_blueprint(plugins_bp)
    app.register_blueprint(settings_bp)
    app.register_blueprint(library_bp)

    # CLI commands
    from vst_library.cli.library import library_cli
    app.cli.add_command(library_cli)

    # Health check endpoint
    @app.route("/api/v1/health")
    def health():
        """Health check endpoint."""
        return jsonify({
            "status": "ok",
            "service": "vst-library",
            "version": __version__,
            "database": database.state.value,
        }), 200

    # Error handlers
    @app.errorhandler(VstLibraryError)
    def library_error(error: VstLibraryError):
        """Render library errors as the failure envelope."""
        if error.http_status >= 500:
            logger.error("Request failed: %s", error.message)
        return jsonify({"success": False, "error": error.message}), error.http_status

    @app.errorhandler(404)
    def not_found(error):
        """Handle 404 errors."""
        return jsonify({"success": False, "error": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        """Handle 405 errors."""
        return jsonify({"success": False, "error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_error(error):
        """Handle 500 errors."""
        logger.error("Unhandled error: %s", getattr(error, "original_exception", error))
        return jsonify({"success": False, "error": "Internal server error"}), 500

    return app
