"""
Flask routes orchestrator for the translation API

This module builds the application and registers all route blueprints:

- blueprints/config_routes.py: Health check and configuration
- blueprints/translation_routes.py: Document translation
"""
import logging
from flask import Flask, jsonify
from flask_cors import CORS

from src.config import TranslationConfig
from src.core.llm.factory import create_provider_from_config
from .blueprints import (
    create_config_blueprint,
    create_translation_blueprint
)

logger = logging.getLogger(__name__)


def create_app(config: TranslationConfig = None, provider_factory=create_provider_from_config):
    """
    Create the Flask application

    Args:
        config: Server configuration (defaults from the environment)
        provider_factory: Callable building an LLMProvider from a TranslationConfig
    """
    config = config or TranslationConfig(interface_type="web", enable_colors=False)
    app = Flask(__name__)
    CORS(app)
    configure_routes(app, config, provider_factory)
    return app


def configure_routes(app, config: TranslationConfig, provider_factory=create_provider_from_config):
    """
    Configure Flask routes by registering all blueprints

    Args:
        app: Flask application instance
        config: Server configuration
        provider_factory: Callable building an LLMProvider from a TranslationConfig
    """

    # Register config and health check routes
    config_bp = create_config_blueprint(config)
    app.register_blueprint(config_bp)

    # Register translation routes
    translation_bp = create_translation_blueprint(config, provider_factory)
    app.register_blueprint(translation_bp)

    # Register error handlers
    _register_error_handlers(app)


def _register_error_handlers(app):
    """Register global error handlers"""

    @app.errorhandler(404)
    def route_not_found(error):
        return jsonify({"error": "API Endpoint not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({"error": "Method not allowed"}), 405

    @app.errorhandler(500)
    def internal_server_error(error):
        logger.error(f"INTERNAL SERVER ERROR: {error}")
        return jsonify({"error": "Internal server error", "details": str(error)}), 500
