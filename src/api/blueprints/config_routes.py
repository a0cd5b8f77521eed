"""
Configuration and health check routes
"""
import logging
from flask import Blueprint, jsonify

from src.config import TranslationConfig, DEBUG_MODE

# Setup logger for this module
logger = logging.getLogger('config_routes')
if DEBUG_MODE:
    logger.setLevel(logging.DEBUG)


def create_config_blueprint(base_config: TranslationConfig):
    """Create and configure the config blueprint"""
    bp = Blueprint('config', __name__)

    @bp.route('/api/health', methods=['GET'])
    def health_check():
        """API health check endpoint"""
        return jsonify({
            "status": "ok",
            "llm_provider": base_config.llm_provider,
            "model": base_config.model,
            "api_endpoint": base_config.api_endpoint,
            "max_concurrency": base_config.max_concurrency
        })

    @bp.route('/api/config', methods=['GET'])
    def get_config():
        """Current server configuration (secrets masked)"""
        logger.debug("Serving configuration")
        return jsonify(base_config.to_dict())

    return bp
