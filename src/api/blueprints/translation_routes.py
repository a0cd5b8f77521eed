"""
Document translation routes
"""
import logging
from flask import Blueprint, request, jsonify

from src.config import TranslationConfig, DEBUG_MODE
from src.core.llm.factory import create_provider_from_config
from src.core.xhtml import (
    XhtmlTranslationError,
    DocumentParseError,
    FragmentTranslationError,
    DocumentSerializationError,
    TranslationCancelledError,
    TranslationTimeoutError,
)
from ..handlers import run_translation

logger = logging.getLogger('translation_routes')
if DEBUG_MODE:
    logger.setLevel(logging.DEBUG)

REQUIRED_FIELDS = ('xhtml', 'source_lang', 'target_lang')

# Checked in order: subclasses before their bases
ERROR_STATUS = [
    (DocumentParseError, 400, 'parse_error'),
    (FragmentTranslationError, 502, 'translation_error'),
    (DocumentSerializationError, 500, 'serialization_error'),
    (TranslationTimeoutError, 504, 'timeout'),
    (TranslationCancelledError, 503, 'cancelled'),
    (XhtmlTranslationError, 500, 'translation_error'),
]


def classify_error(error):
    """
    Map a translation error to an HTTP status and error type.

    Args:
        error: Exception raised by the translation service

    Returns:
        Tuple (status_code, error_type)
    """
    for error_class, status, error_type in ERROR_STATUS:
        if isinstance(error, error_class):
            return status, error_type
    return 500, 'internal_error'


def _missing_fields(data):
    missing = []
    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            missing.append(field)
    return missing


def create_translation_blueprint(base_config: TranslationConfig, provider_factory=create_provider_from_config):
    """
    Create and configure the translation blueprint

    Args:
        base_config: Server configuration used for anything the request does not set
        provider_factory: Callable building an LLMProvider from a TranslationConfig
    """
    bp = Blueprint('translation', __name__)

    @bp.route('/translate', methods=['POST'])
    def translate_document():
        """Translate the text of an XHTML document"""
        data = request.get_json(silent=True)
        if not isinstance(data, dict):
            return jsonify({"error": "Invalid request body"}), 400

        missing = _missing_fields(data)
        if missing:
            return jsonify({"error": "Missing required fields", "missing": missing}), 400

        try:
            config = TranslationConfig.from_web_request(data, base=base_config)
        except (TypeError, ValueError) as e:
            return jsonify({"error": f"Invalid request body: {e}"}), 400

        try:
            result = run_translation(data['xhtml'], config, provider_factory)
        except ValueError as e:
            logger.error(f"Invalid translation configuration: {e}")
            return jsonify({
                "error": f"Translation failed: {e}",
                "error_type": "configuration_error"
            }), 500
        except XhtmlTranslationError as e:
            status, error_type = classify_error(e)
            logger.debug(f"Translation error mapped to {status} ({error_type}): {e.context}")
            return jsonify({
                "error": f"Translation failed: {e.message}",
                "error_type": error_type
            }), status

        return jsonify(result.to_dict())

    return bp
