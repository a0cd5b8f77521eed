"""
Flask web server for the XHTML translation API
"""
import argparse
import logging
from datetime import datetime

from src.config import (
    API_ENDPOINT as DEFAULT_OLLAMA_API_ENDPOINT,
    DEFAULT_MODEL,
    LLM_PROVIDER,
    MAX_CONCURRENT_TRANSLATIONS,
    PORT,
    HOST,
    DEBUG_MODE,
    TranslationConfig
)
from src.api.routes import create_app

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if DEBUG_MODE else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

# Reduce verbosity of werkzeug (Flask HTTP server logs)
logging.getLogger('werkzeug').setLevel(logging.WARNING)


def validate_configuration(config: TranslationConfig, port):
    """Validate required configuration before starting server"""
    issues = []

    if not port or not isinstance(port, int):
        issues.append("PORT must be a valid integer")
    if not config.model:
        issues.append("DEFAULT_MODEL must be configured")
    if not config.api_endpoint and config.llm_provider == 'ollama':
        issues.append("API_ENDPOINT must be configured")
    if config.llm_provider not in ('ollama', 'openai'):
        issues.append(f"Unknown LLM provider '{config.llm_provider}' (expected 'ollama' or 'openai')")
    if not isinstance(config.max_concurrency, int) or config.max_concurrency <= 0:
        issues.append("MAX_CONCURRENT_TRANSLATIONS must be a positive integer")

    if issues:
        logger.error("=" * 70)
        logger.error("CONFIGURATION ERROR")
        logger.error("=" * 70)
        for issue in issues:
            logger.error(f"   - {issue}")
        logger.error("Fix the .env file or command line options and restart")
        logger.error("=" * 70)
        raise ValueError("Configuration validation failed. See errors above.")

    logger.info("Configuration validated successfully")


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="XHTML translation API server.")
    parser.add_argument("--port", type=int, default=PORT, help=f"Port to listen on (default: {PORT}).")
    parser.add_argument("--host", default=HOST, help=f"Host to bind (default: {HOST}).")
    parser.add_argument("--llm-url", dest="llm_url", default=DEFAULT_OLLAMA_API_ENDPOINT,
                        help="LLM API endpoint URL.")
    parser.add_argument("--model", default=DEFAULT_MODEL, help="LLM model name.")
    parser.add_argument("--provider", default=LLM_PROVIDER, choices=["ollama", "openai"],
                        help=f"LLM provider to use (default: {LLM_PROVIDER}).")
    parser.add_argument("--concurrency", type=int, default=MAX_CONCURRENT_TRANSLATIONS,
                        help=f"Maximum concurrent fragment translations (default: {MAX_CONCURRENT_TRANSLATIONS}).")
    return parser.parse_args(argv)


def build_config(args) -> TranslationConfig:
    """Server configuration from command line options and environment defaults"""
    return TranslationConfig(
        model=args.model,
        api_endpoint=args.llm_url,
        llm_provider=args.provider,
        max_concurrency=args.concurrency,
        interface_type="web",
        enable_colors=False,
    )


if __name__ == '__main__':
    args = parse_args()
    config = build_config(args)

    # Validate configuration before starting
    validate_configuration(config, args.port)

    app = create_app(config)

    logger.info("=" * 60)
    logger.info(f"XHTML TRANSLATION SERVER (Version {datetime.now().strftime('%Y%m%d-%H%M')})")
    logger.info("=" * 60)
    logger.info(f"   - LLM provider: {config.llm_provider}")
    logger.info(f"   - LLM endpoint: {config.api_endpoint}")
    logger.info(f"   - Model: {config.model}")
    logger.info(f"   - Max concurrency: {config.max_concurrency}")
    logger.info(f"   - Translate: POST http://{args.host}:{args.port}/translate")
    logger.info(f"   - Health Check: http://{args.host}:{args.port}/api/health")
    logger.info("")

    if args.host == '0.0.0.0':
        logger.warning("Server is binding to 0.0.0.0 (all network interfaces)")
        logger.warning("   For production, use a proper WSGI server like gunicorn:")
        logger.warning("   gunicorn -w 4 --bind 0.0.0.0:8090 'translation_api:create_app()'")

    app.run(debug=False, host=args.host, port=args.port, threaded=True)
