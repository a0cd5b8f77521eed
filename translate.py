"""
Command-line interface for XHTML document translation
"""
import sys
import argparse
import asyncio

from src.config import (
    DEFAULT_MODEL,
    API_ENDPOINT,
    LLM_PROVIDER,
    OPENAI_API_KEY,
    OPENAI_API_ENDPOINT,
    OLLAMA_DEFAULT_ENDPOINT,
    DEFAULT_SOURCE_LANGUAGE,
    DEFAULT_TARGET_LANGUAGE,
    MAX_CONCURRENT_TRANSLATIONS,
    TRANSLATION_TIMEOUT,
    TranslationConfig
)
from src.core.xhtml import XhtmlTranslationError
from src.core.llm.exceptions import LLMProviderError
from src.utils.file_utils import translate_document_file, get_unique_output_path, default_output_path
from src.utils.unified_logger import setup_cli_logger, LogType


def build_parser():
    parser = argparse.ArgumentParser(description="Translate the text of an XHTML/HTML document using an LLM.")
    parser.add_argument("-i", "--input", required=True, help="Path to the input document (XHTML or HTML).")
    parser.add_argument("-o", "--output", default=None, help="Path to the output file. If not specified, uses input filename with suffix.")
    parser.add_argument("-sl", "--source_lang", default=DEFAULT_SOURCE_LANGUAGE, help=f"Source language (default: {DEFAULT_SOURCE_LANGUAGE}).")
    parser.add_argument("-tl", "--target_lang", default=DEFAULT_TARGET_LANGUAGE, help=f"Target language (default: {DEFAULT_TARGET_LANGUAGE}).")
    parser.add_argument("-m", "--model", default=DEFAULT_MODEL, help=f"LLM model (default: {DEFAULT_MODEL}).")
    parser.add_argument("--api_endpoint", default=API_ENDPOINT, help=f"API endpoint for Ollama or OpenAI compatible provider (default: {API_ENDPOINT}).")
    parser.add_argument("--provider", default=LLM_PROVIDER, choices=["ollama", "openai"], help=f"LLM provider to use (default: {LLM_PROVIDER}).")
    parser.add_argument("--openai_api_key", default=OPENAI_API_KEY, help="OpenAI API key (required for api.openai.com).")
    parser.add_argument("--concurrency", type=int, default=MAX_CONCURRENT_TRANSLATIONS, help=f"Maximum concurrent fragment translations (default: {MAX_CONCURRENT_TRANSLATIONS}).")
    parser.add_argument("--timeout", type=int, default=TRANSLATION_TIMEOUT, help=f"Deadline for the whole document in seconds, 0 disables (default: {TRANSLATION_TIMEOUT}).")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output.")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.concurrency <= 0:
        parser.error("--concurrency must be a positive integer")
    if args.timeout < 0:
        parser.error("--timeout must not be negative")

    # The OpenAI cloud endpoint needs a key; local OpenAI-compatible servers usually don't
    if args.provider == "openai" and not args.openai_api_key and args.api_endpoint in (OLLAMA_DEFAULT_ENDPOINT, OPENAI_API_ENDPOINT):
        parser.error("--openai_api_key is required when using the openai provider with api.openai.com")

    if args.output is None:
        args.output = default_output_path(args.input, args.target_lang)

    # Ensure output path is unique (add number suffix if file exists)
    args.output = get_unique_output_path(args.output)

    # Setup unified logger
    logger = setup_cli_logger(enable_colors=not args.no_color)
    config = TranslationConfig.from_cli_args(args)

    logger.info("Translation Started", LogType.TRANSLATION_START, {
        'source_lang': config.source_language,
        'target_lang': config.target_language,
        'model': config.model,
        'input_file': args.input,
        'output_file': args.output,
        'api_endpoint': config.api_endpoint,
        'llm_provider': config.llm_provider,
        'concurrency': config.max_concurrency
    })
    logger.debug(f"Configuration: {config.to_dict()}")

    try:
        result = asyncio.run(translate_document_file(
            args.input,
            args.output,
            config,
            progress_callback=logger.create_progress_callback(every=10)
        ))
    except XhtmlTranslationError as e:
        data = {'details': str(e.context) if e.context else e.message, 'input_file': args.input}
        fragment_text = getattr(e, 'fragment_text', '')
        if fragment_text:
            data['fragment'] = fragment_text.strip()[:200]
        logger.error(f"Translation failed: {e.message}", LogType.ERROR_DETAIL, data)
        return 1
    except (OSError, ValueError, LLMProviderError) as e:
        logger.error(f"Translation failed: {str(e)}", LogType.ERROR_DETAIL, {
            'details': str(e),
            'input_file': args.input
        })
        return 1

    logger.info("Translation Completed Successfully", LogType.TRANSLATION_END, {
        'output_file': args.output,
        'fragments': result.fragment_count,
        'duration': result.metadata.duration
    })
    return 0


if __name__ == "__main__":
    sys.exit(main())
